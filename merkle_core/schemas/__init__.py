"""
Schemas

Error taxonomy and canonical serialization for structured leaves.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

from .errors import (
    ErrorCodes,
    MerkleError,
    MerkleException,
    EmptyInputError,
    IndexOutOfBoundsError,
    InvalidDigestError,
    UnknownHasherError,
    CanonicalizationException,
    ConfigurationError,
)

__all__ = [
    # Canonical serialization
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "EmptyInputError",
    "IndexOutOfBoundsError",
    "InvalidDigestError",
    "UnknownHasherError",
    "CanonicalizationException",
    "ConfigurationError",
]
