"""
Errors
File: errors.py

Purpose: Error taxonomy for tree construction, proof extraction and
the surrounding tooling. Defines both Pydantic models for structured
error reporting and Python exceptions for control flow.

Proof verification never raises; only construction, extraction and
input parsing do.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree & Proof Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"

    # Hashing Errors
    INVALID_DIGEST = "INVALID_DIGEST"
    UNKNOWN_HASH_ALGORITHM = "UNKNOWN_HASH_ALGORITHM"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Tooling Errors
    CONFIG_ERROR = "CONFIG_ERROR"
    PROOF_DOCUMENT_INVALID = "PROOF_DOCUMENT_INVALID"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Error model for structured error reporting.

    Used wherever an error has to be serialized (e.g. the CLI's JSON
    output) rather than raised.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raisable exception."""
        return MerkleException(
            message=self.message,
            code=self.code,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all errors raised by this package.

    Carries structured error information and can be converted to a
    MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(MerkleException, ValueError):
    """Raised when a tree is built from zero leaves."""

    def __init__(self, message: str = "Cannot build a Merkle tree from an empty leaf sequence") -> None:
        super().__init__(message=message, code=ErrorCodes.EMPTY_INPUT)


class IndexOutOfBoundsError(MerkleException, IndexError):
    """Raised when a proof is requested for a leaf index the tree does not have."""

    def __init__(self, index: int, leaf_count: int) -> None:
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_BOUNDS,
            details={"index": index, "leaf_count": leaf_count},
        )
        self.index = index
        self.leaf_count = leaf_count


class InvalidDigestError(MerkleException, ValueError):
    """Raised when a value cannot be interpreted as a 32-byte digest."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_DIGEST,
            details=details,
        )


class UnknownHasherError(MerkleException, ValueError):
    """Raised when a hash algorithm name is not registered."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        super().__init__(
            message=f"Unknown hash algorithm: {name}",
            code=ErrorCodes.UNKNOWN_HASH_ALGORITHM,
            details={"name": name, "available": available or []},
        )
        self.name = name


class CanonicalizationException(MerkleException):
    """Raised when canonical serialization of a leaf object fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class ConfigurationError(MerkleException):
    """Raised when runtime configuration values are invalid."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
        )


__all__ = [
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
