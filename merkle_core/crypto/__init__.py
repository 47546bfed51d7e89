"""
Core cryptographic utilities.

Digest type, pluggable hashers and domain-separated leaf/node hashing.
"""
from .digest import (
    DIGEST_SIZE,
    Digest,
    DigestLike,
)

from .hashers import (
    MerkleHasher,
    Sha3,
    Keccak,
    Sha256,
    DEFAULT_HASHER,
    register_hasher,
    get_hasher,
    available_hashers,
)

from .hashing import (
    LEAF_PREFIX,
    NODE_PREFIX,
    leaf_hash,
    node_hash,
    hash_canonical,
)

__all__ = [
    "DIGEST_SIZE",
    "Digest",
    "DigestLike",
    "MerkleHasher",
    "Sha3",
    "Keccak",
    "Sha256",
    "DEFAULT_HASHER",
    "register_hasher",
    "get_hasher",
    "available_hashers",
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "leaf_hash",
    "node_hash",
    "hash_canonical",
]
