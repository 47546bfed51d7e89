"""
merkle_core

Binary Merkle trees with domain-separated hashing and inclusion proofs.

Policies:
- Leaf: H(0x00 || message)
- Node: H(0x01 || left || right)
- Odd levels: duplicate-last

Hashers: sha3-256 (default), keccak-256, sha256
"""

from merkle_core.crypto import (
    DIGEST_SIZE,
    Digest,
    MerkleHasher,
    Sha3,
    Keccak,
    Sha256,
    get_hasher,
    available_hashers,
    leaf_hash,
    node_hash,
    hash_canonical,
)
from merkle_core.merkle import (
    MerkleTree,
    MerkleProof,
    build_merkle_tree,
    build_merkle_root,
    build_merkle_proof,
    verify_merkle_proof,
    compute_tree_depth,
    MerkleProver,
    MerkleVerifier,
)
from merkle_core.schemas.errors import (
    MerkleException,
    EmptyInputError,
    IndexOutOfBoundsError,
    InvalidDigestError,
    UnknownHasherError,
)

__version__ = "0.1.0"

__all__ = [
    "DIGEST_SIZE",
    "Digest",
    "MerkleHasher",
    "Sha3",
    "Keccak",
    "Sha256",
    "get_hasher",
    "available_hashers",
    "leaf_hash",
    "node_hash",
    "hash_canonical",
    "MerkleTree",
    "MerkleProof",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    "MerkleProver",
    "MerkleVerifier",
    "MerkleException",
    "EmptyInputError",
    "IndexOutOfBoundsError",
    "InvalidDigestError",
    "UnknownHasherError",
]
