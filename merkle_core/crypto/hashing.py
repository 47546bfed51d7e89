"""
Domain-Separated Hashing

Leaf and internal-node hashes are drawn from disjoint preimage spaces by a
one-byte tag:

- Leaf: H(0x00 || message)
- Node: H(0x01 || left || right), always a 65-byte input

A 64-byte message equal to two child digests concatenated never hashes to
their parent, so an internal node cannot be passed off as a leaf.
"""
from __future__ import annotations

from typing import Any

from merkle_core.crypto.digest import Digest
from merkle_core.crypto.hashers import DEFAULT_HASHER, MerkleHasher
from merkle_core.schemas.canonical import dumps_canonical


LEAF_PREFIX: bytes = b"\x00"
NODE_PREFIX: bytes = b"\x01"


def leaf_hash(message: bytes, hasher: type[MerkleHasher] = DEFAULT_HASHER) -> Digest:
    """
    Hash a committed message into a leaf digest: H(0x00 || message).

    Args:
        message: Raw message bytes
        hasher: Hasher class to use

    Returns:
        Leaf Digest

    Example:
        >>> leaf_hash(b"a") == DEFAULT_HASHER.hash(b"\\x00a")
        True
    """
    return hasher.hash(LEAF_PREFIX + bytes(message))


def node_hash(
    left: Digest,
    right: Digest,
    hasher: type[MerkleHasher] = DEFAULT_HASHER,
) -> Digest:
    """
    Hash two child digests into their parent: H(0x01 || left || right).

    Order matters: node_hash(a, b) != node_hash(b, a) for a != b.
    """
    return hasher.hash(NODE_PREFIX + left.raw + right.raw)


def hash_canonical(obj: Any, hasher: type[MerkleHasher] = DEFAULT_HASHER) -> Digest:
    """
    Leaf-hash a structured record via its canonical JSON form.

    Rule: leaf = H(0x00 || dumps_canonical(obj).encode("utf-8"))

    Dict key order does not affect the result.

    Raises:
        CanonicalizationException: If the object cannot be canonically serialized
    """
    return leaf_hash(dumps_canonical(obj).encode("utf-8"), hasher)


__all__ = [
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "leaf_hash",
    "node_hash",
    "hash_canonical",
]
