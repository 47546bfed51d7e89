"""
Hash Function Abstraction

A hasher is a class (never instantiated) mapping arbitrary bytes to one
32-byte Digest. Trees and proofs take the hasher class as a parameter, so
the algorithm is fixed when the tree is built.

Shipped hashers:
- Sha3: SHA3-256 (default)
- Keccak: Keccak-256 with the original (pre-FIPS) padding, as used by Ethereum
- Sha256: SHA-256

The registry maps algorithm names to hasher classes for configuration and
CLI use.
"""
from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import ClassVar

from Crypto.Hash import keccak

from merkle_core.crypto.digest import Digest
from merkle_core.schemas.errors import UnknownHasherError


class MerkleHasher(ABC):
    """
    Contract for a pure, deterministic, collision-resistant hash function
    with 32-byte output.

    Subclasses set `name` and implement `hash`.
    """

    name: ClassVar[str]

    @classmethod
    @abstractmethod
    def hash(cls, data: bytes) -> Digest:
        """Hash raw bytes to a Digest."""


class Sha3(MerkleHasher):
    """SHA3-256 hasher."""

    name = "sha3-256"

    @classmethod
    def hash(cls, data: bytes) -> Digest:
        return Digest(hashlib.sha3_256(data).digest())


class Keccak(MerkleHasher):
    """Keccak-256 hasher (Ethereum flavour, differs from SHA3-256)."""

    name = "keccak-256"

    @classmethod
    def hash(cls, data: bytes) -> Digest:
        return Digest(keccak.new(digest_bits=256, data=data).digest())


class Sha256(MerkleHasher):
    """SHA-256 hasher."""

    name = "sha256"

    @classmethod
    def hash(cls, data: bytes) -> Digest:
        return Digest(hashlib.sha256(data).digest())


DEFAULT_HASHER: type[MerkleHasher] = Sha3

_REGISTRY: dict[str, type[MerkleHasher]] = {}


def register_hasher(hasher: type[MerkleHasher]) -> type[MerkleHasher]:
    """
    Register a hasher class under its `name`.

    Returns the class so it can be used as a decorator.
    """
    _REGISTRY[hasher.name] = hasher
    return hasher


def get_hasher(name: str) -> type[MerkleHasher]:
    """
    Look up a hasher class by algorithm name (case-insensitive).

    Raises:
        UnknownHasherError: If no hasher is registered under that name
    """
    hasher = _REGISTRY.get(name.lower()) if isinstance(name, str) else None
    if hasher is None:
        raise UnknownHasherError(name, available=available_hashers())
    return hasher


def available_hashers() -> list[str]:
    """Return the registered algorithm names, sorted."""
    return sorted(_REGISTRY)


for _hasher in (Sha3, Keccak, Sha256):
    register_hasher(_hasher)


__all__ = [
    "MerkleHasher",
    "Sha3",
    "Keccak",
    "Sha256",
    "DEFAULT_HASHER",
    "register_hasher",
    "get_hasher",
    "available_hashers",
]
