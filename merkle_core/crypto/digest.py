"""
Digest Value Type

Fixed-size 32-byte hash value shared by every hasher, tree and proof.

Rendering:
- str(digest): lowercase hex (display)
- repr(digest): uppercase hex (debug)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from merkle_core.schemas.errors import InvalidDigestError


DIGEST_SIZE: int = 32

DigestLike = Union["Digest", bytes, bytearray, memoryview]


@dataclass(frozen=True, repr=False)
class Digest:
    """
    An immutable 32-byte digest.

    Digests compare by exact byte equality and are hashable, so they can
    be used as dict keys or set members.

    Attributes:
        raw: The 32 digest bytes
    """
    raw: bytes

    def __post_init__(self) -> None:
        """Validate digest length and normalize buffer types to bytes."""
        raw = self.raw
        if isinstance(raw, (bytearray, memoryview)):
            raw = bytes(raw)
            object.__setattr__(self, "raw", raw)
        if not isinstance(raw, bytes):
            raise InvalidDigestError(
                f"Digest must be bytes, got {type(raw).__name__}",
                details={"type": type(raw).__name__},
            )
        if len(raw) != DIGEST_SIZE:
            raise InvalidDigestError(
                f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}",
                details={"length": len(raw)},
            )

    @classmethod
    def coerce(cls, value: DigestLike) -> Digest:
        """
        Return `value` as a Digest.

        Accepts an existing Digest (returned unchanged) or a 32-byte
        bytes-like object.

        Raises:
            InvalidDigestError: If the value has the wrong type or length
        """
        if isinstance(value, Digest):
            return value
        return cls(value)

    @classmethod
    def from_hex(cls, hex_string: str) -> Digest:
        """
        Parse a 64-character hex string, with or without a 0x prefix.

        Example:
            >>> Digest.from_hex("00" * 32).to_hex()
            '0000000000000000000000000000000000000000000000000000000000000000'
        """
        if not isinstance(hex_string, str):
            raise InvalidDigestError(
                f"Hex digest must be a string, got {type(hex_string).__name__}",
            )
        content = hex_string[2:] if hex_string[:2] in ("0x", "0X") else hex_string
        if len(content) != DIGEST_SIZE * 2:
            raise InvalidDigestError(
                f"Hex digest must be {DIGEST_SIZE * 2} characters, got {len(content)}",
                details={"length": len(content)},
            )
        try:
            return cls(bytes.fromhex(content))
        except ValueError as e:
            raise InvalidDigestError(f"Invalid hex characters in digest: {e}") from e

    def as_bytes(self) -> bytes:
        return self.raw

    def to_hex(self) -> str:
        """Lowercase hex rendering (64 characters)."""
        return self.raw.hex()

    def to_hex_upper(self) -> str:
        """Uppercase hex rendering (64 characters)."""
        return self.raw.hex().upper()

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return self.to_hex_upper()


__all__ = [
    "DIGEST_SIZE",
    "Digest",
    "DigestLike",
]
