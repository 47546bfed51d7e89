"""
Proof Document

JSON transport form of an inclusion proof, as written by `merkle prove`
and read by `merkle verify`. Digests are 64-character lowercase hex.
`leaf` and `root` record what the proof was issued for; `merkle verify`
reads only `algorithm`, `index` and `siblings`.

Only proofs are serialized; tree state never is.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from merkle_core.crypto.digest import Digest
from merkle_core.crypto.hashers import MerkleHasher, get_hasher
from merkle_core.merkle.merkle_proofs import MerkleProof


class ProofDocument(BaseModel):
    """A self-contained inclusion proof plus the values it was issued for."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    algorithm: str = Field(
        ...,
        description="Registered hash algorithm name the tree was built with",
        examples=["sha3-256"],
    )
    index: int = Field(
        ...,
        ge=0,
        description="0-based index of the proven leaf",
    )
    leaf: str = Field(
        ...,
        description="Leaf digest H(0x00 || message), hex",
    )
    siblings: list[str] = Field(
        default_factory=list,
        description="Sibling digests from bottom to top, hex",
    )
    root: str = Field(
        ...,
        description="Root digest the proof was issued against, hex",
    )

    @field_validator("algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        return get_hasher(value).name

    @field_validator("leaf", "root")
    @classmethod
    def _hex_digest(cls, value: str) -> str:
        return Digest.from_hex(value).to_hex()

    @field_validator("siblings")
    @classmethod
    def _hex_digests(cls, value: list[str]) -> list[str]:
        return [Digest.from_hex(v).to_hex() for v in value]

    @classmethod
    def from_proof(
        cls,
        proof: MerkleProof,
        leaf: Digest,
        root: Digest,
        hasher: type[MerkleHasher],
    ) -> "ProofDocument":
        return cls(
            algorithm=hasher.name,
            index=proof.index,
            leaf=leaf.to_hex(),
            siblings=[s.to_hex() for s in proof.siblings],
            root=root.to_hex(),
        )

    def to_proof(self) -> MerkleProof:
        return MerkleProof(
            index=self.index,
            siblings=tuple(Digest.from_hex(s) for s in self.siblings),
        )

    @property
    def hasher(self) -> type[MerkleHasher]:
        return get_hasher(self.algorithm)


__all__ = ["ProofDocument"]
