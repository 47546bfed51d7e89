"""
Merkle Inclusion Proofs

A proof is the original leaf index plus the sibling digests from the leaf's
immediate sibling up to the root's immediate children. Verification replays
the tree's left/right pairing from the index parity alone, so it needs only
the proof, a claimed leaf digest and a trusted root; never the tree.

Verification is total: a malformed, truncated or adversarial proof yields
False, never an exception.

This module depends on the domain-separated hashing functions only.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from merkle_core.crypto.digest import Digest, DigestLike
from merkle_core.crypto.hashers import DEFAULT_HASHER, MerkleHasher
from merkle_core.crypto.hashing import leaf_hash, node_hash
from merkle_core.schemas.errors import MerkleException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Attributes:
        index: The 0-based index of the leaf in the original leaf list
        siblings: Sibling digests from bottom to top of the tree
    """
    index: int
    siblings: tuple[Digest, ...] = ()

    def __post_init__(self) -> None:
        """Validate proof structure and freeze the sibling sequence."""
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise ValueError(f"Leaf index must be an int, got {type(self.index).__name__}")
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        siblings = tuple(Digest.coerce(s) for s in self.siblings)
        object.__setattr__(self, "siblings", siblings)

    def verify(
        self,
        leaf: Digest,
        root: Digest,
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> bool:
        """
        Check that `leaf` at this proof's index is committed to by `root`.

        `leaf` must be the leaf hash H(0x00 || message), not the message.
        """
        return verify_merkle_proof(self, leaf, root, hasher)


def verify_merkle_proof(
    proof: MerkleProof,
    leaf: Any,
    root: Any,
    hasher: type[MerkleHasher] = DEFAULT_HASHER,
) -> bool:
    """
    Verify a Merkle proof.

    Algorithm:
    1. Start with the leaf digest and the proof's original index
    2. For each sibling (bottom-up):
       - If current index is even: acc = node_hash(acc, sibling)
       - If current index is odd: acc = node_hash(sibling, acc)
       - Move up: index = index // 2
    3. Check the recomputed root equals the trusted root

    Args:
        proof: MerkleProof to verify
        leaf: Claimed leaf digest
        root: Trusted root digest
        hasher: Hasher class the tree was built with

    Returns:
        True if the proof is valid, False otherwise
    """
    if not isinstance(proof, MerkleProof):
        return False
    if not isinstance(leaf, Digest) or not isinstance(root, Digest):
        return False

    current_hash = leaf
    current_index = proof.index

    for sibling in proof.siblings:
        if current_index % 2 == 0:
            # Current node is left child
            current_hash = node_hash(current_hash, sibling, hasher)
        else:
            # Current node is right child
            current_hash = node_hash(sibling, current_hash, hasher)
        current_index //= 2

    if current_hash != root:
        logger.debug(
            f"Proof for index {proof.index} did not reproduce root {root} "
            f"(got {current_hash}, hasher={hasher.name})"
        )
        return False
    return True


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(leaves, index=1)
        >>> MerkleVerifier.verify(proof, leaves[1], root)
        True
    """

    @staticmethod
    def verify(
        proof: MerkleProof,
        leaf: Digest,
        root: Digest,
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> bool:
        """Verify a proof against a leaf digest and a root."""
        return verify_merkle_proof(proof, leaf, root, hasher)

    @staticmethod
    def verify_message(
        proof: MerkleProof,
        message: bytes,
        root: Digest,
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> bool:
        """
        Verify that a raw message is included in a root.

        The message is leaf-hashed first.
        """
        return verify_merkle_proof(proof, leaf_hash(message, hasher), root, hasher)

    @staticmethod
    def verify_leaf_in_root(
        leaf: DigestLike,
        index: int,
        siblings: Sequence[DigestLike],
        root: DigestLike,
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> bool:
        """
        Verify a leaf is included in a Merkle root using raw components.

        Components that cannot form a valid proof (negative index, wrong
        digest sizes) make the result False.

        Args:
            leaf: The leaf digest to verify
            index: The claimed index of the leaf
            siblings: Sibling digests (bottom-up)
            root: The trusted Merkle root

        Returns:
            True if the proof is valid, False otherwise
        """
        try:
            proof = MerkleProof(index=index, siblings=tuple(siblings))
            leaf_digest = Digest.coerce(leaf)
            root_digest = Digest.coerce(root)
        except (MerkleException, ValueError, TypeError) as e:
            logger.debug(f"Rejected malformed proof components: {e}")
            return False
        return verify_merkle_proof(proof, leaf_digest, root_digest, hasher)


__all__ = [
    "MerkleProof",
    "verify_merkle_proof",
    "MerkleVerifier",
]
