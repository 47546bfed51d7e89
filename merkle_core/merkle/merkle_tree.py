"""
Merkle Tree Implementation
Deterministic Merkle tree construction and proof extraction.

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(0x00 || message)
   - Implemented via merkle_core.crypto.hashing.leaf_hash()
2. Parent hashing: parent = H(0x01 || left || right)
3. Padding rule: Duplicate last node if odd number at any level
4. Empty leaves: rejected with EmptyInputError
5. Single leaf: root = leaf (no hashing, one level)

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf ordering is defined by the caller
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

import logging
from typing import Any, Generic, Sequence, TypeVar

from merkle_core.crypto.digest import Digest, DigestLike
from merkle_core.crypto.hashers import DEFAULT_HASHER, MerkleHasher
from merkle_core.crypto.hashing import hash_canonical, leaf_hash, node_hash
from merkle_core.merkle.merkle_proofs import MerkleProof
from merkle_core.schemas.errors import EmptyInputError, IndexOutOfBoundsError


logger = logging.getLogger(__name__)

H = TypeVar("H", bound=MerkleHasher)


def _next_level(
    current_level: Sequence[Digest],
    hasher: type[MerkleHasher],
) -> tuple[Digest, ...]:
    """Pair adjacent nodes into parents, pairing an unpaired last node with itself."""
    next_level: list[Digest] = []
    for i in range(0, len(current_level), 2):
        left = current_level[i]
        right = current_level[i + 1] if i + 1 < len(current_level) else left
        next_level.append(node_hash(left, right, hasher))
    return tuple(next_level)


class MerkleTree(Generic[H]):
    """
    An immutable binary Merkle tree over leaf digests.

    The tree keeps every level, leaf level first and the single-entry root
    level last, so proofs are extracted without rehashing. The hasher class
    is fixed at construction.

    Example:
        >>> leaves = [leaf_hash(m) for m in (b"a", b"b", b"c")]
        >>> tree = MerkleTree.from_leaves(leaves)
        >>> tree.proof(2).verify(leaves[2], tree.root)
        True
    """

    __slots__ = ("_levels", "_hasher")

    def __init__(self, levels: tuple[tuple[Digest, ...], ...], hasher: type[H]) -> None:
        self._levels = levels
        self._hasher = hasher

    @classmethod
    def from_leaves(
        cls,
        leaves: Sequence[DigestLike],
        hasher: type[H] = DEFAULT_HASHER,
    ) -> MerkleTree[H]:
        """
        Build a tree from already-hashed leaves.

        Args:
            leaves: Non-empty sequence of leaf digests. Order matters.
            hasher: Hasher class used for node hashing

        Returns:
            The constructed tree

        Raises:
            EmptyInputError: If leaves is empty
            InvalidDigestError: If a leaf is not a 32-byte digest
        """
        if len(leaves) == 0:
            raise EmptyInputError()

        levels: list[tuple[Digest, ...]] = [tuple(Digest.coerce(leaf) for leaf in leaves)]
        while len(levels[-1]) > 1:
            levels.append(_next_level(levels[-1], hasher))

        logger.debug(
            f"Built Merkle tree: {len(leaves)} leaves, {len(levels)} levels, hasher={hasher.name}"
        )
        return cls(tuple(levels), hasher)

    @property
    def root(self) -> Digest:
        """The root digest (sole element of the top level)."""
        return self._levels[-1][0]

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    @property
    def depth(self) -> int:
        """Number of levels, leaf level and root level included."""
        return len(self._levels)

    @property
    def leaves(self) -> tuple[Digest, ...]:
        return self._levels[0]

    @property
    def levels(self) -> tuple[tuple[Digest, ...], ...]:
        return self._levels

    @property
    def hasher(self) -> type[H]:
        return self._hasher

    def proof(self, index: int) -> MerkleProof:
        """
        Extract the inclusion proof for the leaf at `index`.

        At each level below the root the partner of the tracked node is
        recorded: the right neighbour for an even index, the node itself
        for an even index at the end of an odd-length level, the left
        neighbour for an odd index.

        Raises:
            TypeError: If index is not an int
            IndexOutOfBoundsError: If index is not in [0, leaf_count)
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Leaf index must be an int, got {type(index).__name__}")
        if index < 0 or index >= self.leaf_count:
            raise IndexOutOfBoundsError(index, self.leaf_count)

        siblings: list[Digest] = []
        current_index = index
        for nodes in self._levels[:-1]:
            if current_index % 2 == 0:
                partner = current_index + 1 if current_index + 1 < len(nodes) else current_index
            else:
                partner = current_index - 1
            siblings.append(nodes[partner])
            current_index //= 2

        return MerkleProof(index=index, siblings=tuple(siblings))

    def verify(self, proof: MerkleProof, leaf: Digest) -> bool:
        """Verify a proof against this tree's root using this tree's hasher."""
        return proof.verify(leaf, self.root, self._hasher)

    def __len__(self) -> int:
        return self.leaf_count

    def __repr__(self) -> str:
        return (
            f"MerkleTree(hasher={self._hasher.name!r}, leaves={self.leaf_count}, "
            f"root={self.root})"
        )


def build_merkle_tree(
    leaves: Sequence[DigestLike],
    hasher: type[H] = DEFAULT_HASHER,
) -> MerkleTree[H]:
    """Function form of MerkleTree.from_leaves."""
    return MerkleTree.from_leaves(leaves, hasher)


def build_merkle_root(
    leaves: Sequence[DigestLike],
    hasher: type[MerkleHasher] = DEFAULT_HASHER,
) -> Digest:
    """
    Compute the Merkle root of a sequence of leaf digests.

    Padding Rule: Duplicate last node at each level if odd.
    Example: [a, b, c] -> [node(a,b), node(c,c)] -> node(node(a,b), node(c,c))

    Raises:
        EmptyInputError: If leaves is empty
    """
    return MerkleTree.from_leaves(leaves, hasher).root


def build_merkle_proof(
    leaves: Sequence[DigestLike],
    index: int,
    hasher: type[MerkleHasher] = DEFAULT_HASHER,
) -> MerkleProof:
    """
    Build a tree from `leaves` and extract the proof for `index`.

    Raises:
        EmptyInputError: If leaves is empty
        IndexOutOfBoundsError: If index is out of range
    """
    return MerkleTree.from_leaves(leaves, hasher).proof(index)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with given number of leaves.

    A single leaf has depth 1, two leaves have depth 2, and every odd level
    size is rounded up by the duplicate-last rule.

    Returns:
        Tree depth (0 for no leaves)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


class MerkleProver:
    """
    Convenience class for building roots and proofs from raw inputs.

    Provides static methods for proof generation from:
    - Pre-hashed leaves (digests)
    - Raw messages (leaf-hashed first)
    - Structured objects (canonically hashed first)
    """

    @staticmethod
    def prove(
        leaves: Sequence[DigestLike],
        index: int,
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> MerkleProof:
        """Generate a proof for the leaf digest at `index`."""
        return build_merkle_proof(leaves, index, hasher)

    @staticmethod
    def prove_messages(
        messages: Sequence[bytes],
        index: int,
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> MerkleProof:
        """Generate a proof for the message at `index`."""
        leaves = [leaf_hash(m, hasher) for m in messages]
        return build_merkle_proof(leaves, index, hasher)

    @staticmethod
    def prove_objects(
        objects: Sequence[Any],
        index: int,
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> MerkleProof:
        """
        Generate a proof for the object at `index`.

        Objects are converted to leaves via canonical hashing.
        """
        leaves = [hash_canonical(obj, hasher) for obj in objects]
        return build_merkle_proof(leaves, index, hasher)

    @staticmethod
    def compute_root(
        leaves: Sequence[DigestLike],
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> Digest:
        return build_merkle_root(leaves, hasher)

    @staticmethod
    def compute_root_from_messages(
        messages: Sequence[bytes],
        hasher: type[MerkleHasher] = DEFAULT_HASHER,
    ) -> Digest:
        leaves = [leaf_hash(m, hasher) for m in messages]
        return build_merkle_root(leaves, hasher)


__all__ = [
    "MerkleTree",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_tree_depth",
    "MerkleProver",
]
