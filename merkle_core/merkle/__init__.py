"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: Immutable tree built from leaf digests
- MerkleProof: Inclusion proof (leaf index + sibling path)
- build_merkle_root / build_merkle_proof / verify_merkle_proof: Function forms
- MerkleProver / MerkleVerifier: Convenience wrappers

Commitment Rules:
1. Leaf hashing: H(0x00 || message)
2. Parent hashing: H(0x01 || left || right)
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: rejected (EmptyInputError)
5. Single leaf: root = leaf

Usage:
    from merkle_core.crypto import leaf_hash
    from merkle_core.merkle import MerkleTree

    leaves = [leaf_hash(m) for m in messages]
    tree = MerkleTree.from_leaves(leaves)

    proof = tree.proof(2)
    assert proof.verify(leaves[2], tree.root)
"""
from .merkle_proofs import (
    MerkleProof,
    verify_merkle_proof,
    MerkleVerifier,
)

from .merkle_tree import (
    MerkleTree,
    build_merkle_tree,
    build_merkle_root,
    build_merkle_proof,
    compute_tree_depth,
    MerkleProver,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    # Core functions
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
