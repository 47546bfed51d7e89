"""
Merkle Tree Unit Tests
Tests for merkle_core/merkle/merkle_tree.py

Covers:
1. Root determinism - same leaves → same root across runs
2. Padding correctness - odd leaf count uses "duplicate last" rule
3. Proof extraction - sibling paths and index bounds
4. Empty leaves - rejected with EmptyInputError
5. Single leaf - root equals leaf
"""
import pytest

from merkle_core.crypto import Digest, Keccak, Sha256, Sha3, leaf_hash, node_hash
from merkle_core.merkle.merkle_tree import (
    MerkleTree,
    build_merkle_tree,
    build_merkle_root,
    build_merkle_proof,
    compute_tree_depth,
)
from merkle_core.schemas.errors import (
    EmptyInputError,
    ErrorCodes,
    IndexOutOfBoundsError,
    InvalidDigestError,
)


class TestEmptyTree:
    """Tests for empty input behavior."""

    def test_empty_leaves_raises(self):
        """Building from no leaves fails with EmptyInputError."""
        with pytest.raises(EmptyInputError) as exc_info:
            MerkleTree.from_leaves([])

        assert exc_info.value.code == ErrorCodes.EMPTY_INPUT

    def test_empty_leaves_is_value_error(self):
        """EmptyInputError is still a ValueError for generic callers."""
        with pytest.raises(ValueError, match="empty"):
            build_merkle_root([])

    def test_build_proof_empty_raises(self):
        """Cannot generate proof for empty tree."""
        with pytest.raises(EmptyInputError):
            build_merkle_proof([], 0)


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf(self):
        """Root of single-leaf tree equals the leaf itself."""
        leaf = leaf_hash(b"single leaf")
        tree = MerkleTree.from_leaves([leaf])

        assert tree.root == leaf
        assert tree.depth == 1
        assert tree.leaf_count == 1

    def test_single_leaf_proof_no_siblings(self):
        """Proof for single leaf has no siblings."""
        leaf = leaf_hash(b"only one")
        proof = MerkleTree.from_leaves([leaf]).proof(0)

        assert proof.index == 0
        assert proof.siblings == ()

    def test_single_leaf_proof_verifies_only_that_leaf(self):
        """Single-leaf verification reduces to comparing leaf and root."""
        leaf = leaf_hash(b"single")
        tree = MerkleTree.from_leaves([leaf])
        proof = tree.proof(0)

        assert proof.verify(leaf, tree.root)
        assert not proof.verify(leaf_hash(b"other"), tree.root)


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_leaves_same_root(self, make_leaves):
        """Same leaves produce same root across multiple builds."""
        leaves = make_leaves(3)

        roots = [build_merkle_root(leaves) for _ in range(10)]

        assert all(r == roots[0] for r in roots)

    def test_same_leaves_same_proofs(self, make_leaves):
        """Two builds from the same leaves give identical proofs."""
        tree1 = MerkleTree.from_leaves(make_leaves(6))
        tree2 = MerkleTree.from_leaves(make_leaves(6))

        for i in range(6):
            assert tree1.proof(i) == tree2.proof(i)

    def test_different_leaves_different_roots(self):
        """Different leaves produce different roots."""
        leaves1 = [leaf_hash(b"a"), leaf_hash(b"b")]
        leaves2 = [leaf_hash(b"x"), leaf_hash(b"y")]

        assert build_merkle_root(leaves1) != build_merkle_root(leaves2)

    def test_leaf_order_matters(self):
        """Different leaf ordering produces different roots."""
        leaves1 = [leaf_hash(b"a"), leaf_hash(b"b"), leaf_hash(b"c")]
        leaves2 = [leaf_hash(b"c"), leaf_hash(b"b"), leaf_hash(b"a")]

        assert build_merkle_root(leaves1) != build_merkle_root(leaves2)


class TestPaddingCorrectness:
    """Tests for odd-number duplicate-last behavior."""

    def test_padding_rule_three_leaves(self):
        """Three leaves: c is paired with itself, not dropped or zero-padded."""
        a = leaf_hash(b"a")
        b = leaf_hash(b"b")
        c = leaf_hash(b"c")

        # Level 0: [a, b, c]
        # Level 1: [node(a,b), node(c,c)]
        # Level 2: [node(node(a,b), node(c,c))]
        expected_root = node_hash(node_hash(a, b), node_hash(c, c))

        assert build_merkle_root([a, b, c]) == expected_root

    def test_padding_rule_five_leaves(self, make_leaves):
        """Five leaves use duplicate-last at multiple levels."""
        a, b, c, d, e = make_leaves(5)

        # Level 1: [ab, cd, ee]
        # Level 2: [abcd, eeee]
        ab = node_hash(a, b)
        cd = node_hash(c, d)
        ee = node_hash(e, e)
        expected_root = node_hash(node_hash(ab, cd), node_hash(ee, ee))

        assert build_merkle_root([a, b, c, d, e]) == expected_root

    def test_even_leaves_no_padding_needed(self, make_leaves):
        """Even number of leaves pairs cleanly at the leaf level."""
        a, b, c, d = make_leaves(4)

        expected_root = node_hash(node_hash(a, b), node_hash(c, d))

        assert build_merkle_root([a, b, c, d]) == expected_root

    def test_two_leaves(self):
        """Two leaves hash directly into the root."""
        a, b = leaf_hash(b"a"), leaf_hash(b"b")

        assert build_merkle_root([a, b]) == node_hash(a, b)

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 7, 8, 9, 16, 17, 100])
    def test_level_sizes_halve_rounding_up(self, make_leaves, n):
        """Each level has ceil(len(previous) / 2) entries, ending in one root."""
        tree = MerkleTree.from_leaves(make_leaves(n))

        sizes = [len(level) for level in tree.levels]
        assert sizes[0] == n
        assert sizes[-1] == 1
        for prev, cur in zip(sizes, sizes[1:]):
            assert cur == (prev + 1) // 2


class TestTreeQueries:
    """Tests for read-only tree accessors."""

    def test_leaf_count_and_len(self, tree, leaves):
        assert tree.leaf_count == len(leaves)
        assert len(tree) == len(leaves)

    def test_leaves_preserved(self, tree, leaves):
        assert tree.leaves == tuple(leaves)

    def test_root_is_top_level(self, tree):
        assert tree.levels[-1] == (tree.root,)

    def test_default_hasher_is_sha3(self, tree):
        assert tree.hasher is Sha3

    def test_levels_are_immutable(self, tree):
        """Levels are tuples; there is no way to mutate a built tree."""
        assert isinstance(tree.levels, tuple)
        assert all(isinstance(level, tuple) for level in tree.levels)

    def test_build_merkle_tree_function_form(self, leaves):
        tree = build_merkle_tree(leaves, Keccak)

        assert tree.hasher is Keccak
        assert tree.root == MerkleTree.from_leaves(leaves, Keccak).root

    def test_repr_mentions_hasher_and_root(self, tree):
        text = repr(tree)

        assert "sha3-256" in text
        assert tree.root.to_hex() in text


class TestLeafCoercion:
    """Tests for accepting raw 32-byte leaves."""

    def test_bytes_leaves_accepted(self, leaves):
        """32-byte bytes values are accepted as leaves."""
        raw = [leaf.as_bytes() for leaf in leaves]

        assert build_merkle_root(raw) == build_merkle_root(leaves)

    def test_wrong_size_leaf_rejected(self):
        with pytest.raises(InvalidDigestError):
            MerkleTree.from_leaves([b"too short"])

    def test_non_bytes_leaf_rejected(self):
        with pytest.raises(InvalidDigestError):
            MerkleTree.from_leaves(["not a digest"])


class TestProofExtraction:
    """Tests for MerkleTree.proof()."""

    def test_sibling_count_is_depth_minus_one(self, make_leaves):
        for n in (2, 3, 5, 8, 13):
            tree = MerkleTree.from_leaves(make_leaves(n))
            for i in range(n):
                assert len(tree.proof(i).siblings) == tree.depth - 1

    def test_proof_keeps_original_index(self, tree):
        for i in range(tree.leaf_count):
            assert tree.proof(i).index == i

    def test_three_leaf_proof_paths(self):
        """Explicit sibling paths for [a, b, c]."""
        a, b, c = (leaf_hash(m) for m in (b"a", b"b", b"c"))
        tree = MerkleTree.from_leaves([a, b, c])
        ab = node_hash(a, b)
        cc = node_hash(c, c)

        assert tree.proof(0).siblings == (b, cc)
        assert tree.proof(1).siblings == (a, cc)
        # Last odd leaf is its own partner
        assert tree.proof(2).siblings == (c, ab)

    def test_index_equal_to_leaf_count_rejected(self, tree):
        """index == leaf_count is out of bounds."""
        with pytest.raises(IndexOutOfBoundsError) as exc_info:
            tree.proof(tree.leaf_count)

        assert exc_info.value.code == ErrorCodes.INDEX_OUT_OF_BOUNDS
        assert exc_info.value.details == {"index": 5, "leaf_count": 5}

    @pytest.mark.parametrize("index", [6, 100, -1])
    def test_out_of_range_indices_rejected(self, tree, index):
        with pytest.raises(IndexOutOfBoundsError):
            tree.proof(index)

    def test_out_of_bounds_is_index_error(self, tree):
        """IndexOutOfBoundsError is still an IndexError."""
        with pytest.raises(IndexError):
            tree.proof(10)

    @pytest.mark.parametrize("index", [1.0, True, "1", None])
    def test_non_int_index_rejected(self, tree, index):
        with pytest.raises(TypeError, match="must be an int"):
            tree.proof(index)


class TestComputeTreeDepth:
    """Tests for compute_tree_depth() function."""

    def test_depth_empty(self):
        assert compute_tree_depth(0) == 0

    def test_depth_single_leaf(self):
        assert compute_tree_depth(1) == 1

    def test_depth_two_leaves(self):
        assert compute_tree_depth(2) == 2

    def test_depth_power_of_two(self):
        assert compute_tree_depth(4) == 3
        assert compute_tree_depth(8) == 4
        assert compute_tree_depth(16) == 5

    def test_depth_non_power_of_two(self):
        """Non-power-of-two requires extra depth due to duplicate-last."""
        assert compute_tree_depth(3) == 3
        assert compute_tree_depth(5) == 4
        assert compute_tree_depth(7) == 4

    def test_depth_matches_built_tree(self, make_leaves):
        for n in range(1, 40):
            assert MerkleTree.from_leaves(make_leaves(n)).depth == compute_tree_depth(n)


class TestHasherSelection:
    """Tests that the hasher is fixed per tree."""

    def test_hashers_give_different_roots(self, messages):
        roots = set()
        for hasher in (Sha3, Keccak, Sha256):
            leaves = [leaf_hash(m, hasher) for m in messages]
            roots.add(MerkleTree.from_leaves(leaves, hasher).root)

        assert len(roots) == 3

    def test_node_hashing_uses_tree_hasher(self):
        a, b = leaf_hash(b"a", Keccak), leaf_hash(b"b", Keccak)
        tree = MerkleTree.from_leaves([a, b], Keccak)

        assert tree.root == node_hash(a, b, Keccak)
        assert tree.root != node_hash(a, b, Sha3)

    def test_root_is_digest(self, tree):
        assert isinstance(tree.root, Digest)
