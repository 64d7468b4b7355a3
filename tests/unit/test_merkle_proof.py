"""
Module 04 - Merkle Proof Unit Tests
Tests for hashtree/merkle/merkle_proof.py and proof generation in MerkleTree

Required behaviour:
1. Every item's proof verifies against the tree's root
2. Sibling order is leaf -> root with correct sides
3. Padding siblings replay the construction rule
4. Tampered candidates fail verification
5. Incomplete proofs cannot be verified
"""
import dataclasses

import pytest

from hashtree.crypto import ContentHasher
from hashtree.merkle import PADDING_DIGEST, MerkleNode, MerkleProof, MerkleProofHash
from hashtree.schemas.errors import InvalidInputException

from fixtures import make_items, make_tree


class TestProofObject:
    """Tests for MerkleProof as a standalone value."""

    def test_manual_two_leaf_proof(self, hasher):
        left, right = hasher.digest_of("l"), hasher.digest_of("r")
        root = hasher.combine(left, right)

        proof = MerkleProof(root, 1, hasher=hasher).with_hash(right, is_right=True)

        assert proof.is_complete
        assert proof.verify(left)
        assert not proof.verify(right)

    def test_side_matters(self, hasher):
        left, right = hasher.digest_of("l"), hasher.digest_of("r")
        root = hasher.combine(left, right)

        wrong_side = MerkleProof(root, 1, hasher=hasher).with_hash(right, is_right=False)

        assert not wrong_side.verify(left)

    def test_with_hash_returns_new_proof(self, hasher):
        empty = MerkleProof("root", 2, hasher=hasher)
        one = empty.with_hash("x", True)

        assert empty.hashes == ()
        assert one.hashes == (MerkleProofHash("x", True),)
        assert not one.is_complete

    def test_with_hash_on_full_proof_rejected(self, hasher):
        proof = MerkleProof("root", 1, hasher=hasher).with_hash("x", True)

        with pytest.raises(InvalidInputException, match="already holds"):
            proof.with_hash("y", False)

    def test_incomplete_proof_cannot_verify(self, hasher):
        proof = MerkleProof("root", 2, hasher=hasher).with_hash("x", True)

        with pytest.raises(InvalidInputException, match="incomplete"):
            proof.verify("anything")

    def test_negative_length_rejected(self):
        with pytest.raises(InvalidInputException):
            MerkleProof("root", -1)

    def test_too_many_steps_rejected(self):
        with pytest.raises(InvalidInputException):
            MerkleProof("root", 0, hashes=[MerkleProofHash("x", True)])

    def test_hashes_stored_as_tuple(self):
        proof = MerkleProof("root", 1, hashes=[MerkleProofHash("x", True)])

        assert isinstance(proof.hashes, tuple)

    def test_frozen(self):
        proof = MerkleProof("root", 0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            proof.length = 3

    def test_zero_length_proof_is_identity(self, hasher):
        proof = MerkleProof("abc", 0, hasher=hasher)

        assert proof.verify("abc")
        assert not proof.verify("abd")

    def test_none_arguments_rejected(self):
        proof = MerkleProof("root", 0)

        with pytest.raises(InvalidInputException):
            proof.verify(None)
        with pytest.raises(InvalidInputException):
            proof.prove_validity_of_data(None)
        with pytest.raises(InvalidInputException):
            proof.prove_validity_of_branch(None)


class TestDataProofs:
    """Tests for MerkleTree.get_merkle_proof(data)."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 7, 8, 9, 16])
    def test_every_item_verifies(self, count):
        items = make_items(count)
        tree = make_tree(items)

        for item in items:
            proof = tree.get_merkle_proof(item)
            assert proof.prove_validity_of_data(item), f"Proof failed for {item}"
            assert proof.length == tree.height
            assert proof.root_digest == tree.root.digest
            assert proof.compute_root(tree.hasher.digest_of(item)) == tree.root.digest

    def test_proof_steps_for_first_leaf(self, abc_tree, hasher):
        a, b, c = (hasher.digest_of(x) for x in "abc")

        proof = abc_tree.get_merkle_proof("a")

        assert proof.hashes == (
            MerkleProofHash(b, is_right=True),
            MerkleProofHash(hasher.combine(c, ""), is_right=True),
        )

    def test_proof_steps_next_to_padding(self, abc_tree, hasher):
        """The padding sibling of "c" is recorded with the sentinel digest."""
        a, b = hasher.digest_of("a"), hasher.digest_of("b")

        proof = abc_tree.get_merkle_proof("c")

        assert proof.hashes == (
            MerkleProofHash(PADDING_DIGEST, is_right=True),
            MerkleProofHash(hasher.combine(a, b), is_right=False),
        )
        assert proof.prove_validity_of_data("c")

    def test_single_item_proof_is_empty(self):
        tree = make_tree(["only"])

        proof = tree.get_merkle_proof("only")

        assert proof.length == 0
        assert proof.hashes == ()
        assert proof.prove_validity_of_data("only")

    def test_duplicates_prove_leftmost(self, hasher):
        tree = make_tree(["x", "y", "x", "z"])

        proof = tree.get_merkle_proof("x")

        assert proof.hashes[0] == MerkleProofHash(hasher.digest_of("y"), is_right=True)
        assert proof.prove_validity_of_data("x")

    def test_tampered_candidate_fails(self, abc_tree):
        proof = abc_tree.get_merkle_proof("a")

        assert not proof.prove_validity_of_data("b")
        assert not proof.prove_validity_of_data("A")

    def test_proof_fails_against_other_root(self, abc_tree):
        other = make_tree(["a", "b", "C"])
        proof = abc_tree.get_merkle_proof("a")

        forged = MerkleProof(other.root.digest, proof.length, proof.hashes, proof.hasher)

        assert not forged.prove_validity_of_data("a")

    def test_unknown_data_rejected(self, abc_tree):
        with pytest.raises(InvalidInputException, match="not part"):
            abc_tree.get_merkle_proof("zzz")

    def test_none_data_rejected(self, abc_tree):
        with pytest.raises(InvalidInputException):
            abc_tree.get_merkle_proof(None)

    def test_proof_uses_tree_hasher(self):
        md5 = ContentHasher("md5")
        tree = make_tree(["a", "b"], hasher=md5)

        proof = tree.get_merkle_proof("a")

        assert proof.hasher == md5
        assert proof.prove_validity_of_data("a")


class TestBranchProofs:
    """Tests for MerkleTree.get_merkle_proof_for_branch(branch)."""

    def test_internal_branch(self, abc_tree):
        branch = abc_tree.root.left

        proof = abc_tree.get_merkle_proof_for_branch(branch)

        assert proof.length == 1
        assert proof.hashes == (MerkleProofHash(abc_tree.root.right.digest, is_right=True),)
        assert proof.prove_validity_of_branch(branch)

    def test_right_branch(self, abc_tree):
        branch = abc_tree.root.right

        proof = abc_tree.get_merkle_proof_for_branch(branch)

        assert proof.hashes == (MerkleProofHash(abc_tree.root.left.digest, is_right=False),)
        assert proof.prove_validity_of_branch(branch)

    def test_root_branch(self, abc_tree):
        proof = abc_tree.get_merkle_proof_for_branch(abc_tree.root)

        assert proof.length == 0
        assert proof.prove_validity_of_branch(abc_tree.root)

    def test_every_node_of_a_tree_verifies(self):
        tree = make_tree(make_items(6))
        stack = [tree.root]
        while stack:
            node = stack.pop()
            if node.is_padding:
                continue
            assert tree.get_merkle_proof_for_branch(node).prove_validity_of_branch(node)
            if not node.is_leaf:
                stack.extend([node.left, node.right])

    def test_branch_with_matching_digest(self, abc_tree, hasher):
        """Branches are located by digest, so an equal-digest copy works too."""
        copy = MerkleNode.leaf(hasher.digest_of("b"))

        proof = abc_tree.get_merkle_proof_for_branch(copy)

        assert proof.prove_validity_of_branch(copy)

    def test_unknown_branch_rejected(self, abc_tree, hasher):
        with pytest.raises(InvalidInputException):
            abc_tree.get_merkle_proof_for_branch(MerkleNode.leaf(hasher.digest_of("zzz")))

    def test_none_branch_rejected(self, abc_tree):
        with pytest.raises(InvalidInputException):
            abc_tree.get_merkle_proof_for_branch(None)
