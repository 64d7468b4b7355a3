"""
Module 04 - Merkle Tree and Proofs
Immutable Merkle tree construction, search, inclusion proofs and diffing.

This module provides:
- MerkleNode: immutable leaf / internal / padding node
- MerkleProof: sibling-digest inclusion proof with self-contained verification
- MerkleTree: tree built from a HashSequence, with queries over its nodes

Usage:
    from hashtree.sequence import HashSequence
    from hashtree.merkle import MerkleTree

    seq = HashSequence.from_items(["a", "b", "c"])
    tree = MerkleTree(seq)

    proof = tree.get_merkle_proof("b")
    assert proof.prove_validity_of_data("b")

    changed = MerkleTree(HashSequence.from_items(["a", "B", "c"]))
    assert tree.find_invalid_data_indices(changed) == {1}
"""
from .merkle_node import (
    PADDING_DIGEST,
    MerkleNode,
    merkle_parent,
)
from .merkle_proof import (
    MerkleProof,
    MerkleProofHash,
)
from .merkle_tree import (
    MerkleTree,
    next_power_of_two,
)


__all__ = [
    # Core types
    "MerkleNode",
    "MerkleProof",
    "MerkleProofHash",
    "MerkleTree",
    "PADDING_DIGEST",
    # Core functions
    "merkle_parent",
    "next_power_of_two",
]
