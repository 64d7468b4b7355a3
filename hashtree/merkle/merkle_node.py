"""
Module 04 - Merkle Node
Immutable node type shared by MerkleTree and MerkleProof.

Node Rules (Hard Contracts):
1. A node is a leaf iff it has no children; internal nodes have exactly two
2. Internal digest = combine(left.digest, right.digest)
3. Padding is a tagged variant: a padding node carries PADDING_DIGEST, and
   an internal node is padding iff both of its children are padding
4. Node equality is digest equality; membership in a tree is identity
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hashtree.crypto.hashing import ContentHasher
from hashtree.schemas.errors import InvalidInputException


# Digest carried by padding nodes. ContentHasher never produces it.
PADDING_DIGEST: str = ""


def merkle_parent(left: str, right: str, hasher: ContentHasher) -> str:
    """
    Compute the parent digest of two child digests.

    Two padding digests yield a padding digest; anything else is
    hasher.combine(left, right). Used both to build trees and to
    replay proofs, so the two always agree.
    """
    if left == PADDING_DIGEST and right == PADDING_DIGEST:
        return PADDING_DIGEST
    return hasher.combine(left, right)


@dataclass(frozen=True)
class MerkleNode:
    """
    A leaf or internal node of a Merkle tree.

    Use the leaf(), padding() and parent() constructors rather than
    building nodes field by field.

    Attributes:
        digest: Hex digest of the node (PADDING_DIGEST for padding)
        left: Left child, None for leaves
        right: Right child, None for leaves
        is_padding: True for synthetic nodes that cover no real data
    """
    digest: str
    left: Optional["MerkleNode"] = field(default=None, compare=False, repr=False)
    right: Optional["MerkleNode"] = field(default=None, compare=False, repr=False)
    is_padding: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if (self.left is None) != (self.right is None):
            raise InvalidInputException("A Merkle node needs zero or two children")
        if self.is_padding and self.digest != PADDING_DIGEST:
            raise InvalidInputException("Padding nodes must carry the padding digest")
        if not self.is_padding and self.digest == PADDING_DIGEST:
            raise InvalidInputException("Only padding nodes may carry the padding digest")

    @classmethod
    def leaf(cls, digest: str) -> "MerkleNode":
        """Create a leaf for a real data digest."""
        if not digest:
            raise InvalidInputException("Leaf digest must be a non-empty string", argument="digest")
        return cls(digest=digest)

    @classmethod
    def padding(cls) -> "MerkleNode":
        """Create a padding leaf."""
        return cls(digest=PADDING_DIGEST, is_padding=True)

    @classmethod
    def parent(
        cls,
        left: "MerkleNode",
        right: "MerkleNode",
        hasher: ContentHasher,
    ) -> "MerkleNode":
        """Create the internal node over two children."""
        return cls(
            digest=merkle_parent(left.digest, right.digest, hasher),
            left=left,
            right=right,
            is_padding=left.is_padding and right.is_padding,
        )

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    def has_same_digest(self, other: "MerkleNode") -> bool:
        return self.digest == other.digest

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "internal"
        if self.is_padding:
            return f"MerkleNode({kind}, padding)"
        return f"MerkleNode({kind}, digest={self.digest[:12]}...)"


__all__ = [
    "PADDING_DIGEST",
    "MerkleNode",
    "merkle_parent",
]
