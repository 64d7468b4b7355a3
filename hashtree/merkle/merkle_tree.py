"""
Module 04 - Merkle Tree Implementation
Immutable Merkle tree over a HashSequence, with search, validation,
proof generation and tree diffing.

Canonical Construction Rules (Hard Contracts):
1. Leaves: the sequence's digests in order, then padding leaves up to the
   next power of two
2. Parents: merkle_parent(left, right); two padding children give a
   padding parent
3. Height: log2(leaf count); a single-item tree has height 0
4. Leaf index i always refers to the i-th item of the source sequence

Traversal Notes:
- Every traversal uses an explicit stack and visits leaves left to right
- Searches return the leftmost match; absence is -1 (indices) or None (paths)
- "Node of this tree" means identity: a node reachable from the root
"""
from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from hashtree.crypto.hashing import ContentHasher
from hashtree.merkle.merkle_node import MerkleNode
from hashtree.merkle.merkle_proof import MerkleProof, MerkleProofHash
from hashtree.schemas.canonical import dumps_canonical
from hashtree.schemas.errors import InvalidInputException, StructuralMismatchException
from hashtree.schemas.nodes import FlatNode
from hashtree.sequence.hash_sequence import HashSequence


logger = logging.getLogger(__name__)


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    result = 1
    while result < n:
        result *= 2
    return result


def _iter_nodes(start: MerkleNode) -> Iterator[MerkleNode]:
    """Pre-order traversal, left subtree before right."""
    stack = [start]
    while stack:
        node = stack.pop()
        yield node
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)


def _iter_leaves(start: MerkleNode) -> Iterator[MerkleNode]:
    """Leaves under start, left to right."""
    return (node for node in _iter_nodes(start) if node.is_leaf)


class MerkleTree:
    """
    Merkle tree built once from a HashSequence snapshot.

    Example:
        >>> seq = HashSequence.from_items(["a", "b", "c"])
        >>> tree = MerkleTree(seq)
        >>> (tree.width, tree.leaf_count, tree.height)
        (3, 4, 2)
        >>> tree.index_of_data("c")
        2
    """

    def __init__(
        self,
        sequence: HashSequence,
        hasher: Optional[ContentHasher] = None,
    ) -> None:
        """
        Build the tree bottom-up.

        Args:
            sequence: Non-empty source sequence
            hasher: Must match the sequence's hasher when given; leaf
                digests and lookups share one algorithm

        Raises:
            InvalidInputException: If sequence is None or empty, or if
                hasher differs from the sequence's
        """
        if sequence is None or len(sequence) == 0:
            raise InvalidInputException(
                "Cannot build a Merkle tree from a None or empty sequence",
                argument="sequence",
            )
        if hasher is not None and hasher != sequence.hasher:
            raise InvalidInputException(
                f"Hasher {hasher.algorithm!r} does not match the sequence hasher "
                f"{sequence.hasher.algorithm!r}",
                argument="hasher",
            )
        self._hasher = sequence.hasher

        digests = sequence.digests_in_order()
        self._width = len(digests)
        self._leaf_count = next_power_of_two(self._width)

        level = [MerkleNode.leaf(digest) for digest in digests]
        level.extend(MerkleNode.padding() for _ in range(self._leaf_count - self._width))

        height = 0
        while len(level) > 1:
            level = [
                MerkleNode.parent(level[i], level[i + 1], self._hasher)
                for i in range(0, len(level), 2)
            ]
            height += 1

        self._root = level[0]
        self._height = height
        logger.debug(
            f"Built Merkle tree: width={self._width} leaves={self._leaf_count} "
            f"height={self._height} algorithm={self._hasher.algorithm}"
        )

    @classmethod
    def from_items(
        cls,
        items: Any,
        hasher: Optional[ContentHasher] = None,
    ) -> "MerkleTree":
        """Build a tree straight from an iterable of items."""
        return cls(HashSequence.from_items(items, hasher))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def root(self) -> MerkleNode:
        return self._root

    @property
    def width(self) -> int:
        """Number of real (non-padding) leaves."""
        return self._width

    @property
    def height(self) -> int:
        """Number of edges from the root to any leaf."""
        return self._height

    @property
    def leaf_count(self) -> int:
        """Number of leaves including padding."""
        return self._leaf_count

    @property
    def hasher(self) -> ContentHasher:
        return self._hasher

    def leaves(self) -> list[MerkleNode]:
        """All leaves left to right, padding included."""
        return list(_iter_leaves(self._root))

    # -------------------------------------------------------------------------
    # Search & validation
    # -------------------------------------------------------------------------

    def _digest_of(self, data: Any) -> str:
        if data is None:
            raise InvalidInputException("Data must not be None", argument="data")
        return self._hasher.digest_of(data)

    @staticmethod
    def _index_of_digest(start: MerkleNode, digest: str) -> int:
        for index, leaf in enumerate(_iter_leaves(start)):
            if leaf.digest == digest:
                return index
        return -1

    def index_of_data(self, data: Any) -> int:
        """
        Index of the leftmost leaf holding data's digest.

        Returns:
            0-based index in source order, or -1 if no leaf matches

        Raises:
            InvalidInputException: If data is None
        """
        return self._index_of_digest(self._root, self._digest_of(data))

    def index_of_data_in_branch(self, branch: MerkleNode, data: Any) -> int:
        """
        Index of data's digest among the leaves of branch.

        The index is an offset from the branch's leftmost leaf, not an index
        into the whole tree.

        Raises:
            InvalidInputException: If either argument is None or branch is not
                a node of this tree
        """
        if branch is None:
            raise InvalidInputException("Branch must not be None", argument="branch")
        digest = self._digest_of(data)
        if not self.validate_branch(branch):
            raise InvalidInputException("Branch is not part of this tree", argument="branch")
        return self._index_of_digest(branch, digest)

    def validate_data(self, data: Any) -> bool:
        """True iff data's digest is the digest of some leaf."""
        digest = self._digest_of(data)
        return any(leaf.digest == digest for leaf in _iter_leaves(self._root))

    def validate_branch(self, branch: MerkleNode) -> bool:
        """True iff branch is literally a node of this tree."""
        if branch is None:
            return False
        return any(node is branch for node in _iter_nodes(self._root))

    def get_path_to_descendant(
        self,
        start: MerkleNode,
        target_digest: str,
    ) -> Optional[list[MerkleNode]]:
        """
        Path from start down to the first node carrying target_digest.

        Nodes are examined in pre-order with the left subtree first, so the
        path leads to the leftmost match. Both ends are included.

        Returns:
            The path, or None if no descendant of start (start included)
            carries the digest

        Raises:
            InvalidInputException: If start or target_digest is None
        """
        if start is None:
            raise InvalidInputException("Start node must not be None", argument="start")
        if target_digest is None:
            raise InvalidInputException("Target digest must not be None", argument="target_digest")

        path: list[MerkleNode] = []
        stack: list[tuple[MerkleNode, int]] = [(start, 0)]
        while stack:
            node, depth = stack.pop()
            # Drop the part of the path belonging to an exhausted subtree
            del path[depth:]
            path.append(node)
            if node.digest == target_digest:
                return path
            if not node.is_leaf:
                stack.append((node.right, depth + 1))
                stack.append((node.left, depth + 1))
        return None

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def get_merkle_proof(self, data: Any) -> MerkleProof:
        """
        Proof of inclusion for a data item.

        Raises:
            InvalidInputException: If data is None or not part of the tree
        """
        digest = self._digest_of(data)
        path = self.get_path_to_descendant(self._root, digest)
        if path is None:
            raise InvalidInputException("Data is not part of this tree", argument="data")
        return self._proof_from_path(path)

    def get_merkle_proof_for_branch(self, branch: MerkleNode) -> MerkleProof:
        """
        Proof of inclusion for a branch (a block of contiguous data).

        The path leads to the leftmost node carrying the branch's digest.

        Raises:
            InvalidInputException: If branch is None or its digest is not
                found in the tree
        """
        if branch is None:
            raise InvalidInputException("Branch must not be None", argument="branch")
        path = self.get_path_to_descendant(self._root, branch.digest)
        if path is None:
            raise InvalidInputException("Branch is not part of this tree", argument="branch")
        return self._proof_from_path(path)

    def _proof_from_path(self, path: list[MerkleNode]) -> MerkleProof:
        steps: list[MerkleProofHash] = []
        for depth in range(len(path) - 2, -1, -1):
            parent = path[depth]
            child = path[depth + 1]
            if parent.left is child:
                steps.append(MerkleProofHash(parent.right.digest, is_right=True))
            else:
                steps.append(MerkleProofHash(parent.left.digest, is_right=False))
        return MerkleProof(
            root_digest=self._root.digest,
            length=len(path) - 1,
            hashes=tuple(steps),
            hasher=self._hasher,
        )

    # -------------------------------------------------------------------------
    # Tree comparison
    # -------------------------------------------------------------------------

    def find_invalid_data_indices(self, other: "MerkleTree") -> set[int]:
        """
        Indices of the leaves where other diverges from this tree.

        Subtrees whose roots carry equal digests are skipped without being
        descended, so the cost is proportional to the number of differences
        times the height.

        Each index is the differing leaf's own position, so a changed
        duplicate is reported where it sits, not at its first copy.

        Raises:
            InvalidInputException: If other is None
            StructuralMismatchException: If the trees have different shapes
        """
        if other is None:
            raise InvalidInputException("Other tree must not be None", argument="other")

        invalid: set[int] = set()
        skipped = 0
        # (node, other node, index of the leftmost leaf below node, leaves below node, depth)
        stack: list[tuple[MerkleNode, MerkleNode, int, int, int]] = [
            (self._root, other.root, 0, self._leaf_count, 0)
        ]
        while stack:
            node, other_node, first_leaf, span, depth = stack.pop()
            if node.is_leaf != other_node.is_leaf:
                raise StructuralMismatchException(
                    "Trees have different structure",
                    depth=depth,
                    details={"width": self._width, "other_width": other.width},
                )
            if node.digest == other_node.digest:
                if not node.is_leaf:
                    skipped += 1
                continue
            if node.is_leaf:
                invalid.add(first_leaf)
                continue
            half = span // 2
            stack.append((node.right, other_node.right, first_leaf + half, half, depth + 1))
            stack.append((node.left, other_node.left, first_leaf, half, depth + 1))

        logger.debug(
            f"Tree diff found {len(invalid)} invalid indices, skipped {skipped} equal subtrees"
        )
        return invalid

    def validate_tree(self, other: "MerkleTree") -> bool:
        """
        True iff other holds the same data as this tree.

        A structural mismatch counts as "not valid" here instead of raising;
        use find_invalid_data_indices() to observe it.

        Raises:
            InvalidInputException: If other is None
        """
        try:
            return not self.find_invalid_data_indices(other)
        except StructuralMismatchException as e:
            logger.debug(f"Tree validation failed on structure: {e.message}")
            return False

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_flat(self) -> list[FlatNode]:
        """Breadth-first flat export; the root is at index 0."""
        order = [self._root]
        position = 0
        while position < len(order):
            node = order[position]
            if not node.is_leaf:
                order.append(node.left)
                order.append(node.right)
            position += 1

        index_of = {id(node): i for i, node in enumerate(order)}
        return [
            FlatNode(
                digest=node.digest,
                is_leaf=node.is_leaf,
                left=None if node.is_leaf else index_of[id(node.left)],
                right=None if node.is_leaf else index_of[id(node.right)],
            )
            for node in order
        ]

    def to_flat_json(self) -> str:
        """Canonical JSON of to_flat()."""
        return dumps_canonical(self.to_flat())

    def __repr__(self) -> str:
        return (
            f"MerkleTree(width={self._width}, height={self._height}, "
            f"root={self._root.digest[:12]}...)"
        )


__all__ = [
    "MerkleTree",
    "next_power_of_two",
]
