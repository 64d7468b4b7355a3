"""
Common test fixtures shared by all modules.

Provides factory functions for:
- item lists
- HashSequence
- MerkleTree (plain and with one item replaced)
"""

from typing import Any, Optional, Sequence

from hashtree.crypto import ContentHasher
from hashtree.merkle import MerkleTree
from hashtree.sequence import HashSequence


def make_items(count: int, prefix: str = "item") -> list[str]:
    """Return ["item0", "item1", ...]."""
    return [f"{prefix}{i}" for i in range(count)]


def make_sequence(
    items: Sequence[Any] = ("a", "b", "c"),
    hasher: Optional[ContentHasher] = None,
) -> HashSequence:
    """Build a HashSequence by appending items at the tail."""
    sequence = HashSequence(hasher or ContentHasher("sha256"))
    for item in items:
        sequence.add_at_tail(item)
    return sequence


def make_tree(
    items: Sequence[Any] = ("a", "b", "c"),
    hasher: Optional[ContentHasher] = None,
) -> MerkleTree:
    """Build a MerkleTree over items."""
    return MerkleTree(make_sequence(items, hasher))


def make_tampered_tree(
    items: Sequence[Any],
    index: int,
    replacement: Any,
    hasher: Optional[ContentHasher] = None,
) -> MerkleTree:
    """Build a MerkleTree over items with items[index] replaced."""
    tampered = list(items)
    tampered[index] = replacement
    return make_tree(tampered, hasher)
