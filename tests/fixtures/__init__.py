"""
Test fixtures package for hashtree tests.

Usage:
    from fixtures import make_sequence, make_tree

    def test_something():
        tree = make_tree(["a", "b", "c"])
"""

from .common import (
    make_items,
    make_sequence,
    make_tree,
    make_tampered_tree,
)

__all__ = [
    "make_items",
    "make_sequence",
    "make_tree",
    "make_tampered_tree",
]
