"""
Core cryptographic utilities.

Module 02 provides content hashing.
"""
from .hashing import (
    ContentHasher,
    get_hasher,
    get_default_hasher,
    hash_bytes,
    hash_item,
    hash_concat,
)

__all__ = [
    "ContentHasher",
    "get_hasher",
    "get_default_hasher",
    "hash_bytes",
    "hash_item",
    "hash_concat",
]
