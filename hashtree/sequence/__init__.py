"""
Module 03 - Hash Sequence

Ordered (item, digest) container that supplies leaf digests to MerkleTree.
"""
from .hash_sequence import HashSequence, HashSequenceIterator

__all__ = [
    "HashSequence",
    "HashSequenceIterator",
]
