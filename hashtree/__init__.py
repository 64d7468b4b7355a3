"""
hashtree: Merkle trees over ordered data.

Fingerprint an ordered dataset with a single root digest, prove that an
item or block belongs to it, and locate exactly which items differ between
two versions of the same sequence.
"""
from hashtree.crypto import ContentHasher, get_default_hasher
from hashtree.merkle import (
    PADDING_DIGEST,
    MerkleNode,
    MerkleProof,
    MerkleProofHash,
    MerkleTree,
)
from hashtree.schemas import (
    FlatNode,
    HashTreeException,
    InvalidInputException,
    StaleIterationException,
    StructuralMismatchException,
)
from hashtree.sequence import HashSequence

__version__ = "0.1.0"

__all__ = [
    "ContentHasher",
    "get_default_hasher",
    "HashSequence",
    "MerkleNode",
    "MerkleProof",
    "MerkleProofHash",
    "MerkleTree",
    "PADDING_DIGEST",
    "FlatNode",
    "HashTreeException",
    "InvalidInputException",
    "StaleIterationException",
    "StructuralMismatchException",
]
