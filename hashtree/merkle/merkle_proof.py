"""
Module 04 - Merkle Proof
Inclusion proof for a leaf or branch of a MerkleTree.

A proof stores the sibling digests met on the path from a target node up
to the root (leaf -> root order), each tagged with the side the sibling
sits on. Verification folds a candidate digest with every sibling:

    sibling on the right:  current = parent(current, sibling)
    sibling on the left:   current = parent(sibling, current)

and succeeds iff the result equals the stored root digest. Parent
digests follow merkle_parent(), exactly as tree construction does.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from hashtree.crypto.hashing import ContentHasher, get_default_hasher
from hashtree.merkle.merkle_node import MerkleNode, merkle_parent
from hashtree.schemas.errors import InvalidInputException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProofHash:
    """
    One proof step.

    Attributes:
        digest: Digest of the sibling node
        is_right: True if the sibling is the right child of the parent
    """
    digest: str
    is_right: bool


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof anchored to a root digest.

    Attributes:
        root_digest: Root digest the proof claims to resolve to
        length: Number of combination steps (tree height for leaf proofs)
        hashes: Sibling steps, leaf -> root
        hasher: Hasher used to combine digests
    """
    root_digest: str
    length: int
    hashes: tuple[MerkleProofHash, ...] = ()
    hasher: ContentHasher = field(default_factory=get_default_hasher)

    def __post_init__(self) -> None:
        if self.length < 0:
            raise InvalidInputException(
                f"Proof length must be non-negative, got {self.length}",
                argument="length",
            )
        # Accept any iterable of steps but store an immutable tuple
        object.__setattr__(self, "hashes", tuple(self.hashes))
        if len(self.hashes) > self.length:
            raise InvalidInputException(
                f"Proof holds {len(self.hashes)} steps but its length is {self.length}",
                argument="hashes",
            )

    @property
    def is_complete(self) -> bool:
        return len(self.hashes) == self.length

    def with_hash(self, digest: str, is_right: bool) -> "MerkleProof":
        """
        Return a copy of this proof with one more step appended.

        Raises:
            InvalidInputException: If the proof already holds `length` steps
        """
        if self.is_complete:
            raise InvalidInputException(
                f"Proof already holds all {self.length} steps",
                argument="digest",
            )
        return MerkleProof(
            root_digest=self.root_digest,
            length=self.length,
            hashes=self.hashes + (MerkleProofHash(digest, is_right),),
            hasher=self.hasher,
        )

    def compute_root(self, digest: str) -> str:
        """
        Replay the proof from a candidate digest and return the resulting root.

        Raises:
            InvalidInputException: If digest is None or the proof is incomplete
        """
        if digest is None:
            raise InvalidInputException("Cannot verify a None digest", argument="digest")
        if not self.is_complete:
            raise InvalidInputException(
                f"Proof is incomplete: {len(self.hashes)} of {self.length} steps",
                argument="hashes",
            )
        current = digest
        for step in self.hashes:
            if step.is_right:
                current = merkle_parent(current, step.digest, self.hasher)
            else:
                current = merkle_parent(step.digest, current, self.hasher)
        return current

    def verify(self, digest: str) -> bool:
        """True iff replaying the proof from digest yields root_digest."""
        ok = self.compute_root(digest) == self.root_digest
        if not ok:
            logger.debug(f"Proof did not resolve to root {self.root_digest[:12]}...")
        return ok

    def prove_validity_of_data(self, data: Any) -> bool:
        """Verify the proof for a data item, hashed with the proof's hasher."""
        if data is None:
            raise InvalidInputException("Cannot prove validity of None data", argument="data")
        return self.verify(self.hasher.digest_of(data))

    def prove_validity_of_branch(self, branch: MerkleNode) -> bool:
        """Verify the proof for a branch, using the branch's own digest."""
        if branch is None:
            raise InvalidInputException("Cannot prove validity of a None branch", argument="branch")
        return self.verify(branch.digest)


__all__ = [
    "MerkleProof",
    "MerkleProofHash",
]
