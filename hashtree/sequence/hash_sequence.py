"""
Module 03 - Hash Sequence
Ordered, linked collection of (item, digest) entries feeding a Merkle tree.

This module provides:
- HashSequence: singly linked chain with head/tail insertion, first-match
  removal and an in-order digest snapshot
- Fail-fast iteration: an iterator created before a structural
  modification raises StaleIterationException on its next advance

Digest Rules:
- An entry's digest is computed once, at insertion, by the sequence's
  ContentHasher and never recomputed
"""
from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, TypeVar

from hashtree.crypto.hashing import ContentHasher, get_default_hasher
from hashtree.schemas.errors import InvalidInputException, StaleIterationException


T = TypeVar("T")


class _Entry(Generic[T]):
    __slots__ = ("data", "digest", "next")

    def __init__(self, data: T, digest: str) -> None:
        self.data = data
        self.digest = digest
        self.next: Optional[_Entry[T]] = None


class HashSequenceIterator(Iterator[T]):
    """Forward, non-restartable iterator over a HashSequence's items."""

    def __init__(self, sequence: "HashSequence[T]") -> None:
        self._sequence = sequence
        self._entry = sequence._head
        self._expected_modifications = sequence._modifications

    def __iter__(self) -> "HashSequenceIterator[T]":
        return self

    def __next__(self) -> T:
        actual = self._sequence._modifications
        if actual != self._expected_modifications:
            raise StaleIterationException(
                "HashSequence was modified during iteration",
                expected_modifications=self._expected_modifications,
                actual_modifications=actual,
            )
        if self._entry is None:
            raise StopIteration
        data = self._entry.data
        self._entry = self._entry.next
        return data


class HashSequence(Generic[T]):
    """
    Ordered collection of items, each paired with its content digest.

    Example:
        >>> seq = HashSequence()
        >>> seq.add_at_tail("a")
        >>> seq.add_at_tail("b")
        >>> len(seq)
        2
        >>> len(seq.digests_in_order())
        2
    """

    def __init__(self, hasher: Optional[ContentHasher] = None) -> None:
        self._hasher = hasher or get_default_hasher()
        self._head: Optional[_Entry[T]] = None
        self._tail: Optional[_Entry[T]] = None
        self._size = 0
        # Bumped on every structural change; read by iterators only
        self._modifications = 0

    @classmethod
    def from_items(
        cls,
        items: Iterable[T],
        hasher: Optional[ContentHasher] = None,
    ) -> "HashSequence[T]":
        """Build a sequence by appending each item in order."""
        sequence: HashSequence[T] = cls(hasher)
        for item in items:
            sequence.add_at_tail(item)
        return sequence

    @property
    def hasher(self) -> ContentHasher:
        return self._hasher

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def _new_entry(self, data: T) -> _Entry[T]:
        if data is None:
            raise InvalidInputException("Cannot add None to a HashSequence", argument="data")
        return _Entry(data, self._hasher.digest_of(data))

    def add_at_head(self, data: T) -> None:
        """Insert an item before the current head."""
        entry = self._new_entry(data)
        if self._head is None:
            self._tail = entry
        else:
            entry.next = self._head
        self._head = entry
        self._size += 1
        self._modifications += 1

    def add_at_tail(self, data: T) -> None:
        """Insert an item after the current tail."""
        entry = self._new_entry(data)
        if self._tail is None:
            self._head = entry
        else:
            self._tail.next = entry
        self._tail = entry
        self._size += 1
        self._modifications += 1

    def remove(self, data: T) -> bool:
        """
        Remove the first entry whose item equals data.

        Returns:
            True if an entry was found and removed, False otherwise
        """
        previous: Optional[_Entry[T]] = None
        entry = self._head
        while entry is not None:
            if entry.data == data:
                if previous is None:
                    self._head = entry.next
                else:
                    previous.next = entry.next
                if entry is self._tail:
                    self._tail = previous
                self._size -= 1
                self._modifications += 1
                return True
            previous = entry
            entry = entry.next
        return False

    def digests_in_order(self) -> list[str]:
        """Snapshot of all digests, head to tail."""
        digests: list[str] = []
        entry = self._head
        while entry is not None:
            digests.append(entry.digest)
            entry = entry.next
        return digests

    def build_nodes_string(self) -> str:
        """One "Data: <item>, Hash: <digest>" line per entry, head to tail."""
        lines = []
        entry = self._head
        while entry is not None:
            lines.append(f"Data: {entry.data}, Hash: {entry.digest}\n")
            entry = entry.next
        return "".join(lines)

    def __iter__(self) -> HashSequenceIterator[T]:
        return HashSequenceIterator(self)

    def __str__(self) -> str:
        return self.build_nodes_string()

    def __repr__(self) -> str:
        return f"HashSequence(size={self._size}, algorithm={self._hasher.algorithm!r})"


__all__ = [
    "HashSequence",
    "HashSequenceIterator",
]
