"""
Module 02 - Hashing Utilities
Content hashing for sequence entries and Merkle parent nodes.

This module provides:
- ContentHasher: digest of an item's canonical content form, and of the
  raw concatenation of two digests
- Module-level helpers bound to the configured default algorithm

Canonical Content Rules:
1. str items hash their UTF-8 bytes
2. bytes / bytearray items hash as-is
3. Anything else hashes its canonical JSON (dumps_canonical)
4. Digests are lowercase hex strings and are never empty

Security/Determinism Notes:
- The hash primitive itself is delegated to hashlib
- All operations are deterministic and stateless
"""
from __future__ import annotations

import hashlib
from typing import Any, Union

from hashtree.config.runtime import DEFAULT_HASH_ALGORITHM, get_default_config
from hashtree.schemas.canonical import dumps_canonical
from hashtree.schemas.errors import InvalidInputException


BytesOrDigest = Union[bytes, bytearray, str]


def _as_bytes(value: BytesOrDigest) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise InvalidInputException(
        f"Expected bytes or digest string, got {type(value).__name__}",
        argument="value",
    )


class ContentHasher:
    """
    Stateless content hasher over a fixed hashlib algorithm.

    Example:
        >>> hasher = ContentHasher("sha256")
        >>> hasher.digest_of("hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """

    __slots__ = ("_algorithm",)

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM) -> None:
        algorithm = algorithm.strip().lower()
        try:
            probe = hashlib.new(algorithm)
        except (ValueError, TypeError) as e:
            raise InvalidInputException(
                f"Unsupported hash algorithm: {algorithm!r}",
                argument="algorithm",
            ) from e
        if probe.digest_size == 0:
            # shake_* families have no fixed output length
            raise InvalidInputException(
                f"Hash algorithm {algorithm!r} has no fixed digest size",
                argument="algorithm",
            )
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def digest_length(self) -> int:
        """Length of a hex digest produced by this hasher."""
        return hashlib.new(self._algorithm).digest_size * 2

    def hash_bytes(self, data: BytesOrDigest) -> str:
        """Compute the hex digest of raw bytes."""
        return hashlib.new(self._algorithm, _as_bytes(data)).hexdigest()

    def canonical_bytes(self, item: Any) -> bytes:
        """
        Return the canonical content form of an item as bytes.

        Raises:
            InvalidInputException: If item is None
            CanonicalizationException: If item cannot be serialized
        """
        if item is None:
            raise InvalidInputException("Cannot hash None", argument="item")
        if isinstance(item, str):
            return item.encode("utf-8")
        if isinstance(item, (bytes, bytearray)):
            return bytes(item)
        return dumps_canonical(item).encode("utf-8")

    def digest_of(self, item: Any) -> str:
        """
        Digest of an arbitrary item's canonical content form.

        This is the leaf digest stored by HashSequence and searched for by
        MerkleTree lookups.
        """
        return self.hash_bytes(self.canonical_bytes(item))

    def combine(self, left: BytesOrDigest, right: BytesOrDigest) -> str:
        """
        Digest of the raw concatenation left || right.

        Digest strings contribute their textual (UTF-8) bytes, so
        combine(a, b) == hash_bytes((a + b).encode()) for hex digests a, b.
        """
        return self.hash_bytes(_as_bytes(left) + _as_bytes(right))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentHasher):
            return NotImplemented
        return self._algorithm == other._algorithm

    def __hash__(self) -> int:
        return hash(self._algorithm)

    def __repr__(self) -> str:
        return f"ContentHasher(algorithm={self._algorithm!r})"


_hashers: dict[str, ContentHasher] = {}


def get_hasher(algorithm: str) -> ContentHasher:
    """Return a shared ContentHasher for the given algorithm."""
    key = algorithm.strip().lower()
    hasher = _hashers.get(key)
    if hasher is None:
        hasher = ContentHasher(key)
        _hashers[key] = hasher
    return hasher


def get_default_hasher() -> ContentHasher:
    """Return the hasher for the default runtime configuration."""
    return get_hasher(get_default_config().hashing.algorithm)


def hash_bytes(data: BytesOrDigest) -> str:
    """Hex digest of raw bytes with the default algorithm."""
    return get_default_hasher().hash_bytes(data)


def hash_item(item: Any) -> str:
    """Hex digest of an item's canonical content form with the default algorithm."""
    return get_default_hasher().digest_of(item)


def hash_concat(left: BytesOrDigest, right: BytesOrDigest) -> str:
    """Hex digest of left || right with the default algorithm."""
    return get_default_hasher().combine(left, right)


__all__ = [
    "ContentHasher",
    "get_hasher",
    "get_default_hasher",
    "hash_bytes",
    "hash_item",
    "hash_concat",
]
