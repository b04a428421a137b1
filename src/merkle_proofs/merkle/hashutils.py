"""
Hashing Utilities

This module wraps the underlying hash primitive (``hashlib``) behind the small
interface the tree and proof modules need:

- ``hash_leaf``: digest of a single leaf value
- ``hash_nodes``: digest of an ordered pair of child digests
- ``hash_empty``: digest of the empty tree

Values are turned into bytes through ``to_hashable_bytes``, which is the single
customization point for supporting new value types (subclass ``Hashable``).
"""

import hashlib
from abc import ABC, abstractmethod
from typing import Any, Dict

from ..constants import LEAF_PREFIX, NODE_PREFIX, SUPPORTED_HASH_ALGORITHMS


class UnsupportedAlgorithmError(ValueError):
    """Exception raised when a hash algorithm name is not recognised."""
    pass


class Hashable(ABC):
    """
    Base class for custom tree values.

    Subclasses return the canonical byte encoding of the value, which is what
    gets leaf-hashed. Two values that must produce the same leaf digest must
    return the same bytes.
    """

    @abstractmethod
    def hashable_bytes(self) -> bytes:
        """Return the canonical byte representation of this value."""


def to_hashable_bytes(value: Any) -> bytes:
    """
    Convert a tree value to the bytes fed into the leaf hash.

    Args:
        value: bytes-like object, string (UTF-8 encoded) or ``Hashable``

    Returns:
        Canonical byte representation of the value

    Raises:
        TypeError: If the value type has no canonical byte encoding

    Examples:
        >>> to_hashable_bytes("abc")
        b'abc'
        >>> to_hashable_bytes(bytearray(b"\\x01"))
        b'\\x01'
    """
    if isinstance(value, Hashable):
        return value.hashable_bytes()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(
        f"Values of type {type(value).__name__} cannot be hashed into a tree; "
        f"use bytes, str or a Hashable subclass"
    )


class Algorithm:
    """
    A digest algorithm used to build trees and check proofs.

    Wraps a ``hashlib`` constructor. Leaf and node digests are domain
    separated with a one byte prefix so that an interior digest can never be
    passed off as a leaf digest.
    """

    def __init__(self, name: str):
        try:
            ctx = hashlib.new(name)
        except ValueError:
            raise UnsupportedAlgorithmError(f"Unsupported hash algorithm: {name}")
        if ctx.digest_size == 0:
            # Variable-length digests (shake_*) need an output length
            raise UnsupportedAlgorithmError(f"Unsupported variable-length hash algorithm: {name}")
        self.name = name

    def __repr__(self) -> str:
        return f"Algorithm({self.name!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Algorithm):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def digest_size(self) -> int:
        """Length in bytes of the digests produced by this algorithm."""
        return hashlib.new(self.name).digest_size

    def _context(self):
        return hashlib.new(self.name)

    def hash_empty(self) -> bytes:
        """Digest of the empty byte string, used as the root of an empty tree."""
        return self._context().digest()

    def hash_leaf(self, value: Any) -> bytes:
        """Digest of a leaf value: H(0x00 || value)."""
        ctx = self._context()
        ctx.update(LEAF_PREFIX)
        ctx.update(to_hashable_bytes(value))
        return ctx.digest()

    def hash_nodes(self, left: bytes, right: bytes) -> bytes:
        """Digest of an ordered pair of child digests: H(0x01 || left || right)."""
        ctx = self._context()
        ctx.update(NODE_PREFIX)
        ctx.update(left)
        ctx.update(right)
        return ctx.digest()


SHA1 = Algorithm("sha1")
SHA256 = Algorithm("sha256")
SHA384 = Algorithm("sha384")
SHA512 = Algorithm("sha512")
BLAKE2B = Algorithm("blake2b")
BLAKE2S = Algorithm("blake2s")

_ALGORITHMS: Dict[str, Algorithm] = {
    "sha1": SHA1,
    "sha256": SHA256,
    "sha384": SHA384,
    "sha512": SHA512,
    "blake2b": BLAKE2B,
    "blake2s": BLAKE2S,
}


def get_algorithm(name: str) -> Algorithm:
    """
    Look up a supported algorithm by name.

    Names are case-insensitive and may contain dashes ("SHA-256").

    Raises:
        UnsupportedAlgorithmError: If the name is not one of
            ``SUPPORTED_HASH_ALGORITHMS``
    """
    key = name.strip().lower().replace("-", "").replace("_", "")
    if key not in SUPPORTED_HASH_ALGORITHMS:
        raise UnsupportedAlgorithmError(
            f"Unsupported hash algorithm: {name} "
            f"(expected one of {', '.join(SUPPORTED_HASH_ALGORITHMS)})"
        )
    return _ALGORITHMS[key]
