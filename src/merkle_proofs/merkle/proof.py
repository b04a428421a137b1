"""
Merkle Inclusion Proofs

This module implements the recursive ``Lemma`` structure, its generation from a
built tree, and the ``Proof`` object that binds a lemma chain to a value and a
claimed root hash.

A lemma level holds:
- node_hash: digest of the tree node it stands for
- sibling_hash: digest of the other child, tagged with the side it sits on
- sub_lemma: the next level down, toward the proved leaf

Validation recomputes every interior digest bottom-up from the sub-lemma
digest and the sibling digest, in the order given by the side tag.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Any, Optional

from .hashutils import Algorithm
from .tree import EmptyTree, Leaf, Node, Tree

logger = logging.getLogger(__name__)


class Side(Enum):
    """Branch of a node a sibling digest came from."""
    LEFT = "left"
    RIGHT = "right"


@total_ordering
@dataclass(frozen=True)
class Positioned:
    """
    A value tagged with the branch it was found in.

    Ordered by side first (left before right), then by value.
    """
    side: Side
    value: Any

    @classmethod
    def left(cls, value: Any) -> "Positioned":
        return cls(Side.LEFT, value)

    @classmethod
    def right(cls, value: Any) -> "Positioned":
        return cls(Side.RIGHT, value)

    def _sort_key(self):
        return (self.side is Side.RIGHT, self.value)

    def __lt__(self, other):
        if not isinstance(other, Positioned):
            return NotImplemented
        return self._sort_key() < other._sort_key()


@total_ordering
@dataclass(frozen=True)
class Lemma:
    """
    One level of an inclusion proof.

    ``sibling_hash`` and ``sub_lemma`` are either both set (interior level) or
    both ``None`` (the proved leaf).
    """
    node_hash: bytes
    sibling_hash: Optional[Positioned] = None
    sub_lemma: Optional["Lemma"] = None

    @classmethod
    def new(cls, tree: Tree, needle: bytes) -> Optional["Lemma"]:
        """
        Search ``tree`` for a leaf with digest ``needle``.

        The left subtree is always searched before the right one, so when the
        digest occurs more than once the leftmost occurrence is proved.

        Returns:
            The lemma chain from ``tree`` down to the leaf, or None if absent
        """
        if isinstance(tree, EmptyTree):
            return None
        if isinstance(tree, Leaf):
            return cls._new_leaf_proof(tree.digest, needle)
        return cls._new_tree_proof(tree, needle)

    @classmethod
    def _new_leaf_proof(cls, digest: bytes, needle: bytes) -> Optional["Lemma"]:
        if digest == needle:
            return cls(node_hash=digest)
        return None

    @classmethod
    def _new_tree_proof(cls, node: Node, needle: bytes) -> Optional["Lemma"]:
        sub_lemma = cls.new(node.left, needle)
        if sub_lemma is not None:
            sibling = Positioned.right(node.right.digest)
        else:
            sub_lemma = cls.new(node.right, needle)
            if sub_lemma is None:
                return None
            sibling = Positioned.left(node.left.digest)

        return cls(node_hash=node.digest, sibling_hash=sibling, sub_lemma=sub_lemma)

    @property
    def depth(self) -> int:
        """Number of interior levels below and including this one."""
        depth = 0
        lemma = self
        while lemma.sub_lemma is not None:
            depth += 1
            lemma = lemma.sub_lemma
        return depth

    def leaf(self) -> "Lemma":
        """The terminal level of the chain."""
        lemma = self
        while lemma.sub_lemma is not None:
            lemma = lemma.sub_lemma
        return lemma

    def _sort_key(self):
        # An absent optional sorts before any present one
        return (
            self.node_hash,
            () if self.sibling_hash is None else (self.sibling_hash._sort_key(),),
            () if self.sub_lemma is None else (self.sub_lemma._sort_key(),),
        )

    def __lt__(self, other):
        if not isinstance(other, Lemma):
            return NotImplemented
        return self._sort_key() < other._sort_key()


@total_ordering
@dataclass(frozen=True)
class Proof:
    """
    An inclusion proof that ``value`` is a member of a tree with root
    ``root_hash`` built with ``algorithm``.

    The algorithm is context: it takes no part in equality, ordering or
    hashing. Proofs are ordered by (root_hash, value, lemma).
    """
    algorithm: Algorithm = field(compare=False)
    root_hash: bytes
    lemma: Lemma
    value: Any

    def __lt__(self, other):
        if not isinstance(other, Proof):
            return NotImplemented
        return (self.root_hash, self.value, self.lemma) < (
            other.root_hash,
            other.value,
            other.lemma,
        )

    def validate(self, root_hash: bytes) -> bool:
        """
        Check that this proof is well formed and commits to ``root_hash``.

        Both the proof's own root hash and the digest of its top lemma must
        equal ``root_hash``, and every interior lemma digest must be the
        combination of its sub-lemma digest and its sibling digest.
        """
        if self.root_hash != root_hash or self.lemma.node_hash != root_hash:
            return False
        return self._validate_lemma(self.lemma)

    def _validate_lemma(self, lemma: Lemma) -> bool:
        while lemma.sub_lemma is not None:
            sibling = lemma.sibling_hash
            sub = lemma.sub_lemma
            if sibling is None:
                return False
            if sibling.side is Side.LEFT:
                combined = self.algorithm.hash_nodes(sibling.value, sub.node_hash)
            else:
                combined = self.algorithm.hash_nodes(sub.node_hash, sibling.value)
            if combined != lemma.node_hash:
                return False
            lemma = sub

        return lemma.sibling_hash is None

    def leaf_hash_matches(self) -> bool:
        """Check that the proved leaf digest is the leaf digest of ``value``."""
        try:
            expected = self.algorithm.hash_leaf(self.value)
        except TypeError:
            return False
        return self.lemma.leaf().node_hash == expected

    def verify(self, root_hash: bytes) -> bool:
        """Validate the lemma chain and check it ends at the digest of ``value``."""
        return self.validate(root_hash) and self.leaf_hash_matches()

    def index(self) -> int:
        """
        Position of the proved leaf, recovered from the sibling side tags.

        Every leaf of a built tree sits at the same depth, so the tags read
        from the root down are the bits of the index, most significant first.
        """
        index = 0
        lemma = self.lemma
        while lemma.sub_lemma is not None and lemma.sibling_hash is not None:
            index = index * 2 + (1 if lemma.sibling_hash.side is Side.LEFT else 0)
            lemma = lemma.sub_lemma
        return index

    def into_data(self) -> "ProofData":
        """Return the proof data, omitting the algorithm."""
        return ProofData(root_hash=self.root_hash, lemma=self.lemma, value=self.value)


@dataclass(frozen=True)
class ProofData:
    """A proof without its algorithm, as exchanged with serializers."""
    root_hash: bytes
    lemma: Lemma
    value: Any

    def into_proof(self, algorithm: Algorithm) -> Proof:
        """Return the proof with this data and the given algorithm."""
        return Proof(
            algorithm=algorithm,
            root_hash=self.root_hash,
            lemma=self.lemma,
            value=self.value,
        )
