"""
Merkle Tree Facade

``MerkleTree`` owns an immutable tree built from an ordered sequence of values
and exposes its root hash, leaf count and height, inclusion proof generation
and left-to-right iteration over its values.
"""

import logging
from typing import Any, Iterable, Iterator, Optional

from .hashutils import SHA256, Algorithm
from .proof import Lemma, Positioned, Proof
from .tree import Tree, build_tree, iter_leaves, leaf_at

logger = logging.getLogger(__name__)


class MerkleTree:
    """
    A Merkle tree over an ordered sequence of values.

    Usage:
        tree = MerkleTree.from_values(["a", "b", "c"])
        proof = tree.gen_proof("b")
        assert proof.validate(tree.root_hash)
    """

    def __init__(self, root: Tree, algorithm: Algorithm, height: int, count: int):
        self._root = root
        self.algorithm = algorithm
        self.height = height
        self.count = count

    @classmethod
    def from_values(cls, values: Iterable[Any], algorithm: Algorithm = SHA256) -> "MerkleTree":
        """
        Build a tree from ``values`` using ``algorithm``.

        Any finite sequence is accepted, including an empty one.
        """
        values = list(values)
        root, height = build_tree(values, algorithm)
        return cls(root, algorithm, height, len(values))

    @property
    def root_hash(self) -> bytes:
        """The root digest, a commitment to the whole leaf sequence."""
        return self._root.digest

    @property
    def tree(self) -> Tree:
        return self._root

    def is_empty(self) -> bool:
        return self.count == 0

    def gen_proof(self, value: Any) -> Optional[Proof]:
        """
        Generate an inclusion proof for ``value``.

        Returns:
            A Proof, or None if the value is not in the tree
        """
        needle = self.algorithm.hash_leaf(value)
        lemma = Lemma.new(self._root, needle)
        if lemma is None:
            logger.debug(f"No leaf with digest {needle.hex()} in tree {self.root_hash.hex()}")
            return None
        return Proof(self.algorithm, self.root_hash, lemma, value)

    def gen_nth_proof(self, n: int) -> Proof:
        """
        Generate an inclusion proof for the leaf at position ``n``.

        Unlike ``gen_proof`` this proves a specific position, so equal values
        at different positions get different proofs.

        Raises:
            IndexError: If ``n`` is not a valid leaf position
        """
        path, leaf = leaf_at(self._root, n, self.count)

        lemma = Lemma(node_hash=leaf.digest)
        for node, went_left in reversed(path):
            if went_left:
                sibling = Positioned.right(node.right.digest)
            else:
                sibling = Positioned.left(node.left.digest)
            lemma = Lemma(node_hash=node.digest, sibling_hash=sibling, sub_lemma=lemma)

        return Proof(self.algorithm, self.root_hash, lemma, leaf.value)

    def leaves(self) -> Iterator[Any]:
        """Lazily iterate over the values from left to right."""
        return iter_leaves(self._root)

    def __iter__(self) -> Iterator[Any]:
        return self.leaves()

    def __len__(self) -> int:
        return self.count

    def _key(self):
        return (self.algorithm.name, self.root_hash, self.height, self.count)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MerkleTree):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"MerkleTree(root_hash={self.root_hash.hex()}, count={self.count}, "
            f"height={self.height}, algorithm={self.algorithm.name})"
        )
