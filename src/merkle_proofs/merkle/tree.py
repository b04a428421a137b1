"""
Merkle Tree Building Utilities

This module defines the immutable binary tree that backs a ``MerkleTree`` and
the functions that build and walk it.

Tree shape:
- An empty input produces an ``EmptyTree`` carrying the empty-tree digest
- A single value produces a lone ``Leaf``
- Otherwise adjacent pairs are combined level by level until one node is left;
  on a level with an odd number of nodes the last node is paired with itself
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple, Union

from .hashutils import Algorithm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmptyTree:
    """A tree with no leaves."""
    digest: bytes


@dataclass(frozen=True)
class Leaf:
    """A leaf holding one value and its leaf digest."""
    digest: bytes
    value: Any


@dataclass(frozen=True)
class Node:
    """An interior node holding the digest of its two children."""
    digest: bytes
    left: "Tree"
    right: "Tree"


Tree = Union[EmptyTree, Leaf, Node]


def build_tree(values: Sequence[Any], algorithm: Algorithm) -> Tuple[Tree, int]:
    """
    Build a tree from an ordered sequence of values.

    Args:
        values: Ordered leaf values
        algorithm: Digest algorithm used for leaves and nodes

    Returns:
        Tuple of (root of the tree, height of the tree)

    Examples:
        >>> root, height = build_tree(["a", "b", "c"], SHA256)
        >>> height
        2
    """
    if not values:
        return EmptyTree(algorithm.hash_empty()), 0

    level: List[Tree] = [Leaf(algorithm.hash_leaf(v), v) for v in values]
    height = 0

    while len(level) > 1:
        next_level: List[Tree] = []
        for i in range(0, len(level), 2):
            left = level[i]
            # Odd level: the last node is paired with itself
            right = level[i + 1] if i + 1 < len(level) else left
            digest = algorithm.hash_nodes(left.digest, right.digest)
            next_level.append(Node(digest, left, right))
        level = next_level
        height += 1

    logger.debug(f"Built tree over {len(values)} leaves, height {height}")
    return level[0], height


def iter_leaves(tree: Tree) -> Iterator[Any]:
    """
    Lazily yield the leaf values of a tree from left to right.

    A node whose right child is its own left child (the duplicated last node
    of an odd level) contributes its leaves only once.
    """
    stack: List[Tree] = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, Leaf):
            yield current.value
        elif isinstance(current, Node):
            if current.right is not current.left:
                stack.append(current.right)
            stack.append(current.left)


def leaf_at(tree: Tree, index: int, count: int) -> Tuple[List[Tuple[Node, bool]], Leaf]:
    """
    Walk from the root to the leaf at ``index``.

    Args:
        tree: Root of a tree built by ``build_tree``
        index: Position of the leaf (0-based)
        count: Number of leaves the tree was built from

    Returns:
        Tuple of (path of (node, went_left) pairs from the root, the leaf)

    Raises:
        IndexError: If index is outside ``[0, count)``
    """
    if not 0 <= index < count:
        raise IndexError(f"Leaf index {index} out of range (0-{count - 1})")

    path: List[Tuple[Node, bool]] = []
    current = tree
    # Number of leaves covered by each child of the current node
    span = 1
    while span < count:
        span *= 2
    offset = index
    while isinstance(current, Node):
        span //= 2
        went_left = offset < span
        path.append((current, went_left))
        if went_left:
            current = current.left
        else:
            current = current.right
            offset -= span

    return path, current
