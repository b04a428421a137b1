"""
Merkle Tree Operations

This package provides the Merkle tree core: hashing, tree construction,
inclusion proof generation and validation.

The module is organized into four components:
- hashutils: Digest algorithms and the Hashable value contract
- tree: Immutable tree nodes, construction and leaf iteration
- proof: Lemma chains, proofs and their validation
- merkletree: The MerkleTree facade tying the above together
"""

# Hashing
from .hashutils import (
    Algorithm,
    Hashable,
    UnsupportedAlgorithmError,
    to_hashable_bytes,
    get_algorithm,
    SHA1,
    SHA256,
    SHA384,
    SHA512,
    BLAKE2B,
    BLAKE2S,
)

# Tree building utilities
from .tree import (
    EmptyTree,
    Leaf,
    Node,
    Tree,
    build_tree,
    iter_leaves,
    leaf_at,
)

# Proof generation and verification
from .proof import (
    Side,
    Positioned,
    Lemma,
    Proof,
    ProofData,
)

from .merkletree import MerkleTree

__all__ = [
    # Hashing
    "Algorithm",
    "Hashable",
    "UnsupportedAlgorithmError",
    "to_hashable_bytes",
    "get_algorithm",
    "SHA1",
    "SHA256",
    "SHA384",
    "SHA512",
    "BLAKE2B",
    "BLAKE2S",
    # Tree
    "EmptyTree",
    "Leaf",
    "Node",
    "Tree",
    "build_tree",
    "iter_leaves",
    "leaf_at",
    # Proofs
    "Side",
    "Positioned",
    "Lemma",
    "Proof",
    "ProofData",
    # Facade
    "MerkleTree",
]
