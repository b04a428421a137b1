"""
Merkle Proofs - Main proof generation module

This module contains the functions shared by the CLI and API interfaces for
building trees from value lists, generating inclusion proofs and verifying
serialized proofs.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .merkle import Algorithm, MerkleTree, Proof, get_algorithm
from .serialization import proof_from_dict, proof_to_dict
from .utils.hex_helpers import bytes_to_hex, hex_to_bytes

logger = logging.getLogger(__name__)


@dataclass
class ProofResult:
    """Container for proof generation results."""
    proof: Proof
    root: bytes
    metadata: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "proof": proof_to_dict(self.proof),
            "root": bytes_to_hex(self.root),
            "metadata": self.metadata,
        }


def resolve_algorithm(algorithm: Union[str, Algorithm]) -> Algorithm:
    """Accept an Algorithm or its name."""
    if isinstance(algorithm, Algorithm):
        return algorithm
    return get_algorithm(algorithm)


def load_values(values_file: str) -> List[str]:
    """
    Load tree values from a file.

    The file is either a JSON array of strings, or plain text with one value
    per line (blank lines are skipped).

    Raises:
        ValueError: If a JSON file is not an array of strings
    """
    with open(values_file, "r", encoding="utf-8") as f:
        content = f.read()

    if content.lstrip().startswith("["):
        data = json.loads(content)
        if not isinstance(data, list) or not all(isinstance(v, str) for v in data):
            raise ValueError(f"{values_file} must contain a JSON array of strings")
        values = data
    else:
        values = [line for line in content.splitlines() if line.strip()]

    logger.info(f"Loaded {len(values)} values from {values_file}")
    return values


def build_tree(values: List[Any], algorithm: Union[str, Algorithm] = "sha256") -> MerkleTree:
    """Build a MerkleTree over values."""
    algo = resolve_algorithm(algorithm)
    tree = MerkleTree.from_values(values, algo)
    logger.info(
        f"Built {algo.name} tree: {tree.count} leaves, height {tree.height}, "
        f"root {tree.root_hash.hex()}"
    )
    return tree


def _proof_result(tree: MerkleTree, proof: Proof) -> ProofResult:
    metadata = {
        "algorithm": tree.algorithm.name,
        "leaf_index": proof.index(),
        "leaf_hash": bytes_to_hex(proof.lemma.leaf().node_hash),
        "proof_length": proof.lemma.depth,
        "tree_height": tree.height,
        "leaf_count": tree.count,
    }
    return ProofResult(proof, tree.root_hash, metadata)


def generate_proof(values: List[Any], value: Any,
                   algorithm: Union[str, Algorithm] = "sha256") -> Optional[ProofResult]:
    """
    Generate an inclusion proof for ``value`` in the tree built over ``values``.

    Returns:
        ProofResult, or None if the value is not among the values
    """
    tree = build_tree(values, algorithm)
    proof = tree.gen_proof(value)
    if proof is None:
        logger.info(f"Value not found in tree {tree.root_hash.hex()}")
        return None
    return _proof_result(tree, proof)


def generate_nth_proof(values: List[Any], index: int,
                       algorithm: Union[str, Algorithm] = "sha256") -> ProofResult:
    """
    Generate an inclusion proof for the value at position ``index``.

    Raises:
        ValueError: If index is out of range
    """
    tree = build_tree(values, algorithm)
    if index < 0 or index >= tree.count:
        raise ValueError(f"Leaf index {index} out of range (0-{tree.count - 1})")
    return _proof_result(tree, tree.gen_nth_proof(index))


def verify_proof(proof_data: Dict[str, Any], root_hash: Union[str, bytes],
                 algorithm: Union[str, Algorithm] = "sha256") -> bool:
    """
    Verify a serialized proof against a root hash.

    The lemma chain must recompute to ``root_hash`` and end at the leaf digest
    of the proof's value.

    Raises:
        ProofFormatError: If the proof is structurally malformed
        ValueError: If the root hash is not valid hex
    """
    algo = resolve_algorithm(algorithm)
    if isinstance(root_hash, str):
        root_hash = hex_to_bytes(root_hash)
    proof = proof_from_dict(proof_data, algo)
    valid = proof.verify(root_hash)
    logger.info(f"Proof against root {root_hash.hex()}: {'valid' if valid else 'INVALID'}")
    return valid
