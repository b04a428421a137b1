"""
Proof Service Module

This module provides a service layer for building trees, generating proofs
and verifying proofs using the standardized functions from main.py.
"""

import logging
from typing import Any, Dict, List, Optional

from ..main import build_tree, generate_nth_proof, generate_proof, verify_proof
from ..merkle import get_algorithm
from ..serialization import ProofFormatError
from ..utils.hex_helpers import bytes_to_hex

logger = logging.getLogger(__name__)


class ProofServiceError(Exception):
    """Custom exception for proof service operations."""
    pass


class ProofNotFoundError(ProofServiceError):
    """Raised when the requested value is not a leaf of the tree."""
    pass


class ProofService:
    """Service for building trees and generating or verifying inclusion proofs."""

    def __init__(self, algorithm: str = "sha256"):
        """
        Initialize the proof service.

        Args:
            algorithm: Default hash algorithm name for requests that omit one
        """
        self.algorithm = algorithm

    def algorithm_name(self, algorithm: Optional[str] = None) -> str:
        """
        Resolve a requested algorithm, or the service default, to its canonical name.

        Raises:
            ProofServiceError: If the algorithm is unknown
        """
        try:
            return get_algorithm(algorithm or self.algorithm).name
        except ValueError as e:
            logger.error(f"Validation error resolving algorithm: {e}")
            raise ProofServiceError(f"Validation error: {e}")

    def get_tree(self, values: List[str], algorithm: Optional[str] = None) -> Dict[str, Any]:
        """
        Build a tree and describe it.

        Raises:
            ProofServiceError: If the algorithm is unknown
        """
        try:
            tree = build_tree(values, algorithm or self.algorithm)
        except ValueError as e:
            logger.error(f"Validation error building tree: {e}")
            raise ProofServiceError(f"Validation error: {e}")

        return {
            "root_hash": bytes_to_hex(tree.root_hash),
            "count": tree.count,
            "height": tree.height,
            "algorithm": tree.algorithm.name,
        }

    def get_proof(
        self,
        values: List[str],
        value: Optional[str] = None,
        index: Optional[int] = None,
        algorithm: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Generate an inclusion proof for a value or a leaf position.

        Args:
            values: Ordered leaf values
            value: Value to prove (the leftmost occurrence is proved)
            index: Leaf position to prove, used when value is None
            algorithm: Hash algorithm name

        Returns:
            Dictionary with the serialized proof, root hash, leaf index and metadata

        Raises:
            ProofNotFoundError: If value is not among the values
            ProofServiceError: If the request is invalid
        """
        algorithm = algorithm or self.algorithm
        try:
            if value is not None:
                result = generate_proof(values, value, algorithm)
                if result is None:
                    raise ProofNotFoundError(f"Value {value!r} is not in the tree")
            elif index is not None:
                result = generate_nth_proof(values, index, algorithm)
            else:
                raise ProofServiceError("Either a value or an index is required")
        except ValueError as e:
            logger.error(f"Validation error generating proof: {e}")
            raise ProofServiceError(f"Validation error: {e}")

        output = result.to_dict()
        return {
            "proof": output["proof"],
            "root_hash": output["root"],
            "leaf_index": result.metadata["leaf_index"],
            "metadata": result.metadata,
        }

    def verify(self, proof: Dict[str, Any], root_hash: str, algorithm: Optional[str] = None) -> bool:
        """
        Verify a serialized proof against a trusted root hash.

        Raises:
            ProofServiceError: If the proof or root hash is malformed
        """
        try:
            return verify_proof(proof, root_hash, algorithm or self.algorithm)
        except ProofFormatError as e:
            logger.error(f"Malformed proof: {e}")
            raise ProofServiceError(f"Malformed proof: {e}")
        except ValueError as e:
            logger.error(f"Validation error verifying proof: {e}")
            raise ProofServiceError(f"Validation error: {e}")
