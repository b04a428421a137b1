"""
Proof API Package

This package exposes proof generation over HTTP. It includes:

- ProofService: service layer shared by the REST API
- rest_api: FastAPI application and ``run_server``

Usage:
    from merkle_proofs.api import ProofService

    service = ProofService()
    proof = service.get_proof(["a", "b", "c"], value="b")
"""

from .proof_service import ProofService, ProofServiceError, ProofNotFoundError

__all__ = [
    'ProofService',
    'ProofServiceError',
    'ProofNotFoundError',
]
