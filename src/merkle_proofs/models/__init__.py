"""
API Models Package

This package contains request and response models for the proof API.
It includes Pydantic models for validation and serialization of:

- Tree requests and responses (values, root hash, height)
- Proof requests and responses (lemma chains, roots, metadata)
- Verification requests and responses
- Error responses and status models

Usage:
    from merkle_proofs.models import ProofRequest, ProofResponse

    request = ProofRequest(values=["a", "b"], value="a")
"""

from .api_models import (
    ErrorResponse,
    HealthResponse,
    SiblingModel,
    LemmaModel,
    ProofModel,
    TreeRequest,
    TreeResponse,
    ProofRequest,
    ProofResponse,
    VerifyRequest,
    VerifyResponse,
)

__all__ = [
    'ErrorResponse',
    'HealthResponse',
    'SiblingModel',
    'LemmaModel',
    'ProofModel',
    'TreeRequest',
    'TreeResponse',
    'ProofRequest',
    'ProofResponse',
    'VerifyRequest',
    'VerifyResponse',
]
