"""
REST API for Merkle Proofs

This module provides a FastAPI-based REST API for building Merkle trees,
generating inclusion proofs and verifying them, with full OpenAPI
documentation.
"""

import logging
import traceback

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..constants import VERSION
from ..models.api_models import (
    ErrorResponse,
    HealthResponse,
    ProofRequest,
    ProofResponse,
    TreeRequest,
    TreeResponse,
    VerifyRequest,
    VerifyResponse,
)
from .proof_service import ProofNotFoundError, ProofService, ProofServiceError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Merkle Proofs API",
    description="""
    Build Merkle trees and generate or verify inclusion proofs.

    The API is stateless: every request carries the ordered values the tree is
    built from. A proof can then be checked by anyone holding only the root
    hash.

    ## Features
    - **Trees**: Root hash, leaf count and height for an ordered list of values
    - **Proofs**: Inclusion proof for a value, or for the leaf at a position
    - **Verification**: Check a serialized proof against a trusted root hash
    - **Algorithms**: sha1, sha256, sha384, sha512, blake2b, blake2s

    ## Proof Shape
    Proofs are nested lemma chains. Each level carries the node digest, the
    sibling digest with the side it sits on, and the next level down. The hash
    algorithm is not part of the proof and must be supplied on verification.
    """,
    version=VERSION,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global proof service instance
proof_service = None


def get_proof_service() -> ProofService:
    """Dependency to get the proof service instance."""
    global proof_service
    if proof_service is None:
        proof_service = ProofService(algorithm=get_settings().hash_algorithm)
    return proof_service


@app.exception_handler(ValueError)
async def value_error_handler(request, exc: ValueError):
    """Handle validation errors."""
    logger.error(f"Validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=str(exc),
            code="VALIDATION_ERROR",
            details={"error_type": type(exc).__name__}
        ).model_dump()
    )


@app.exception_handler(ProofNotFoundError)
async def proof_not_found_handler(request, exc: ProofNotFoundError):
    """Handle values that are not in the tree."""
    logger.info(f"Proof not found: {exc}")
    return JSONResponse(
        status_code=404,
        content=ErrorResponse(
            error=str(exc),
            code="NOT_FOUND",
            details={"error_type": "ProofNotFoundError"}
        ).model_dump()
    )


@app.exception_handler(ProofServiceError)
async def proof_service_error_handler(request, exc: ProofServiceError):
    """Handle invalid proof service requests."""
    logger.error(f"Proof service error: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=str(exc),
            code="PROOF_SERVICE_ERROR",
            details={"error_type": "ProofServiceError"}
        ).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected errors."""
    logger.error(f"Unexpected error: {exc}\n{traceback.format_exc()}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code="INTERNAL_ERROR",
            details={"error_type": type(exc).__name__}
        ).model_dump()
    )


@app.get("/", response_model=dict)
async def root():
    """API root endpoint with basic information."""
    return {
        "name": "Merkle Proofs API",
        "version": VERSION,
        "description": "Build Merkle trees and generate or verify inclusion proofs",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy")


@app.post("/trees", response_model=TreeResponse)
async def build_tree(
    request: TreeRequest,
    service: ProofService = Depends(get_proof_service)
):
    """
    Build a tree over the given values and return its root hash, leaf count
    and height.
    """
    return TreeResponse(**service.get_tree(request.values, request.algorithm))


@app.post("/proofs", response_model=ProofResponse)
async def generate_proof(
    request: ProofRequest,
    service: ProofService = Depends(get_proof_service)
):
    """
    Generate an inclusion proof.

    Give either `value` (the leftmost leaf holding it is proved) or `index`
    (the leaf at that position is proved). Returns 404 when the value is not
    one of the values.
    """
    logger.info(f"Generating proof over {len(request.values)} values")
    result = service.get_proof(
        request.values,
        value=request.value,
        index=request.index,
        algorithm=request.algorithm,
    )
    return ProofResponse(**result)


@app.post("/proofs/verify", response_model=VerifyResponse)
async def verify_proof(
    request: VerifyRequest,
    service: ProofService = Depends(get_proof_service)
):
    """
    Verify a proof against a trusted root hash.

    An invalid proof is not an error: the response carries `valid: false`.
    """
    algorithm = service.algorithm_name(request.algorithm)
    valid = service.verify(request.proof.model_dump(), request.root_hash, algorithm)
    return VerifyResponse(valid=valid, root_hash=request.root_hash, algorithm=algorithm)


def run_server(host: str = None, port: int = None, dev: bool = False):
    """
    Run the API server.

    Args:
        host: Host to bind to (defaults to MERKLE_API_HOST)
        port: Port to bind to (defaults to MERKLE_API_PORT)
        dev: Enable development mode with auto-reload
    """
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port
    logger.info(f"Starting Merkle Proofs API server on {host}:{port}")
    uvicorn.run(
        "merkle_proofs.api.rest_api:app",
        host=host,
        port=port,
        reload=dev,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run_server(dev=True)
