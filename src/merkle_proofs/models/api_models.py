"""
API Models

This module defines Pydantic models for API request and response validation.
The proof models mirror the transport shape produced by
``merkle_proofs.serialization``.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..constants import SUPPORTED_HASH_ALGORITHMS, VERSION
from ..merkle.hashutils import get_algorithm
from ..utils.hex_helpers import normalize_hex


def _check_algorithm(v: Optional[str]) -> Optional[str]:
    # None defers to the service default (MERKLE_HASH_ALGORITHM)
    if v is not None:
        get_algorithm(v)
    return v


class ErrorResponse(BaseModel):
    """
    Response model for API errors.

    Attributes:
        error: Error message
        code: Error code (string identifier)
        details: Additional error details
    """
    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code")
    details: Optional[dict] = Field(default=None, description="Additional error details")


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""
    status: str = Field(..., description="Service status")
    version: str = Field(default=VERSION, description="Service version")
    algorithms: List[str] = Field(
        default_factory=lambda: list(SUPPORTED_HASH_ALGORITHMS),
        description="Supported hash algorithms",
    )
    timestamp: Optional[str] = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="Response timestamp",
    )


class SiblingModel(BaseModel):
    """A sibling digest and the side of the parent it sits on."""
    side: Literal["left", "right"] = Field(..., description="Side of the sibling")
    hash: str = Field(..., description="Sibling digest as hex string")

    @field_validator('hash')
    @classmethod
    def validate_hash(cls, v):
        return normalize_hex(v)


class LemmaModel(BaseModel):
    """One level of a lemma chain."""
    node_hash: str = Field(..., description="Node digest as hex string")
    sibling_hash: Optional[SiblingModel] = Field(default=None, description="Sibling digest, null at the leaf")
    sub_lemma: Optional["LemmaModel"] = Field(default=None, description="Next level down, null at the leaf")

    @field_validator('node_hash')
    @classmethod
    def validate_node_hash(cls, v):
        return normalize_hex(v)


class ProofModel(BaseModel):
    """Serialized inclusion proof (the algorithm is carried separately)."""
    root_hash: str = Field(..., description="Root digest as hex string")
    lemma: LemmaModel = Field(..., description="Lemma chain from the root to the leaf")
    value: str = Field(..., description="Proved value")
    value_encoding: Literal["utf-8", "hex"] = Field(default="utf-8", description="Encoding of value")

    @field_validator('root_hash')
    @classmethod
    def validate_root_hash(cls, v):
        return normalize_hex(v)


class TreeRequest(BaseModel):
    """Request model for building a tree."""
    values: List[str] = Field(..., description="Ordered leaf values")
    algorithm: Optional[str] = Field(default=None, description="Hash algorithm (defaults to the server setting)")

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v):
        return _check_algorithm(v)


class TreeResponse(BaseModel):
    """Response model for a built tree."""
    root_hash: str = Field(..., description="Root digest as hex string")
    count: int = Field(..., description="Number of leaves")
    height: int = Field(..., description="Tree height")
    algorithm: str = Field(..., description="Hash algorithm")


class ProofRequest(BaseModel):
    """
    Request model for proof generation.

    Exactly one of ``value`` (prove the first leaf holding this value) and
    ``index`` (prove the leaf at this position) must be given.
    """
    values: List[str] = Field(..., description="Ordered leaf values")
    value: Optional[str] = Field(default=None, description="Value to prove")
    index: Optional[int] = Field(default=None, ge=0, description="Leaf position to prove")
    algorithm: Optional[str] = Field(default=None, description="Hash algorithm (defaults to the server setting)")

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v):
        return _check_algorithm(v)

    @model_validator(mode='after')
    def validate_target(self):
        if (self.value is None) == (self.index is None):
            raise ValueError("Exactly one of 'value' and 'index' must be given")
        return self


class ProofResponse(BaseModel):
    """Response model for a generated proof."""
    proof: ProofModel = Field(..., description="Serialized proof")
    root_hash: str = Field(..., description="Root digest as hex string")
    leaf_index: int = Field(..., description="Position of the proved leaf")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional proof metadata")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "proof": {
                "root_hash": "0x2b0c7d1bd4c3b8b5b0e1a1f5e5b0b5c0f5d0b1f2a3c4d5e6f708192a3b4c5d6e",
                "lemma": {
                    "node_hash": "0x2b0c7d1bd4c3b8b5b0e1a1f5e5b0b5c0f5d0b1f2a3c4d5e6f708192a3b4c5d6e",
                    "sibling_hash": {"side": "right", "hash": "0x9c1d..."},
                    "sub_lemma": {"node_hash": "0x022a...", "sibling_hash": None, "sub_lemma": None},
                },
                "value": "a",
                "value_encoding": "utf-8",
            },
            "root_hash": "0x2b0c7d1bd4c3b8b5b0e1a1f5e5b0b5c0f5d0b1f2a3c4d5e6f708192a3b4c5d6e",
            "leaf_index": 0,
            "metadata": {
                "algorithm": "sha256",
                "proof_length": 1,
                "tree_height": 1,
                "leaf_count": 2,
            },
        }
    })


class VerifyRequest(BaseModel):
    """Request model for proof verification."""
    proof: ProofModel = Field(..., description="Serialized proof")
    root_hash: str = Field(..., description="Trusted root digest as hex string")
    algorithm: Optional[str] = Field(default=None, description="Hash algorithm the tree was built with (defaults to the server setting)")

    @field_validator('root_hash')
    @classmethod
    def validate_root_hash(cls, v):
        return normalize_hex(v)

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v):
        return _check_algorithm(v)


class VerifyResponse(BaseModel):
    """Response model for proof verification."""
    valid: bool = Field(..., description="Whether the proof is valid for the root")
    root_hash: str = Field(..., description="Root digest the proof was checked against")
    algorithm: str = Field(..., description="Hash algorithm used")
