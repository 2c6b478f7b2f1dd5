from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# ============================================================================
# Enums
# ============================================================================


class CipherType(str, Enum):
    """Cipher types the breaker can identify."""

    CAESAR = "caesar"
    RAIL_FENCE = "rail_fence"
    VIGENERE = "vigenere"


# ============================================================================
# Request Schemas
# ============================================================================


class BreakRequest(BaseModel):
    """
    Request schema for /break-cipher endpoint.

    Emptiness and length are checked by the orchestrator so that every
    invalid ciphertext gets the same 400 response.
    """

    ciphertext: str
    timeout_seconds: float | None = Field(default=None, gt=0, le=300)


class TransformRequest(BaseModel):
    """Request schema for /encrypt and /decrypt endpoints."""

    text: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: str | int


class AnalyzeRequest(BaseModel):
    """Request schema for /analyze endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)


# ============================================================================
# Response Schemas
# ============================================================================


class RankedCandidateSchema(BaseModel):
    """A ranked decryption as returned to clients."""

    rank: int = Field(ge=1)
    method: CipherType
    key: str
    decrypted_text: str
    confidence: float = Field(ge=0.0, le=1.0)
    raw_score: float | None = None
    valid_word_percentage: float | None = None
    invalid_words: list[str] = Field(default_factory=list)


class BreakResponse(BaseModel):
    """Response schema for /break-cipher endpoint."""

    candidates: list[RankedCandidateSchema]
    methods_attempted: list[CipherType]
    methods_failed: dict[str, str] = Field(default_factory=dict)
    early_exit_reason: str | None = None
    explanations: list[str] = Field(default_factory=list)


class TransformResponse(BaseModel):
    """Response schema for /encrypt and /decrypt endpoints."""

    text: str
    cipher_type: CipherType
    key_used: str


class KeyLengthScore(BaseModel):
    """Average index of coincidence for one candidate key length."""

    length: int
    average_ioc: float


class AnalyzeResponse(BaseModel):
    """Response schema for /analyze endpoint."""

    letter_count: int
    index_of_coincidence: float
    key_lengths: list[KeyLengthScore]


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
