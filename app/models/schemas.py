from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================


class CipherType(str, Enum):
    """Supported cipher types."""

    CAESAR = "caesar"
    TRITHEMIUS = "trithemius"
    BOOK = "book"


class KeyMode(str, Enum):
    """Trithemius key schedule families."""

    LINEAR = "linear"
    QUADRATIC = "quadratic"
    MOTTO = "motto"


class CaseHandling(str, Enum):
    """How letters are cased in the output."""

    PRESERVE = "preserve"  # Same case as the input letter
    UPPER = "upper"
    LOWER = "lower"


class NonAlphaHandling(str, Enum):
    """What happens to characters outside the alphabet."""

    PRESERVE = "preserve"  # Copy unchanged
    REMOVE = "remove"  # Drop
    SPACE = "space"  # Replace with a single space


# ============================================================================
# Engine Schemas
# ============================================================================


class TransformPolicy(BaseModel):
    """Output policy threaded through every encrypt/decrypt call."""

    model_config = ConfigDict(frozen=True)

    case_handling: CaseHandling = CaseHandling.PRESERVE
    non_alpha_handling: NonAlphaHandling = NonAlphaHandling.PRESERVE


class KeyVerdict(BaseModel):
    """Outcome of a key validation."""

    valid: bool
    message: str = ""


class BruteForceResult(BaseModel):
    """One decryption attempt of a brute-force run."""

    key: int
    text: str
    score: float = Field(ge=0.0, le=1.0)
    likely: bool


# ============================================================================
# Request Schemas
# ============================================================================


class EncryptRequest(BaseModel):
    """Request schema for /encrypt endpoint."""

    plaintext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    language: str | None = None
    key: int | str | dict[str, Any] | None = None
    policy: TransformPolicy | None = None


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    language: str | None = None
    key: int | str | dict[str, Any] | None = None
    policy: TransformPolicy | None = None


class KeyValidationRequest(BaseModel):
    """Request schema for /keys/validate endpoint."""

    cipher_type: CipherType
    language: str | None = None
    key: int | str | dict[str, Any] | None = None


class BookGridRequest(BaseModel):
    """Request schema for /book/grid endpoint."""

    reference_text: str = Field(max_length=100_000)
    size: int | None = Field(default=None, ge=1, le=100)


class BruteForceRequest(BaseModel):
    """Request schema for /brute-force endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    language: str | None = None
    policy: TransformPolicy | None = None


# ============================================================================
# Response Schemas
# ============================================================================


class LanguageInfo(BaseModel):
    """Alphabet details for one language."""

    id: str
    name: str
    size: int
    uppercase: str
    lowercase: str
    sample: str
    help: str
    key_range: str


class EncryptResponse(BaseModel):
    """Response schema for /encrypt endpoint."""

    ciphertext: str
    cipher_type: CipherType
    language: str
    key_used: int | str | dict[str, Any]
    explanation: str


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    cipher_type: CipherType
    language: str
    key_used: int | str | dict[str, Any]
    explanation: str


class KeyValidationResponse(BaseModel):
    """Response schema for /keys/validate endpoint."""

    valid: bool
    message: str
    key_range: str | None = None


class RandomKeyResponse(BaseModel):
    """Response schema for /keys/random endpoint."""

    cipher_type: CipherType
    language: str
    key: int | str | dict[str, Any]


class BookGridResponse(BaseModel):
    """Response schema for /book/grid endpoint."""

    size: int
    letter_count: int
    rows: list[list[str]]
    coordinates: dict[str, list[str]]


class BruteForceResponse(BaseModel):
    """Response schema for /brute-force endpoint."""

    language: str
    total_keys: int
    best: BruteForceResult | None
    results: list[BruteForceResult]


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
