from fastapi import APIRouter, Query

from app.core.exceptions import CipherError, MissingKeyError, ValidationError
from app.dependencies import SettingsDep, http_error, prepare_book_key
from app.models.schemas import (
    CipherType,
    ErrorResponse,
    KeyValidationRequest,
    KeyValidationResponse,
    RandomKeyResponse,
)
from app.services.context import build_context
from app.services.engines.registry import EngineRegistry

router = APIRouter()


@router.post(
    "/validate",
    response_model=KeyValidationResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Language not supported"},
    },
    summary="Validate a key",
    description="Check a key against a cipher and language without transforming any text.",
)
async def validate_key(
    request: KeyValidationRequest,
    settings: SettingsDep,
) -> KeyValidationResponse:
    """
    Validate a key.

    Invalid keys are reported in the body (valid=false) rather than as errors,
    so a form can show the message next to the key input.
    """
    try:
        context = build_context(request.language or settings.default_language)
        engine = EngineRegistry().get_engine(request.cipher_type, context.alphabet)
    except CipherError as e:
        raise http_error(e) from e

    key = request.key
    if request.cipher_type == CipherType.BOOK:
        try:
            key = prepare_book_key(key, settings)
        except (MissingKeyError, ValidationError) as e:
            return KeyValidationResponse(valid=False, message=e.message)
    verdict = engine.validate_key(key)

    key_range = context.validator.range_label if request.cipher_type == CipherType.CAESAR else None
    return KeyValidationResponse(valid=verdict.valid, message=verdict.message, key_range=key_range)


@router.get(
    "/random",
    response_model=RandomKeyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Cipher has no random keys"},
        404: {"model": ErrorResponse, "description": "Language not supported"},
    },
    summary="Generate a random key",
    description="Random Caesar key in 1..N-1 or random linear Trithemius schedule.",
)
async def random_key(
    settings: SettingsDep,
    cipher_type: CipherType = Query(CipherType.CAESAR, description="Cipher type"),
    language: str | None = Query(None, description="Language id"),
) -> RandomKeyResponse:
    try:
        context = build_context(language or settings.default_language)
        engine = EngineRegistry().get_engine(cipher_type, context.alphabet)
        key = engine.generate_random_key()
    except CipherError as e:
        raise http_error(e) from e

    return RandomKeyResponse(cipher_type=cipher_type, language=context.alphabet.id, key=key)
