import logging

from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import CipherError, MissingKeyError
from app.dependencies import SettingsDep, check_text_length, http_error, prepare_book_key
from app.models.schemas import CipherType, DecryptRequest, DecryptResponse, ErrorResponse
from app.services.engines.registry import EngineRegistry
from app.services.languages.alphabets import select_language
from app.services.preprocessing.normalizer import TextNormalizer

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or missing key"},
        404: {"model": ErrorResponse, "description": "Language or cipher type not supported"},
        422: {"model": ErrorResponse, "description": "Unknown key mode"},
        500: {"model": ErrorResponse, "description": "Decryption failed"},
    },
    summary="Decrypt ciphertext",
    description=(
        "Decrypt ciphertext with a known key. "
        "Use /brute-force to recover an unknown Caesar key."
    ),
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
) -> DecryptResponse:
    """Decrypt ciphertext with the given cipher type and key."""
    try:
        check_text_length(request.ciphertext, settings)
        alphabet = select_language(request.language or settings.default_language)
        engine = EngineRegistry().get_engine(request.cipher_type, alphabet)

        key = request.key
        if request.cipher_type == CipherType.BOOK:
            key = prepare_book_key(key, settings)
        elif key is None:
            raise MissingKeyError("a key is required for decryption")

        parsed_key = engine.parse_key(key)
        normalized = TextNormalizer().normalize(request.ciphertext)
        plaintext = engine.decrypt(normalized, parsed_key, request.policy or settings.default_policy)

        return DecryptResponse(
            plaintext=plaintext,
            cipher_type=request.cipher_type,
            language=alphabet.id,
            key_used=engine.describe_key(parsed_key),
            explanation=engine.explain(parsed_key),
        )

    except CipherError as e:
        raise http_error(e) from e
    except Exception as e:
        logger.exception("Decryption failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Decryption failed: {str(e)}",
        )
