import logging

from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import CipherError
from app.dependencies import SettingsDep, check_text_length, http_error, prepare_book_key
from app.models.schemas import CipherType, EncryptRequest, EncryptResponse, ErrorResponse
from app.services.engines.registry import EngineRegistry
from app.services.languages.alphabets import select_language
from app.services.preprocessing.normalizer import TextNormalizer

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=EncryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or key"},
        404: {"model": ErrorResponse, "description": "Language or cipher type not supported"},
        422: {"model": ErrorResponse, "description": "Unknown key mode"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext with the Caesar, Trithemius or book cipher.",
)
async def encrypt_plaintext(
    request: EncryptRequest,
    settings: SettingsDep,
) -> EncryptResponse:
    """
    Encrypt plaintext with a specified cipher type.

    Caesar and Trithemius get a random key when none is given; the book
    cipher always needs a reference text.
    """
    try:
        check_text_length(request.plaintext, settings)
        alphabet = select_language(request.language or settings.default_language)
        engine = EngineRegistry().get_engine(request.cipher_type, alphabet)

        key = request.key
        if request.cipher_type == CipherType.BOOK:
            key = prepare_book_key(key, settings)
        elif key is None:
            key = engine.generate_random_key()

        parsed_key = engine.parse_key(key)
        normalized = TextNormalizer().normalize(request.plaintext)
        ciphertext = engine.encrypt(normalized, parsed_key, request.policy or settings.default_policy)

        return EncryptResponse(
            ciphertext=ciphertext,
            cipher_type=request.cipher_type,
            language=alphabet.id,
            key_used=engine.describe_key(parsed_key),
            explanation=engine.explain(parsed_key),
        )

    except CipherError as e:
        raise http_error(e) from e
    except Exception as e:
        logger.exception("Encryption failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Encryption failed: {str(e)}",
        )
