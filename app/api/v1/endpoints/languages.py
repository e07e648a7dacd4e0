from fastapi import APIRouter

from app.core.exceptions import CipherError
from app.dependencies import http_error
from app.models.schemas import ErrorResponse, LanguageInfo
from app.services.context import build_context
from app.services.languages.alphabets import AlphabetRegistry

router = APIRouter()


def _language_info(language_id: str) -> LanguageInfo:
    context = build_context(language_id)
    alphabet = context.alphabet
    return LanguageInfo(
        id=alphabet.id,
        name=alphabet.name,
        size=alphabet.size,
        uppercase=alphabet.uppercase,
        lowercase=alphabet.lowercase,
        sample=alphabet.sample,
        help=alphabet.help,
        key_range=context.validator.range_label,
    )


@router.get(
    "",
    response_model=list[LanguageInfo],
    summary="List languages",
    description="Alphabets the ciphers can work over.",
)
async def list_languages() -> list[LanguageInfo]:
    return [_language_info(alphabet.id) for alphabet in AlphabetRegistry.list_registered()]


@router.get(
    "/{language_id}",
    response_model=LanguageInfo,
    responses={
        404: {"model": ErrorResponse, "description": "Language not supported"},
    },
    summary="Get language",
    description="Alphabet, sample text and Caesar key range of one language.",
)
async def get_language(language_id: str) -> LanguageInfo:
    try:
        return _language_info(language_id)
    except CipherError as e:
        raise http_error(e) from e
