from fastapi import APIRouter

from app.core.exceptions import CipherError
from app.dependencies import SettingsDep, check_text_length, http_error
from app.models.schemas import BruteForceRequest, BruteForceResponse, ErrorResponse
from app.services.context import build_context
from app.services.preprocessing.normalizer import TextNormalizer

router = APIRouter()


@router.post(
    "",
    response_model=BruteForceResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Language not supported"},
    },
    summary="Brute-force a Caesar ciphertext",
    description=(
        "Decrypt with every Caesar key of the language and rank the candidates "
        "by how many words contain common short words."
    ),
)
async def brute_force(
    request: BruteForceRequest,
    settings: SettingsDep,
) -> BruteForceResponse:
    """
    Run an exhaustive Caesar key search.

    Results are ordered by descending score; candidates with a score above
    0.6 are flagged as likely.
    """
    try:
        check_text_length(request.ciphertext, settings)
        context = build_context(request.language or settings.default_language)
        normalized = TextNormalizer().normalize(request.ciphertext)
        results = context.attacker.attack(
            normalized,
            policy=request.policy or settings.default_policy,
        )
    except CipherError as e:
        raise http_error(e) from e

    return BruteForceResponse(
        language=context.alphabet.id,
        total_keys=context.attacker.total_keys,
        best=results[0] if results else None,
        results=results,
    )
