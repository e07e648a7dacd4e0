from typing import Annotated, Any

from fastapi import Depends, HTTPException, status

from app.core.config import Settings, get_settings
from app.core.exceptions import (
    CipherError,
    EngineError,
    EngineNotFoundError,
    MissingKeyError,
    TextTooLongError,
    UnknownLanguageError,
    UnknownModeError,
    ValidationError,
)
from app.services.engines.coordinate.book import check_reference_text


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


def http_error(error: CipherError) -> HTTPException:
    """Map an engine error to the HTTP status the API reports it with."""
    if isinstance(error, (UnknownLanguageError, EngineNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, UnknownModeError):
        code = 422
    elif isinstance(error, (ValidationError, MissingKeyError, EngineError)):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=error.message)


def check_text_length(text: str, settings: Settings) -> None:
    if len(text) > settings.max_text_length:
        raise TextTooLongError(len(text), settings.max_text_length)


def prepare_book_key(raw: Any, settings: Settings) -> dict[str, Any]:
    """
    Apply the reference-text policy to a book cipher key from a request.

    Raises:
        MissingKeyError: no reference text in the request
        ValidationError: reference text shorter than the configured minimum
    """
    if isinstance(raw, str):
        raw = {"reference_text": raw}
    if not isinstance(raw, dict) or not raw.get("reference_text"):
        raise MissingKeyError()

    text = raw["reference_text"]
    if not isinstance(text, str):
        raise ValidationError("reference text must be a string")
    check_reference_text(text, settings.book_min_reference_length)
    size = raw.get("size")
    if size is None:
        size = settings.book_grid_size
    return {"reference_text": text, "size": size}
