from fastapi import APIRouter

from app.core.exceptions import CipherError
from app.dependencies import SettingsDep, http_error, prepare_book_key
from app.models.schemas import BookGridRequest, BookGridResponse, ErrorResponse
from app.services.engines.coordinate.book import BookGrid

router = APIRouter()


@router.post(
    "/grid",
    response_model=BookGridResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Reference text too short"},
    },
    summary="Build a book cipher grid",
    description="Lay out the letters of a reference text in a square grid and index their coordinates.",
)
async def build_grid(
    request: BookGridRequest,
    settings: SettingsDep,
) -> BookGridResponse:
    """Build the grid a book cipher key text produces, for display."""
    try:
        key = prepare_book_key(
            {"reference_text": request.reference_text, "size": request.size},
            settings,
        )
        grid = BookGrid(key["reference_text"], key["size"])
    except CipherError as e:
        raise http_error(e) from e

    return BookGridResponse(
        size=grid.size,
        letter_count=grid.letter_count,
        rows=grid.as_lists(),
        coordinates={
            letter: [f"{row}/{col}" for row, col in coords]
            for letter, coords in grid.coordinate_index.items()
        },
    )
