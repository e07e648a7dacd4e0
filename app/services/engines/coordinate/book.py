import logging
import re
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from app.core.exceptions import MissingKeyError, ValidationError
from app.models.schemas import CipherType, KeyVerdict, NonAlphaHandling, TransformPolicy
from app.services.engines.base import DEFAULT_POLICY, CipherEngine
from app.services.engines.registry import EngineRegistry
from app.services.languages.alphabets import Alphabet
from app.services.preprocessing.normalizer import TextNormalizer

logger = logging.getLogger(__name__)

Coordinate = tuple[int, int]


class BookGrid:
    """
    Square letter grid built from a reference text (usually a poem).

    Non-letters are stripped, the rest is upper-cased and written row by row,
    left to right. Cells past the end of the text hold EMPTY. Rows and columns
    are numbered from 1.

        grid = BookGrid("Roses are red, violets are blue ...", size=10)
        grid.get_coordinate("e")   # (1, 4): first E in row-major order
        grid.char_at(1, 4)         # "E"
    """

    EMPTY: ClassVar[str] = "_"
    MAX_SIZE: ClassVar[int] = 100

    def __init__(self, reference_text: str, size: int = 10):
        if not 1 <= size <= self.MAX_SIZE:
            raise ValidationError(f"grid size must be between 1 and {self.MAX_SIZE}", {"size": size})

        self.size = size
        letters = TextNormalizer().letters_only(reference_text).upper()
        self.letter_count = min(len(letters), size * size)

        cells = list(letters[: size * size])
        cells.extend(self.EMPTY * (size * size - len(cells)))
        self.rows: tuple[tuple[str, ...], ...] = tuple(
            tuple(cells[row * size:(row + 1) * size]) for row in range(size)
        )
        self.coordinate_index: Mapping[str, tuple[Coordinate, ...]] = self._index_coordinates()

        logger.debug(
            "Built %dx%d book grid with %d letters (%d distinct)",
            size, size, self.letter_count, len(self.coordinate_index),
        )

    def _index_coordinates(self) -> Mapping[str, tuple[Coordinate, ...]]:
        index: dict[str, list[Coordinate]] = {}
        for row, cells in enumerate(self.rows, start=1):
            for col, char in enumerate(cells, start=1):
                if char != self.EMPTY:
                    index.setdefault(char, []).append((row, col))
        return MappingProxyType({char: tuple(coords) for char, coords in index.items()})

    def get_coordinate(self, char: str) -> Coordinate | None:
        """First (row, col) of a letter in row-major order, case-insensitive."""
        coords = self.coordinate_index.get(char.upper())
        return coords[0] if coords else None

    def char_at(self, row: int, col: int) -> str | None:
        """Letter in a 1-based cell; None when out of range or empty."""
        if not (1 <= row <= self.size and 1 <= col <= self.size):
            return None
        char = self.rows[row - 1][col - 1]
        return None if char == self.EMPTY else char

    def as_lists(self) -> list[list[str]]:
        return [list(row) for row in self.rows]

    def __repr__(self) -> str:
        return f"BookGrid(size={self.size}, letters={self.letter_count})"


def check_reference_text(reference_text: str, min_length: int) -> None:
    """
    Reject reference texts too short to fill a grid reasonably.

    Raises:
        ValidationError: if the trimmed text is shorter than ``min_length``
    """
    length = len(reference_text.strip())
    if length < min_length:
        raise ValidationError(
            f"reference text must have at least {min_length} characters",
            {"length": length, "min_length": min_length},
        )


@EngineRegistry.register
class BookCipherEngine(CipherEngine):
    """
    Book (poem) cipher engine.

    Each letter is replaced by the "row/col" coordinate of its first occurrence
    in a BookGrid. Tokens are joined with ", ".

    Marker tokens:
    - "--/--"  letter missing from the grid
    - "[c]"    non-letter kept literally (preserve policy)
    - "[ ]"    non-letter replaced by a space (space policy)

    Decoding never fails on a bad token: anything that does not resolve to a
    grid letter becomes UNKNOWN.
    """

    name = "Book Cipher"
    cipher_type = CipherType.BOOK
    description = (
        "A coordinate cipher keyed by a text: letters of the key text are laid out "
        "in a square grid and each message letter is written as the row/column of "
        "a cell holding it."
    )

    DELIMITER: ClassVar[str] = ", "
    NOT_FOUND: ClassVar[str] = "--/--"
    UNKNOWN: ClassVar[str] = "?"

    # Split on "," or ";" unless it is the payload of a "[,]" / "[;]" marker
    _TOKEN_SPLIT: ClassVar[re.Pattern[str]] = re.compile(r"(?<!\[)[,;]\s*")

    def __init__(self, alphabet: Alphabet, grid_size: int = 10):
        super().__init__(alphabet)
        self.grid_size = grid_size

    def validate_key(self, key: Any) -> KeyVerdict:
        try:
            grid = self.parse_key(key)
        except (MissingKeyError, ValidationError) as e:
            return KeyVerdict(valid=False, message=e.message)
        if not grid.letter_count:
            return KeyVerdict(valid=False, message="reference text contains no letters")
        return KeyVerdict(valid=True, message="key is valid")

    def parse_key(self, raw: Any) -> BookGrid:
        """
        Accept a BookGrid, a reference text, or {"reference_text": ..., "size": ...}.

        Raises:
            MissingKeyError: no grid or reference text was supplied
        """
        if isinstance(raw, BookGrid):
            return raw
        if isinstance(raw, dict):
            text = raw.get("reference_text")
            size = raw.get("size")
            if size is None:
                size = self.grid_size
        else:
            text, size = raw, self.grid_size

        if not isinstance(text, str) or not text:
            raise MissingKeyError()
        if isinstance(size, bool):
            raise ValidationError("grid size must be a number", {"size": size})
        try:
            size = int(size)
        except (TypeError, ValueError, OverflowError):
            raise ValidationError("grid size must be a number", {"size": size}) from None
        return BookGrid(text, size)

    def encrypt(self, plaintext: str, key: Any, policy: TransformPolicy | None = None) -> str:
        grid = self.parse_key(key)
        policy = policy or DEFAULT_POLICY
        tokens = []

        for char in plaintext:
            coordinate = grid.get_coordinate(char)
            if coordinate:
                tokens.append(f"{coordinate[0]}/{coordinate[1]}")
            elif char.isalpha():
                tokens.append(self.NOT_FOUND)
            elif policy.non_alpha_handling == NonAlphaHandling.PRESERVE:
                tokens.append(f"[{char}]")
            elif policy.non_alpha_handling == NonAlphaHandling.SPACE:
                tokens.append("[ ]")

        return self.DELIMITER.join(tokens)

    def decrypt(self, ciphertext: str, key: Any, policy: TransformPolicy | None = None) -> str:
        grid = self.parse_key(key)
        result = []

        for token in self._TOKEN_SPLIT.split(ciphertext):
            token = token.strip()
            if not token:
                continue
            if self._is_marker(token):
                result.append(token[1:-1])
                continue
            result.append(self._resolve(grid, token))

        return "".join(result)

    def describe_key(self, key: Any) -> dict[str, Any]:
        grid = self.parse_key(key)
        return {"size": grid.size, "letter_count": grid.letter_count}

    def explain(self, key: Any) -> str:
        grid = self.parse_key(key)
        return (
            f"Book cipher on a {grid.size}x{grid.size} grid holding {grid.letter_count} letters "
            f"({len(grid.coordinate_index)} distinct). Each letter is written as row/column of "
            f"its first occurrence; letters missing from the grid become {self.NOT_FOUND}."
        )

    @staticmethod
    def _is_marker(token: str) -> bool:
        return len(token) >= 2 and token.startswith("[") and token.endswith("]")

    def _resolve(self, grid: BookGrid, token: str) -> str:
        parts = token.split("/")
        if len(parts) != 2:
            return self.UNKNOWN
        try:
            row, col = int(parts[0]), int(parts[1])
        except ValueError:
            return self.UNKNOWN
        return grid.char_at(row, col) or self.UNKNOWN
