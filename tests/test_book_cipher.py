"""Tests for the book cipher grid and engine."""

import pytest

from app.core.exceptions import EngineError, MissingKeyError, ValidationError
from app.models.schemas import NonAlphaHandling, TransformPolicy
from app.services.engines.coordinate.book import BookCipherEngine, BookGrid, check_reference_text
from app.services.languages.alphabets import ENGLISH, UKRAINIAN

POEM = (
    "Roses are red, violets are blue, sugar is sweet and so are you. "
    "The quick brown fox jumps over the lazy dog."
)


class TestBookGrid:
    """Test suite for grid construction and lookups."""

    @pytest.fixture
    def grid(self):
        # R O S E S A R E R E / D _ _ ...
        return BookGrid("Roses are red", size=10)

    def test_letters_are_stripped_and_uppercased(self, grid):
        assert grid.rows[0] == tuple("ROSESARERE")
        assert grid.letter_count == 11

    def test_short_text_padded_with_empty_cells(self, grid):
        assert grid.rows[1] == ("D",) + (BookGrid.EMPTY,) * 9
        assert all(cell == BookGrid.EMPTY for row in grid.rows[2:] for cell in row)
        assert len(grid.rows) == 10

    def test_long_text_truncated(self):
        grid = BookGrid("ab" * 80, size=10)
        assert grid.letter_count == 100
        assert grid.rows[9][9] == "B"

    def test_first_occurrence_wins(self, grid):
        assert grid.get_coordinate("e") == (1, 4)
        assert grid.get_coordinate("R") == (1, 1)
        assert grid.coordinate_index["R"] == ((1, 1), (1, 7), (1, 9))

    def test_missing_letters(self, grid):
        assert grid.get_coordinate("z") is None
        assert grid.get_coordinate(",") is None

    def test_char_at_bounds_and_empty_cells(self, grid):
        assert grid.char_at(2, 1) == "D"
        assert grid.char_at(2, 2) is None
        assert grid.char_at(0, 1) is None
        assert grid.char_at(11, 1) is None
        assert grid.char_at(1, 11) is None

    def test_coordinates_point_back_to_their_letter(self):
        grid = BookGrid(POEM)
        for letter in grid.coordinate_index:
            row, col = grid.get_coordinate(letter)
            assert grid.char_at(row, col) == letter

    def test_custom_size(self):
        grid = BookGrid("Roses are red", size=3)
        assert grid.rows == (("R", "O", "S"), ("E", "S", "A"), ("R", "E", "R"))
        assert grid.letter_count == 9

    def test_invalid_size(self):
        with pytest.raises(ValidationError):
            BookGrid("Roses are red", size=0)

    @pytest.mark.parametrize("size", [0, -3, 101, 3000])
    def test_size_out_of_range(self, size):
        with pytest.raises(ValidationError, match="grid size must be between 1 and 100"):
            BookGrid("Roses are red", size=size)

    def test_largest_size(self):
        assert BookGrid("Roses are red", size=100).letter_count == 11

    def test_cyrillic_reference(self):
        grid = BookGrid("Садок вишневий коло хати", size=5)
        assert grid.rows[0] == tuple("САДОК")
        assert grid.get_coordinate("в") == (2, 1)

    def test_decomposed_letters_are_normalized(self):
        grid = BookGrid("\u0438\u0306ти", size=2)
        assert grid.rows[0] == ("Й", "Т")


class TestReferenceTextPolicy:
    """Minimum length of reference texts."""

    def test_too_short(self):
        with pytest.raises(ValidationError, match="at least 100 characters"):
            check_reference_text("a" * 99, 100)

    def test_surrounding_whitespace_ignored(self):
        with pytest.raises(ValidationError):
            check_reference_text("   " + "a" * 99 + "   ", 100)
        check_reference_text("  " + "a" * 100, 100)


class TestBookCipherEngine:
    """Test suite for the book cipher engine."""

    @pytest.fixture
    def engine(self):
        return BookCipherEngine(ENGLISH)

    @pytest.fixture
    def grid(self):
        return BookGrid("Roses are red", size=10)

    def test_encrypt_letters(self, engine, grid):
        assert engine.encrypt("Sad", grid) == "1/3, 1/6, 2/1"

    def test_letter_missing_from_grid(self, engine, grid):
        assert engine.encrypt("Rob", grid) == "1/1, 1/2, --/--"

    def test_non_letter_policies(self, engine, grid):
        assert engine.encrypt("Red!", grid) == "1/1, 1/4, 2/1, [!]"
        remove = TransformPolicy(non_alpha_handling=NonAlphaHandling.REMOVE)
        assert engine.encrypt("Red!", grid, remove) == "1/1, 1/4, 2/1"
        space = TransformPolicy(non_alpha_handling=NonAlphaHandling.SPACE)
        assert engine.encrypt("Red!", grid, space) == "1/1, 1/4, 2/1, [ ]"

    def test_decrypt(self, engine, grid):
        assert engine.decrypt("1/1, 1/4, 2/1, [!]", grid) == "RED!"

    def test_decrypt_marker_tokens(self, engine, grid):
        assert engine.decrypt("1/1, [,], [ ], 1/2", grid) == "R, O"

    def test_decrypt_accepts_semicolons_and_loose_spacing(self, engine, grid):
        assert engine.decrypt("1/1;1/2 ,  1/3,", grid) == "ROS"

    @pytest.mark.parametrize("token", ["--/--", "x/y", "11/3", "2/2", "1", "1/2/3", "0/1"])
    def test_unresolvable_tokens(self, engine, grid, token):
        assert engine.decrypt(token, grid) == BookCipherEngine.UNKNOWN

    def test_roundtrip(self, engine):
        key = {"reference_text": POEM, "size": 10}
        plaintext = "Hello, World!"
        assert engine.decrypt(engine.encrypt(plaintext, key), key) == plaintext.upper()

    def test_string_key_uses_default_size(self, engine):
        assert engine.parse_key(POEM).size == 10
        assert BookCipherEngine(ENGLISH, grid_size=6).parse_key(POEM).size == 6

    def test_ukrainian(self):
        engine = BookCipherEngine(UKRAINIAN)
        key = "Садок вишневий коло хати, хрущі над вишнями гудуть"
        assert engine.decrypt(engine.encrypt("Вишня", key), key) == "ВИШНЯ"

    @pytest.mark.parametrize("key", [None, "", {"size": 10}, {"reference_text": ""}])
    def test_missing_key(self, engine, key):
        with pytest.raises(MissingKeyError):
            engine.encrypt("abc", key)
        with pytest.raises(MissingKeyError):
            engine.decrypt("1/1", key)

    def test_bad_size(self, engine):
        with pytest.raises(ValidationError, match="grid size must be a number"):
            engine.parse_key({"reference_text": POEM, "size": "big"})

    def test_zero_size_is_not_replaced_by_default(self, engine):
        with pytest.raises(ValidationError, match="between 1 and 100"):
            engine.parse_key({"reference_text": POEM, "size": 0})
        verdict = engine.validate_key({"reference_text": POEM, "size": 0})
        assert not verdict.valid

    @pytest.mark.parametrize("size", [True, float("inf")])
    def test_size_must_be_a_number(self, engine, size):
        with pytest.raises(ValidationError, match="grid size must be a number"):
            engine.parse_key({"reference_text": POEM, "size": size})

    def test_validate_key(self, engine):
        assert engine.validate_key(POEM).valid
        assert not engine.validate_key(None).valid
        assert engine.validate_key("12345, 678").message == "reference text contains no letters"

    def test_describe_key(self, engine, grid):
        assert engine.describe_key(grid) == {"size": 10, "letter_count": 11}

    def test_no_random_keys(self, engine):
        with pytest.raises(EngineError):
            engine.generate_random_key()
