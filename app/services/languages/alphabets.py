from dataclasses import dataclass
from functools import cached_property
from typing import ClassVar

from app.core.exceptions import UnknownLanguageError


@dataclass(frozen=True)
class Alphabet:
    """
    Ordered letters of one language in both cases.

    ``uppercase[i]`` and ``lowercase[i]`` are the same letter, so a letter's
    index does not depend on the case it was written in.
    """

    id: str
    name: str
    uppercase: str
    lowercase: str
    sample: str = ""
    help: str = ""
    common_words: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.uppercase) != len(self.lowercase):
            raise ValueError(
                f"Alphabet '{self.id}' has {len(self.uppercase)} uppercase "
                f"and {len(self.lowercase)} lowercase letters"
            )
        if len(set(self.uppercase)) != len(self.uppercase):
            raise ValueError(f"Alphabet '{self.id}' contains duplicate letters")

    @property
    def size(self) -> int:
        return len(self.uppercase)

    @cached_property
    def _upper_index(self) -> dict[str, int]:
        return {char: i for i, char in enumerate(self.uppercase)}

    @cached_property
    def _lower_index(self) -> dict[str, int]:
        return {char: i for i, char in enumerate(self.lowercase)}

    def locate(self, char: str) -> tuple[int, bool] | None:
        """
        Find a character's alphabet index and whether it was written uppercase.

        The upper-cased form is looked up first, then the lower-cased form.

        Args:
            char: A single character

        Returns:
            (index, is_upper) or None if the character is not a letter of
            this alphabet
        """
        idx = self._upper_index.get(char.upper())
        if idx is not None:
            return idx, char != char.lower()

        idx = self._lower_index.get(char.lower())
        if idx is not None:
            return idx, False

        return None

    def index_of(self, char: str) -> int | None:
        """Case-insensitive index of a letter, or None if absent."""
        located = self.locate(char)
        return located[0] if located else None

    def contains(self, char: str) -> bool:
        return char in self._upper_index or char in self._lower_index

    def letter(self, index: int, upper: bool = True) -> str:
        """Letter at ``index`` (taken modulo the alphabet size)."""
        source = self.uppercase if upper else self.lowercase
        return source[index % self.size]


class AlphabetRegistry:
    """
    Registry of the languages the ciphers can work in.

    Alphabets are immutable; selecting a language swaps the whole alphabet.
    """

    _alphabets: ClassVar[dict[str, Alphabet]] = {}

    @classmethod
    def register(cls, alphabet: Alphabet) -> Alphabet:
        cls._alphabets[alphabet.id] = alphabet
        return alphabet

    @classmethod
    def get(cls, language_id: str) -> Alphabet:
        """
        Look up an alphabet by language id.

        Raises:
            UnknownLanguageError: if the id is not registered
        """
        try:
            return cls._alphabets[language_id.lower()]
        except KeyError:
            raise UnknownLanguageError(language_id) from None

    @classmethod
    def list_registered(cls) -> list[Alphabet]:
        return list(cls._alphabets.values())

    @classmethod
    def is_registered(cls, language_id: str) -> bool:
        return language_id.lower() in cls._alphabets


UKRAINIAN = AlphabetRegistry.register(Alphabet(
    id="ukrainian",
    name="Ukrainian",
    uppercase="АБВГҐДЕЄЖЗИІЇЙКЛМНОПРСТУФХЦЧШЩЬЮЯ",
    lowercase="абвгґдеєжзиіїйклмнопрстуфхцчшщьюя",
    sample="Привіт світ! Це приклад тексту для шифрування.",
    help=(
        "Шифр Цезаря - це метод шифрування, де кожна буква замінюється на букву, "
        "що знаходиться на фіксованому числі позицій далі в алфавіті."
    ),
    common_words=(
        "і", "в", "на", "з", "до", "за", "по", "від",
        "для", "про", "що", "як", "але", "або", "та", "це",
    ),
))

ENGLISH = AlphabetRegistry.register(Alphabet(
    id="english",
    name="English",
    uppercase="ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    lowercase="abcdefghijklmnopqrstuvwxyz",
    sample="Hello world! This is a sample text for encryption.",
    help=(
        "Caesar cipher is an encryption method where each letter is replaced by "
        "a letter a fixed number of positions down the alphabet."
    ),
    common_words=(
        "the", "and", "is", "in", "to", "of", "a",
        "that", "it", "with", "for", "as", "was", "are",
    ),
))


def select_language(language_id: str) -> Alphabet:
    """Return the alphabet for ``language_id``."""
    return AlphabetRegistry.get(language_id)
