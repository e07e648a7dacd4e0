from dataclasses import dataclass
from functools import lru_cache

from app.models.schemas import CipherType
from app.services.analysis.brute_force import BruteForceAttacker
from app.services.engines.coordinate.book import BookCipherEngine
from app.services.engines.monoalphabetic.caesar import CaesarEngine, CaesarKeyValidator
from app.services.engines.polyalphabetic.trithemius import TrithemiusEngine
from app.services.engines.registry import EngineRegistry
from app.services.languages.alphabets import Alphabet, select_language


@dataclass(frozen=True)
class CipherContext:
    """Everything the ciphers need for one language, built once."""

    alphabet: Alphabet
    validator: CaesarKeyValidator
    caesar: CaesarEngine
    trithemius: TrithemiusEngine
    book: BookCipherEngine
    attacker: BruteForceAttacker


@lru_cache
def build_context(language_id: str) -> CipherContext:
    """
    Build the cipher bundle for a language.

    Raises:
        UnknownLanguageError: if the language is not registered
    """
    alphabet = select_language(language_id)
    registry = EngineRegistry()
    caesar = registry.get_engine(CipherType.CAESAR, alphabet)

    return CipherContext(
        alphabet=alphabet,
        validator=caesar.validator,
        caesar=caesar,
        trithemius=registry.get_engine(CipherType.TRITHEMIUS, alphabet),
        book=registry.get_engine(CipherType.BOOK, alphabet),
        attacker=BruteForceAttacker(alphabet, caesar),
    )
