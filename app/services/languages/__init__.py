"""Alphabets of the supported languages."""

from app.services.languages.alphabets import Alphabet, AlphabetRegistry, select_language

__all__ = [
    "Alphabet",
    "AlphabetRegistry",
    "select_language",
]
