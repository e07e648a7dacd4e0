"""Monoalphabetic cipher engines."""

from app.services.engines.monoalphabetic.caesar import CaesarEngine, CaesarKeyValidator

__all__ = [
    "CaesarEngine",
    "CaesarKeyValidator",
]
