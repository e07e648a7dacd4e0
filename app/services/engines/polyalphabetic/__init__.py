"""Polyalphabetic cipher engines."""

from app.services.engines.polyalphabetic.trithemius import TrithemiusEngine

__all__ = [
    "TrithemiusEngine",
]
