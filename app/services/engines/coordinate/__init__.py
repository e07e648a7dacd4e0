"""Coordinate (grid) cipher engines."""

from app.services.engines.coordinate.book import BookCipherEngine, BookGrid

__all__ = [
    "BookCipherEngine",
    "BookGrid",
]
