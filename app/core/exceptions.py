from typing import Any


class CipherError(Exception):
    """Base exception for all cipher engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CipherError):
    """Raised when a key or schedule parameters fail validation."""

    pass


class TextTooLongError(ValidationError):
    """Raised when input text exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Text length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class MissingKeyError(CipherError):
    """Raised when the book cipher is used before a grid has been built."""

    def __init__(self, message: str = "book cipher grid has not been built"):
        super().__init__(message)


class UnknownLanguageError(CipherError):
    """Raised when a language id has no registered alphabet."""

    def __init__(self, language_id: str):
        super().__init__(
            f"Language '{language_id}' is not supported",
            {"language": language_id},
        )


class EngineError(CipherError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str):
        super().__init__(
            f"Cipher engine '{engine_name}' not found",
            {"engine_name": engine_name},
        )


class UnknownModeError(EngineError):
    """Raised for an unrecognized Trithemius key schedule family."""

    def __init__(self, mode: str):
        super().__init__(
            "unknown key mode",
            {"mode": mode},
        )
