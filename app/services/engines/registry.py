from typing import Type

from app.core.exceptions import EngineNotFoundError
from app.models.schemas import CipherType
from app.services.engines.base import CipherEngine
from app.services.languages.alphabets import Alphabet


class EngineRegistry:
    """
    Registry for cipher engines.

    Manages available cipher engines and hands out one instance per
    (cipher type, alphabet) pair.
    """

    _engines: dict[CipherType, Type[CipherEngine]] = {}
    _instances: dict[tuple[CipherType, Alphabet], CipherEngine] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherEngine]) -> Type[CipherEngine]:
        """
        Register a cipher engine class.

        Can be used as a decorator:
            @EngineRegistry.register
            class CaesarEngine(CipherEngine):
                ...

        Args:
            engine_class: The engine class to register

        Returns:
            The engine class (for decorator usage)
        """
        cls._engines[engine_class.cipher_type] = engine_class
        return engine_class

    def get_engine(self, cipher_type: CipherType, alphabet: Alphabet) -> CipherEngine:
        """
        Get an engine instance for the specified cipher type and alphabet.

        Args:
            cipher_type: The type of cipher
            alphabet: The alphabet the engine works over

        Returns:
            Engine instance

        Raises:
            EngineNotFoundError: if no engine is registered for the type
        """
        if cipher_type not in self._engines:
            raise EngineNotFoundError(str(cipher_type.value))

        # Lazy instantiation with caching; engines hold no mutable state
        cache_key = (cipher_type, alphabet)
        if cache_key not in self._instances:
            self._instances[cache_key] = self._engines[cipher_type](alphabet)

        return self._instances[cache_key]

    @classmethod
    def list_registered(cls) -> list[CipherType]:
        """
        List all registered cipher types.

        Returns:
            List of registered cipher types
        """
        return list(cls._engines.keys())

    @classmethod
    def is_registered(cls, cipher_type: CipherType) -> bool:
        """
        Check if a cipher type is registered.

        Args:
            cipher_type: The cipher type to check

        Returns:
            True if registered
        """
        return cipher_type in cls._engines


# Import engines to trigger registration
def _load_engines() -> None:
    """Load all engine modules to trigger registration."""
    from app.services.engines.monoalphabetic import caesar  # noqa: F401
    from app.services.engines.polyalphabetic import trithemius  # noqa: F401
    from app.services.engines.coordinate import book  # noqa: F401


# Load engines when module is imported
_load_engines()
