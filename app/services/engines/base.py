from abc import ABC, abstractmethod
from typing import Any

from app.core.exceptions import EngineError
from app.models.schemas import CipherType, KeyVerdict, TransformPolicy
from app.services.languages.alphabets import Alphabet

DEFAULT_POLICY = TransformPolicy()


class CipherEngine(ABC):
    """
    Abstract base class for all cipher engines.

    An engine is bound to one alphabet for its whole life; switching language
    means asking the registry for another instance.

    Each cipher implementation must provide:
    - validate_key(): Check a key against the alphabet
    - parse_key(): Turn a raw request payload into the engine's key type
    - encrypt() / decrypt(): Transform text under a TransformPolicy
    - explain(): Generate human-readable explanation
    """

    # Cipher metadata
    name: str
    cipher_type: CipherType
    description: str

    def __init__(self, alphabet: Alphabet):
        self.alphabet = alphabet

    @abstractmethod
    def validate_key(self, key: Any) -> KeyVerdict:
        """
        Validate that a key is usable with this cipher and alphabet.

        Args:
            key: The key to validate

        Returns:
            KeyVerdict with a human-readable message
        """
        pass

    @abstractmethod
    def parse_key(self, raw: Any) -> Any:
        """
        Convert a raw key (as received from a request) to the engine's key.

        Args:
            raw: Key as sent by the caller

        Returns:
            Key accepted by encrypt() and decrypt()
        """
        pass

    @abstractmethod
    def encrypt(self, plaintext: str, key: Any, policy: TransformPolicy | None = None) -> str:
        """
        Encrypt plaintext with the given key.

        Args:
            plaintext: The plaintext to encrypt
            key: The encryption key
            policy: Case and non-alphabetic handling (defaults to preserve/preserve)

        Returns:
            Ciphertext
        """
        pass

    @abstractmethod
    def decrypt(self, ciphertext: str, key: Any, policy: TransformPolicy | None = None) -> str:
        """
        Decrypt ciphertext with the given key.

        Args:
            ciphertext: The ciphertext to decrypt
            key: The decryption key
            policy: Case and non-alphabetic handling (defaults to preserve/preserve)

        Returns:
            Plaintext
        """
        pass

    @abstractmethod
    def explain(self, key: Any) -> str:
        """
        Generate human-readable explanation of the transform.

        Args:
            key: The key used

        Returns:
            Explanation string
        """
        pass

    def describe_key(self, key: Any) -> int | str | dict[str, Any]:
        """Serializable form of a key for responses."""
        return key

    def generate_random_key(self) -> int | str | dict[str, Any]:
        """
        Generate a random valid key for this cipher.

        Raises:
            EngineError: if the cipher has no random key generation
        """
        raise EngineError(
            f"{self.name} does not support random keys",
            {"cipher_type": self.cipher_type.value},
        )
