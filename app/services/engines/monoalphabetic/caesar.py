import logging
import math
import random
from typing import Any

from app.core.exceptions import ValidationError
from app.models.schemas import CipherType, KeyVerdict, TransformPolicy
from app.services.engines.base import DEFAULT_POLICY, CipherEngine
from app.services.engines.registry import EngineRegistry
from app.services.engines.text_policy import render_letter, render_non_letter
from app.services.languages.alphabets import Alphabet

logger = logging.getLogger(__name__)


class CaesarKeyValidator:
    """
    Checks a Caesar key against the size of the active alphabet.

    Valid keys are whole numbers in ``1..N-1``. Numeric strings are accepted,
    surrounding whitespace is ignored.
    """

    def __init__(self, alphabet: Alphabet):
        self.alphabet = alphabet
        self.max_key = alphabet.size - 1

    def validate(self, key: Any) -> KeyVerdict:
        if key is None or (isinstance(key, str) and not key.strip()):
            return KeyVerdict(valid=False, message="key must not be empty")

        number = self.to_int(key)
        if number is None:
            if self._is_fractional(key):
                return KeyVerdict(valid=False, message="key must be a whole number")
            return KeyVerdict(valid=False, message="key must be a number")
        if number < 1:
            return KeyVerdict(valid=False, message="key must be greater than 0")
        if number > self.max_key:
            return KeyVerdict(valid=False, message=f"key cannot exceed {self.max_key}")

        return KeyVerdict(valid=True, message="key is valid")

    def get_range(self) -> tuple[int, int]:
        """Inclusive bounds of valid keys."""
        return 1, self.max_key

    @property
    def range_label(self) -> str:
        low, high = self.get_range()
        return f"{low}-{high}"

    @staticmethod
    def to_int(key: Any) -> int | None:
        """Whole-number value of a key, or None if it is not one."""
        if isinstance(key, bool):
            return None
        if isinstance(key, int):
            return key
        if isinstance(key, float):
            return int(key) if key.is_integer() else None
        if isinstance(key, str):
            try:
                return int(key.strip())
            except ValueError:
                return None
        return None

    @staticmethod
    def _is_fractional(key: Any) -> bool:
        """A finite number (or numeric string) with a fractional part."""
        if isinstance(key, bool):
            return False
        if isinstance(key, str):
            try:
                key = float(key.strip())
            except ValueError:
                return False
        return isinstance(key, float) and math.isfinite(key) and not key.is_integer()


@EngineRegistry.register
class CaesarEngine(CipherEngine):
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. Works over any registered alphabet; an alphabet of N
    letters has N-1 useful keys.
    """

    name = "Caesar Cipher"
    cipher_type = CipherType.CAESAR
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )

    def __init__(self, alphabet: Alphabet):
        super().__init__(alphabet)
        self.validator = CaesarKeyValidator(alphabet)

    def validate_key(self, key: Any) -> KeyVerdict:
        return self.validator.validate(self.parse_key(key))

    def parse_key(self, raw: Any) -> Any:
        if isinstance(raw, dict):
            raw = raw.get("shift", raw.get("key"))
        return raw

    def encrypt(self, plaintext: str, key: Any, policy: TransformPolicy | None = None) -> str:
        """Encrypt plaintext with the given shift."""
        shift = self._checked_key(key)
        return self._shift_text(plaintext, shift, policy or DEFAULT_POLICY)

    def decrypt(self, ciphertext: str, key: Any, policy: TransformPolicy | None = None) -> str:
        """Decrypt by shifting forward by N - key."""
        shift = self._checked_key(key)
        return self._shift_text(ciphertext, self.alphabet.size - shift, policy or DEFAULT_POLICY)

    def generate_random_key(self) -> int:
        """Generate a random shift (1..N-1)."""
        return random.randint(1, self.validator.max_key)

    def describe_key(self, key: Any) -> int:
        return self._checked_key(key)

    def explain(self, key: Any) -> str:
        shift = self._checked_key(key)
        return (
            f"Caesar cipher over the {self.alphabet.name} alphabet (n={self.alphabet.size}) "
            f"with key {shift}. Each letter is moved {shift} positions forward to encrypt "
            f"and {shift} positions back to decrypt."
        )

    def _checked_key(self, key: Any) -> int:
        key = self.parse_key(key)
        verdict = self.validator.validate(key)
        if not verdict.valid:
            logger.debug("Rejected Caesar key %r: %s", key, verdict.message)
            raise ValidationError(verdict.message, {"key": key})
        return CaesarKeyValidator.to_int(key)

    def _shift_text(self, text: str, shift: int, policy: TransformPolicy) -> str:
        result = []
        size = self.alphabet.size

        for char in text:
            located = self.alphabet.locate(char)
            if located is None:
                result.append(render_non_letter(char, policy))
                continue
            index, was_upper = located
            result.append(render_letter(self.alphabet, (index + shift) % size, was_upper, policy))

        return "".join(result)
