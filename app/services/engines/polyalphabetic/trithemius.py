import logging
import random
from typing import Any

from app.core.exceptions import UnknownModeError, ValidationError
from app.models.schemas import CipherType, KeyVerdict, TransformPolicy
from app.services.engines.base import DEFAULT_POLICY, CipherEngine
from app.services.engines.polyalphabetic.schedules import (
    LinearSchedule,
    MottoSchedule,
    QuadraticSchedule,
    TrithemiusKeyValidator,
    TrithemiusSchedule,
    build_schedule,
)
from app.services.engines.registry import EngineRegistry
from app.services.engines.text_policy import render_letter, render_non_letter

logger = logging.getLogger(__name__)

_SCHEDULE_TYPES = (LinearSchedule, QuadraticSchedule, MottoSchedule)


@EngineRegistry.register
class TrithemiusEngine(CipherEngine):
    """
    Trithemius cipher engine.

    A polyalphabetic cipher where the shift changes from letter to letter
    according to a key schedule. Only letters advance the position counter,
    so punctuation and spaces never change the shifts applied to the letters
    that follow them.
    """

    name = "Trithemius Cipher"
    cipher_type = CipherType.TRITHEMIUS
    description = (
        "A polyalphabetic cipher where the shift for each letter comes from its "
        "position in the text: a linear or quadratic function of the position, "
        "or the letters of a repeating motto."
    )

    def validate_key(self, key: Any) -> KeyVerdict:
        try:
            schedule = self.parse_key(key)
        except (UnknownModeError, ValidationError) as e:
            return KeyVerdict(valid=False, message=e.message)
        return TrithemiusKeyValidator.validate_schedule(schedule, self.alphabet)

    def parse_key(self, raw: Any) -> TrithemiusSchedule:
        """
        Build a schedule from ``{"mode": ..., <params>}``.

        Raises:
            UnknownModeError: missing or unrecognized mode
            ValidationError: parameters do not fit the mode
        """
        if isinstance(raw, _SCHEDULE_TYPES):
            return raw
        if not isinstance(raw, dict):
            raise UnknownModeError(str(raw))
        return build_schedule(raw.get("mode", ""), raw, self.alphabet)

    def encrypt(self, plaintext: str, key: Any, policy: TransformPolicy | None = None) -> str:
        schedule = self._checked_schedule(key)
        return self._transform(plaintext, schedule, policy or DEFAULT_POLICY, encrypting=True)

    def decrypt(self, ciphertext: str, key: Any, policy: TransformPolicy | None = None) -> str:
        schedule = self._checked_schedule(key)
        return self._transform(ciphertext, schedule, policy or DEFAULT_POLICY, encrypting=False)

    def generate_random_key(self) -> dict[str, Any]:
        """Random linear schedule with a non-zero slope."""
        size = self.alphabet.size
        return {
            "mode": "linear",
            "a": random.randint(1, size - 1),
            "b": random.randint(0, size - 1),
            "position_base": 0,
        }

    def describe_key(self, key: Any) -> dict[str, Any]:
        return self.parse_key(key).model_dump()

    def explain(self, key: Any) -> str:
        schedule = self.parse_key(key)
        n = self.alphabet.size
        base = schedule.position_base

        if isinstance(schedule, LinearSchedule):
            rule = f"k(p) = ({schedule.a}*p + {schedule.b}) mod {n}"
        elif isinstance(schedule, QuadraticSchedule):
            rule = f"k(p) = ({schedule.a}*p^2 + {schedule.b}*p + {schedule.c}) mod {n}"
        else:
            # the motto is always read from its first letter
            base = 0
            rule = f"k(p) = alphabet index of the motto letter \"{schedule.phrase}\"[p mod {len(schedule.phrase)}]"

        return (
            f"Trithemius cipher over the {self.alphabet.name} alphabet (n={n}). "
            f"The letter at position p (counting letters from {base}) is shifted by {rule}."
        )

    def _checked_schedule(self, key: Any) -> TrithemiusSchedule:
        schedule = self.parse_key(key)
        verdict = TrithemiusKeyValidator.validate_schedule(schedule, self.alphabet)
        if not verdict.valid:
            logger.debug("Rejected Trithemius schedule %r: %s", schedule, verdict.message)
            raise ValidationError(verdict.message, {"mode": schedule.mode})
        return schedule

    def _transform(
        self,
        text: str,
        schedule: TrithemiusSchedule,
        policy: TransformPolicy,
        encrypting: bool,
    ) -> str:
        size = self.alphabet.size
        position = 0
        result = []

        for char in text:
            located = self.alphabet.locate(char)
            if located is None:
                result.append(render_non_letter(char, policy))
                continue

            index, was_upper = located
            shift = schedule.shift_at(position, size, self.alphabet)
            new_index = (index + shift) % size if encrypting else (index - shift) % size
            result.append(render_letter(self.alphabet, new_index, was_upper, policy))
            position += 1

        return "".join(result)
