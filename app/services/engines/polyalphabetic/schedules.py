"""
Trithemius key schedules.

A schedule maps the position of a letter in the text (counting letters only)
to a shift. Three families are supported:

    linear     k(p) = (A*p + B) mod n
    quadratic  k(p) = (A*p^2 + B*p + C) mod n
    motto      k(i) = index of phrase[i mod len(phrase)] in the alphabet

where p = position + position_base for the polynomial families; the motto is
always read from its first letter, whatever the position base. Fractional
coefficients are allowed; the value is floored before the modulus is taken, so
the shift is always an integer in 0..n-1. Arithmetic is exact, so very large
integer coefficients are fine.
"""

import math
from abc import abstractmethod
from fractions import Fraction
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import UnknownModeError, ValidationError
from app.models.schemas import KeyMode, KeyVerdict
from app.services.languages.alphabets import Alphabet

Number = int | float


class _Schedule(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    position_base: Literal[0, 1] = Field(
        default=0,
        validation_alias=AliasChoices("position_base", "pBase"),
    )

    @abstractmethod
    def shift_at(self, position: int, size: int, alphabet: Alphabet) -> int:
        """Shift for the letter at ``position`` (0-based, letters only)."""

    def as_params(self) -> dict[str, Any]:
        return self.model_dump(exclude={"mode"})


def _coefficient(name: str) -> Any:
    return Field(default=0, validation_alias=AliasChoices(name.lower(), name))


def _is_finite(value: Number) -> bool:
    # ints are exact; math.isfinite would overflow converting a huge one to float
    return isinstance(value, int) or math.isfinite(value)


class LinearSchedule(_Schedule):
    """k(p) = (A*p + B) mod n"""

    mode: Literal["linear"] = "linear"
    a: Number = _coefficient("A")
    b: Number = _coefficient("B")

    @field_validator("a", "b")
    @classmethod
    def _finite(cls, value: Number) -> Number:
        if not _is_finite(value):
            raise ValueError("A and B must be numbers")
        return value

    def shift_at(self, position: int, size: int, alphabet: Alphabet) -> int:
        p = position + self.position_base
        return math.floor(Fraction(self.a) * p + Fraction(self.b)) % size


class QuadraticSchedule(_Schedule):
    """k(p) = (A*p^2 + B*p + C) mod n"""

    mode: Literal["quadratic"] = "quadratic"
    a: Number = _coefficient("A")
    b: Number = _coefficient("B")
    c: Number = _coefficient("C")

    @field_validator("a", "b", "c")
    @classmethod
    def _finite(cls, value: Number) -> Number:
        if not _is_finite(value):
            raise ValueError("A, B, C must be numbers")
        return value

    def shift_at(self, position: int, size: int, alphabet: Alphabet) -> int:
        p = position + self.position_base
        return math.floor(Fraction(self.a) * p * p + Fraction(self.b) * p + Fraction(self.c)) % size


class MottoSchedule(_Schedule):
    """k(i) = alphabet index of the motto letter at i (0 if absent)"""

    mode: Literal["motto"] = "motto"
    phrase: str = Field(min_length=1, validation_alias=AliasChoices("phrase", "motto"))

    def shift_at(self, position: int, size: int, alphabet: Alphabet) -> int:
        index = alphabet.index_of(self.phrase[position % len(self.phrase)])
        return (index or 0) % size


TrithemiusSchedule = Annotated[
    Union[LinearSchedule, QuadraticSchedule, MottoSchedule],
    Field(discriminator="mode"),
]

_schedule_adapter = TypeAdapter(TrithemiusSchedule)


def _param(params: dict[str, Any], *names: str) -> Any:
    for name in names:
        if name in params:
            return params[name]
    return None


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return _is_finite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


class TrithemiusKeyValidator:
    """Checks that schedule parameters are well-formed for a family and alphabet."""

    @staticmethod
    def validate(mode: str, params: dict[str, Any], alphabet: Alphabet) -> KeyVerdict:
        if mode == KeyMode.LINEAR:
            a, b = _param(params, "a", "A"), _param(params, "b", "B")
            if not (_is_finite_number(a) and _is_finite_number(b)):
                return KeyVerdict(valid=False, message="A and B must be numbers")
            return KeyVerdict(valid=True, message="key is valid")

        if mode == KeyMode.QUADRATIC:
            coefficients = [_param(params, n.lower(), n) for n in ("A", "B", "C")]
            if not all(_is_finite_number(value) for value in coefficients):
                return KeyVerdict(valid=False, message="A, B, C must be numbers")
            return KeyVerdict(valid=True, message="key is valid")

        if mode == KeyMode.MOTTO:
            phrase = _param(params, "phrase", "motto")
            if phrase is None or phrase == "":
                return KeyVerdict(valid=False, message="phrase must not be empty")
            if not isinstance(phrase, str):
                return KeyVerdict(valid=False, message="phrase must be text")
            for char in phrase:
                if not alphabet.contains(char):
                    return KeyVerdict(
                        valid=False,
                        message=f'character "{char}" is not in the selected alphabet',
                    )
            return KeyVerdict(valid=True, message="key is valid")

        return KeyVerdict(valid=False, message="unknown key mode")

    @classmethod
    def validate_schedule(cls, schedule: _Schedule, alphabet: Alphabet) -> KeyVerdict:
        return cls.validate(schedule.mode, schedule.as_params(), alphabet)


def build_schedule(mode: str, params: dict[str, Any], alphabet: Alphabet) -> TrithemiusSchedule:
    """
    Validate parameters and construct the schedule for one family.

    Raises:
        UnknownModeError: mode is not linear, quadratic or motto
        ValidationError: parameters are not valid for the mode
    """
    try:
        key_mode = KeyMode(mode)
    except ValueError:
        raise UnknownModeError(str(mode)) from None

    verdict = TrithemiusKeyValidator.validate(key_mode, params, alphabet)
    if not verdict.valid:
        raise ValidationError(verdict.message, {"mode": key_mode.value})

    try:
        return _schedule_adapter.validate_python({**params, "mode": key_mode.value})
    except PydanticValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(errors, {"mode": key_mode.value}) from e
