"""Built-in field validators.

Every validator except ``is_required`` accepts an absent field (``None``):
presence is enforced separately by chaining ``is_required`` in front.
Errors are plain strings so they serialize as-is in the rejection body.
"""

import re
from typing import Iterable, Optional, Pattern, Union

from fieldguard.validators.base import BaseValidator

# Signed 64-bit range accepted by is_number
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

BOOL_LITERALS = ("true", "false")


def is_required(field_name: str, field_value: Optional[str]) -> Optional[str]:
    """Fail when the field is absent from the request."""
    if field_value is None:
        return f"'{field_name}' is required"
    return None


def is_number(field_name: str, field_value: Optional[str]) -> Optional[str]:
    """Fail when a present value is not a signed 64-bit integer."""
    if field_value is None:
        return None
    if _INTEGER_RE.fullmatch(field_value) is None or not INT64_MIN <= int(field_value) <= INT64_MAX:
        return f"field '{field_name}' = '{field_value}' is not a valid number"
    return None


def is_bool(field_name: str, field_value: Optional[str]) -> Optional[str]:
    """Fail when a present value is not the literal 'true' or 'false'."""
    if field_value is None or field_value in BOOL_LITERALS:
        return None
    return f"field '{field_name}' = '{field_value}' is not a valid boolean"


class LengthUnderValidator(BaseValidator[str]):
    """Rejects values longer than ``max_length`` characters."""

    def __init__(self, max_length: int):
        if max_length < 0:
            raise ValueError("max_length must be >= 0")
        self.max_length = max_length

    @property
    def name(self) -> str:
        return f"length_under({self.max_length})"

    def validate(self, field_name: str, field_value: Optional[str]) -> Optional[str]:
        if field_value is not None and len(field_value) > self.max_length:
            return (
                f"field '{field_name}' = '{field_value}' exceeds the maximum length of {self.max_length}"
            )
        return None


class LengthOverValidator(BaseValidator[str]):
    """Rejects values shorter than ``min_length`` characters."""

    def __init__(self, min_length: int):
        if min_length < 0:
            raise ValueError("min_length must be >= 0")
        self.min_length = min_length

    @property
    def name(self) -> str:
        return f"length_over({self.min_length})"

    def validate(self, field_name: str, field_value: Optional[str]) -> Optional[str]:
        if field_value is not None and len(field_value) < self.min_length:
            return (
                f"field '{field_name}' = '{field_value}' is shorter than the minimum length of {self.min_length}"
            )
        return None


class PatternValidator(BaseValidator[str]):
    """Rejects values that do not fully match a regular expression."""

    def __init__(self, pattern: Union[str, Pattern[str]]):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    @property
    def name(self) -> str:
        return f"matches({self.pattern.pattern!r})"

    def validate(self, field_name: str, field_value: Optional[str]) -> Optional[str]:
        if field_value is not None and self.pattern.fullmatch(field_value) is None:
            return f"field '{field_name}' = '{field_value}' does not match {self.pattern.pattern!r}"
        return None


class ChoiceValidator(BaseValidator[str]):
    """Rejects values outside a fixed set of accepted strings."""

    def __init__(self, choices: Iterable[str]):
        self.choices = tuple(choices)
        if not self.choices:
            raise ValueError("choices must not be empty")

    @property
    def name(self) -> str:
        return f"one_of({', '.join(self.choices)})"

    def validate(self, field_name: str, field_value: Optional[str]) -> Optional[str]:
        if field_value is not None and field_value not in self.choices:
            return f"field '{field_name}' = '{field_value}' must be one of: {', '.join(self.choices)}"
        return None


# ── Factories ──

def is_length_under(max_length: int) -> LengthUnderValidator:
    return LengthUnderValidator(max_length)


def is_length_over(min_length: int) -> LengthOverValidator:
    return LengthOverValidator(min_length)


def matches(pattern: Union[str, Pattern[str]]) -> PatternValidator:
    return PatternValidator(pattern)


def is_one_of(*choices: str) -> ChoiceValidator:
    return ChoiceValidator(choices)
