"""Base validator and provider contracts.

A validator is anything callable as ``validator(field_name, field_value)``
that returns ``None`` when the value is acceptable and an error value
otherwise. Plain functions, closures and ``BaseValidator`` instances are
interchangeable.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Generic, Optional, Protocol, TypeVar, Union, runtime_checkable

from fieldguard.validators.models import FieldLocator

E = TypeVar("E")

# Function form: (field_name, field_value) -> None on success, error value on failure
Validator = Callable[[str, Optional[str]], Union[Optional[E], Awaitable[Optional[E]]]]


class BaseValidator(ABC, Generic[E]):
    """Abstract base for class-based validators.

    Contract:
        - validate() is pure: same input, same output, no shared mutable state
        - validate() receives None when the field is absent from the request
        - validate() returns None on success, an error value on failure
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def validate(self, field_name: str, field_value: Optional[str]) -> Optional[E]:
        """Check one field value.

        Args:
            field_name: Name of the parameter, query parameter, cookie or header
            field_value: Raw value, or None when the request does not carry it

        Returns:
            None if the value is acceptable, otherwise the error to report
        """
        ...

    def __call__(self, field_name: str, field_value: Optional[str]) -> Optional[E]:
        return self.validate(field_name, field_value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


@runtime_checkable
class FieldValueProvider(Protocol):
    """Resolves a locator to the raw string value carried by a request.

    lookup() never raises for a missing field: absence is reported as None.
    """

    def lookup(self, locator: FieldLocator) -> Optional[str]:
        ...


def validator_name(validator: Callable) -> str:
    """Best-effort name of a validator for log events."""
    if isinstance(validator, BaseValidator):
        return validator.name
    return getattr(validator, "__qualname__", None) or getattr(validator, "__name__", None) or repr(validator)
