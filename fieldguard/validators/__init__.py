"""Field validation core — registry, dispatcher and built-in validators.

Usage:
    from fieldguard.validators import RegistryBuilder, QueryParam, dispatch, is_number

    registry = RegistryBuilder().add_validator(QueryParam("age"), is_number).build()
    outcome = dispatch(registry, provider)
    if outcome.rejected:
        # Render outcome.errors
"""

from fieldguard.validators.base import BaseValidator, FieldValueProvider, Validator
from fieldguard.validators.builtins import (
    is_bool,
    is_length_over,
    is_length_under,
    is_number,
    is_one_of,
    is_required,
    matches,
)
from fieldguard.validators.dispatcher import Dispatcher, adispatch, dispatch
from fieldguard.validators.models import (
    Cookie,
    FieldError,
    FieldKind,
    FieldLocator,
    Header,
    Param,
    QueryParam,
    ValidationOutcome,
)
from fieldguard.validators.registry import Registry, RegistryBuilder, freeze

__all__ = [
    "BaseValidator",
    "FieldValueProvider",
    "Validator",
    "Dispatcher",
    "dispatch",
    "adispatch",
    "Registry",
    "RegistryBuilder",
    "freeze",
    "FieldKind",
    "FieldLocator",
    "FieldError",
    "ValidationOutcome",
    "Param",
    "QueryParam",
    "Cookie",
    "Header",
    "is_required",
    "is_number",
    "is_bool",
    "is_length_under",
    "is_length_over",
    "matches",
    "is_one_of",
]
