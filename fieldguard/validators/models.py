"""Validation models: field locators, collected errors and dispatch outcomes.

Everything here is immutable so a single instance can be shared by
concurrently processed requests.
"""

from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field


class FieldKind(str, Enum):
    """Category of request data a locator points at."""

    PARAM = "param"              # Path parameter resolved by the router
    QUERY_PARAM = "query_param"  # Parsed query string
    COOKIE = "cookie"            # Parsed Cookie header
    HEADER = "header"            # Request header, case-insensitive


class FieldLocator(BaseModel):
    """Where to find a named piece of request data.

    Two locators are equal when both kind and ``key`` match. The key of a
    header is its lower-cased name, so ``Header("X-Token") == Header("x-token")``;
    ``name`` keeps the spelling it was registered with.
    """

    model_config = ConfigDict(frozen=True)

    kind: FieldKind
    name: str = Field(min_length=1)

    @property
    def key(self) -> str:
        """Name used for equality and lookup."""
        return self.name.lower() if self.kind is FieldKind.HEADER else self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldLocator):
            return NotImplemented
        return self.kind is other.kind and self.key == other.key

    def __hash__(self) -> int:
        return hash((self.kind, self.key))

    def __str__(self) -> str:
        return f"{self.kind.value} '{self.name}'"


# ── Locator constructors ──

def Param(name: str) -> FieldLocator:  # noqa: N802
    """Path parameter, e.g. ``Param("age")`` for the route ``/test/{age}``."""
    return FieldLocator(kind=FieldKind.PARAM, name=name)


def QueryParam(name: str) -> FieldLocator:  # noqa: N802
    """Query parameter, e.g. ``QueryParam("page")`` for ``/items?page=2``."""
    return FieldLocator(kind=FieldKind.QUERY_PARAM, name=name)


def Cookie(name: str) -> FieldLocator:  # noqa: N802
    """Cookie, e.g. ``Cookie("session")``."""
    return FieldLocator(kind=FieldKind.COOKIE, name=name)


def Header(name: str) -> FieldLocator:  # noqa: N802
    """Header, e.g. ``Header("X-Custom-Header")``. Matched case-insensitively."""
    return FieldLocator(kind=FieldKind.HEADER, name=name)


class FieldError(BaseModel):
    """A single validator failure, tagged with the locator that produced it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    locator: FieldLocator
    error: Any  # Integrator-defined error value, must be JSON-encodable


class ValidationOutcome(BaseModel):
    """Result of dispatching one request.

    ``errors`` is empty for Proceed; otherwise it lists every failure in the
    order it was discovered (locator registration order, then chain order).
    """

    model_config = ConfigDict(frozen=True)

    errors: tuple[FieldError, ...] = ()

    @classmethod
    def proceed(cls) -> "ValidationOutcome":
        return cls()

    @classmethod
    def rejected_with(cls, errors: Iterable[FieldError]) -> "ValidationOutcome":
        return cls(errors=tuple(errors))

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def rejected(self) -> bool:
        return bool(self.errors)

    def failed_locators(self) -> list[FieldLocator]:
        """Distinct failing locators, in the order they first failed."""
        seen: dict[FieldLocator, None] = {}
        for err in self.errors:
            seen.setdefault(err.locator, None)
        return list(seen)
