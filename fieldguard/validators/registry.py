"""Validator registry: which validators run against which request field.

Built in two phases. A ``RegistryBuilder`` collects registrations during
setup; ``build()`` freezes it into a ``Registry`` that is read-only and can be
shared by every request the guard processes.

Usage:
    registry = (
        RegistryBuilder()
        .add_validator(Param("age"), is_number)
        .add_validator(Cookie("session"), is_required)
        .add_validator(Cookie("session"), is_length_under(20))
        .build()
    )
"""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Union

import structlog

from fieldguard.errors import ConfigurationError
from fieldguard.validators.base import Validator, validator_name
from fieldguard.validators.models import FieldLocator

logger = structlog.get_logger()

ValidatorSource = Union[Mapping[FieldLocator, Validator], Iterable[tuple[FieldLocator, Validator]]]


class Registry:
    """Immutable, ordered mapping of field locators to validator chains.

    Locators keep their first-registration order; each chain keeps the order
    its validators were added. Both orders are execution order.
    """

    __slots__ = ("_chains",)

    def __init__(self, chains: Mapping[FieldLocator, Iterable[Validator]]):
        self._chains = MappingProxyType({locator: tuple(chain) for locator, chain in chains.items()})

    @classmethod
    def empty(cls) -> "Registry":
        return cls({})

    def locators(self) -> tuple[FieldLocator, ...]:
        """Registered locators, in first-registration order."""
        return tuple(self._chains)

    def chain(self, locator: FieldLocator) -> tuple[Validator, ...]:
        """Validators registered for a locator (empty if none)."""
        return self._chains.get(locator, ())

    def items(self) -> Iterator[tuple[FieldLocator, tuple[Validator, ...]]]:
        return iter(self._chains.items())

    def validator_count(self) -> int:
        return sum(len(chain) for chain in self._chains.values())

    def __contains__(self, locator: object) -> bool:
        return locator in self._chains

    def __len__(self) -> int:
        return len(self._chains)

    def __iter__(self) -> Iterator[FieldLocator]:
        return iter(self._chains)

    def __repr__(self) -> str:
        fields = ", ".join(f"{locator}: {len(chain)}" for locator, chain in self._chains.items())
        return f"Registry({fields})"


class RegistryBuilder:
    """Mutable collector of validator registrations.

    Registering a locator again appends to its chain instead of replacing it.
    Once ``build()`` has been called the builder is frozen.
    """

    def __init__(self):
        self._chains: dict[FieldLocator, list[Validator]] = {}
        self._frozen = False

    def add_validator(self, locator: FieldLocator, validator: Validator) -> "RegistryBuilder":
        """Append a validator to the chain of ``locator``."""
        if self._frozen:
            raise ConfigurationError(
                f"Cannot add a validator for {locator}: registry has already been built"
            )
        if not isinstance(locator, FieldLocator):
            raise ConfigurationError(f"Expected a FieldLocator, got {type(locator).__name__}")
        if not callable(validator):
            raise ConfigurationError(f"Validator for {locator} is not callable: {validator!r}")

        self._chains.setdefault(locator, []).append(validator)
        logger.debug("validator_registered", field=str(locator), validator=validator_name(validator))
        return self

    def with_validators(self, validators: ValidatorSource) -> "RegistryBuilder":
        """Register every (locator, validator) pair, in iteration order."""
        pairs = validators.items() if isinstance(validators, Mapping) else validators
        for locator, validator in pairs:
            self.add_validator(locator, validator)
        return self

    def build(self) -> Registry:
        """Freeze the builder and return the read-only registry."""
        self._frozen = True
        registry = Registry(self._chains)
        logger.debug(
            "registry_built",
            fields=len(registry),
            validators=registry.validator_count(),
        )
        return registry

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._chains)


def freeze(registry: Union[Registry, RegistryBuilder]) -> Registry:
    """Return a read-only registry, building (and freezing) a builder if given one."""
    if isinstance(registry, Registry):
        return registry
    if isinstance(registry, RegistryBuilder):
        return registry.build()
    raise ConfigurationError(f"Expected a Registry or RegistryBuilder, got {type(registry).__name__}")
