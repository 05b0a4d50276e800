"""Property-based tests for registry ordering and error aggregation."""

from __future__ import annotations

from typing import Optional

from hypothesis import given, settings
from hypothesis import strategies as st

from fieldguard.api.providers import MappingFieldProvider
from fieldguard.validators import FieldKind, FieldLocator, RegistryBuilder, dispatch

names = st.text(alphabet="abcXYZ-_", min_size=1, max_size=4)
locators = st.builds(FieldLocator, kind=st.sampled_from(list(FieldKind)), name=names)

# Each registration: (locator, whether its validator fails)
registrations = st.lists(st.tuples(locators, st.booleans()), max_size=12)


def make_validator(index: int, fails: bool):
    def validator(field_name: str, field_value: Optional[str]) -> Optional[str]:
        return f"v{index}" if fails else None

    return validator


def build(regs):
    builder = RegistryBuilder()
    for index, (locator, fails) in enumerate(regs):
        builder.add_validator(locator, make_validator(index, fails))
    return builder.build()


@given(registrations)
@settings(max_examples=100)
def test_one_error_per_failing_validator_in_registration_order(regs) -> None:
    outcome = dispatch(build(regs), MappingFieldProvider())

    # Group by first appearance of each locator, chain order within a group
    grouped: dict[FieldLocator, list[tuple[int, bool]]] = {}
    for index, (locator, fails) in enumerate(regs):
        grouped.setdefault(locator, []).append((index, fails))
    expected = [
        (locator, f"v{index}")
        for locator, chain in grouped.items()
        for index, fails in chain
        if fails
    ]

    assert [(e.locator, e.error) for e in outcome.errors] == expected
    assert outcome.passed == (not expected)


@given(st.lists(locators, max_size=8), st.dictionaries(names, names))
@settings(max_examples=50)
def test_passing_validators_always_proceed(locs, values) -> None:
    builder = RegistryBuilder()
    for locator in locs:
        builder.add_validator(locator, make_validator(0, fails=False))
    provider = MappingFieldProvider(params=values, query=values, cookies=values, headers=values)
    assert dispatch(builder.build(), provider).passed


@given(registrations)
@settings(max_examples=50)
def test_dispatch_is_deterministic(regs) -> None:
    registry = build(regs)
    assert dispatch(registry, MappingFieldProvider()) == dispatch(registry, MappingFieldProvider())
