import asyncio
from typing import Optional

import pytest

from fieldguard.api.providers import MappingFieldProvider
from fieldguard.errors import ConfigurationError
from fieldguard.validators import (
    BaseValidator,
    Cookie,
    Dispatcher,
    FieldError,
    Header,
    Param,
    QueryParam,
    RegistryBuilder,
    adispatch,
    dispatch,
    is_length_under,
    is_number,
    is_required,
)


def always_fail(message: str):
    def validator(field_name: str, field_value: Optional[str]) -> Optional[str]:
        return f"{message}:{field_name}"

    return validator


def always_pass(field_name: str, field_value: Optional[str]) -> Optional[str]:
    return None


class RecordingProvider(MappingFieldProvider):
    """MappingFieldProvider that remembers every lookup."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.lookups = []

    def lookup(self, locator):
        self.lookups.append(locator)
        return super().lookup(locator)


# ── Core properties ──


def test_empty_registry_always_proceeds() -> None:
    outcome = dispatch(RegistryBuilder().build(), MappingFieldProvider(query={"age": "x"}))
    assert outcome.passed
    assert outcome.errors == ()


def test_all_passing_validators_proceed() -> None:
    registry = (
        RegistryBuilder()
        .add_validator(Param("n"), is_number)
        .add_validator(Header("X-Token"), is_required)
        .add_validator(Header("X-Token"), always_pass)
        .build()
    )
    provider = MappingFieldProvider(params={"n": "4"}, headers={"X-Token": "abc"})
    assert dispatch(registry, provider).passed


def test_errors_follow_locator_registration_order() -> None:
    registry = (
        RegistryBuilder()
        .add_validator(QueryParam("l1"), always_fail("v1"))
        .add_validator(QueryParam("l2"), always_fail("v2"))
        .build()
    )
    outcome = dispatch(registry, MappingFieldProvider())
    assert [e.locator for e in outcome.errors] == [QueryParam("l1"), QueryParam("l2")]


def test_chain_does_not_short_circuit() -> None:
    registry = (
        RegistryBuilder()
        .add_validator(Param("id"), always_fail("v1"))
        .add_validator(Param("id"), always_fail("v2"))
        .build()
    )
    outcome = dispatch(registry, MappingFieldProvider())
    assert outcome.errors == (
        FieldError(locator=Param("id"), error="v1:id"),
        FieldError(locator=Param("id"), error="v2:id"),
    )


def test_one_error_per_failing_validator_across_locators() -> None:
    registry = (
        RegistryBuilder()
        .add_validator(Cookie("a"), always_fail("x"))
        .add_validator(Param("b"), always_pass)
        .add_validator(Param("b"), always_fail("y"))
        .add_validator(Cookie("a"), always_fail("z"))
        .build()
    )
    outcome = dispatch(registry, MappingFieldProvider())
    assert [(str(e.locator), e.error) for e in outcome.errors] == [
        ("cookie 'a'", "x:a"),
        ("cookie 'a'", "z:a"),
        ("param 'b'", "y:b"),
    ]


def test_absence_is_not_an_error_by_itself() -> None:
    registry = RegistryBuilder().add_validator(QueryParam("page"), is_number).build()
    assert dispatch(registry, MappingFieldProvider()).passed


def test_each_field_is_looked_up_once() -> None:
    registry = (
        RegistryBuilder()
        .add_validator(Cookie("s"), is_required)
        .add_validator(Cookie("s"), is_length_under(3))
        .add_validator(Param("p"), is_number)
        .build()
    )
    provider = RecordingProvider(cookies={"s": "ok"})
    dispatch(registry, provider)
    assert provider.lookups == [Cookie("s"), Param("p")]


def test_validators_receive_locator_name_and_value() -> None:
    seen = []

    def spy(field_name: str, field_value: Optional[str]) -> None:
        seen.append((field_name, field_value))

    registry = (
        RegistryBuilder()
        .add_validator(Header("X-Custom-Header"), spy)
        .add_validator(QueryParam("missing"), spy)
        .build()
    )
    dispatch(registry, MappingFieldProvider(headers={"x-CUSTOM-header": "7"}))
    assert seen == [("X-Custom-Header", "7"), ("missing", None)]


# ── Worked examples ──


def test_query_param_not_a_number_is_rejected() -> None:
    registry = RegistryBuilder().add_validator(QueryParam("age"), is_number).build()
    outcome = dispatch(registry, MappingFieldProvider(query={"age": "notanumber"}))
    assert outcome.errors == (
        FieldError(locator=QueryParam("age"), error="field 'age' = 'notanumber' is not a valid number"),
    )


def test_missing_optional_query_param_proceeds() -> None:
    registry = RegistryBuilder().add_validator(QueryParam("age"), is_number).build()
    assert dispatch(registry, MappingFieldProvider(query={"other": "1"})).passed


def test_missing_required_cookie_yields_exactly_one_error() -> None:
    registry = (
        RegistryBuilder()
        .add_validator(Cookie("session"), is_required)
        .add_validator(Cookie("session"), is_length_under(20))
        .build()
    )
    outcome = dispatch(registry, MappingFieldProvider())
    assert outcome.rejected
    assert outcome.errors == (FieldError(locator=Cookie("session"), error="'session' is required"),)


# ── Validator forms ──


class MaxValue(BaseValidator[dict]):
    def __init__(self, maximum: int):
        self.maximum = maximum

    @property
    def name(self) -> str:
        return "max_value"

    def validate(self, field_name: str, field_value: Optional[str]) -> Optional[dict]:
        if field_value is not None and int(field_value) > self.maximum:
            return {"field": field_name, "max": self.maximum}
        return None


def test_class_based_validator_with_structured_error() -> None:
    registry = RegistryBuilder().add_validator(Param("n"), MaxValue(10)).build()
    outcome = dispatch(registry, MappingFieldProvider(params={"n": "11"}))
    assert outcome.errors[0].error == {"field": "n", "max": 10}


def test_async_validators_are_awaited_in_order() -> None:
    calls = []

    async def slow_check(field_name: str, field_value: Optional[str]) -> Optional[str]:
        calls.append("async")
        await asyncio.sleep(0)
        return "async failed"

    def sync_check(field_name: str, field_value: Optional[str]) -> Optional[str]:
        calls.append("sync")
        return "sync failed"

    registry = (
        RegistryBuilder()
        .add_validator(Param("n"), slow_check)
        .add_validator(Param("n"), sync_check)
        .build()
    )
    outcome = asyncio.run(adispatch(registry, MappingFieldProvider()))
    assert calls == ["async", "sync"]
    assert [e.error for e in outcome.errors] == ["async failed", "sync failed"]


def test_sync_dispatch_rejects_async_validators() -> None:
    async def check(field_name: str, field_value: Optional[str]) -> None:
        return None

    registry = RegistryBuilder().add_validator(Param("n"), check).build()
    with pytest.raises(ConfigurationError):
        dispatch(registry, MappingFieldProvider())


def test_crashing_validator_propagates() -> None:
    def broken(field_name: str, field_value: Optional[str]) -> None:
        raise RuntimeError("boom")

    dispatcher = Dispatcher(RegistryBuilder().add_validator(Param("n"), broken).build())
    with pytest.raises(RuntimeError, match="boom"):
        dispatcher.dispatch(MappingFieldProvider())
    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(dispatcher.adispatch(MappingFieldProvider()))


def test_dispatcher_can_be_reused_across_requests() -> None:
    dispatcher = Dispatcher(RegistryBuilder().add_validator(QueryParam("age"), is_number).build())
    assert dispatcher.dispatch(MappingFieldProvider(query={"age": "x"})).rejected
    assert dispatcher.dispatch(MappingFieldProvider(query={"age": "3"})).passed
