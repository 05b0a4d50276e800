"""Dispatcher — runs a registry's validator chains against one request.

For every registered locator (registration order) the field value is looked
up once through the provider, then every validator of the chain runs in
order. Failures never stop the run: all of them are collected so the client
receives the complete list in one response.

Usage:
    outcome = dispatch(registry, MappingFieldProvider(query={"age": "12"}))
    if outcome.rejected:
        # Render outcome.errors
"""

import inspect
import time
from typing import Optional

import structlog

from fieldguard.errors import ConfigurationError
from fieldguard.validators.base import FieldValueProvider, Validator, validator_name
from fieldguard.validators.models import FieldError, FieldLocator, ValidationOutcome
from fieldguard.validators.registry import Registry

logger = structlog.get_logger()


class Dispatcher:
    """Evaluates a frozen registry against request field values.

    Design principles:
        - Total: validation failures are data, never exceptions
        - Ordered: errors follow locator order, then chain order
        - Stateless: nothing request-scoped is kept on the instance
    """

    def __init__(self, registry: Registry):
        self.registry = registry

    def dispatch(self, provider: FieldValueProvider) -> ValidationOutcome:
        """Run every chain synchronously and aggregate failures.

        Raises:
            ConfigurationError: if a validator returns an awaitable; use adispatch()
        """
        start_time = time.perf_counter()
        errors: list[FieldError] = []

        for locator, chain in self.registry.items():
            value = provider.lookup(locator)
            for validator in chain:
                result = self._invoke(validator, locator, value)
                if inspect.isawaitable(result):
                    _close_awaitable(result)
                    raise ConfigurationError(
                        f"Validator {validator_name(validator)} for {locator} is asynchronous; "
                        "use adispatch()"
                    )
                if result is not None:
                    errors.append(FieldError(locator=locator, error=result))

        return self._finish(errors, start_time)

    async def adispatch(self, provider: FieldValueProvider) -> ValidationOutcome:
        """Same as dispatch(), awaiting validators that return awaitables."""
        start_time = time.perf_counter()
        errors: list[FieldError] = []

        for locator, chain in self.registry.items():
            value = provider.lookup(locator)
            for validator in chain:
                result = self._invoke(validator, locator, value)
                if inspect.isawaitable(result):
                    try:
                        result = await result
                    except Exception as e:
                        self._log_crash(validator, locator, e)
                        raise
                if result is not None:
                    errors.append(FieldError(locator=locator, error=result))

        return self._finish(errors, start_time)

    # ── Helpers ──

    def _invoke(self, validator: Validator, locator: FieldLocator, value: Optional[str]):
        try:
            return validator(locator.name, value)
        except Exception as e:
            self._log_crash(validator, locator, e)
            raise

    @staticmethod
    def _log_crash(validator: Validator, locator: FieldLocator, exc: Exception) -> None:
        logger.error(
            "validator_crashed",
            field=str(locator),
            validator=validator_name(validator),
            error=str(exc),
            error_type=type(exc).__name__,
        )

    @staticmethod
    def _finish(errors: list[FieldError], start_time: float) -> ValidationOutcome:
        duration_ms = round((time.perf_counter() - start_time) * 1000, 3)

        if not errors:
            logger.debug("field_validation_passed", duration_ms=duration_ms)
            return ValidationOutcome.proceed()

        outcome = ValidationOutcome.rejected_with(errors)
        logger.info(
            "field_validation_rejected",
            error_count=len(errors),
            fields=[str(locator) for locator in outcome.failed_locators()],
            duration_ms=duration_ms,
        )
        return outcome


def _close_awaitable(awaitable) -> None:
    # Rejected coroutines are closed so they never emit a "never awaited" warning
    close = getattr(awaitable, "close", None)
    if close is not None:
        close()


def dispatch(registry: Registry, provider: FieldValueProvider) -> ValidationOutcome:
    """Validate one request's fields against ``registry``."""
    return Dispatcher(registry).dispatch(provider)


async def adispatch(registry: Registry, provider: FieldValueProvider) -> ValidationOutcome:
    """Async variant of dispatch() supporting coroutine validators."""
    return await Dispatcher(registry).adispatch(provider)
