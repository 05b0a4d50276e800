"""Exception types raised by fieldguard.

Validation failures are never raised: they travel as data inside a
ValidationOutcome. The exceptions here cover setup misuse and the
per-route rejection signal.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from fieldguard.validators.models import ValidationOutcome


class FieldGuardError(Exception):
    """Base class for every fieldguard exception."""


class ConfigurationError(FieldGuardError):
    """Raised at setup time when a registry or guard is misconfigured."""


class RequestRejected(FieldGuardError):
    """Raised by the per-route guard when a request fails validation.

    Handled by the exception handler installed with
    ``register_exception_handlers()``, which renders the aggregated errors.
    """

    def __init__(self, outcome: "ValidationOutcome", status_code: int = 400, detail: Optional[str] = None):
        self.outcome = outcome
        self.status_code = status_code
        super().__init__(detail or f"{len(outcome.errors)} request field(s) failed validation")
