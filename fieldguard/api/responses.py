"""Rejection response shaping.

A rejected outcome becomes a JSON array of
``{"locatorKind", "locatorName", "error"}`` records, in discovery order,
returned with a 4xx status. Integrator error values are encoded with
FastAPI's ``jsonable_encoder``, so strings, dicts, dataclasses and pydantic
models all work.
"""

from typing import Any, Optional

import structlog
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse, PlainTextResponse, Response

from fieldguard.config import get_settings
from fieldguard.errors import ConfigurationError
from fieldguard.models.responses import FieldErrorRecord
from fieldguard.validators.models import FieldError, ValidationOutcome

logger = structlog.get_logger()


class ErrorEncodingFailed(Exception):
    """An integrator error value could not be turned into JSON."""

    def __init__(self, field_error: FieldError, cause: Exception):
        self.field_error = field_error
        self.cause = cause
        locator = field_error.locator
        super().__init__(
            f"cannot serialize validator error for {locator.kind.value} '{locator.name}': {cause}"
        )


def check_status_code(status_code: int) -> int:
    """Validate a configured rejection status (client errors only)."""
    if not isinstance(status_code, int) or not 400 <= status_code <= 499:
        raise ConfigurationError(f"Rejection status code must be a 4xx code, got {status_code!r}")
    return status_code


def _encode_error(field_error: FieldError) -> Any:
    try:
        return jsonable_encoder(field_error.error)
    except (TypeError, ValueError) as e:
        raise ErrorEncodingFailed(field_error, e) from e


def build_error_body(outcome: ValidationOutcome) -> list[dict[str, Any]]:
    """Serialize every collected error, preserving order.

    Raises:
        ErrorEncodingFailed: if an error value is not JSON-encodable
    """
    return [
        FieldErrorRecord.from_field_error(field_error, _encode_error(field_error)).to_wire()
        for field_error in outcome.errors
    ]


def rejection_response(outcome: ValidationOutcome, status_code: Optional[int] = None) -> Response:
    """Build the terminal response for a rejected request.

    ``status_code`` defaults to the configured REJECT_STATUS_CODE.
    """
    if status_code is None:
        status_code = get_settings().REJECT_STATUS_CODE
    try:
        return JSONResponse(status_code=status_code, content=build_error_body(outcome))
    except ErrorEncodingFailed as e:
        logger.error(
            "rejection_encoding_failed",
            field=str(e.field_error.locator),
            error=str(e.cause),
            error_type=type(e.cause).__name__,
        )
        return PlainTextResponse(str(e), status_code=500)
    except ValueError as e:
        # json.dumps refuses NaN/Infinity
        logger.error("rejection_encoding_failed", error=str(e), error_type=type(e).__name__)
        return PlainTextResponse(f"cannot serialize validator errors: {e}", status_code=500)
