"""HTTP integration — providers, guards and rejection responses."""

from fieldguard.api.dependencies import FieldGuard, register_exception_handlers
from fieldguard.api.middleware import FieldGuardMiddleware
from fieldguard.api.providers import MappingFieldProvider, RequestFieldProvider
from fieldguard.api.responses import build_error_body, rejection_response

__all__ = [
    "FieldGuard",
    "FieldGuardMiddleware",
    "MappingFieldProvider",
    "RequestFieldProvider",
    "build_error_body",
    "register_exception_handlers",
    "rejection_response",
]
