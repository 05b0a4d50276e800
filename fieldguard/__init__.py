"""fieldguard: request field validation for FastAPI and Starlette routes.

Register validators against path parameters, query parameters, cookies and
headers; every validator runs before the route handler and all failures are
returned together in one 4xx response.

Quick Start:
    >>> from fieldguard import FieldGuard, QueryParam, RegistryBuilder, is_number
    >>> guard = FieldGuard(RegistryBuilder().add_validator(QueryParam("age"), is_number))
    >>> @app.get("/people", dependencies=[Depends(guard)])
    ... async def people(): ...
"""

from fieldguard.api import (
    FieldGuard,
    FieldGuardMiddleware,
    MappingFieldProvider,
    RequestFieldProvider,
    build_error_body,
    register_exception_handlers,
    rejection_response,
)
from fieldguard.errors import ConfigurationError, FieldGuardError, RequestRejected
from fieldguard.validators import (
    BaseValidator,
    Cookie,
    Dispatcher,
    FieldError,
    FieldKind,
    FieldLocator,
    FieldValueProvider,
    Header,
    Param,
    QueryParam,
    Registry,
    RegistryBuilder,
    ValidationOutcome,
    adispatch,
    dispatch,
    is_bool,
    is_length_over,
    is_length_under,
    is_number,
    is_one_of,
    is_required,
    matches,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Locators
    "FieldKind",
    "FieldLocator",
    "Param",
    "QueryParam",
    "Cookie",
    "Header",
    # Registry and dispatch
    "Registry",
    "RegistryBuilder",
    "Dispatcher",
    "dispatch",
    "adispatch",
    "FieldError",
    "ValidationOutcome",
    # Validators
    "BaseValidator",
    "FieldValueProvider",
    "is_required",
    "is_number",
    "is_bool",
    "is_length_under",
    "is_length_over",
    "matches",
    "is_one_of",
    # HTTP integration
    "FieldGuard",
    "FieldGuardMiddleware",
    "MappingFieldProvider",
    "RequestFieldProvider",
    "build_error_body",
    "rejection_response",
    "register_exception_handlers",
    # Errors
    "FieldGuardError",
    "ConfigurationError",
    "RequestRejected",
]
