"""App-level guard — Starlette middleware that validates request fields.

Usage:
    app.add_middleware(
        FieldGuardMiddleware,
        registry=registry,
        paths=["/age/"],
    )
"""

from typing import Optional, Sequence, Union

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from fieldguard.api.providers import RequestFieldProvider
from fieldguard.api.responses import check_status_code, rejection_response
from fieldguard.config import get_settings
from fieldguard.validators.dispatcher import Dispatcher
from fieldguard.validators.registry import Registry, RegistryBuilder, freeze

logger = structlog.get_logger()


class FieldGuardMiddleware(BaseHTTPMiddleware):
    """Runs the registry before the route handler and short-circuits on failure.

    ``paths`` restricts validation to requests whose path starts with one of
    the given prefixes; by default every HTTP request is validated.
    """

    def __init__(
        self,
        app: ASGIApp,
        registry: Union[Registry, RegistryBuilder],
        status_code: Optional[int] = None,
        paths: Optional[Sequence[str]] = None,
    ):
        super().__init__(app)
        self.dispatcher = Dispatcher(freeze(registry))
        self.status_code = check_status_code(
            status_code if status_code is not None else get_settings().REJECT_STATUS_CODE
        )
        self.paths = tuple(paths) if paths else None

    def applies_to(self, path: str) -> bool:
        return self.paths is None or path.startswith(self.paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.applies_to(request.url.path):
            return await call_next(request)

        outcome = await self.dispatcher.adispatch(RequestFieldProvider(request))
        if outcome.passed:
            return await call_next(request)

        logger.info(
            "request_rejected",
            path=request.url.path,
            method=request.method,
            status_code=self.status_code,
            error_count=len(outcome.errors),
        )
        return rejection_response(outcome, self.status_code)
