"""Per-route guard — a FastAPI dependency bound to one route's registry.

Usage:
    guard = FieldGuard(registry)

    @app.get("/test/{n}", dependencies=[Depends(guard)])
    async def handler(n: str): ...

    register_exception_handlers(app)
"""

from typing import Optional, Union

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from fieldguard.api.providers import RequestFieldProvider
from fieldguard.api.responses import check_status_code, rejection_response
from fieldguard.config import get_settings
from fieldguard.errors import RequestRejected
from fieldguard.validators.dispatcher import Dispatcher
from fieldguard.validators.models import ValidationOutcome
from fieldguard.validators.registry import Registry, RegistryBuilder, freeze

logger = structlog.get_logger()


class FieldGuard:
    """Callable dependency that validates the current request's fields.

    Raises RequestRejected on failure; the handler installed by
    register_exception_handlers() renders it. On success the (passing)
    outcome is returned, so it can also be injected as a parameter.
    """

    def __init__(self, registry: Union[Registry, RegistryBuilder], status_code: Optional[int] = None):
        self.registry = freeze(registry)
        self.dispatcher = Dispatcher(self.registry)
        self.status_code = check_status_code(
            status_code if status_code is not None else get_settings().REJECT_STATUS_CODE
        )

    async def __call__(self, request: Request) -> ValidationOutcome:
        outcome = await self.dispatcher.adispatch(RequestFieldProvider(request))
        if outcome.rejected:
            raise RequestRejected(outcome, self.status_code)
        return outcome


async def request_rejected_handler(request: Request, exc: RequestRejected) -> Response:
    """Render a RequestRejected raised by a FieldGuard dependency."""
    logger.info(
        "request_rejected",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error_count=len(exc.outcome.errors),
    )
    return rejection_response(exc.outcome, exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the RequestRejected handler on ``app``."""
    app.add_exception_handler(RequestRejected, request_rejected_handler)
