"""fieldguard demo application.

Shows both ways of attaching validators: a per-route FieldGuard dependency
and the app-level FieldGuardMiddleware. Run with ``python -m fieldguard``.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fieldguard import __version__
from fieldguard.api.dependencies import FieldGuard, register_exception_handlers
from fieldguard.api.middleware import FieldGuardMiddleware
from fieldguard.config import Settings, get_settings
from fieldguard.logging_setup import configure_logging
from fieldguard.models.responses import HealthResponse
from fieldguard.validators import (
    Cookie,
    Header,
    Param,
    QueryParam,
    RegistryBuilder,
    is_bool,
    is_length_under,
    is_number,
    is_required,
)

logger = structlog.get_logger()


# ── Custom error type ──

class CatError(BaseModel):
    """Integrator-defined error body for the /cats route."""

    status_code: int
    message: str


def cat_age(field_name: str, field_value: Optional[str]) -> Optional[CatError]:
    if field_value is None:
        return CatError(status_code=400, message=f"'{field_name}' is mandatory")
    if not field_value.isdigit() or int(field_value) > 38:
        return CatError(status_code=400, message=f"field '{field_name}' = '{field_value}' is not a plausible cat age")
    return None


# ── Registries ──

def build_test_guard() -> FieldGuard:
    """Validators for /test/{n}."""
    registry = (
        RegistryBuilder()
        .add_validator(Param("n"), is_number)
        .add_validator(Header("X-Custom-Header"), is_number)
        .add_validator(QueryParam("test"), is_bool)
        .add_validator(Cookie("session"), is_required)
        .add_validator(Cookie("session"), is_length_under(20))
    )
    return FieldGuard(registry)


def build_cat_guard() -> FieldGuard:
    """Validators for /cats/{age}, reporting CatError values."""
    return FieldGuard(RegistryBuilder().add_validator(Param("age"), cat_age), status_code=422)


def build_age_registry() -> RegistryBuilder:
    """Validators applied by the app-level middleware to /age/ paths."""
    return RegistryBuilder().with_validators([
        (Param("age"), is_number),
        (Param("age"), is_required),
    ])


# ── Routes ──

router = APIRouter()
_start_time = time.time()


@router.get("/api/v1/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check with the number of guarded fields per demo route."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        guarded_fields=request.app.state.guarded_fields,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the demo FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    test_guard = build_test_guard()
    cat_guard = build_cat_guard()
    age_registry = build_age_registry().build()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app_starting", debug=settings.DEBUG, reject_status_code=settings.REJECT_STATUS_CODE)
        yield
        logger.info("app_stopped")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Request field validation in front of route handlers.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.guarded_fields = {
        "/test/{n}": len(test_guard.registry),
        "/cats/{age}": len(cat_guard.registry),
        "/age/{age}": len(age_registry),
    }

    # ── Middleware ──

    app.add_middleware(FieldGuardMiddleware, registry=age_registry, paths=["/age/"])

    # ── Exception Handlers ──

    register_exception_handlers(app)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all error handler for unhandled exceptions."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again.",
            },
        )

    # ── Routes ──

    @app.get("/test/{n}", dependencies=[Depends(test_guard)])
    async def test_route(n: str):
        return {"name": "Mozart", "n": n}

    @app.get("/cats/{age}", dependencies=[Depends(cat_guard)])
    async def cat_route(age: str):
        return {"name": "Gribouille", "age": age}

    @app.get("/age/{age}")
    async def age_route(age: str):
        return "Hello World"

    app.include_router(router)
    return app


app = create_app()
