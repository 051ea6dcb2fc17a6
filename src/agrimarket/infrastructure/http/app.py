"""AgriMarket FastAPI application.

Usage:
    uvicorn agrimarket.infrastructure.http.app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agrimarket.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    Forbidden,
    PersistenceError,
    Unauthorized,
)
from agrimarket.infrastructure.bootstrap import Container, container
from agrimarket.infrastructure.http.routes import order_router, product_router
from agrimarket.infrastructure.logging import bind_request_context, clear_request_context

logger = structlog.get_logger(__name__)

_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (Unauthorized, 401),
    (Forbidden, 403),
    (EntityNotFoundError, 404),
]


def status_code_for(exc: DomainException) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return 400


def error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def create_app(app_container: Container | None = None) -> FastAPI:
    app = FastAPI(
        title="AgriMarket API",
        description="Order placement, stock reservation and order status lifecycle",
    )
    app.state.container = app_container or container()

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        clear_request_context()
        bind_request_context(
            request_id=request.headers.get("x-request-id") or uuid.uuid4().hex[:12],
            method=request.method,
            path=request.url.path,
        )
        return await call_next(request)

    @app.exception_handler(DomainException)
    async def handle_domain_error(request: Request, exc: DomainException) -> JSONResponse:
        code = status_code_for(exc)
        logger.info("Request rejected", status=code, reason=str(exc))
        return error(str(exc), code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"Invalid {field}: {first.get('msg', 'malformed request')}" if field else "Malformed request"
        return error(message, 400)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error("Storage failure", error=str(exc))
        return error("Server error", 500)

    app.include_router(order_router)
    app.include_router(product_router)

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse(content={"status": "ok"})

    return app


def __getattr__(name: str) -> FastAPI:
    # ``uvicorn ...app:app`` builds the application lazily from the environment
    if name == "app":
        return create_app()
    raise AttributeError(name)
