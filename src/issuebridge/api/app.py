"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from issuebridge import __version__
from issuebridge.api.dependencies import (
    close_service_factory,
    close_service_store,
    init_service_factory,
    init_service_store,
)
from issuebridge.api.models import APIResponse
from issuebridge.api.routes import boards, hooks, services
from issuebridge.config import AppConfig, resolve_config
from issuebridge.integrations import IntegrationError, ServiceValidationError, UnknownServiceError
from issuebridge.logging import get_logger
from issuebridge.service_store import (
    ServiceExistsError,
    ServiceNotFoundError,
    ServiceStoreError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = get_logger("api")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    config: AppConfig = app.state.config or resolve_config()
    app.state.config = config
    init_service_store(config.get_database_path())
    init_service_factory(config, transport=app.state.transport)
    logger.info("IssueBridge API started (gitlab_url=%s)", config.gitlab_url)

    yield

    close_service_factory()
    close_service_store()


def create_app(
    config: AppConfig | None = None,
    transport: httpx.BaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config; resolved from issuebridge.yaml/env at startup when omitted
        transport: httpx transport for tracker calls (for testing)
    """
    app = FastAPI(
        title="IssueBridge API",
        description="Forwards host events to external issue trackers",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.config = config
    app.state.transport = transport

    @app.exception_handler(ServiceNotFoundError)
    async def service_not_found_handler(
        _request: Request, _exc: ServiceNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Service not found")

    @app.exception_handler(UnknownServiceError)
    async def unknown_service_handler(_request: Request, exc: UnknownServiceError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ServiceExistsError)
    async def service_exists_handler(_request: Request, _exc: ServiceExistsError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Service already exists")

    @app.exception_handler(ServiceValidationError)
    async def service_invalid_handler(
        _request: Request, exc: ServiceValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(IntegrationError)
    async def integration_error_handler(_request: Request, exc: IntegrationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(ServiceStoreError)
    async def store_error_handler(_request: Request, _exc: ServiceStoreError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(httpx.HTTPError)
    async def tracker_unreachable_handler(_request: Request, exc: httpx.HTTPError) -> JSONResponse:
        logger.warning("Issue tracker request failed: %s", exc)
        return _error(status.HTTP_502_BAD_GATEWAY, "Issue tracker unreachable")

    app.include_router(services.router, prefix="/api/v1")
    app.include_router(hooks.router, prefix="/api/v1")
    app.include_router(boards.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
