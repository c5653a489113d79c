from __future__ import annotations

import logging
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from crate_graph import __version__
from crate_graph.adapters.crate_registry import CrateRegistry, CratesIoClient
from crate_graph.config import Settings, load_settings
from crate_graph.errors import QueryValidationError, RegistryError
from crate_graph.models.error import ErrorResponse
from crate_graph.observability.middleware import (
    AccessLogMiddleware,
    MetricsExclusions,
    NormalizePathMiddleware,
    ObservabilityMetricsMiddleware,
)
from crate_graph.routers import dependency_graph, health, metrics, proxy

logger = logging.getLogger("crate_graph.api")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger("crate_graph")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.propagate = False
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


async def _query_validation_handler(request: Request, exc: QueryValidationError) -> JSONResponse:
    body = ErrorResponse(code=exc.code, description=exc.description)
    return JSONResponse(status_code=400, content=body.to_json())


async def _registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    logger.warning(
        "registry_error path=%s code=%s upstream_status=%s message=%s",
        request.url.path,
        exc.code,
        exc.upstream_status,
        exc.message,
    )
    body = ErrorResponse(code=exc.code, description=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.to_json())


def create_app(settings: Optional[Settings] = None, registry: Optional[CrateRegistry] = None) -> FastAPI:
    """Build the ASGI app.

    ``registry`` defaults to a ``CratesIoClient`` pointed at
    ``settings.registry_base_url``; tests pass an ``InMemoryCrateRegistry``.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Crate Graph API", version=__version__)
    app.state.settings = settings
    app.state.application_start = time.monotonic()
    app.state.crate_registry = registry or CratesIoClient(
        base_url=settings.registry_base_url,
        user_agent=settings.registry_user_agent,
        timeout=settings.registry_timeout_seconds,
    )

    exclusions = MetricsExclusions.from_lists(settings.metrics_exclude_paths, settings.metrics_exclude_patterns)
    app.add_middleware(ObservabilityMetricsMiddleware, exclusions=exclusions)
    app.add_middleware(AccessLogMiddleware, slow_request_ms=settings.slow_request_ms)
    app.add_middleware(NormalizePathMiddleware)

    app.add_exception_handler(QueryValidationError, _query_validation_handler)
    app.add_exception_handler(RegistryError, _registry_error_handler)

    app.include_router(metrics.router, tags=["observability"])
    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(dependency_graph.router, prefix=settings.base_path, tags=["dependency-graph"])
    app.include_router(proxy.router, prefix=settings.base_path, tags=["proxy"])

    logger.info(
        "api_created registry=%s base_path=%s metrics_exclude=%s metrics_exclude_patterns=%s",
        settings.registry_base_url,
        settings.base_path or "/",
        sorted(exclusions.exact),
        [pattern.pattern for pattern in exclusions.patterns],
    )
    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.host_address, port=settings.host_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
