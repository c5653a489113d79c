"""Request metrics and access logging middleware."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from crate_graph.observability import metrics

logger = logging.getLogger(__name__)


@dataclass
class MetricsExclusions:
    """Paths that are never instrumented.

    ``exact`` is checked before ``patterns``; a path matching either is excluded.
    """

    exact: set[str] = field(default_factory=set)
    patterns: list[re.Pattern[str]] = field(default_factory=list)

    @classmethod
    def from_lists(cls, paths: Iterable[str] = (), patterns: Iterable[str] = ()) -> "MetricsExclusions":
        exclusions = cls()
        for path in paths:
            exclusions.exclude(path)
        for pattern in patterns:
            exclusions.exclude_regex(pattern)
        return exclusions

    def exclude(self, path: str) -> "MetricsExclusions":
        self.exact.add(path)
        return self

    def exclude_regex(self, pattern: str) -> "MetricsExclusions":
        self.patterns.append(re.compile(pattern))
        return self

    def is_excluded(self, path: str) -> bool:
        if path in self.exact:
            return True
        return any(pattern.search(path) for pattern in self.patterns)


class NormalizePathMiddleware:
    """Strips one trailing slash from the request path before routing.

    ``/health/liveness/`` is served and counted as ``/health/liveness``; the root
    path ``/`` is left alone.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope["path"]
            if len(path) > 1 and path.endswith("/"):
                scope = dict(scope)
                scope["path"] = path[:-1]
                raw_path = scope.get("raw_path")
                if raw_path and len(raw_path) > 1 and raw_path.endswith(b"/"):
                    scope["raw_path"] = raw_path[:-1]
        await self.app(scope, receive, send)


class ObservabilityMetricsMiddleware(BaseHTTPMiddleware):
    """Counts requests/responses and times them per path, skipping excluded paths."""

    def __init__(self, app: ASGIApp, exclusions: MetricsExclusions | None = None) -> None:
        super().__init__(app)
        self.exclusions = exclusions or MetricsExclusions()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if self.exclusions.is_excluded(path):
            return await call_next(request)

        metrics.http_request_count(path)
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed = time.perf_counter() - start
            metrics.http_response_duration_seconds(path, status_code, elapsed)
            metrics.http_response_count(path, status_code)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One log line per request; WARNING for 5xx or slow requests."""

    def __init__(self, app: ASGIApp, slow_request_ms: float = 1500.0) -> None:
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        status_code: int | None = None
        exc_name: str | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as exc:
            exc_name = exc.__class__.__name__
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            if status_code is None:
                status_code = 500
            level = logging.INFO
            if status_code >= 500 or elapsed_ms >= self.slow_request_ms:
                level = logging.WARNING
            logger.log(
                level,
                "http_request method=%s path=%s status=%s elapsed_ms=%.2f client=%s exception=%s",
                request.method,
                request.url.path,
                status_code,
                elapsed_ms,
                request.client.host if request.client else "unknown",
                exc_name or "none",
            )
