"""Process-wide Prometheus metrics.

Collectors register on ``prometheus_client``'s default registry at import time
and live for the lifetime of the process.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

BASE_URL = "base_url"
ENDPOINT = "endpoint"
STATUS_CODE = "status_code"

HTTP_REQUEST_COUNT = Counter(
    "http_request_count",
    "http request count",
    [ENDPOINT],
)

HTTP_RESPONSE_COUNT = Counter(
    "http_response_count",
    "http response count",
    [ENDPOINT, STATUS_CODE],
)

HTTP_RESPONSE_DURATION_SECONDS = Histogram(
    "http_response_duration_seconds",
    "http response duration seconds",
    [ENDPOINT, STATUS_CODE],
)

API_REQUEST_DURATION_SECONDS = Histogram(
    "api_request_duration_seconds",
    "api request duration seconds",
    [BASE_URL, ENDPOINT, STATUS_CODE],
)


def http_request_count(endpoint: str) -> None:
    HTTP_REQUEST_COUNT.labels(endpoint).inc()


def http_response_count(endpoint: str, status_code: int | str) -> None:
    HTTP_RESPONSE_COUNT.labels(endpoint, str(status_code)).inc()


def http_response_duration_seconds(endpoint: str, status_code: int | str, seconds: float) -> None:
    HTTP_RESPONSE_DURATION_SECONDS.labels(endpoint, str(status_code)).observe(seconds)


def api_request_duration_seconds(base_url: str, endpoint: str, status_code: int | str, seconds: float) -> None:
    API_REQUEST_DURATION_SECONDS.labels(base_url, endpoint, str(status_code)).observe(seconds)
