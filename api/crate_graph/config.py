"""Environment-driven service configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_REGISTRY_BASE_URL = "https://crates.io"
DEFAULT_USER_AGENT = "crate-graph-api (+https://crates.io/policies)"
DEFAULT_EXCLUDE_PATHS = ("/metrics", "/health")
DEFAULT_EXCLUDE_PATTERNS = ("^/health/",)


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.getenv(name, "").strip()
    try:
        return max(minimum, float(raw))
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> list[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def normalize_base_path(raw: str) -> str:
    """Return ``raw`` as a route prefix: leading slash, no trailing slash, '' for root."""
    value = (raw or "").strip().strip("/")
    if not value:
        return ""
    return f"/{value}"


@dataclass(frozen=True)
class Settings:
    registry_base_url: str = DEFAULT_REGISTRY_BASE_URL
    registry_user_agent: str = DEFAULT_USER_AGENT
    registry_timeout_seconds: float = 10.0
    host_address: str = "0.0.0.0"
    host_port: int = 8080
    base_path: str = ""
    log_level: str = "INFO"
    slow_request_ms: float = 1500.0
    metrics_exclude_paths: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATHS))
    metrics_exclude_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))


def load_settings() -> Settings:
    return Settings(
        registry_base_url=_env_str("CRATE_REGISTRY_BASE_URL", DEFAULT_REGISTRY_BASE_URL).rstrip("/")
        or DEFAULT_REGISTRY_BASE_URL,
        registry_user_agent=_env_str("CRATE_REGISTRY_USER_AGENT", DEFAULT_USER_AGENT) or DEFAULT_USER_AGENT,
        registry_timeout_seconds=_env_float("CRATE_REGISTRY_TIMEOUT_SECONDS", 10.0, minimum=0.1),
        host_address=_env_str("HOST_ADDRESS", "0.0.0.0") or "0.0.0.0",
        host_port=_env_int("HOST_PORT", 8080),
        base_path=normalize_base_path(_env_str("HOST_BASE_PATH", "")),
        log_level=(_env_str("LOG_LEVEL", "INFO") or "INFO").upper(),
        slow_request_ms=_env_float("API_SLOW_REQUEST_MS", 1500.0, minimum=25.0),
        metrics_exclude_paths=_env_list("METRICS_EXCLUDE_PATHS", DEFAULT_EXCLUDE_PATHS),
        metrics_exclude_patterns=_env_list("METRICS_EXCLUDE_PATTERNS", DEFAULT_EXCLUDE_PATTERNS),
    )
