"""Health checks and the health report envelope."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence

from crate_graph import __version__
from crate_graph.models.health import Check, Health, HealthStatus

SERVICE_NAME = "crate-graph-api"


def _iso_utc(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def uptime_checker(now: datetime, application_start: float, clock: Optional[float] = None) -> Check:
    """System check reporting seconds since ``application_start`` (a ``time.monotonic`` value)."""
    current = time.monotonic() if clock is None else clock
    return Check(
        component_type="system",
        observed_value=str(max(0.0, current - application_start)),
        observed_unit="s",
        status="pass",
        time=_iso_utc(now),
    )


def status(checks: Mapping[str, Sequence[Check]]) -> HealthStatus:
    statuses = {check.status for group in checks.values() for check in group}
    if "fail" in statuses:
        return "fail"
    if "warn" in statuses:
        return "warn"
    return "pass"


def envelope(checks: Mapping[str, Sequence[Check]]) -> Health:
    return Health(
        status=status(checks),
        version=__version__.split(".", 1)[0],
        release_id=__version__,
        checks={key: list(group) for key, group in checks.items()},
        description=f"health of {SERVICE_NAME} service",
    )


def report(application_start: float, now: Optional[datetime] = None) -> Health:
    now = now or datetime.now(timezone.utc)
    return envelope({"uptime": [uptime_checker(now, application_start)]})
