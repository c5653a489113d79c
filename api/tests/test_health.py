"""Tests for the health report and probes."""

import time
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from crate_graph import __version__
from crate_graph.models.health import Check
from crate_graph.services import health_service


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/health/liveness", "/health/readiness", "/health/liveliness"])
async def test_probes_return_empty_200(client: AsyncClient, path: str):
    response = await client.get(path)
    assert response.status_code == 200
    assert response.content == b""
    assert response.headers.get("content-length") == "0"


@pytest.mark.asyncio
async def test_health_report(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/health+json")
    data = response.json()
    assert data["status"] == "pass"
    assert data["version"] == __version__.split(".")[0]
    assert data["releaseId"] == __version__
    assert data["description"] == "health of crate-graph-api service"
    uptime = data["checks"]["uptime"]
    assert len(uptime) == 1
    assert uptime[0]["componentType"] == "system"
    assert uptime[0]["observedUnit"] == "s"
    assert uptime[0]["status"] == "pass"
    assert float(uptime[0]["observedValue"]) >= 0.0
    assert "componentId" not in uptime[0]
    assert "notes" not in data


def test_uptime_checker():
    now = datetime(2018, 1, 17, 3, 36, 48, tzinfo=timezone.utc)
    start = time.monotonic()

    check = health_service.uptime_checker(now, start, clock=start + 12.5)

    assert check.component_id is None
    assert check.component_type == "system"
    assert float(check.observed_value) == pytest.approx(12.5)
    assert check.observed_unit == "s"
    assert check.status == "pass"
    assert check.time == "2018-01-17T03:36:48Z"
    assert check.output is None
    assert check.links is None
    assert check.additional_keys is None


def _checks(*statuses):
    return {f"check-{i}": [Check(status=status)] for i, status in enumerate(statuses)}


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ((), "pass"),
        (("pass",), "pass"),
        ((None,), "pass"),
        (("pass", "pass"), "pass"),
        (("warn",), "warn"),
        (("pass", "warn"), "warn"),
        (("fail",), "fail"),
        (("warn", "fail"), "fail"),
        (("pass", "warn", "fail"), "fail"),
    ],
)
def test_status_precedence(statuses, expected):
    assert health_service.status(_checks(*statuses)) == expected


def test_status_looks_inside_each_check_group():
    checks = {"db": [Check(status="pass"), Check(status="warn")], "cache": [Check(status="pass")]}
    assert health_service.status(checks) == "warn"


def test_envelope_serializes_camel_case_without_unset_fields():
    health = health_service.envelope({"key": [Check()]})

    assert health.to_json() == {
        "status": "pass",
        "version": __version__.split(".")[0],
        "releaseId": __version__,
        "checks": {"key": [{}]},
        "description": "health of crate-graph-api service",
    }
