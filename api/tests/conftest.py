"""Pytest configuration and fixtures.

Endpoint tests build a fresh app around an ``InMemoryCrateRegistry`` so no
request ever reaches the real registry. Registry client tests mock HTTP with
respx instead.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from prometheus_client import REGISTRY

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from crate_graph.adapters.crate_registry import InMemoryCrateRegistry  # noqa: E402
from crate_graph.config import Settings  # noqa: E402
from crate_graph.main import create_app  # noqa: E402
from crate_graph.models.crate import CrateDependenciesResponse, DependencyResponse  # noqa: E402


def sample_value(name: str, labels: dict[str, str]) -> float:
    """Current value of a sample in the default registry, 0.0 when never recorded."""
    value = REGISTRY.get_sample_value(name, labels)
    return value if value is not None else 0.0


def build_dependency(crate_id: str, req: str, kind: str = "normal", **overrides) -> DependencyResponse:
    fields = {
        "id": 1,
        "version_id": 1,
        "crate_id": crate_id,
        "req": req,
        "optional": False,
        "default_features": False,
        "features": None,
        "target": None,
        "kind": kind,
        "downloads": 0,
    }
    fields.update(overrides)
    return DependencyResponse(**fields)


@pytest.fixture
def make_dependency():
    return build_dependency


@pytest.fixture
def registry() -> InMemoryCrateRegistry:
    """Fresh in-memory registry per test."""
    store = InMemoryCrateRegistry()
    store.add_dependencies(
        "name",
        "version",
        CrateDependenciesResponse(
            dependencies=[
                build_dependency("crate-a", "1.0.1", kind="dev", id=1, version_id=1),
                build_dependency("crate-b", "1.0.2", kind="normal", id=2, version_id=2),
            ]
        ),
    )
    return store


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def app(settings: Settings, registry: InMemoryCrateRegistry):
    return create_app(settings=settings, registry=registry)


@pytest_asyncio.fixture
async def client(app):
    """ASGI client; raise_app_exceptions=False so 5xx return a response body."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
