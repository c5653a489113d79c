"""Tests for the registry pass-through routes."""

import pytest
from httpx import ASGITransport, AsyncClient

from crate_graph.adapters.crate_registry import InMemoryCrateRegistry
from crate_graph.config import Settings
from crate_graph.errors import RegistryDecodeError, RegistryUnavailableError
from crate_graph.main import create_app
from crate_graph.models.crate import CrateResponse


@pytest.fixture
def serde_crate() -> CrateResponse:
    return CrateResponse.model_validate(
        {
            "crate": {
                "id": "serde",
                "name": "serde",
                "downloads": 10,
                "max_version": "1.0.123",
                "description": "A generic serialization/deserialization framework",
                "repository": "https://github.com/serde-rs/serde",
            },
            "versions": [{"id": 1, "crate": "serde", "num": "1.0.123", "license": "MIT OR Apache-2.0"}],
            "keywords": [{"id": "serde", "keyword": "serde", "crates_cnt": 3}],
            "categories": [],
        }
    )


@pytest.mark.asyncio
async def test_proxy_crate_returns_registry_payload(
    client: AsyncClient, registry: InMemoryCrateRegistry, serde_crate: CrateResponse
):
    registry.add_crate(serde_crate)

    response = await client.get("/proxy/crate?name=serde")

    assert response.status_code == 200
    data = response.json()
    assert data["crate"]["name"] == "serde"
    assert data["crate"]["max_version"] == "1.0.123"
    assert data["versions"][0]["num"] == "1.0.123"
    assert data["versions"][0]["license"] == "MIT OR Apache-2.0"
    assert data["keywords"][0]["keyword"] == "serde"
    assert data["categories"] == []


@pytest.mark.asyncio
async def test_proxy_crate_missing_name_returns_400(client: AsyncClient):
    response = await client.get("/proxy/crate")
    assert response.status_code == 400
    assert response.json() == {"name": "query", "description": "missing field `name`"}


@pytest.mark.asyncio
async def test_proxy_crate_unknown_returns_404(client: AsyncClient):
    response = await client.get("/proxy/crate?name=nope")
    assert response.status_code == 404
    assert response.json()["name"] == "not_found"


@pytest.mark.asyncio
async def test_proxy_crate_dependencies_returns_registry_payload(client: AsyncClient):
    response = await client.get("/proxy/crate_dependencies?name=name&version=version")

    assert response.status_code == 200
    dependencies = response.json()["dependencies"]
    assert [d["crate_id"] for d in dependencies] == ["crate-a", "crate-b"]
    assert dependencies[0] == {
        "id": 1,
        "version_id": 1,
        "crate_id": "crate-a",
        "req": "1.0.1",
        "optional": False,
        "default_features": False,
        "features": None,
        "target": None,
        "kind": "dev",
        "downloads": 0,
    }


@pytest.mark.asyncio
async def test_proxy_crate_dependencies_missing_version_returns_400(client: AsyncClient):
    response = await client.get("/proxy/crate_dependencies?name=name")
    assert response.status_code == 400
    assert response.json() == {"name": "query", "description": "missing field `version`"}


class _UnavailableRegistry(InMemoryCrateRegistry):
    async def get_crate(self, crate_name: str):
        raise RegistryUnavailableError("registry returned 503", upstream_status=503)

    async def get_crate_dependencies(self, crate_name: str, crate_version: str):
        raise RegistryDecodeError("bad body")


@pytest.mark.asyncio
async def test_proxy_registry_failures_are_structured():
    app = create_app(settings=Settings(), registry=_UnavailableRegistry())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        crate = await ac.get("/proxy/crate?name=serde")
        dependencies = await ac.get("/proxy/crate_dependencies?name=serde&version=1.0.0")

    assert crate.status_code == 503
    assert crate.json() == {"name": "upstream_unavailable", "description": "registry returned 503"}
    assert dependencies.status_code == 502
    assert dependencies.json() == {"name": "upstream_decode", "description": "bad body"}
