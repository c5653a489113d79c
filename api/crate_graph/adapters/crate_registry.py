"""CrateRegistry abstraction + crates.io HTTP client + in-memory backend.

The HTTP client makes exactly one GET per call with a fixed User-Agent and no
retries. Failures are raised as the tagged errors in ``crate_graph.errors``.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Protocol, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from crate_graph.config import DEFAULT_USER_AGENT
from crate_graph.errors import (
    CrateNotFoundError,
    RegistryDecodeError,
    RegistryTimeoutError,
    RegistryUnavailableError,
)
from crate_graph.models.crate import CrateDependenciesResponse, CrateResponse
from crate_graph.observability import metrics

log = logging.getLogger(__name__)

CRATE_PATH = "/api/v1/crates/{name}"
CRATE_DEPENDENCIES_PATH = "/api/v1/crates/{name}/{version}/dependencies"

ModelT = TypeVar("ModelT", bound=BaseModel)


class CrateRegistry(Protocol):
    """Protocol for registry lookups. Implementations: CratesIoClient, InMemoryCrateRegistry."""

    async def get_crate(self, crate_name: str) -> CrateResponse:
        ...

    async def get_crate_dependencies(self, crate_name: str, crate_version: str) -> CrateDependenciesResponse:
        ...


class CratesIoClient:
    def __init__(
        self,
        base_url: str = "https://crates.io",
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {
            "Accept": "application/json",
            "User-Agent": user_agent,
        }

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get_crate(self, crate_name: str) -> CrateResponse:
        path = CRATE_PATH.format(name=quote(crate_name, safe=""))
        return await self._get_json(path, CRATE_PATH, CrateResponse)

    async def get_crate_dependencies(self, crate_name: str, crate_version: str) -> CrateDependenciesResponse:
        path = CRATE_DEPENDENCIES_PATH.format(
            name=quote(crate_name, safe=""),
            version=quote(crate_version, safe=""),
        )
        return await self._get_json(path, CRATE_DEPENDENCIES_PATH, CrateDependenciesResponse)

    async def _get_json(self, path: str, endpoint: str, model: type[ModelT]) -> ModelT:
        url = f"{self._base_url}{path}"
        start = time.perf_counter()
        status_label = "error"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, headers=self._headers) as client:
                r = await client.get(url)
            status_label = str(r.status_code)
        except httpx.TimeoutException as exc:
            log.warning("registry_timeout url=%s error=%s", url, exc)
            raise RegistryTimeoutError(f"registry timed out for {url}", url=url) from exc
        except httpx.HTTPError as exc:
            log.warning("registry_transport_error url=%s error=%s", url, exc)
            raise RegistryUnavailableError(f"registry request failed for {url}: {exc}", url=url) from exc
        finally:
            metrics.api_request_duration_seconds(
                self._base_url, endpoint, status_label, time.perf_counter() - start
            )

        if r.status_code == 404:
            raise CrateNotFoundError(f"registry has no resource at {url}", url=url, upstream_status=404)
        if r.status_code != 200:
            log.warning("registry_bad_status url=%s status=%s body=%s", url, r.status_code, r.text[:200])
            raise RegistryUnavailableError(
                f"registry returned {r.status_code} for {url}",
                url=url,
                upstream_status=r.status_code,
            )

        try:
            return model.model_validate_json(r.content)
        except ValidationError as exc:
            log.warning("registry_decode_error url=%s errors=%s", url, exc.error_count())
            raise RegistryDecodeError(f"could not decode registry response for {url}", url=url) from exc


class InMemoryCrateRegistry:
    """Dict-backed registry for tests and local runs. Records every call made."""

    def __init__(self) -> None:
        self._crates: dict[str, CrateResponse] = {}
        self._dependencies: dict[tuple[str, str], CrateDependenciesResponse] = {}
        self.calls: list[tuple[str, ...]] = []

    def add_crate(self, crate: CrateResponse) -> None:
        self._crates[crate.crate.name] = crate

    def add_dependencies(self, crate_name: str, crate_version: str, response: CrateDependenciesResponse) -> None:
        self._dependencies[(crate_name, crate_version)] = response

    async def get_crate(self, crate_name: str) -> CrateResponse:
        self.calls.append(("get_crate", crate_name))
        crate = self._crates.get(crate_name)
        if crate is None:
            raise CrateNotFoundError(f"crate {crate_name} not found")
        return crate

    async def get_crate_dependencies(self, crate_name: str, crate_version: str) -> CrateDependenciesResponse:
        self.calls.append(("get_crate_dependencies", crate_name, crate_version))
        response = self._dependencies.get((crate_name, crate_version))
        if response is None:
            raise CrateNotFoundError(f"crate {crate_name} {crate_version} not found")
        return response
