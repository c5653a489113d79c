"""Pass-through registry routes. Responses are the upstream JSON, re-typed."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from crate_graph.adapters.crate_registry import CrateRegistry
from crate_graph.models.crate import CrateDependenciesResponse, CrateResponse
from crate_graph.models.error import ErrorResponse
from crate_graph.routers.dependencies import get_registry, require_query

router = APIRouter(prefix="/proxy")

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get("/crate", response_model=CrateResponse, responses=_ERRORS)
async def get_crate(
    name: Optional[str] = Query(None),
    registry: CrateRegistry = Depends(get_registry),
) -> CrateResponse:
    return await registry.get_crate(require_query(name, "name"))


@router.get("/crate_dependencies", response_model=CrateDependenciesResponse, responses=_ERRORS)
async def get_crate_dependencies(
    name: Optional[str] = Query(None),
    version: Optional[str] = Query(None),
    registry: CrateRegistry = Depends(get_registry),
) -> CrateDependenciesResponse:
    crate_name = require_query(name, "name")
    crate_version = require_query(version, "version")
    return await registry.get_crate_dependencies(crate_name, crate_version)
