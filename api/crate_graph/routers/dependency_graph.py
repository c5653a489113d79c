"""Dependency graph API route."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from crate_graph.adapters.crate_registry import CrateRegistry
from crate_graph.models.dependency_graph import QueryResult
from crate_graph.models.error import ErrorResponse
from crate_graph.routers.dependencies import get_registry, require_query
from crate_graph.services import dependency_graph_service

router = APIRouter()


@router.get(
    "/dependency-graph",
    response_model=QueryResult,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
async def query_dependency_graph(
    name: Optional[str] = Query(None, description="Crate name."),
    version: Optional[str] = Query(None, description="Crate version."),
    registry: CrateRegistry = Depends(get_registry),
) -> QueryResult:
    crate_name = require_query(name, "name")
    crate_version = require_query(version, "version")
    return await dependency_graph_service.query(registry, crate_name, crate_version)
