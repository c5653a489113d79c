"""Pydantic models."""

from crate_graph.models.crate import CrateDependenciesResponse, CrateResponse, DependencyResponse
from crate_graph.models.dependency_graph import Edge, Node, QueryResult
from crate_graph.models.error import ErrorResponse
from crate_graph.models.health import Check, Health

__all__ = [
    "Check",
    "CrateDependenciesResponse",
    "CrateResponse",
    "DependencyResponse",
    "Edge",
    "ErrorResponse",
    "Health",
    "Node",
    "QueryResult",
]
