"""Reshape a crate version's dependency list into a one-level graph."""

from __future__ import annotations

from typing import Iterable

from crate_graph.adapters.crate_registry import CrateRegistry
from crate_graph.models.crate import DependencyResponse
from crate_graph.models.dependency_graph import Edge, Node, QueryResult


def build_dependency_graph(name: str, version: str, dependencies: Iterable[DependencyResponse]) -> QueryResult:
    """Root node for ``name``/``version`` with one edge per dependency, in order.

    Edge targets carry the requirement string (e.g. ``^1.2.1``) as their version;
    they are not resolved and never have edges of their own.
    """
    edges = [
        Edge(
            relationship=dependency.kind,
            node=Node(name=dependency.crate_id, version=dependency.req),
        )
        for dependency in dependencies
    ]
    return QueryResult(data=[Node(name=name, version=version, edges=edges)])


async def query(registry: CrateRegistry, name: str, version: str) -> QueryResult:
    response = await registry.get_crate_dependencies(name, version)
    return build_dependency_graph(name, version, response.dependencies)
