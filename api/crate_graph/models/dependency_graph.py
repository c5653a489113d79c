"""Dependency graph response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Node(BaseModel):
    name: str
    version: str
    edges: Optional[list["Edge"]] = None


class Edge(BaseModel):
    relationship: str
    node: Node


class QueryResult(BaseModel):
    """GET /dependency-graph response. ``data`` holds the root node."""

    data: Optional[list[Node]] = None


Node.model_rebuild()
