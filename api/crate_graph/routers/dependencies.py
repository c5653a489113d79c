"""Shared request dependencies for routers."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from crate_graph.adapters.crate_registry import CrateRegistry
from crate_graph.errors import missing_field


def get_registry(request: Request) -> CrateRegistry:
    return request.app.state.crate_registry


def require_query(value: Optional[str], field_name: str) -> str:
    """Return ``value`` or raise the 400 ``missing field`` error for ``field_name``."""
    if value is None:
        raise missing_field(field_name)
    return value
