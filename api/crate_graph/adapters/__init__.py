"""Adapters for the upstream package registry."""

from crate_graph.adapters.crate_registry import CrateRegistry, CratesIoClient, InMemoryCrateRegistry

__all__ = ["CrateRegistry", "CratesIoClient", "InMemoryCrateRegistry"]
