"""Linker for packages installed in ``node_modules`` directories."""

from __future__ import annotations

from pathlib import Path

from licensetree.graph.interfaces import ResolvedGraph
from licensetree.graph.models import Package
from licensetree.graph.structs import devirtualize_locator
from licensetree.linkers.registry import register_linker


class NodeModulesLinker:
    name = "node-modules"

    def package_path(self, graph: ResolvedGraph, package: Package) -> Path | None:
        """Directory of *package*, or None when the graph knows no location."""
        locator = package.locator
        path = graph.package_location(locator.locator_hash)
        if path is None and locator.is_virtual:
            path = graph.package_location(devirtualize_locator(locator).locator_hash)
        return path

    def read_manifest(self, path: Path) -> bytes:
        return (path / "package.json").read_bytes()


register_linker(NodeModulesLinker())
