"""Interfaces the closure and report code consume from the host."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from licensetree.graph.models import Package, Workspace


@runtime_checkable
class ResolvedGraph(Protocol):
    """Read-only view of a resolved project, plus one bulk re-resolve."""

    def resolution(self, descriptor_hash: str) -> str | None: ...

    def package(self, locator_hash: str) -> Package | None: ...

    def package_location(self, locator_hash: str) -> Path | None: ...

    def workspaces(self) -> list[Workspace]: ...

    def recursive_workspace_dependencies(
        self, workspace: Workspace, dependency_kinds: tuple[str, ...]
    ) -> list[Workspace]: ...

    def reresolve_everything(self, *, without_dev_dependencies: bool = False) -> None: ...


@runtime_checkable
class Linker(Protocol):
    """Maps a resolved package to the directory holding its manifest."""

    name: str

    def package_path(self, graph: ResolvedGraph, package: Package) -> Path | None: ...

    def read_manifest(self, path: Path) -> bytes: ...
