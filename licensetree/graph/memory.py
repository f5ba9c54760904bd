"""Dict-backed ResolvedGraph."""

from __future__ import annotations

from collections import deque
from pathlib import Path

import structlog

from licensetree.exceptions import ReresolutionError
from licensetree.graph.models import AnyDescriptor, AnyLocator, Package, Workspace
from licensetree.graph.structs import stringify_descriptor, stringify_locator

log = structlog.get_logger("licensetree.graph")


class InMemoryGraph:
    """A resolved project held in plain dictionaries.

    ``resolutions`` maps descriptor hash → locator hash, ``packages`` maps
    locator hash → :class:`Package` and ``locations`` maps locator hash →
    the directory that holds the package's ``package.json``.
    """

    def __init__(self) -> None:
        self._workspaces: list[Workspace] = []
        self.resolutions: dict[str, str] = {}
        self.packages: dict[str, Package] = {}
        self.locations: dict[str, Path] = {}

    # ── building ─────────────────────────────────────────────────────────

    def add_workspace(self, workspace: Workspace) -> None:
        """Register *workspace* along with its anchored resolution and package."""
        self._workspaces.append(workspace)
        locator = workspace.anchored_locator
        self.resolutions[workspace.anchored_descriptor.descriptor_hash] = locator.locator_hash
        self.packages[locator.locator_hash] = Package(
            locator=locator, dependencies=dict(workspace.dependencies)
        )
        self.locations[locator.locator_hash] = workspace.cwd

    def add_package(self, package: Package, location: Path | None = None) -> None:
        self.packages[package.locator.locator_hash] = package
        if location is not None:
            self.locations[package.locator.locator_hash] = location

    def add_resolution(self, descriptor: AnyDescriptor, locator: AnyLocator) -> None:
        self.resolutions[descriptor.descriptor_hash] = locator.locator_hash

    # ── ResolvedGraph ────────────────────────────────────────────────────

    def resolution(self, descriptor_hash: str) -> str | None:
        return self.resolutions.get(descriptor_hash)

    def package(self, locator_hash: str) -> Package | None:
        return self.packages.get(locator_hash)

    def package_location(self, locator_hash: str) -> Path | None:
        return self.locations.get(locator_hash)

    def workspaces(self) -> list[Workspace]:
        return list(self._workspaces)

    def workspace_by_locator(self, locator_hash: str) -> Workspace | None:
        for workspace in self._workspaces:
            if workspace.anchored_locator.locator_hash == locator_hash:
                return workspace
        return None

    def recursive_workspace_dependencies(
        self, workspace: Workspace, dependency_kinds: tuple[str, ...]
    ) -> list[Workspace]:
        """Workspaces reachable from *workspace* through edges of the given kinds."""
        seen = {workspace.anchored_locator.locator_hash}
        result: list[Workspace] = []
        queue = deque([workspace])
        while queue:
            current = queue.popleft()
            for descriptor in current.manifest.edges(dependency_kinds):
                locator_hash = self.resolution(descriptor.descriptor_hash)
                if locator_hash is None or locator_hash in seen:
                    continue
                target = self.workspace_by_locator(locator_hash)
                if target is None:
                    continue
                seen.add(locator_hash)
                result.append(target)
                queue.append(target)
        return result

    def reresolve_everything(self, *, without_dev_dependencies: bool = False) -> None:
        """Recompute stored resolutions from the workspaces' current edges.

        With *without_dev_dependencies* the dev declarations of every
        workspace are cleared first, so packages only reachable through dev
        edges drop out of the graph.
        """
        if without_dev_dependencies:
            for workspace in self._workspaces:
                workspace.manifest.dev_dependencies.clear()

        resolutions: dict[str, str] = {}
        packages: dict[str, Package] = {}
        pending: deque[AnyDescriptor] = deque()

        for workspace in self._workspaces:
            locator = workspace.anchored_locator
            anchored = self.packages.get(locator.locator_hash)
            if anchored is None:
                raise ReresolutionError(
                    f"workspace {stringify_locator(locator)} has no stored package"
                )
            anchored.dependencies = dict(workspace.dependencies)
            pending.append(workspace.anchored_descriptor)

        while pending:
            descriptor = pending.popleft()
            if descriptor.descriptor_hash in resolutions:
                continue
            locator_hash = self.resolutions.get(descriptor.descriptor_hash)
            package = self.packages.get(locator_hash) if locator_hash else None
            if package is None:
                raise ReresolutionError(
                    f"no candidates found for {stringify_descriptor(descriptor)}"
                )
            resolutions[descriptor.descriptor_hash] = locator_hash
            if locator_hash not in packages:
                packages[locator_hash] = package
                pending.extend(package.dependencies.values())

        dropped = len(self.packages) - len(packages)
        self.resolutions = resolutions
        self.packages = packages
        log.info(
            "graph.reresolved",
            packages=len(packages),
            dropped=dropped,
            without_dev_dependencies=without_dev_dependencies,
        )
