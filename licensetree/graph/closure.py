"""Dependency closure: which packages a license report covers, in which order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import structlog

from licensetree.exceptions import LicenseTreeError, MissingResolutionError, ReresolutionError
from licensetree.graph.interfaces import ResolvedGraph
from licensetree.graph.models import (
    HARD_DEPENDENCIES,
    PRODUCTION_DEPENDENCIES,
    AnyDescriptor,
    Package,
    Workspace,
)
from licensetree.graph.structs import (
    descriptor_sort_key,
    devirtualize,
    devirtualize_locator,
    stringify_descriptor,
    stringify_locator,
)

log = structlog.get_logger("licensetree.closure")


@dataclass(frozen=True, eq=False)
class ClosureEntry:
    """One package of the report, with the descriptor that selected it."""

    descriptor: AnyDescriptor
    package: Package

    @property
    def key(self) -> str:
        return stringify_locator(devirtualize_locator(self.package.locator))


def build_closure(
    graph: ResolvedGraph,
    root_workspaces: Iterable[Workspace],
    *,
    recursive: bool,
    production: bool,
) -> list[ClosureEntry]:
    """Compute the ordered, deduplicated list of packages to report on.

    Direct dependencies of every workspace in scope are always included
    (development-only ones are dropped in *production* mode). With
    *recursive*, their transitive dependencies are included as well.

    The result is sorted by ident, then virtual-before-physical, then range,
    and holds a single entry per devirtualized descriptor.

    Raises :class:`ReresolutionError` if the production re-resolution fails
    and :class:`MissingResolutionError` if a descriptor has no resolution in
    recursive mode.
    """
    root_workspaces = list(root_workspaces)

    if recursive and production:
        _reresolve_without_dev(graph)

    collected: list[AnyDescriptor] = []
    seen: set[AnyDescriptor] = set()
    resolved: dict[AnyDescriptor, Package | None] = {}
    for workspace in _workspace_scope(graph, root_workspaces, production):
        for descriptor in _direct_descriptors(workspace, production):
            _collect(graph, descriptor, recursive, seen, resolved, collected)

    entries: list[ClosureEntry] = []
    seen_canonical: set[str] = set()
    for descriptor in sorted(collected, key=descriptor_sort_key):
        if descriptor in resolved:
            package = resolved[descriptor]
        else:
            package = _lookup(graph, descriptor, recursive)
        if package is None:
            continue
        canonical = devirtualize(descriptor)
        if canonical in seen_canonical:
            continue
        seen_canonical.add(canonical)
        entries.append(ClosureEntry(descriptor=descriptor, package=package))

    log.debug(
        "closure.built",
        descriptors=len(collected),
        entries=len(entries),
        recursive=recursive,
        production=production,
    )
    return entries


def _reresolve_without_dev(graph: ResolvedGraph) -> None:
    log.info("closure.reresolve", reason="production")
    try:
        graph.reresolve_everything(without_dev_dependencies=True)
    except LicenseTreeError:
        raise
    except Exception as exc:
        raise ReresolutionError(f"re-resolution failed: {exc}") from exc


def _workspace_scope(
    graph: ResolvedGraph, root_workspaces: list[Workspace], production: bool
) -> list[Workspace]:
    """Root workspaces plus every workspace they hard-depend on."""
    kinds = PRODUCTION_DEPENDENCIES if production else HARD_DEPENDENCIES
    scope: list[Workspace] = []
    seen: set[str] = set()
    for root in root_workspaces:
        for workspace in [root, *graph.recursive_workspace_dependencies(root, kinds)]:
            locator_hash = workspace.anchored_locator.locator_hash
            if locator_hash in seen:
                continue
            seen.add(locator_hash)
            scope.append(workspace)
    return scope


def _direct_descriptors(workspace: Workspace, production: bool) -> list[AnyDescriptor]:
    descriptors: list[AnyDescriptor] = []
    for ident_hash, descriptor in workspace.dependencies.items():
        if production and workspace.is_development_only(ident_hash):
            continue
        descriptors.append(descriptor)
    return descriptors


def _collect(
    graph: ResolvedGraph,
    descriptor: AnyDescriptor,
    recursive: bool,
    seen: set[AnyDescriptor],
    resolved: dict[AnyDescriptor, Package | None],
    collected: list[AnyDescriptor],
) -> None:
    """Append every descriptor reachable from *descriptor* to *collected*.

    In recursive mode each visited descriptor is looked up once; its package
    is kept in *resolved* so the final pass does not look it up again.
    """
    stack = [descriptor]
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        collected.append(current)
        if not recursive:
            continue
        package = _lookup(graph, current, recursive)
        resolved[current] = package
        if package is None:
            continue
        stack.extend(reversed(list(package.dependencies.values())))


def _lookup(graph: ResolvedGraph, descriptor: AnyDescriptor, recursive: bool) -> Package | None:
    locator_hash = graph.resolution(descriptor.descriptor_hash)
    if locator_hash is None:
        if recursive:
            raise MissingResolutionError(stringify_descriptor(descriptor))
        return None
    package = graph.package(locator_hash)
    if package is None:
        log.warning(
            "closure.package_missing",
            descriptor=stringify_descriptor(descriptor),
            locator_hash=locator_hash,
        )
    return package
