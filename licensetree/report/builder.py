"""Build the license tree of a project: closure → manifests → report tree."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Iterable

import structlog

from licensetree.core.config import load_settings
from licensetree.exceptions import ManifestReadError
from licensetree.graph.closure import ClosureEntry, build_closure
from licensetree.graph.interfaces import Linker, ResolvedGraph
from licensetree.graph.models import LicenseInfo, Workspace
from licensetree.graph.structs import stringify_locator
from licensetree.linkers import resolve_linker
from licensetree.manifest.license_info import get_license_info
from licensetree.report.tree import TreeNode, assemble

log = structlog.get_logger("licensetree.report")


async def get_tree(
    graph: ResolvedGraph,
    json_mode: bool,
    recursive: bool,
    production: bool,
    *,
    workspaces: Iterable[Workspace] | None = None,
    linker: Linker | None = None,
    concurrency: int | None = None,
) -> TreeNode:
    """Return the license tree of *graph*.

    *workspaces* defaults to every workspace of the project. Manifests are
    read with at most *concurrency* reads in flight; the tree keeps the
    closure order regardless of completion order.

    Raises :class:`ManifestReadError` if any manifest is unreadable or not a
    JSON object, and :class:`ValueError` if *concurrency* is below 1.
    """
    settings = load_settings()
    if linker is None:
        linker = resolve_linker(settings.node_linker)
    if concurrency is None:
        concurrency = settings.manifest_concurrency
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")
    if workspaces is None:
        workspaces = graph.workspaces()

    entries = build_closure(graph, workspaces, recursive=recursive, production=production)

    sem = asyncio.Semaphore(concurrency)

    async def _read_one(entry: ClosureEntry) -> LicenseInfo | None:
        path = linker.package_path(graph, entry.package)
        if path is None:
            log.debug("report.manifest_skipped", locator=stringify_locator(entry.package.locator))
            return None
        async with sem:
            manifest = await _read_manifest(linker, path)
        return get_license_info(manifest)

    results = await asyncio.gather(*[_read_one(entry) for entry in entries])

    infos: dict[ClosureEntry, LicenseInfo] = {}
    located: list[ClosureEntry] = []
    for entry, info in zip(entries, results):
        if info is None:
            continue
        infos[entry] = info
        located.append(entry)

    log.info("report.assembled", packages=len(located), recursive=recursive, production=production)
    return assemble(located, infos.__getitem__, json_mode)


async def _read_manifest(linker: Linker, path: Path) -> dict[str, Any]:
    try:
        raw = await asyncio.to_thread(linker.read_manifest, path)
    except OSError as exc:
        raise ManifestReadError(path, exc.strerror or str(exc)) from exc
    try:
        manifest = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestReadError(path, f"invalid JSON: {exc}") from exc
    if not isinstance(manifest, dict):
        raise ManifestReadError(path, "expected a JSON object")
    return manifest
