"""Load a ResolvedGraph from a project installed into ``node_modules``."""

from __future__ import annotations

import json
from collections import deque
from pathlib import Path
from typing import Any

import structlog

from licensetree.exceptions import ManifestReadError, ProjectNotFoundError
from licensetree.graph.memory import InMemoryGraph
from licensetree.graph.models import Descriptor, Locator, Package, Workspace, WorkspaceManifest
from licensetree.graph.structs import parse_ident, stringify_descriptor, stringify_ident

log = structlog.get_logger("licensetree.graph")

_UNNAMED_ROOT = "root-workspace-0b6124"


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_bytes())
    except OSError as exc:
        raise ManifestReadError(path, exc.strerror or str(exc)) from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestReadError(path, f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestReadError(path, "expected a JSON object")
    return data


def find_project_root(cwd: Path) -> Path:
    """Return the project directory containing *cwd*.

    The top-most ancestor whose package.json declares ``workspaces`` wins;
    otherwise the nearest directory with a package.json.
    """
    cwd = cwd.resolve()
    nearest: Path | None = None
    topmost: Path | None = None
    for directory in [cwd, *cwd.parents]:
        manifest = directory / "package.json"
        if not manifest.is_file():
            continue
        if nearest is None:
            nearest = directory
        if "workspaces" in _read_json(manifest):
            topmost = directory
    root = topmost or nearest
    if root is None:
        raise ProjectNotFoundError(f"no package.json found in {cwd} or its parents")
    return root


def _workspace_patterns(manifest: dict[str, Any]) -> list[str]:
    workspaces = manifest.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [p for p in workspaces if isinstance(p, str)]


def _descriptors(section: Any) -> dict[str, Descriptor]:
    result: dict[str, Descriptor] = {}
    if not isinstance(section, dict):
        return result
    for name, range_ in section.items():
        try:
            ident = parse_ident(name)
        except ValueError:
            log.warning("graph.invalid_dependency", name=name)
            continue
        result[ident.ident_hash] = Descriptor(ident, str(range_))
    return result


class InstalledProject(InMemoryGraph):
    """A project whose dependencies are resolved from ``node_modules`` on disk."""

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = root

    @classmethod
    def load(cls, root: Path) -> InstalledProject:
        root = root.resolve()
        project = cls(root)
        root_manifest = _read_json(root / "package.json")

        directories = [root]
        for pattern in _workspace_patterns(root_manifest):
            for hit in sorted(root.glob(pattern)):
                hit = hit.resolve()
                if (hit / "package.json").is_file() and hit not in directories:
                    directories.append(hit)

        for directory in directories:
            project.add_workspace(project._load_workspace(directory))

        project._resolve_installed()
        log.debug(
            "graph.loaded",
            root=str(root),
            workspaces=len(directories),
            packages=len(project.packages),
        )
        return project

    def _load_workspace(self, directory: Path) -> Workspace:
        data = _read_json(directory / "package.json")
        relative = directory.relative_to(self.root).as_posix()
        name = data.get("name") if isinstance(data.get("name"), str) else None
        return Workspace(
            cwd=directory,
            relative_cwd=relative,
            manifest=WorkspaceManifest(
                name=parse_ident(name or _UNNAMED_ROOT),
                dependencies=_descriptors(data.get("dependencies")),
                dev_dependencies=_descriptors(data.get("devDependencies")),
            ),
        )

    def _find_installed(self, name: str, requirer: Path) -> Path | None:
        """Node-style lookup of ``node_modules/<name>`` from *requirer* up to the root."""
        for directory in [requirer, *requirer.parents]:
            candidate = directory / "node_modules" / name
            if (candidate / "package.json").is_file():
                return candidate
            if directory == self.root:
                break
        return None

    def _resolve_installed(self) -> None:
        by_cwd = {workspace.cwd: workspace for workspace in self._workspaces}
        by_name = {
            workspace.manifest.name.ident_hash: workspace for workspace in self._workspaces
        }
        pending: deque[tuple[Descriptor, Path]] = deque()
        for workspace in self._workspaces:
            for descriptor in workspace.dependencies.values():
                pending.append((descriptor, workspace.cwd))

        while pending:
            descriptor, requirer = pending.popleft()
            if descriptor.descriptor_hash in self.resolutions:
                continue

            target: Workspace | None = None
            installed: Path | None = None
            if descriptor.range.startswith("workspace:"):
                target = by_name.get(descriptor.ident.ident_hash)
            else:
                installed = self._find_installed(stringify_ident(descriptor.ident), requirer)
                if installed is not None:
                    target = by_cwd.get(installed.resolve())
                elif descriptor.ident.ident_hash in by_name:
                    target = by_name[descriptor.ident.ident_hash]

            if target is not None:
                self.add_resolution(descriptor, target.anchored_locator)
                continue
            if installed is None:
                log.debug("graph.not_installed", descriptor=stringify_descriptor(descriptor))
                continue

            data = _read_json(installed / "package.json")
            version = data.get("version") if isinstance(data.get("version"), str) else "0.0.0"
            locator = Locator(descriptor.ident, f"npm:{version}")
            self.add_resolution(descriptor, locator)
            if locator.locator_hash in self.packages:
                continue
            dependencies = _descriptors(data.get("dependencies"))
            self.add_package(
                Package(locator=locator, version=version, dependencies=dict(dependencies)),
                location=installed,
            )
            for dependency in dependencies.values():
                pending.append((dependency, installed))
