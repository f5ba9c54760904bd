"""Shared pytest fixtures for licensetree tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from licensetree.graph.memory import InMemoryGraph
from licensetree.graph.models import (
    Descriptor,
    Locator,
    Package,
    VirtualDescriptor,
    VirtualLocator,
    Workspace,
    WorkspaceManifest,
)
from licensetree.graph.structs import parse_ident


def _descriptors(deps: dict[str, str] | None) -> dict[str, Descriptor]:
    result: dict[str, Descriptor] = {}
    for name, range_ in (deps or {}).items():
        ident = parse_ident(name)
        result[ident.ident_hash] = Descriptor(ident, range_)
    return result


class GraphFactory:
    """Build an InMemoryGraph whose packages have manifests under *root*."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.graph = InMemoryGraph()

    def workspace(
        self,
        name: str,
        relative: str = ".",
        dependencies: dict[str, str] | None = None,
        dev_dependencies: dict[str, str] | None = None,
        manifest: dict | None = None,
    ) -> Workspace:
        cwd = self.root if relative == "." else self.root / relative
        cwd.mkdir(parents=True, exist_ok=True)
        (cwd / "package.json").write_text(json.dumps(manifest or {"name": name}))
        workspace = Workspace(
            cwd=cwd,
            relative_cwd=relative,
            manifest=WorkspaceManifest(
                name=parse_ident(name),
                dependencies=_descriptors(dependencies),
                dev_dependencies=_descriptors(dev_dependencies),
            ),
        )
        self.graph.add_workspace(workspace)
        return workspace

    def package(
        self,
        name: str,
        version: str,
        dependencies: dict[str, str] | None = None,
        manifest: dict | None = None,
    ) -> Package:
        location = self.root / "node_modules" / f"{name}-{version}"
        location.mkdir(parents=True, exist_ok=True)
        data = manifest if manifest is not None else {"name": name, "version": version}
        (location / "package.json").write_text(json.dumps(data))
        package = Package(
            locator=Locator(parse_ident(name), f"npm:{version}"),
            version=version,
            dependencies=_descriptors(dependencies),
        )
        self.graph.add_package(package, location=location)
        return package

    def resolve(self, name: str, range_: str, target: Package | Workspace) -> Descriptor:
        descriptor = Descriptor(parse_ident(name), range_)
        if isinstance(target, Workspace):
            self.graph.add_resolution(descriptor, target.anchored_locator)
        else:
            self.graph.add_resolution(descriptor, target.locator)
        return descriptor

    def virtual(
        self, descriptor: Descriptor, package: Package, entropy: str
    ) -> tuple[VirtualDescriptor, Package]:
        """Register a virtual instantiation of *package* reached through *descriptor*."""
        virtual_descriptor = VirtualDescriptor(physical=descriptor, entropy=entropy)
        virtual_package = Package(
            locator=VirtualLocator(physical=package.locator, entropy=entropy),
            version=package.version,
            dependencies=dict(package.dependencies),
        )
        self.graph.add_package(virtual_package)
        self.graph.add_resolution(virtual_descriptor, virtual_package.locator)
        return virtual_descriptor, virtual_package


@pytest.fixture
def factory(tmp_path):
    return GraphFactory(tmp_path)


@pytest.fixture
def make_factory(tmp_path):
    def _make(name: str) -> GraphFactory:
        return GraphFactory(tmp_path / name)

    return _make


@pytest.fixture
def basic_graph(factory):
    """app -> a (prod), b (dev); a -> c; b -> c, d."""
    factory.workspace(
        "app",
        dependencies={"a": "^1.0.0"},
        dev_dependencies={"b": "^2.0.0"},
    )
    a = factory.package("a", "1.0.0", {"c": "^3.0.0"}, {"license": "MIT"})
    b = factory.package("b", "2.0.0", {"c": "^3.0.0", "d": "^4.0.0"}, {"license": "ISC"})
    c = factory.package("c", "3.1.0", manifest={"license": "Apache-2.0"})
    d = factory.package("d", "4.0.0", manifest={"licenses": ["MIT", "BSD-3-Clause"]})
    factory.resolve("a", "^1.0.0", a)
    factory.resolve("b", "^2.0.0", b)
    factory.resolve("c", "^3.0.0", c)
    factory.resolve("d", "^4.0.0", d)
    return factory.graph


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    if "LICENSETREE_LOG_LEVEL" not in os.environ:
        monkeypatch.setenv("LICENSETREE_LOG_LEVEL", "WARNING")
