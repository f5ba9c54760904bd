"""Data model of the resolved dependency graph and the license report."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Union

UNKNOWN_LICENSE = "UNKNOWN"

# Edge kinds that make one workspace depend on another.
HARD_DEPENDENCIES = ("dependencies", "devDependencies")
PRODUCTION_DEPENDENCIES = ("dependencies",)


def make_hash(*parts: str) -> str:
    digest = hashlib.sha512()
    for part in parts:
        digest.update(part.encode("utf-8"))
        digest.update(b"\0")
    return digest.hexdigest()


@dataclass(frozen=True)
class Ident:
    """Package name, optionally scoped (``@scope/name``)."""

    scope: str | None
    name: str

    @cached_property
    def ident_hash(self) -> str:
        return make_hash(self.scope or "", self.name)


@dataclass(frozen=True)
class Descriptor:
    """A physical dependency edge: ident plus the requested range."""

    ident: Ident
    range: str

    is_virtual = False

    @cached_property
    def descriptor_hash(self) -> str:
        return make_hash(self.ident.ident_hash, self.range)


@dataclass(frozen=True)
class VirtualDescriptor:
    """A peer-dependency instantiation of an underlying physical descriptor."""

    physical: Descriptor
    entropy: str

    is_virtual = True

    @property
    def ident(self) -> Ident:
        return self.physical.ident

    @property
    def range(self) -> str:
        return f"virtual:{self.entropy}#{self.physical.range}"

    @cached_property
    def descriptor_hash(self) -> str:
        return make_hash(self.ident.ident_hash, self.range)


@dataclass(frozen=True)
class Locator:
    """Exact identity of a resolved package: ident plus reference."""

    ident: Ident
    reference: str

    is_virtual = False

    @cached_property
    def locator_hash(self) -> str:
        return make_hash(self.ident.ident_hash, self.reference)


@dataclass(frozen=True)
class VirtualLocator:
    physical: Locator
    entropy: str

    is_virtual = True

    @property
    def ident(self) -> Ident:
        return self.physical.ident

    @property
    def reference(self) -> str:
        return f"virtual:{self.entropy}#{self.physical.reference}"

    @cached_property
    def locator_hash(self) -> str:
        return make_hash(self.ident.ident_hash, self.reference)


AnyDescriptor = Union[Descriptor, VirtualDescriptor]
AnyLocator = Union[Locator, VirtualLocator]


@dataclass
class Package:
    """A resolved package and its outgoing edges, keyed by ident hash."""

    locator: AnyLocator
    version: str | None = None
    dependencies: dict[str, AnyDescriptor] = field(default_factory=dict)


@dataclass
class WorkspaceManifest:
    name: Ident
    dependencies: dict[str, Descriptor] = field(default_factory=dict)
    dev_dependencies: dict[str, Descriptor] = field(default_factory=dict)

    def edges(self, dependency_kinds: tuple[str, ...]) -> list[Descriptor]:
        result: list[Descriptor] = []
        if "dependencies" in dependency_kinds:
            result.extend(self.dependencies.values())
        if "devDependencies" in dependency_kinds:
            result.extend(self.dev_dependencies.values())
        return result


@dataclass
class Workspace:
    """A project-local package."""

    cwd: Path
    relative_cwd: str
    manifest: WorkspaceManifest

    @property
    def anchored_descriptor(self) -> Descriptor:
        return Descriptor(self.manifest.name, f"workspace:{self.relative_cwd}")

    @property
    def anchored_locator(self) -> Locator:
        return Locator(self.manifest.name, f"workspace:{self.relative_cwd}")

    @property
    def dependencies(self) -> dict[str, Descriptor]:
        """All hard dependencies; a dev declaration overrides a regular one."""
        merged = dict(self.manifest.dependencies)
        merged.update(self.manifest.dev_dependencies)
        return merged

    def is_development_only(self, ident_hash: str) -> bool:
        return ident_hash in self.manifest.dev_dependencies


@dataclass
class LicenseInfo:
    license: str = UNKNOWN_LICENSE
    url: str | None = None
    vendor_name: str | None = None
    vendor_url: str | None = None
