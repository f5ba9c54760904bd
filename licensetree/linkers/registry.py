"""Linker registry — look up the package location strategy by name."""

from __future__ import annotations

from licensetree.exceptions import UnknownLinkerError
from licensetree.graph.interfaces import Linker

LINKER_REGISTRY: dict[str, Linker] = {}


def register_linker(linker: Linker) -> None:
    """Register a linker instance by its name."""
    LINKER_REGISTRY[linker.name] = linker


def resolve_linker(name: str) -> Linker:
    try:
        return LINKER_REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(LINKER_REGISTRY)) or "none"
        raise UnknownLinkerError(f"unsupported linker {name!r} (known: {known})") from None
