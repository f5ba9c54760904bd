"""Package location strategies — auto-registered on import."""

from licensetree.linkers import node_modules  # noqa: F401
from licensetree.linkers.registry import LINKER_REGISTRY, register_linker, resolve_linker

__all__ = ["LINKER_REGISTRY", "register_linker", "resolve_linker"]
