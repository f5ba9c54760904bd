"""Plain-text rendering of a report tree."""

from __future__ import annotations

from typing import TextIO

from licensetree.graph.structs import stringify_locator
from licensetree.report.tree import DependentValue, NodeValue, TreeNode

_BRANCH = "├─ "
_LAST = "└─ "
_PIPE = "│  "
_BLANK = "   "


def format_value(value: NodeValue) -> str:
    if isinstance(value, DependentValue):
        locator = stringify_locator(value.locator)
        return f"{locator} (via {value.descriptor.range})"
    return value


def emit_tree(tree: TreeNode, stream: TextIO) -> None:
    """Write *tree* to *stream*; the valueless root itself is not printed."""
    for line in _lines(tree, ""):
        stream.write(line + "\n")


def _lines(node: TreeNode, prefix: str) -> list[str]:
    lines: list[str] = []
    items = list((node.children or {}).items())
    for index, (key, child) in enumerate(items):
        last = index == len(items) - 1
        label = format_value(child.value) if child.value is not None else key
        lines.append(prefix + (_LAST if last else _BRANCH) + label)
        lines.extend(_lines(child, prefix + (_BLANK if last else _PIPE)))
    return lines
