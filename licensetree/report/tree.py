"""Report tree: one node per closure entry, keyed by devirtualized locator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

from licensetree.graph.closure import ClosureEntry
from licensetree.graph.models import AnyDescriptor, AnyLocator, LicenseInfo
from licensetree.graph.structs import stringify_descriptor, stringify_locator


@dataclass(frozen=True)
class DependentValue:
    """Node value naming a package and the descriptor that pulled it in."""

    locator: AnyLocator
    descriptor: AnyDescriptor

    def to_json(self) -> dict[str, str]:
        return {
            "locator": stringify_locator(self.locator),
            "descriptor": stringify_descriptor(self.descriptor),
        }


NodeValue = Union[str, DependentValue]


@dataclass
class TreeNode:
    value: NodeValue | None = None
    children: dict[str, TreeNode] | None = None


class _ChildrenBuilder:
    """Ordered child map that only takes fields with a value."""

    def __init__(self, json_mode: bool) -> None:
        self._json_mode = json_mode
        self._fields: list[tuple[str, TreeNode]] = []

    def add_optional(self, name: str, label: str, value: str | None) -> _ChildrenBuilder:
        if value:
            text = value if self._json_mode else f"{label}: {value}"
            self._fields.append((name, TreeNode(value=text)))
        return self

    def add(self, name: str, value: str) -> _ChildrenBuilder:
        self._fields.append((name, TreeNode(value=value)))
        return self

    def build(self) -> dict[str, TreeNode]:
        return dict(self._fields)


def license_node(entry: ClosureEntry, info: LicenseInfo, json_mode: bool) -> TreeNode:
    children = (
        _ChildrenBuilder(json_mode)
        .add_optional("url", "URL", info.url)
        .add_optional("vendorName", "VendorName", info.vendor_name)
        .add_optional("vendorUrl", "VendorUrl", info.vendor_url)
        .add("license", info.license)
        .build()
    )
    value = DependentValue(locator=entry.package.locator, descriptor=entry.descriptor)
    return TreeNode(value=value, children=children)


def assemble(
    entries: Iterable[ClosureEntry],
    license_info_of: Callable[[ClosureEntry], LicenseInfo],
    json_mode: bool,
) -> TreeNode:
    """Build ``{licenses: {<locator>: node}}`` in the order of *entries*.

    Entries sharing a key keep the first position and the last node.
    """
    packages: dict[str, TreeNode] = {}
    for entry in entries:
        packages[entry.key] = license_node(entry, license_info_of(entry), json_mode)
    return TreeNode(children={"licenses": TreeNode(children=packages)})


def _value_to_json(value: NodeValue) -> Any:
    if isinstance(value, DependentValue):
        return value.to_json()
    return value


def tree_node_to_json(node: TreeNode) -> Any:
    """Convert a tree to plain JSON data.

    Leaves become their value; nodes without a value become their children
    mapping; other nodes become ``{"value": ..., "children": {...}}``.
    """
    if node.children is None:
        if node.value is None:
            raise ValueError("Assertion failed: expected a value on a leaf node")
        return _value_to_json(node.value)

    children = {key: tree_node_to_json(child) for key, child in node.children.items()}
    if node.value is None:
        return children
    return {"value": _value_to_json(node.value), "children": children}
