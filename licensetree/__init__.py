"""licensetree: license report over a project's dependency graph."""

__version__ = "0.1.0"

from licensetree.graph.closure import ClosureEntry, build_closure
from licensetree.graph.models import LicenseInfo
from licensetree.manifest.author import parse_author
from licensetree.manifest.license_info import get_license_info
from licensetree.report.builder import get_tree
from licensetree.report.tree import TreeNode, assemble, tree_node_to_json

__all__ = [
    "ClosureEntry",
    "LicenseInfo",
    "TreeNode",
    "assemble",
    "build_closure",
    "get_license_info",
    "get_tree",
    "parse_author",
    "tree_node_to_json",
]
