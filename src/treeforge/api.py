"""
treeforge.api - One-call entry points for building and navigating trees.

Example:
    root = build_single(departments, 0)
    dept = find_node(root, 3)
    ancestor_names(dept)  # ["R&D Center", "Tech Center"]
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from treeforge.adapters import RecordAdapter
from treeforge.builder import TreeBuilder
from treeforge.config import DEFAULT_CONFIG, TreeConfig
from treeforge.functional import build_generic
from treeforge.navigation import ancestor_ids, ancestor_names, find_node
from treeforge.node import TreeNode

__all__ = [
    "ancestor_ids",
    "ancestor_names",
    "build_forest",
    "build_forest_from_trees",
    "build_generic",
    "build_single",
    "build_single_from_trees",
    "create_empty_node",
    "find_node",
]


def build_single(
    records: Iterable[Any],
    root_id: Any = 0,
    config: TreeConfig | None = None,
    adapter: RecordAdapter | None = None,
) -> TreeNode:
    """Build a single-root tree.

    The root carries ``root_id``; it is synthetic unless a record has
    that id.

    Args:
        records: Flat records linked by parent id.
        root_id: Parent id of the top-level records (default 0).
        config: Builder configuration.
        adapter: Extracts tree fields (default: DefaultAdapter).

    Returns:
        The root TreeNode.
    """
    return TreeBuilder.of(root_id, config).append(records, adapter).build()


def build_forest(
    records: Iterable[Any],
    root_id: Any = 0,
    config: TreeConfig | None = None,
    adapter: RecordAdapter | None = None,
) -> list[TreeNode]:
    """Build a forest: the children of the single-root tree.

    Returns:
        Top-level TreeNodes, ordered by weight.
    """
    return build_single(records, root_id, config, adapter).children


def build_single_from_trees(trees: Mapping[Any, TreeNode], root_id: Any = 0) -> TreeNode:
    """Re-parent already-built nodes under a new root.

    The configuration of the first supplied node is reused. An empty
    mapping yields an empty root.

    Args:
        trees: Mapping of id to TreeNode.
        root_id: Parent id of the top-level nodes (default 0).

    Returns:
        The root TreeNode.
    """
    first = next((tree for tree in trees.values() if tree is not None), None)
    if first is None:
        return create_empty_node(root_id)
    return TreeBuilder.of(root_id, first.config).append_trees(trees).build()


def build_forest_from_trees(trees: Mapping[Any, TreeNode], root_id: Any = 0) -> list[TreeNode]:
    """Re-parent already-built nodes and return the top-level nodes."""
    return build_single_from_trees(trees, root_id).children


def create_empty_node(node_id: Any, config: TreeConfig | None = None) -> TreeNode:
    """Create a childless placeholder node carrying only an id."""
    node = TreeNode(id=node_id, config=config or DEFAULT_CONFIG)
    node._synthetic = True
    return node
