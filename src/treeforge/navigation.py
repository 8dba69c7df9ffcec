"""
Tree navigation - Read-only lookups over an assembled tree.

Functions:
- find_node: first node with an id, in pre-order
- iter_ancestors: nodes from a node up to (not including) a synthetic root
- ancestor_ids / ancestor_names: the ids or names along that walk

For example, given Tech Center > R&D Center > R&D Dept 1 built under a
synthetic root, ``ancestor_names(dept1, include_self=True)`` returns
``["R&D Dept 1", "R&D Center", "Tech Center"]``.
"""

from __future__ import annotations

from typing import Any, Iterator

from treeforge.node import TreeNode


def find_node(tree: TreeNode | None, node_id: Any) -> TreeNode | None:
    """Find the first node with the given id.

    Searches the tree depth-first in pre-order, so the result is the
    first match in children order.

    Args:
        tree: Root of the subtree to search.
        node_id: The id to find.

    Returns:
        The matching TreeNode, or None if not found.
    """
    if tree is None:
        return None
    stack = [tree]
    while stack:
        node = stack.pop()
        if node.id == node_id:
            return node
        stack.extend(reversed(node._children))
    return None


def iter_ancestors(node: TreeNode | None, include_self: bool = False) -> Iterator[TreeNode]:
    """Walk upward from a node.

    The walk stops at a synthetic root, the placeholder that only holds
    the configured root id when no record carries it. A root backed by a
    record, or the top of a cloned subtree, is yielded like any other
    node, whatever its id or name.

    Args:
        node: Starting node.
        include_self: Whether to yield the starting node first.

    Yields:
        The node (optionally), then its parent, grandparent, and so on.
    """
    if node is None:
        return
    current = node if include_self else node.parent
    while current is not None and not (current.parent is None and current._synthetic):
        yield current
        current = current.parent


def ancestor_ids(node: TreeNode | None, include_self: bool = False) -> list[Any]:
    """Ids from a node up to the top-level ancestor.

    Args:
        node: Starting node.
        include_self: Whether the node's own id comes first.

    Returns:
        List of ids, nearest first. Empty if node is None.
    """
    return [n.id for n in iter_ancestors(node, include_self)]


def ancestor_names(node: TreeNode | None, include_self: bool = False) -> list[str | None]:
    """Names from a node up to the top-level ancestor.

    Args:
        node: Starting node.
        include_self: Whether the node's own name comes first.

    Returns:
        List of names, nearest first. Empty if node is None.
    """
    return [n.name for n in iter_ancestors(node, include_self)]
