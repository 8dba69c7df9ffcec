"""Tree Serialization - Export trees to plain data and text.

This module provides functions to render a TreeNode (or a forest) as
JSON-compatible dicts keyed by the configured field names, as a JSON
string, and as an indented text outline.
"""

from __future__ import annotations

import json
from typing import Any

from treeforge.config import TreeConfig
from treeforge.node import TreeNode


def _fields(node: TreeNode, config: TreeConfig) -> dict[str, Any]:
    result: dict[str, Any] = {
        config.id_key: node.id,
        config.parent_id_key: node.parent_id,
        config.name_key: node.name,
        config.weight_key: node.weight,
    }
    # Extra attributes never shadow the tree fields
    for key, value in node.extra.items():
        result.setdefault(key, value)
    return result


def to_dict(node: TreeNode, config: TreeConfig | None = None) -> dict[str, Any]:
    """Serialize a subtree to nested dicts.

    Args:
        node: Root of the subtree.
        config: Supplies the field names (default: the node's own config).

    Returns:
        Dict with the tree fields, the extra attributes, and a children
        list under children_key when the node has children.
    """
    config = config or node.config
    result = _fields(node, config)
    stack = [(node, result)]
    while stack:
        source, target = stack.pop()
        if not source._children:
            continue
        children = target[config.children_key] = []
        for child in source._children:
            child_dict = _fields(child, config)
            children.append(child_dict)
            stack.append((child, child_dict))
    return result


def forest_to_dicts(forest: list[TreeNode], config: TreeConfig | None = None) -> list[dict[str, Any]]:
    """Serialize each tree of a forest with to_dict()."""
    return [to_dict(tree, config) for tree in forest]


def to_json(node: TreeNode, config: TreeConfig | None = None, indent: int | None = 2) -> str:
    """Serialize a subtree to a JSON string.

    Values that JSON cannot represent are rendered with str().
    """
    return json.dumps(to_dict(node, config), indent=indent, ensure_ascii=False, default=str)


def to_text(node: TreeNode, indent: str = "  ") -> str:
    """Render a subtree as an outline, one ``name[id]`` line per node.

    Example:
        Tech Center[1]
          R&D Center[2]
            R&D Dept 1[3]
    """
    lines = []
    stack = [(node, 0)]
    while stack:
        current, level = stack.pop()
        label = "" if current.name is None else current.name
        lines.append(f"{indent * level}{label}[{current.id}]")
        stack.extend((child, level + 1) for child in reversed(current._children))
    return "\n".join(lines)
