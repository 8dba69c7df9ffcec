"""TreeNode - The assembled node entity.

This module provides the node type produced by TreeBuilder:
- Identity and display fields (id, parent_id, name, weight, extra)
- Ordered, owned children
- A parent back-reference used only for upward traversal
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from treeforge.config import DEFAULT_CONFIG, TreeConfig


@dataclass(eq=False)
class TreeNode:
    """A node in an assembled tree.

    Equality is structural: two nodes are equal when their fields and
    their children (recursively, in order) are equal. The parent link and
    the config are not compared.

    Attributes:
        id: Unique identifier of the node.
        parent_id: Parent id as read from the source record.
        name: Display name.
        weight: Ordering key among siblings.
        extra: Additional attributes copied from the source record.
        config: Configuration the node was built with.
    """

    id: Any
    parent_id: Any = None
    name: str | None = None
    weight: Any = None
    extra: dict[str, Any] = field(default_factory=dict)
    config: TreeConfig = field(default=DEFAULT_CONFIG, repr=False)

    # Internal storage (prefixed) - set by the builder only
    _children: list[TreeNode] = field(default_factory=list, init=False, repr=False)
    _parent: TreeNode | None = field(default=None, init=False, repr=False)
    # Placeholder root holding only the configured root id
    _synthetic: bool = field(default=False, init=False, repr=False)

    def __eq__(self, other: object) -> bool:
        """Compare two subtrees structurally."""
        if not isinstance(other, TreeNode):
            return NotImplemented
        stack = [(self, other)]
        while stack:
            a, b = stack.pop()
            if (
                a.id != b.id
                or a.parent_id != b.parent_id
                or a.name != b.name
                or a.weight != b.weight
                or a.extra != b.extra
                or len(a._children) != len(b._children)
            ):
                return False
            stack.extend(zip(a._children, b._children))
        return True

    __hash__ = None  # type: ignore[assignment]

    # Iterator access
    def iter_children(self) -> Iterator[TreeNode]:
        """Iterate over child nodes."""
        yield from self._children

    @property
    def children(self) -> list[TreeNode]:
        """Children as a new list."""
        return list(self._children)

    @property
    def parent(self) -> TreeNode | None:
        """The enclosing node, or None for a root."""
        return self._parent

    def child_count(self) -> int:
        """Return number of children."""
        return len(self._children)

    def has_children(self) -> bool:
        """Check if the node has any children."""
        return bool(self._children)

    @property
    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self._parent is None

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self._children

    def get_extra(self, key: str, default: Any = None) -> Any:
        """Get an extra attribute."""
        return self.extra.get(key, default)

    def _attach(self, child: TreeNode) -> None:
        """Append a child and point its parent link here."""
        child._parent = self
        self._children.append(child)

    @property
    def depth(self) -> int:
        """Number of edges between this node and its root."""
        depth = 0
        node = self._parent
        while node is not None:
            depth += 1
            node = node._parent
        return depth

    def walk(self, order: str = "pre") -> Iterator[TreeNode]:
        """Yield this node and everything below it.

        ``order`` is "pre" (each node before its children), "post" (each
        node after its children) or "level" (one depth at a time). All three
        run without recursion.
        """
        walkers = {
            "pre": self._walk_preorder,
            "post": self._walk_postorder,
            "level": self._walk_level,
        }
        if order not in walkers:
            raise ValueError(f"Unknown traversal order: {order}")
        yield from walkers[order]()

    def _walk_preorder(self) -> Iterator[TreeNode]:
        """Pre-order traversal (parent before children)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def _walk_postorder(self) -> Iterator[TreeNode]:
        """Post-order traversal (children before parent)."""
        stack: list[tuple[TreeNode, bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                yield node
                continue
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node._children))

    def _walk_level(self) -> Iterator[TreeNode]:
        level: list[TreeNode] = [self]
        while level:
            yield from level
            level = [child for node in level for child in node._children]

    def ancestors(self) -> Iterator[TreeNode]:
        """Iterate from the parent up to the root."""
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def find(self, predicate: Callable[[TreeNode], bool]) -> Iterator[TreeNode]:
        """Find all descendants matching predicate.

        Args:
            predicate: Function that returns True for matching nodes.

        Yields:
            Matching TreeNode instances, in pre-order.
        """
        for node in self.walk():
            if predicate(node):
                yield node

    def get_node(self, node_id: Any) -> TreeNode | None:
        """Return the first node in this subtree with the given id."""
        from treeforge.navigation import find_node

        return find_node(self, node_id)

    def clone(self) -> TreeNode:
        """Deep copy of this subtree; the copy is a root."""
        return self._copy(lambda node: True)

    def filter(self, predicate: Callable[[TreeNode], bool]) -> TreeNode | None:
        """Pruned deep copy of this subtree.

        A node is kept when it matches predicate or any of its descendants
        does. The original tree is left untouched.

        Returns:
            The pruned copy, or None if nothing matches.
        """
        keep: set[int] = set()
        for node in self.walk("post"):
            if predicate(node) or any(id(child) in keep for child in node._children):
                keep.add(id(node))
        if id(self) not in keep:
            return None
        return self._copy(lambda node: id(node) in keep)

    def _copy(self, keep: Callable[[TreeNode], bool]) -> TreeNode:
        """Copy nodes accepted by keep, preserving order."""
        root = self._shallow_copy()
        stack = [(self, root)]
        while stack:
            source, target = stack.pop()
            for child in source._children:
                if not keep(child):
                    continue
                copy = child._shallow_copy()
                target._attach(copy)
                stack.append((child, copy))
        return root

    def _shallow_copy(self) -> TreeNode:
        copy = TreeNode(
            id=self.id,
            parent_id=self.parent_id,
            name=self.name,
            weight=self.weight,
            extra=dict(self.extra),
            config=self.config,
        )
        copy._synthetic = self._synthetic
        return copy
