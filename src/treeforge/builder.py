"""Tree Builder - Assembles a tree from flat parent-linked records.

This module provides the builder pattern for constructing a tree:
records are appended (possibly in several batches), bucketed by parent
id, and assembled under a configured root id when build() is called.

Example:
    builder = TreeBuilder.of(0)
    builder.append(departments)
    root = builder.build()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Iterable, Iterator, Mapping

from treeforge.adapters import DefaultAdapter, RecordAdapter
from treeforge.config import DEFAULT_CONFIG, TreeConfig
from treeforge.errors import ConfigError, ConversionError, CycleObserved
from treeforge.node import TreeNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DroppedClaim:
    """A parent's claim on an id that was already attached elsewhere.

    Attributes:
        node_id: The id claimed again.
        parent_id: Id of the parent whose claim was dropped.
        kept_parent_id: Id of the parent holding the node.
    """

    node_id: Any
    parent_id: Any
    kept_parent_id: Any

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.node_id!r} under {self.parent_id!r} (kept under {self.kept_parent_id!r})"


@dataclass
class _Entry:
    """A record with its fields already extracted."""

    id: Any
    parent_id: Any
    name: str | None
    weight: Any
    extra: dict[str, Any]
    record: Any = field(repr=False)


class TreeBuilder:
    """Builds a tree from records appended in one or more batches.

    The builder owns its record index for one append*/build session and
    is not safe to share between threads.
    """

    def __init__(self, root_id: Any, config: TreeConfig | None = None) -> None:
        """Initialize the builder.

        Args:
            root_id: Id of the root; records whose parent id equals it
                become the top-level children.
            config: Builder configuration (uses DEFAULT_CONFIG if not provided).

        Raises:
            ConfigError: If the configuration is invalid or root_id is unhashable.
        """
        try:
            hash(root_id)
        except TypeError as e:
            raise ConfigError(f"root_id must be hashable, got {root_id!r}") from e
        self.root_id = root_id
        self.config = config or DEFAULT_CONFIG
        self.config.validate()
        self._buckets: dict[Any, list[_Entry]] = {}
        self._root_entry: _Entry | None = None
        self._record_count = 0
        self._dropped: list[DroppedClaim] = []

    @classmethod
    def of(cls, root_id: Any, config: TreeConfig | None = None) -> TreeBuilder:
        """Create a builder for the given root id."""
        return cls(root_id, config)

    @property
    def record_count(self) -> int:
        """Number of records appended so far."""
        return self._record_count

    @property
    def dropped_claims(self) -> list[DroppedClaim]:
        """Claims rejected by the last build() because the id was already placed."""
        return list(self._dropped)

    def append(self, records: Iterable[Any], adapter: RecordAdapter | None = None) -> TreeBuilder:
        """Add records to the index.

        The batch is committed only if every record converts; with
        ``skip_invalid`` records the adapter cannot read are skipped instead.

        Args:
            records: Records to add.
            adapter: Extracts tree fields (default: DefaultAdapter for the config).

        Returns:
            Self for method chaining.

        Raises:
            ConversionError: If a record has no id and skip_invalid is off.
        """
        adapter = adapter or DefaultAdapter(self.config)
        entries = []
        for position, record in enumerate(records):
            try:
                entries.append(self._parse(record, adapter))
            except ConversionError as e:
                if not self.config.skip_invalid:
                    cause = e.__cause__ or e
                    raise ConversionError(str(e), position=position, record=record) from cause
                logger.warning("Skipping record #%d: %s", position, e)

        for entry in entries:
            self._buckets.setdefault(entry.parent_id, []).append(entry)
            if self._root_entry is None and entry.id == self.root_id:
                self._root_entry = entry
        self._record_count += len(entries)
        return self

    def append_trees(self, trees: Mapping[Any, TreeNode]) -> TreeBuilder:
        """Add already-built nodes to be re-parented under this builder's root.

        Only the fields of each node are read; children and parent links of
        the supplied nodes are ignored and the nodes are not modified.

        Args:
            trees: Mapping of id to TreeNode.

        Returns:
            Self for method chaining.
        """
        return self.append((node for node in trees.values() if node is not None), DefaultAdapter())

    def reset(self) -> TreeBuilder:
        """Discard all appended records."""
        self._buckets.clear()
        self._root_entry = None
        self._record_count = 0
        self._dropped = []
        return self

    def build(self) -> TreeNode:
        """Assemble the tree under the root id.

        Returns:
            The root node. It is synthetic (id only) unless a record carries
            the root id, in which case the root takes that record's fields.

        Raises:
            CycleObserved: With strict_parents, when an id is claimed by a
                second parent.
            ConfigError: If sibling weights cannot be ordered.
        """
        config = self.config
        root = self._make_root()
        # id -> (parent id, source record) of every placed node
        placed: dict[Any, tuple[Any, Any]] = {
            self.root_id: (None, self._root_entry.record if self._root_entry else None)
        }
        self._dropped = []

        stack: list[tuple[TreeNode, Iterator[_Entry], int]] = [(root, self._candidates(root.id, 0), 0)]
        while stack:
            node, candidates, depth = stack[-1]
            entry = next(candidates, None)
            if entry is None:
                self._sort_children(node)
                stack.pop()
                continue

            if entry.id in placed:
                kept, kept_record = placed[entry.id]
                same_parent = kept == node.id and entry.id != self.root_id
                if same_parent and entry.record is kept_record:
                    # Same record appended twice
                    continue
                if config.strict_parents and not same_parent:
                    raise CycleObserved(entry.id, node.id, kept)
                self._dropped.append(DroppedClaim(entry.id, node.id, kept))
                logger.debug("Dropping claim of %r on %r, already under %r", node.id, entry.id, kept)
                continue

            if config.child_predicate is not None and not config.child_predicate(entry.record):
                continue

            child = self._make_node(entry)
            placed[entry.id] = (node.id, entry.record)
            node._attach(child)
            stack.append((child, self._candidates(child.id, depth + 1), depth + 1))

        logger.debug(
            "Built tree under %r: %d nodes from %d records, %d claims dropped",
            self.root_id,
            len(placed) - 1,
            self._record_count,
            len(self._dropped),
        )
        return root

    def build_forest(self) -> list[TreeNode]:
        """Assemble the tree and return the root's children."""
        return self.build().children

    def _parse(self, record: Any, adapter: RecordAdapter) -> _Entry:
        """Extract the tree fields of one record."""
        try:
            node_id = adapter.id(record)
            parent_id = adapter.parent_id(record)
            hash(node_id)
            hash(parent_id)
            return _Entry(
                id=node_id,
                parent_id=parent_id,
                name=adapter.name(record),
                weight=adapter.weight(record),
                extra=dict(adapter.extra(record) or {}),
                record=record,
            )
        except ConversionError:
            raise
        except (AttributeError, LookupError, TypeError, ValueError) as e:
            raise ConversionError(f"cannot read {type(record).__name__}: {e}", record=record) from e

    def _candidates(self, node_id: Any, depth: int) -> Iterator[_Entry]:
        """Iterate candidate children, honoring max_depth."""
        max_depth = self.config.max_depth
        if max_depth is not None and depth >= max_depth:
            return iter(())
        return iter(self._buckets.get(node_id, ()))

    def _make_root(self) -> TreeNode:
        root = TreeNode(id=self.root_id, config=self.config)
        if self._root_entry is None:
            root._synthetic = True
        else:
            root.parent_id = self._root_entry.parent_id
            root.name = self._root_entry.name
            root.weight = self._root_entry.weight
            root.extra = dict(self._root_entry.extra)
        return root

    def _make_node(self, entry: _Entry) -> TreeNode:
        return TreeNode(
            id=entry.id,
            parent_id=entry.parent_id,
            name=entry.name,
            weight=entry.weight,
            extra=dict(entry.extra),
            config=self.config,
        )

    def _sort_children(self, node: TreeNode) -> None:
        """Order children by weight; absent weights go last, ties keep order."""
        if not self.config.sort_children or len(node._children) < 2:
            return
        weighted = [c for c in node._children if c.weight is not None]
        unweighted = [c for c in node._children if c.weight is None]
        comparator = self.config.weight_comparator
        try:
            if comparator is not None:
                weighted.sort(key=cmp_to_key(lambda a, b: comparator(a.weight, b.weight)))
            else:
                weighted.sort(key=lambda c: c.weight)
        except TypeError as e:
            raise ConfigError(
                f"Weights under {node.id!r} cannot be ordered ({e}); supply weight_comparator"
            ) from e
        node._children[:] = weighted + unweighted
