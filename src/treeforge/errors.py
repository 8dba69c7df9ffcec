"""Exceptions raised while assembling trees.

All errors abort the build call that raised them; no partial tree is
returned.
"""

from __future__ import annotations

from typing import Any


class TreeError(Exception):
    """Base class for treeforge errors."""


class ConfigError(TreeError, ValueError):
    """Invalid or conflicting builder configuration."""


class ConversionError(TreeError):
    """A record adapter could not extract a required id.

    Attributes:
        position: Index of the offending record in the appended sequence.
        record: The offending record.
    """

    def __init__(self, message: str, position: int | None = None, record: Any = None) -> None:
        self.position = position
        self.record = record
        if position is not None:
            message = f"record #{position}: {message}"
        super().__init__(message)


class CycleObserved(TreeError):
    """A second parent claimed an id that is already attached.

    Only raised when the builder runs with ``strict_parents``.

    Attributes:
        node_id: The id claimed twice.
        parent_id: Id of the parent whose claim was rejected.
        kept_parent_id: Id of the parent that already holds the node.
    """

    def __init__(self, node_id: Any, parent_id: Any, kept_parent_id: Any) -> None:
        self.node_id = node_id
        self.parent_id = parent_id
        self.kept_parent_id = kept_parent_id
        super().__init__(
            f"node {node_id!r} claimed by parent {parent_id!r} "
            f"but already attached under {kept_parent_id!r}"
        )
