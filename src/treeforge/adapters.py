"""Record adapters - Extract tree fields from caller records.

This module provides:
- RecordAdapter: Protocol every adapter satisfies
- NodeRecord: Plain record type read directly by the default adapter
- DefaultAdapter: Reads fields by key (mappings) or attribute (objects)
- FunctionAdapter: Reads fields through caller-supplied callables
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable

from treeforge.config import DEFAULT_CONFIG, TreeConfig
from treeforge.errors import ConversionError

_MISSING = object()


@runtime_checkable
class RecordAdapter(Protocol):
    """Protocol for record adapters.

    Adapters are pure: they read a record and never modify it. Failing
    to produce an id must raise ConversionError.
    """

    def id(self, record: Any) -> Any:
        """Return the record's id."""
        ...

    def parent_id(self, record: Any) -> Any:
        """Return the id of the record's parent."""
        ...

    def name(self, record: Any) -> str | None:
        """Return the display name, if any."""
        ...

    def weight(self, record: Any) -> Any:
        """Return the ordering weight, if any."""
        ...

    def extra(self, record: Any) -> Mapping[str, Any]:
        """Return additional attributes to copy onto the node."""
        ...


@dataclass
class NodeRecord:
    """A flat record that already carries the tree fields.

    Attributes:
        id: Record id.
        parent_id: Id of the parent record.
        name: Display name.
        weight: Ordering weight among siblings.
        extra: Additional attributes.
    """

    id: Any
    parent_id: Any = None
    name: str | None = None
    weight: Any = None
    extra: dict[str, Any] = field(default_factory=dict)


class DefaultAdapter:
    """Adapter for records that expose the tree fields directly.

    Mappings are read by key and objects by attribute, using the field
    bindings of the config. For mappings, every key that is not bound to
    a tree field becomes an extra attribute; objects contribute their
    ``extra`` attribute when they have one.
    """

    def __init__(self, config: TreeConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._bound = {
            self.config.id_key,
            self.config.parent_id_key,
            self.config.name_key,
            self.config.weight_key,
            self.config.children_key,
        }

    def _get(self, record: Any, key: str) -> Any:
        if isinstance(record, Mapping):
            return record.get(key, _MISSING)
        return getattr(record, key, _MISSING)

    def id(self, record: Any) -> Any:
        value = self._get(record, self.config.id_key)
        if value is _MISSING:
            raise ConversionError(
                f"{type(record).__name__} has no '{self.config.id_key}' field", record=record
            )
        return value

    def parent_id(self, record: Any) -> Any:
        value = self._get(record, self.config.parent_id_key)
        return None if value is _MISSING else value

    def name(self, record: Any) -> str | None:
        value = self._get(record, self.config.name_key)
        return None if value is _MISSING else value

    def weight(self, record: Any) -> Any:
        value = self._get(record, self.config.weight_key)
        return None if value is _MISSING else value

    def extra(self, record: Any) -> Mapping[str, Any]:
        if isinstance(record, Mapping):
            return {k: v for k, v in record.items() if k not in self._bound}
        value = getattr(record, "extra", None)
        return value if isinstance(value, Mapping) else {}


class FunctionAdapter:
    """Adapter built from accessor callables.

    Example:
        adapter = FunctionAdapter(
            id_fn=lambda dept: dept.code,
            parent_id_fn=lambda dept: dept.parent_code,
            name_fn=lambda dept: dept.title,
        )
    """

    def __init__(
        self,
        id_fn: Callable[[Any], Any],
        parent_id_fn: Callable[[Any], Any],
        name_fn: Callable[[Any], str | None] | None = None,
        weight_fn: Callable[[Any], Any] | None = None,
        extra_fn: Callable[[Any], Mapping[str, Any]] | None = None,
    ) -> None:
        self._id_fn = id_fn
        self._parent_id_fn = parent_id_fn
        self._name_fn = name_fn
        self._weight_fn = weight_fn
        self._extra_fn = extra_fn

    def id(self, record: Any) -> Any:
        return self._id_fn(record)

    def parent_id(self, record: Any) -> Any:
        return self._parent_id_fn(record)

    def name(self, record: Any) -> str | None:
        return self._name_fn(record) if self._name_fn else None

    def weight(self, record: Any) -> Any:
        return self._weight_fn(record) if self._weight_fn else None

    def extra(self, record: Any) -> Mapping[str, Any]:
        return self._extra_fn(record) if self._extra_fn else {}
