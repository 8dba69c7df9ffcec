"""
treeforge.config - Builder configuration.

Provides the TreeConfig dataclass describing field bindings for
schema-less records and the policies applied during assembly, plus
a loader for the ``[tree]`` table of a TOML file.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import tomlkit
from tomlkit.exceptions import ParseError

from treeforge.errors import ConfigError

# camelCase spellings accepted by from_dict()
_ALIASES = {
    "idKey": "id_key",
    "parentIdKey": "parent_id_key",
    "nameKey": "name_key",
    "weightKey": "weight_key",
    "childrenKey": "children_key",
    "maxDepth": "max_depth",
    "deep": "max_depth",
    "childPredicate": "child_predicate",
    "weightComparator": "weight_comparator",
    "sortChildren": "sort_children",
    "strictParents": "strict_parents",
    "skipInvalid": "skip_invalid",
}


@dataclass(frozen=True)
class TreeConfig:
    """
    Configuration for tree assembly.

    Attributes:
        id_key: Field holding the record id (default: "id")
        parent_id_key: Field holding the parent id (default: "parent_id")
        name_key: Field holding the display name (default: "name")
        weight_key: Field holding the ordering weight (default: "weight")
        children_key: Field used for children when serializing (default: "children")
        max_depth: Deepest level that may receive children; root is 0 (default: None)
        child_predicate: Callable(record) -> bool; a false result drops the subtree
        weight_comparator: Callable(a, b) -> int replacing natural weight ordering
        sort_children: Whether siblings are ordered by weight (default: True)
        strict_parents: Raise CycleObserved when a second parent claims an id
        skip_invalid: Skip records without an id instead of failing the build
    """

    id_key: str = "id"
    parent_id_key: str = "parent_id"
    name_key: str = "name"
    weight_key: str = "weight"
    children_key: str = "children"
    max_depth: int | None = None
    child_predicate: Callable[[Any], bool] | None = None
    weight_comparator: Callable[[Any, Any], int] | None = None
    sort_children: bool = True
    strict_parents: bool = False
    skip_invalid: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TreeConfig:
        """
        Create TreeConfig from a configuration dictionary.

        Args:
            data: Dictionary from the [tree] config section. Keys may use
                snake_case or the camelCase spellings (idKey, maxDepth, ...).

        Returns:
            TreeConfig instance with values from data or defaults

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown tree config key: {key}")
            values[name] = value
        config = cls(**values)
        config.validate()
        return config

    def replace(self, **changes: Any) -> TreeConfig:
        """Return a copy with the given fields changed."""
        config = dataclasses.replace(self, **changes)
        config.validate()
        return config

    def validate(self) -> None:
        """Check the configuration for invalid or conflicting values.

        Raises:
            ConfigError: Describing the first problem found.
        """
        keys = {
            "id_key": self.id_key,
            "parent_id_key": self.parent_id_key,
            "name_key": self.name_key,
            "weight_key": self.weight_key,
            "children_key": self.children_key,
        }
        for field_name, key in keys.items():
            if not isinstance(key, str) or not key:
                raise ConfigError(f"{field_name} must be a non-empty string")
        if len(set(keys.values())) != len(keys):
            raise ConfigError(f"Field keys must be distinct: {sorted(keys.values())}")

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigError(f"max_depth must be an int or None, got {self.max_depth!r}")
            if self.max_depth < 0:
                raise ConfigError(f"max_depth must not be negative, got {self.max_depth}")

        if self.child_predicate is not None and not callable(self.child_predicate):
            raise ConfigError("child_predicate must be callable")
        if self.weight_comparator is not None:
            if not callable(self.weight_comparator):
                raise ConfigError("weight_comparator must be callable")
            if not self.sort_children:
                raise ConfigError("weight_comparator given but sort_children is disabled")


DEFAULT_CONFIG = TreeConfig()


def load_config(path: Path | str, section: str = "tree") -> TreeConfig:
    """Load a TreeConfig from a TOML file.

    Args:
        path: Path to the TOML file.
        section: Table holding the tree settings (default "tree").

    Returns:
        TreeConfig built from the table, or defaults if the table is absent.

    Raises:
        ConfigError: If the table is malformed or holds invalid values.
    """
    content = Path(path).read_text(encoding="utf-8")
    try:
        doc = tomlkit.parse(content)
    except ParseError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    table = doc.get(section)
    if table is None:
        return DEFAULT_CONFIG
    if not isinstance(table, dict):
        raise ConfigError(f"[{section}] in {path} must be a table")
    return TreeConfig.from_dict(table.unwrap())
