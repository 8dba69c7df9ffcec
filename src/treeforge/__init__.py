"""
treeforge - Assemble trees from flat parent-linked records

Records that each carry an id and a parent id are indexed, linked into
a tree under a configured root id, ordered by weight, and navigated by
id lookup or ancestor chains.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("treeforge")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from treeforge.adapters import DefaultAdapter, FunctionAdapter, NodeRecord, RecordAdapter
from treeforge.api import (
    ancestor_ids,
    ancestor_names,
    build_forest,
    build_forest_from_trees,
    build_generic,
    build_single,
    build_single_from_trees,
    create_empty_node,
    find_node,
)
from treeforge.builder import DroppedClaim, TreeBuilder
from treeforge.config import DEFAULT_CONFIG, TreeConfig, load_config
from treeforge.errors import ConfigError, ConversionError, CycleObserved, TreeError
from treeforge.node import TreeNode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "DEFAULT_CONFIG",
    "ConfigError",
    "ConversionError",
    "CycleObserved",
    "DefaultAdapter",
    "DroppedClaim",
    "FunctionAdapter",
    "NodeRecord",
    "RecordAdapter",
    "TreeBuilder",
    "TreeConfig",
    "TreeError",
    "TreeNode",
    "ancestor_ids",
    "ancestor_names",
    "build_forest",
    "build_forest_from_trees",
    "build_generic",
    "build_single",
    "build_single_from_trees",
    "create_empty_node",
    "find_node",
    "load_config",
]
