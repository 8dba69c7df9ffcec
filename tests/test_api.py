"""Tests for the one-call entry points."""

from treeforge import (
    TreeConfig,
    ancestor_ids,
    ancestor_names,
    build_forest,
    build_forest_from_trees,
    build_single,
    build_single_from_trees,
    create_empty_node,
    find_node,
)


class TestBuild:
    """Tests for build_single() and build_forest()."""

    def test_department_chain(self, departments):
        """Test the three-level department example."""
        root = build_single(departments, 0)

        assert root.id == 0
        assert [n.id for n in root.walk()] == [0, 1, 2, 3]
        assert find_node(root, 3).name == "R&D Dept 1"

    def test_ancestors_of_department(self, dept_tree):
        """Test ancestor chains of the deepest department."""
        node = find_node(dept_tree, 3)

        assert ancestor_names(node, include_self=False) == ["R&D Center", "Tech Center"]
        assert ancestor_ids(node, include_self=True) == [3, 2, 1]

    def test_default_root_id(self, departments):
        """Test that the root id defaults to 0."""
        assert build_single(departments).id == 0

    def test_empty(self):
        """Test empty input."""
        assert build_single([], "any").child_count() == 0
        assert build_forest([], "any") == []

    def test_forest_is_root_children(self, org_records):
        """Test that the forest equals the single tree's children."""
        forest = build_forest(org_records, "root")
        root = build_single(org_records, "root")

        assert forest == root.children

    def test_config_passed_through(self, departments):
        """Test that the config reaches the builder."""
        root = build_single(departments, 0, TreeConfig(max_depth=1))

        assert [n.id for n in root.walk()] == [0, 1]


class TestMerge:
    """Tests for build_single_from_trees()."""

    def test_merge_rebuilds_tree(self, org_tree):
        """Test that nodes keyed by id merge back into the same shape."""
        nodes = {n.id: n for n in org_tree.walk() if not n.is_root}

        assert build_single_from_trees(nodes, "root") == org_tree

    def test_merge_reuses_node_config(self, departments):
        """Test that the supplied nodes' config is used for the merge."""
        config = TreeConfig(max_depth=2)
        root = build_single(departments, 0, config)
        nodes = {n.id: n for n in root.walk() if not n.is_root}

        merged = build_single_from_trees(nodes, 0)
        assert merged.config is config
        assert [n.id for n in merged.walk()] == [0, 1, 2]

    def test_merge_single_nodes(self):
        """Test merging standalone nodes."""
        nodes = {
            1: create_empty_node(1),
            2: create_empty_node(2),
        }
        nodes[1].parent_id = 0
        nodes[2].parent_id = 1

        merged = build_single_from_trees(nodes, 0)
        assert ancestor_ids(find_node(merged, 2), include_self=True) == [2, 1]

    def test_empty_mapping(self):
        """Test that an empty mapping gives an empty root."""
        root = build_single_from_trees({}, 9)

        assert root.id == 9
        assert root.is_leaf
        assert build_forest_from_trees({}, 9) == []

    def test_none_values_ignored(self, org_tree):
        """Test that None entries in the mapping are skipped."""
        nodes = {n.id: n for n in org_tree.walk() if not n.is_root}
        nodes["ghost"] = None

        assert build_forest_from_trees(nodes, "root") == org_tree.children
