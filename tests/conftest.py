"""Pytest fixtures for tree tests."""

import pytest


@pytest.fixture
def departments():
    """Three-level department chain under root id 0."""
    return [
        {"id": 1, "parent_id": 0, "name": "Tech Center"},
        {"id": 2, "parent_id": 1, "name": "R&D Center"},
        {"id": 3, "parent_id": 2, "name": "R&D Dept 1"},
    ]


@pytest.fixture
def dept_tree(departments):
    """Single-root tree built from the department chain."""
    from treeforge import build_single

    return build_single(departments, 0)


@pytest.fixture
def org_records():
    """Records with weights, siblings and extra attributes."""
    from treeforge import NodeRecord

    return [
        NodeRecord(id="hq", parent_id="root", name="Headquarters", weight=1),
        NodeRecord(id="sales", parent_id="hq", name="Sales", weight=2, extra={"floor": 3}),
        NodeRecord(id="eng", parent_id="hq", name="Engineering", weight=1),
        NodeRecord(id="ops", parent_id="hq", name="Operations", weight=2),
        NodeRecord(id="backend", parent_id="eng", name="Backend", weight=5),
        NodeRecord(id="frontend", parent_id="eng", name="Frontend"),
        NodeRecord(id="web", parent_id="eng", name="Web", weight=0),
        NodeRecord(id="branch", parent_id="root", name="Branch Office", weight=0),
    ]


@pytest.fixture
def org_tree(org_records):
    """Tree built from org_records under "root"."""
    from treeforge import TreeBuilder

    return TreeBuilder.of("root").append(org_records).build()
