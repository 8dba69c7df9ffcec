"""Functional tree building on caller-owned record types.

build_generic links records to their children through caller callables
instead of producing TreeNode objects.
"""

from __future__ import annotations

from typing import Callable, Iterator, TypeVar

R = TypeVar("R")
K = TypeVar("K")

_DONE = object()


def build_generic(
    records: list[R],
    root_id: K,
    id_fn: Callable[[R], K],
    parent_id_fn: Callable[[R], K],
    attach_fn: Callable[[R, list[R]], None],
) -> list[R]:
    """Build a forest in place on the caller's records.

    Records whose parent id equals ``root_id`` form the result. Every
    placed record receives its children through ``attach_fn`` once its
    own subtree is complete; leaves receive an empty list. A visited set
    shared by the whole walk keeps any id from being placed twice, so
    cyclic or duplicated input terminates and first discovery wins.

    Args:
        records: Records to link.
        root_id: Parent id of the top-level records.
        id_fn: Returns a record's id.
        parent_id_fn: Returns a record's parent id.
        attach_fn: Called as attach_fn(record, children).

    Returns:
        The top-level records, in input order.
    """
    by_parent: dict[K, list[R]] = {}
    for record in records:
        by_parent.setdefault(parent_id_fn(record), []).append(record)

    visited: set[K] = set()
    top_level: list[R] = []
    for record in by_parent.get(root_id, []):
        record_id = id_fn(record)
        if record_id not in visited:
            visited.add(record_id)
            top_level.append(record)

    for top in top_level:
        stack: list[tuple[R, Iterator[R], list[R]]] = [
            (top, iter(by_parent.get(id_fn(top), [])), [])
        ]
        while stack:
            record, candidates, children = stack[-1]
            candidate = next(candidates, _DONE)
            if candidate is _DONE:
                attach_fn(record, children)
                stack.pop()
                continue
            candidate_id = id_fn(candidate)
            if candidate_id in visited:
                continue
            visited.add(candidate_id)
            children.append(candidate)
            stack.append((candidate, iter(by_parent.get(candidate_id, [])), []))

    return top_level
