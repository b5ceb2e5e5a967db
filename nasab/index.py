from __future__ import annotations

from typing import Any, Iterable

from .models import PersonNode


def build_index(nodes: Iterable[PersonNode]) -> dict[Any, PersonNode]:
    """Map person id -> node. Later duplicates overwrite earlier ones."""

    index: dict[Any, PersonNode] = {}
    for node in nodes:
        index[node.id] = node
    return index


def build_children_index(index: dict[Any, PersonNode]) -> dict[Any, list[PersonNode]]:
    """Group indexed nodes by ``father_id``, keeping snapshot order within each group."""

    out: dict[Any, list[PersonNode]] = {}
    for node in index.values():
        if node.father_id is None:
            continue
        out.setdefault(node.father_id, []).append(node)
    return out
