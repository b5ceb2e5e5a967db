"""Branch-scoped views of a person snapshot.

A branch view is everything a viewer needs around one focus person without
pulling in the whole tree:

- the focus person
- every ancestor up the ``father_id`` line
- every descendant, at any depth
- siblings and uncles/aunts, one level only

Collateral relatives whose children are left out carry a count so the
renderer can draw a "more below" badge instead of the full cousin subtree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from .index import build_children_index, build_index
from .models import PersonNode

log = logging.getLogger(__name__)

# Only the focused tree view caps descent; the plain branch view walks the
# full subtree guarded by its visited set.
_FOCUSED_MAX_DESCENDANT_DEPTH = 100


@dataclass
class _Selection:
    visible: set[Any] = field(default_factory=set)
    hidden_counts: dict[Any, int] = field(default_factory=dict)
    root_id: Any = None


def _add_ancestors(sel: _Selection, focus: PersonNode, index: dict[Any, PersonNode]) -> None:
    sel.root_id = focus.id
    seen: set[Any] = {focus.id}
    current_id = focus.father_id
    while current_id is not None and current_id in index:
        if current_id in seen:
            log.warning("father_id cycle detected above %s at %s", focus.id, current_id)
            break
        seen.add(current_id)
        sel.visible.add(current_id)
        sel.root_id = current_id
        current_id = index[current_id].father_id


def _add_descendants(
    sel: _Selection,
    focus_id: Any,
    kids_by_father: dict[Any, list[PersonNode]],
    *,
    max_depth: int | None = None,
) -> None:
    seen: set[Any] = {focus_id}
    stack: list[tuple[Any, int]] = [(focus_id, 0)]
    while stack:
        node_id, depth = stack.pop()
        if max_depth is not None and depth > max_depth:
            log.warning("descendant walk below %s stopped at depth %d", focus_id, max_depth)
            continue
        for child in kids_by_father.get(node_id, []):
            if child.id in seen:
                continue
            seen.add(child.id)
            sel.visible.add(child.id)
            stack.append((child.id, depth + 1))


def _add_collateral(
    sel: _Selection,
    father_id: Any,
    exclude_id: Any,
    kids_by_father: dict[Any, list[PersonNode]],
) -> None:
    """Show ``father_id``'s other children, flagging (not adding) their own kids."""

    for relative in kids_by_father.get(father_id, []):
        if relative.id == exclude_id:
            continue
        sel.visible.add(relative.id)
        hidden = len(kids_by_father.get(relative.id, []))
        if hidden:
            sel.hidden_counts[relative.id] = hidden


def _select_branch(
    focus: PersonNode,
    index: dict[Any, PersonNode],
    kids_by_father: dict[Any, list[PersonNode]],
    *,
    max_descendant_depth: int | None = None,
) -> _Selection:
    sel = _Selection(visible={focus.id})

    _add_ancestors(sel, focus, index)
    _add_descendants(sel, focus.id, kids_by_father, max_depth=max_descendant_depth)

    if focus.father_id is not None:
        # Siblings.
        _add_collateral(sel, focus.father_id, focus.id, kids_by_father)

        # Uncles and aunts.
        father = index.get(focus.father_id)
        if father is not None and father.father_id is not None and father.father_id in index:
            _add_collateral(sel, father.father_id, father.id, kids_by_father)

    return sel


def filter_for_branch(focus_id: Any, nodes: Iterable[PersonNode]) -> list[PersonNode]:
    """Return the branch view around ``focus_id``, in the input order.

    Nodes whose children were left out are returned as copies with
    ``has_hidden_descendants=True`` and ``hidden_descendant_count`` set.
    An unknown ``focus_id`` yields ``[]``.
    """

    all_nodes = list(nodes)
    index = build_index(all_nodes)
    focus = index.get(focus_id)
    if focus is None:
        if all_nodes:
            log.warning("focus person %s not found in %d nodes", focus_id, len(all_nodes))
        return []

    sel = _select_branch(focus, index, build_children_index(index))

    out: list[PersonNode] = []
    for node in all_nodes:
        if node.id not in sel.visible:
            continue
        hidden = sel.hidden_counts.get(node.id)
        if hidden:
            node = replace(node, has_hidden_descendants=True, hidden_descendant_count=hidden)
        out.append(node)
    return out


def _spouse_ids(focus: PersonNode) -> list[Any]:
    marriages = focus.extra.get("marriages")
    if not isinstance(marriages, list):
        return []
    out: list[Any] = []
    for marriage in marriages:
        if not isinstance(marriage, dict):
            continue
        spouse_id = marriage.get("spouse_id")
        if isinstance(spouse_id, (str, int)) and not isinstance(spouse_id, bool):
            out.append(spouse_id)
    return out


def filter_tree_for_person(focus_id: Any, nodes: Iterable[PersonNode]) -> list[PersonNode]:
    """Focused tree view: the branch view plus in-laws, prepared for layout.

    On top of :func:`filter_for_branch` this adds each spouse listed in the
    focus person's ``marriages`` along with the spouse's father and mother,
    marks the focus person, and detaches the highest reached ancestor
    (``is_filtered_root``, ``father_id=None``) so a ``father_id``
    pointing outside the snapshot cannot leave the view without a root.
    """

    all_nodes = list(nodes)
    index = build_index(all_nodes)
    focus = index.get(focus_id)
    if focus is None:
        if all_nodes:
            log.warning("focus person %s not found in %d nodes", focus_id, len(all_nodes))
        return []

    sel = _select_branch(
        focus,
        index,
        build_children_index(index),
        max_descendant_depth=_FOCUSED_MAX_DESCENDANT_DEPTH,
    )

    for spouse_id in _spouse_ids(focus):
        spouse = index.get(spouse_id)
        if spouse is None:
            continue
        sel.visible.add(spouse_id)
        for parent_id in (spouse.father_id, spouse.mother_id):
            if parent_id is not None and parent_id in index:
                sel.visible.add(parent_id)

    out: list[PersonNode] = []
    for node in all_nodes:
        if node.id not in sel.visible:
            continue
        changes: dict[str, Any] = {}
        hidden = sel.hidden_counts.get(node.id)
        if hidden:
            changes["has_hidden_descendants"] = True
            changes["hidden_descendant_count"] = hidden
        if node.id == sel.root_id:
            changes["is_filtered_root"] = True
            changes["father_id"] = None
        if node.id == focus_id:
            changes["is_focus_person"] = True
        out.append(replace(node, **changes) if changes else node)

    return out
