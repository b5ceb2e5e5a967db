from __future__ import annotations

import logging
from typing import Any

from .index import build_children_index
from .models import PersonNode

log = logging.getLogger(__name__)


def father_of(person_id: Any, index: dict[Any, PersonNode]) -> PersonNode | None:
    person = index.get(person_id)
    if person is None or person.father_id is None:
        return None
    return index.get(person.father_id)


def children_of(
    person_id: Any,
    index: dict[Any, PersonNode],
    *,
    require_male_parent: bool = False,
    by_mother: bool = False,
) -> list[PersonNode]:
    """All indexed nodes whose ``father_id`` is ``person_id``.

    ``require_male_parent`` returns nothing for a parent who is not male.
    ``by_mother`` also matches ``mother_id``, for listing a woman's children;
    each child appears once, in snapshot order.
    """

    if require_male_parent:
        parent = index.get(person_id)
        if parent is None or not parent.is_male:
            return []
    if person_id is None:
        return []
    if by_mother:
        return [n for n in index.values() if person_id in (n.father_id, n.mother_id)]
    return [n for n in index.values() if n.father_id == person_id]


def siblings_of(person_id: Any, index: dict[Any, PersonNode]) -> list[PersonNode]:
    father = father_of(person_id, index)
    if father is None:
        return []
    return [n for n in children_of(father.id, index) if n.id != person_id]


def descendant_count(person_id: Any, index: dict[Any, PersonNode]) -> int:
    """Total descendants through ``father_id``.

    A precomputed ``descendants_count`` on the record wins. Otherwise the
    subtree is walked iteratively; each id is counted once, so a loop in the
    data cannot inflate the total or hang the walk.
    """

    person = index.get(person_id)
    if person is None:
        return 0
    if person.descendants_count is not None:
        return person.descendants_count

    kids_by_father = build_children_index(index)
    seen: set[Any] = {person_id}
    stack = [person_id]
    count = 0
    while stack:
        current = stack.pop()
        for child in kids_by_father.get(current, []):
            if child.id in seen:
                log.warning("father_id cycle detected below %s at %s", person_id, child.id)
                continue
            seen.add(child.id)
            count += 1
            stack.append(child.id)
    return count


def sibling_count(person_id: Any, index: dict[Any, PersonNode]) -> int:
    father = father_of(person_id, index)
    if father is None:
        return 0
    return max(0, len(children_of(father.id, index)) - 1)
