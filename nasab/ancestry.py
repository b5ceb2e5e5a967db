from __future__ import annotations

import logging
from typing import Any

from .config import get_connectors, get_family_name, get_name_include_self
from .models import PersonNode

log = logging.getLogger(__name__)

# Real lineages in the dataset are far shallower; the cap only exists to stop
# a malformed father_id loop.
MAX_ANCESTRY_DEPTH = 20


def ancestor_chain(
    start_id: Any,
    index: dict[Any, PersonNode],
    *,
    max_depth: int = MAX_ANCESTRY_DEPTH,
) -> list[PersonNode]:
    """Return ``[start, father, grandfather, ...]`` following ``father_id``.

    The walk stops at a null or unindexed father, at an id already seen, or
    once ``max_depth`` people have been collected. An unknown ``start_id``
    gives an empty chain.
    """

    chain: list[PersonNode] = []
    seen: set[Any] = set()
    current_id = start_id

    while current_id is not None and current_id in index:
        if current_id in seen:
            log.warning("father_id cycle detected at %s (start %s)", current_id, start_id)
            break
        if len(chain) >= max_depth:
            log.warning("ancestor chain for %s truncated at depth %d", start_id, max_depth)
            break
        seen.add(current_id)
        person = index[current_id]
        chain.append(person)
        current_id = person.father_id

    return chain


def _lineage(
    person: PersonNode,
    index: dict[Any, PersonNode],
    *,
    max_depth: int = MAX_ANCESTRY_DEPTH,
) -> list[PersonNode]:
    chain = ancestor_chain(person.id, index, max_depth=max_depth)
    if chain:
        return chain
    # Record not in this snapshot; its father may still be.
    return [person, *ancestor_chain(person.father_id, index, max_depth=max_depth - 1)]


def _connector_for(person: PersonNode, connectors: dict[str, str] | None) -> str:
    words = connectors or get_connectors()
    if person.gender == "female":
        return words["female"]
    return words["male"]


def full_name(
    person: PersonNode,
    index: dict[Any, PersonNode],
    family_name: str | None = None,
    *,
    include_self: bool | None = None,
    include_family: bool = True,
    connectors: dict[str, str] | None = None,
) -> str:
    """Lineage display name, e.g. "Nora bint Abdullah Saleh Al-Family".

    The gender connector is placed once, right after the first name; the
    remaining ancestor names are joined with plain spaces.

    ``include_self=False`` drops the person's own name, so the result starts
    with the connector (the sheet-subtitle form). When omitted it follows the
    ``NASAB_NAME_INCLUDE_SELF`` setting. A person with no indexed ancestors is
    rendered as their name, plus the family name when ``include_family``.
    """

    if include_self is None:
        include_self = get_name_include_self()
    if family_name is None:
        family_name = get_family_name()

    chain = _lineage(person, index)
    names = [p.name for p in chain]
    if include_family and family_name:
        names.append(family_name)

    if len(chain) < 2:
        return " ".join(names)

    connector = _connector_for(person, connectors)
    if include_self:
        return " ".join([names[0], connector, *names[1:]])
    return " ".join([connector, *names[1:]])


def common_name(
    person: PersonNode,
    index: dict[Any, PersonNode],
    *,
    generations: int | None = None,
    connectors: dict[str, str] | None = None,
) -> str:
    """Short lineage name without the family name.

    ``generations`` limits how many ancestor names follow the person's own
    name (``1`` gives "name bin father").
    """

    chain = _lineage(person, index)
    if generations is not None:
        chain = chain[: max(0, generations) + 1]

    names = [p.name for p in chain]
    if len(names) < 2:
        return names[0]
    return " ".join([names[0], _connector_for(person, connectors), *names[1:]])


def infer_generation(person: PersonNode, index: dict[Any, PersonNode]) -> int:
    """Supplied generation if present, otherwise the lineage length (root = 1).

    Unlike the name chain this is not cut at ``MAX_ANCESTRY_DEPTH``; the
    visited set alone ends the walk, as in the branch view.
    """

    if person.generation is not None:
        return person.generation
    return len(_lineage(person, index, max_depth=len(index) + 1))
