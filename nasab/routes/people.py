from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query

from ..ancestry import ancestor_chain, common_name, full_name, infer_generation
from ..db import db_conn
from ..index import build_index
from ..ordering import sort_siblings_oldest_first
from ..queries import _fetch_profile, _fetch_snapshot
from ..relations import children_of, descendant_count, father_of, sibling_count
from ..resolve import _resolve_person_id
from ..serialize import _person_node_to_public

router = APIRouter()


@router.get("/people/{person_id}")
def get_person(person_id: str) -> dict[str, Any]:
    if not person_id:
        raise HTTPException(status_code=400, detail="missing person_id")

    with db_conn() as conn:
        person = _fetch_profile(conn, person_id)

    if person is None:
        raise HTTPException(status_code=404, detail="person not found")
    return _person_node_to_public(person)


@router.get("/people/{person_id}/lineage")
def get_person_lineage(
    person_id: str,
    include_self: Optional[bool] = None,
    include_family: bool = True,
    generations: Optional[int] = Query(default=None, ge=0, le=20),
) -> dict[str, Any]:
    """Names and counts shown on the profile sheet.

    Returns:
    - full_name / common_name: lineage strings (see ``include_self``)
    - chain: ancestor ids, person first
    - children: oldest first by HID
    - counts: children, siblings, descendants
    """

    if not person_id:
        raise HTTPException(status_code=400, detail="missing person_id")

    with db_conn() as conn:
        nodes = _fetch_snapshot(conn)

    index = build_index(nodes)
    resolved_id = _resolve_person_id(person_id, index)
    person = index[resolved_id]

    father = father_of(resolved_id, index)
    # Men list father_id children; anyone else also matches mother_id.
    children = sort_siblings_oldest_first(
        children_of(resolved_id, index, by_mother=not person.is_male)
    )

    return {
        "person": _person_node_to_public(person),
        "father": _person_node_to_public(father) if father is not None else None,
        "full_name": full_name(
            person,
            index,
            include_self=include_self,
            include_family=include_family,
        ),
        "common_name": common_name(person, index, generations=generations),
        "chain": [p.id for p in ancestor_chain(resolved_id, index)],
        "generation": infer_generation(person, index),
        "children": [_person_node_to_public(c) for c in children],
        "counts": {
            "children": len(children),
            "siblings": sibling_count(resolved_id, index),
            "descendants": descendant_count(resolved_id, index),
        },
    }
