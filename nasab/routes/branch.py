from __future__ import annotations

from typing import Any, Callable, Iterable, Literal

from fastapi import APIRouter, Body, HTTPException, Query

from ..branch import filter_for_branch, filter_tree_for_person
from ..db import db_conn
from ..index import build_index
from ..models import PersonNode
from ..queries import _fetch_snapshot
from ..resolve import _resolve_person_id
from ..serialize import _is_valid_id, _parse_nodes, _person_node_to_public

router = APIRouter()

_VIEWS: dict[str, Callable[[Any, Iterable[PersonNode]], list[PersonNode]]] = {
    "branch": filter_for_branch,
    "focused": filter_tree_for_person,
}


def _branch_payload(focus_id: Any, nodes: list[PersonNode], view: str) -> dict[str, Any]:
    filtered = _VIEWS[view](focus_id, nodes)
    return {
        "focus_id": focus_id,
        "view": view,
        "nodes": [_person_node_to_public(n) for n in filtered],
        "hidden": sum(1 for n in filtered if n.has_hidden_descendants),
        "total": len(filtered),
    }


@router.get("/people/{person_id}/branch")
def get_person_branch(
    person_id: str,
    view: Literal["branch", "focused"] = Query(default="branch"),
) -> dict[str, Any]:
    """Return the branch view around one person.

    - view=branch: ancestors, all descendants, siblings and uncles/aunts;
      collateral relatives with children carry hiddenDescendantCount
    - view=focused: same set plus in-laws, with the focus person and the
      view root marked for layout
    """

    if not person_id:
        raise HTTPException(status_code=400, detail="missing person_id")

    with db_conn() as conn:
        nodes = _fetch_snapshot(conn)

    focus_id = _resolve_person_id(person_id, build_index(nodes))
    return _branch_payload(focus_id, nodes, view)


@router.post("/branch/filter")
def post_branch_filter(payload: dict[str, Any] = Body(default_factory=dict)) -> dict[str, Any]:
    """Filter a caller-supplied snapshot without touching the database.

    Body: ``{"focus_id": ..., "nodes": [...], "view": "branch" | "focused"}``.
    An unknown focus id is not an error: the result is simply empty.
    """

    focus_id = payload.get("focus_id")
    if focus_id is None or (isinstance(focus_id, str) and not focus_id.strip()):
        raise HTTPException(status_code=400, detail="focus_id is required")
    if not _is_valid_id(focus_id):
        raise HTTPException(status_code=400, detail="focus_id must be a string or integer")

    view = str(payload.get("view") or "branch")
    if view not in _VIEWS:
        raise HTTPException(status_code=400, detail=f"unknown view: {view}")

    nodes = _parse_nodes(payload.get("nodes") or [])
    return _branch_payload(focus_id, nodes, view)
