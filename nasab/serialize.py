from __future__ import annotations

from datetime import date, datetime
from typing import Any

from fastapi import HTTPException

from .models import _CORE_KEYS, InvalidPersonRecord, PersonNode

# Hard guardrail on request bodies for the pure filter endpoint.
MAX_REQUEST_NODES = 20_000

_ID_KEYS = ("id", "father_id", "mother_id")


def _is_valid_id(value: Any) -> bool:
    """Ids are opaque JSON scalars: a string or an integer, never a bool."""

    return isinstance(value, (str, int)) and not isinstance(value, bool)


def _compact_json(value: Any) -> Any:
    """Recursively remove null/empty fields from display extras.

    Rules:
    - Drop keys with None
    - Drop keys with empty string (after strip)
    - Drop keys with empty list/dict
    - Keep 0/False
    - Dates become ISO strings
    """

    if value is None:
        return None

    if isinstance(value, (date, datetime)):
        return value.isoformat()

    if isinstance(value, str):
        s = value.strip()
        return s if s else None

    if isinstance(value, list):
        out_list = []
        for item in value:
            v = _compact_json(item)
            if v is None:
                continue
            out_list.append(v)
        return out_list if out_list else None

    if isinstance(value, dict):
        out_dict: dict[str, Any] = {}
        for k, v in value.items():
            vv = _compact_json(v)
            if vv is None:
                continue
            out_dict[k] = vv
        return out_dict if out_dict else None

    return value


def _person_node_to_public(node: PersonNode) -> dict[str, Any]:
    # Core fields keep explicit nulls (the renderer reads father_id: null as a root);
    # only the pass-through extras are compacted.
    compact = _compact_json(node.extra) or {}
    out = node.to_dict()
    for key in node.extra:
        if key not in _CORE_KEYS:
            out.pop(key, None)
    out.update({k: v for k, v in compact.items() if k not in out})
    return out


def _parse_nodes(raw: Any) -> list[PersonNode]:
    """Turn a JSON request body list into nodes, or fail with 400."""

    if not isinstance(raw, list):
        raise HTTPException(status_code=400, detail="nodes must be a list")
    if len(raw) > MAX_REQUEST_NODES:
        raise HTTPException(status_code=400, detail=f"too many nodes (max {MAX_REQUEST_NODES})")

    nodes: list[PersonNode] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise HTTPException(status_code=400, detail=f"nodes[{i}] must be an object")
        for key in _ID_KEYS:
            value = item.get(key)
            if value is not None and not _is_valid_id(value):
                raise HTTPException(
                    status_code=400, detail=f"nodes[{i}].{key} must be a string or integer"
                )
        try:
            nodes.append(PersonNode.from_mapping(item))
        except InvalidPersonRecord as e:
            raise HTTPException(status_code=400, detail=f"nodes[{i}]: {e}") from e
    return nodes
