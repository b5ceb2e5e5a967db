from __future__ import annotations

from typing import Any

from fastapi import HTTPException

from .models import PersonNode


def _resolve_person_id(person_ref: str, index: dict[Any, PersonNode]) -> Any:
    """Resolve either a profile id or a HID (e.g. "1.4.3") to the profile id."""

    ref = (person_ref or "").strip()
    if ref in index:
        return ref
    for node in index.values():
        if node.hid is not None and node.hid == ref:
            return node.id
    raise HTTPException(status_code=404, detail=f"person not found: {person_ref}")
