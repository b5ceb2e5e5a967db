from __future__ import annotations

import logging
from typing import Any

import psycopg

from .models import InvalidPersonRecord, PersonNode

log = logging.getLogger(__name__)

# Core tree columns first, then display attributes carried through as extras.
_PROFILE_COLUMNS = (
    "id",
    "hid",
    "name",
    "father_id",
    "mother_id",
    "gender",
    "generation",
    "descendants_count",
    "sibling_order",
    "status",
    "photo_url",
    "birth_date",
    "death_date",
)

_PROFILE_SELECT = f"SELECT {', '.join(_PROFILE_COLUMNS)} FROM profiles"

_MARRIAGE_COLUMNS = ("husband_id", "wife_id", "status", "marriage_order")


def _row_to_node(
    r: tuple[Any, ...],
    marriages: dict[str, list[dict[str, Any]]] | None = None,
) -> PersonNode | None:
    row = dict(zip(_PROFILE_COLUMNS, r))
    # UUID columns come back as uuid.UUID; the tree works on plain strings.
    for key in ("id", "father_id", "mother_id"):
        if row[key] is not None:
            row[key] = str(row[key])
    if marriages and row["id"] in marriages:
        row["marriages"] = marriages[row["id"]]
    try:
        return PersonNode.from_mapping(row)
    except InvalidPersonRecord as e:
        log.warning("skipping profile row: %s", e)
        return None


def _fetch_profile(conn: psycopg.Connection, person_id: str) -> PersonNode | None:
    """Load one live profile by id, or None."""

    r = conn.execute(
        f"{_PROFILE_SELECT} WHERE id::text = %s AND deleted_at IS NULL LIMIT 1",
        (person_id,),
    ).fetchone()
    if not r:
        return None
    return _row_to_node(tuple(r))


def _fetch_marriages(conn: psycopg.Connection) -> dict[str, list[dict[str, Any]]]:
    """Live marriages keyed by profile id, one ``spouse_id`` entry per side."""

    rows = conn.execute(
        f"SELECT {', '.join(_MARRIAGE_COLUMNS)} FROM marriages "
        "WHERE deleted_at IS NULL ORDER BY marriage_order NULLS LAST",
        (),
    ).fetchall()

    out: dict[str, list[dict[str, Any]]] = {}
    for r in rows:
        row = dict(zip(_MARRIAGE_COLUMNS, r))
        husband_id, wife_id = row["husband_id"], row["wife_id"]
        if husband_id is None or wife_id is None:
            continue
        husband_id, wife_id = str(husband_id), str(wife_id)
        for person_id, spouse_id in ((husband_id, wife_id), (wife_id, husband_id)):
            out.setdefault(person_id, []).append(
                {"spouse_id": spouse_id, "status": row["status"], "order": row["marriage_order"]}
            )
    return out


def _fetch_snapshot(conn: psycopg.Connection) -> list[PersonNode]:
    """Load every live profile as an immutable snapshot, ordered by HID."""

    rows = conn.execute(
        f"{_PROFILE_SELECT} WHERE deleted_at IS NULL ORDER BY hid NULLS LAST, id",
        (),
    ).fetchall()
    marriages = _fetch_marriages(conn)

    out: list[PersonNode] = []
    for r in rows:
        node = _row_to_node(tuple(r), marriages)
        if node is not None:
            out.append(node)
    return out
