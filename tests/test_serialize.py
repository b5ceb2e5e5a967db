from __future__ import annotations

from datetime import date

import pytest
from fastapi import HTTPException

from nasab.config import get_connectors, get_family_name, get_name_include_self
from nasab.models import PersonNode
from nasab.serialize import _compact_json, _parse_nodes, _person_node_to_public


def test_compact_json_drops_empty_values() -> None:
    assert _compact_json({"a": None, "b": " ", "c": [], "d": 0, "e": False, "f": {"g": ""}}) == {
        "d": 0,
        "e": False,
    }
    assert _compact_json(date(1990, 5, 1)) == "1990-05-01"


def test_public_node_keeps_null_parents_and_compacts_extras() -> None:
    p = PersonNode(
        id="p1",
        name="Nora",
        extra={"bio": "", "birth_date": date(1962, 1, 1), "achievements": []},
        has_hidden_descendants=True,
        hidden_descendant_count=4,
    )
    out = _person_node_to_public(p)
    assert out["father_id"] is None
    assert out["birth_date"] == "1962-01-01"
    assert "bio" not in out
    assert "achievements" not in out
    assert out["hasHiddenDescendants"] is True
    assert out["hiddenDescendantCount"] == 4


def test_public_node_extras_never_replace_core_fields() -> None:
    p = PersonNode(id="p1", name="Nora", father_id="f1", extra={"id": "bogus", "name": "", "bio": "b"})
    out = _person_node_to_public(p)
    assert out["id"] == "p1"
    assert out["name"] == "Nora"
    assert out["father_id"] == "f1"
    assert out["bio"] == "b"


def test_parse_nodes_rejects_bad_bodies() -> None:
    with pytest.raises(HTTPException) as e:
        _parse_nodes({"id": "x"})
    assert e.value.status_code == 400

    with pytest.raises(HTTPException):
        _parse_nodes(["x"])

    with pytest.raises(HTTPException) as e:
        _parse_nodes([{"id": "a", "name": "A"}, {"id": "b"}])
    assert "nodes[1]" in e.value.detail

    with pytest.raises(HTTPException) as e:
        _parse_nodes([{"id": "a", "name": "A", "father_id": {"id": "b"}}])
    assert e.value.status_code == 400
    assert "nodes[0].father_id" in e.value.detail

    with pytest.raises(HTTPException) as e:
        _parse_nodes([{"id": True, "name": "A"}])
    assert "nodes[0].id" in e.value.detail


def test_parse_nodes_builds_records() -> None:
    nodes = _parse_nodes([{"id": "a", "name": "A", "gender": "Male", "hid": "1"}])
    assert nodes[0].gender == "male"


def test_config_defaults_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "NASAB_FAMILY_NAME",
        "NASAB_CONNECTOR_MALE",
        "NASAB_CONNECTOR_FEMALE",
        "NASAB_NAME_INCLUDE_SELF",
    ):
        monkeypatch.delenv(key, raising=False)

    assert get_family_name() == "القفاري"
    assert get_connectors() == {"male": "بن", "female": "بنت"}
    assert get_name_include_self() is True

    monkeypatch.setenv("NASAB_NAME_INCLUDE_SELF", "off")
    monkeypatch.setenv("NASAB_FAMILY_NAME", "  ")
    assert get_name_include_self() is False
    assert get_family_name() == "القفاري"

    monkeypatch.setenv("NASAB_NAME_INCLUDE_SELF", "maybe")
    assert get_name_include_self() is True
