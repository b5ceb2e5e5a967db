from __future__ import annotations

from typing import Any

import pytest

from nasab.models import PersonNode


def node(
    pid: str,
    name: str | None = None,
    *,
    father: str | None = None,
    mother: str | None = None,
    gender: str = "male",
    hid: str | None = None,
    **extra: Any,
) -> PersonNode:
    return PersonNode(
        id=pid,
        name=name or pid,
        father_id=father,
        mother_id=mother,
        gender=gender,
        hid=hid,
        extra=dict(extra),
    )


@pytest.fixture()
def family() -> list[PersonNode]:
    # G
    # ├── U (uncle) ── K1
    # ├── F (father)
    # │   ├── X (focus) ── C1 ── GC1
    # │   ├── S1 (brother) ── S1a, S1b
    # │   └── S2 (sister)
    # └── A (aunt)
    # Z ── Z1 (unrelated root)
    return [
        node("G", "Saleh", hid="1"),
        node("U", "Hamad", father="G", hid="1.1"),
        node("F", "Abdullah", father="G", hid="1.2"),
        node("A", "Lulwa", father="G", gender="female", hid="1.3"),
        node("K1", "Fahad", father="U", hid="1.1.1"),
        node("X", "Mohammed", father="F", hid="1.2.1"),
        node("S1", "Ibrahim", father="F", hid="1.2.2"),
        node("S2", "Nora", father="F", gender="female", hid="1.2.3"),
        node("S1a", father="S1", hid="1.2.2.1"),
        node("S1b", father="S1", hid="1.2.2.2"),
        node("C1", "Khalid", father="X", hid="1.2.1.1"),
        node("GC1", "Saad", father="C1", hid="1.2.1.1.1"),
        node("Z", "Other", hid="2"),
        node("Z1", father="Z", hid="2.1"),
    ]


@pytest.fixture()
def make_node():
    return node
