"""Person record used by every tree operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

_GENDERS = {"male", "female"}

# Keys that map onto dataclass fields; everything else is carried in ``extra``.
_CORE_KEYS = (
    "id",
    "name",
    "father_id",
    "mother_id",
    "gender",
    "generation",
    "hid",
    "descendants_count",
)

# Output-only annotations; dropped on input so re-filtering a view starts clean.
_ANNOTATION_KEYS = (
    "hasHiddenDescendants",
    "hiddenDescendantCount",
    "isFocusPerson",
    "isFilteredRoot",
)


class InvalidPersonRecord(ValueError):
    """A raw record is missing a field the tree cannot work without."""


def _normalize_gender(raw: Any) -> str | None:
    if raw is None:
        return None
    g = str(raw).strip().lower()
    return g if g in _GENDERS else None


def _optional_int(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class PersonNode:
    id: Any
    name: str
    father_id: Any = None
    mother_id: Any = None
    gender: str | None = None
    generation: int | None = None
    hid: str | None = None
    descendants_count: int | None = None
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    # Set only on copies returned by the branch filters.
    has_hidden_descendants: bool = False
    hidden_descendant_count: int | None = None
    is_focus_person: bool = False
    is_filtered_root: bool = False

    @property
    def is_male(self) -> bool:
        return self.gender == "male"

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "PersonNode":
        """Build a node from a loosely-shaped dict (DB row, JSON body, ...).

        Only ``id`` and ``name`` are required. Unknown keys are kept verbatim in
        ``extra`` so display attributes survive a round trip through the core.
        """

        pid = row.get("id")
        if pid is None or (isinstance(pid, str) and not pid.strip()):
            raise InvalidPersonRecord("person record has no id")

        name = row.get("name")
        if name is None:
            raise InvalidPersonRecord(f"person {pid} has no name")

        hid = row.get("hid")
        extra = {
            k: v for k, v in row.items() if k not in _CORE_KEYS and k not in _ANNOTATION_KEYS
        }

        return cls(
            id=pid,
            name=str(name),
            father_id=row.get("father_id"),
            mother_id=row.get("mother_id"),
            gender=_normalize_gender(row.get("gender")),
            generation=_optional_int(row.get("generation")),
            hid=str(hid) if hid is not None else None,
            descendants_count=_optional_int(row.get("descendants_count")),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        out.update(
            {
                "id": self.id,
                "name": self.name,
                "father_id": self.father_id,
                "mother_id": self.mother_id,
                "gender": self.gender,
                "generation": self.generation,
                "hid": self.hid,
            }
        )
        if self.descendants_count is not None:
            out["descendants_count"] = self.descendants_count
        if self.has_hidden_descendants:
            out["hasHiddenDescendants"] = True
            out["hiddenDescendantCount"] = self.hidden_descendant_count
        if self.is_focus_person:
            out["isFocusPerson"] = True
        if self.is_filtered_root:
            out["isFilteredRoot"] = True
        return out
