from __future__ import annotations

from typing import Iterable

from .models import PersonNode


def birth_order_key(person: PersonNode) -> int:
    """Trailing HID segment as an int ("3.2.5" -> 5); 0 when missing or not numeric."""

    parts = str(person.hid or "").split(".")
    try:
        return int(parts[-1])
    except ValueError:
        return 0


def sort_siblings_oldest_first(people: Iterable[PersonNode]) -> list[PersonNode]:
    # Higher HID suffix = older sibling. sorted() keeps ties in input order.
    return sorted(people, key=birth_order_key, reverse=True)
