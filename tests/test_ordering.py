from __future__ import annotations

from nasab.ordering import birth_order_key, sort_siblings_oldest_first


def test_birth_order_key_uses_last_hid_segment(make_node) -> None:
    assert birth_order_key(make_node("a", hid="3.2.7")) == 7
    assert birth_order_key(make_node("a", hid="12")) == 12


def test_birth_order_key_defaults_to_zero(make_node) -> None:
    assert birth_order_key(make_node("a")) == 0
    assert birth_order_key(make_node("a", hid="")) == 0
    assert birth_order_key(make_node("a", hid="3.x")) == 0
    assert birth_order_key(make_node("a", hid="3.2.")) == 0


def test_sort_siblings_higher_suffix_first(make_node) -> None:
    people = [make_node("one", hid="1.1"), make_node("two", hid="1.2"), make_node("three", hid="1.3")]
    assert [p.id for p in sort_siblings_oldest_first(people)] == ["three", "two", "one"]


def test_sort_siblings_is_stable_for_ties(make_node) -> None:
    people = [
        make_node("a", hid="1.2"),
        make_node("b"),
        make_node("c", hid="1.2"),
        make_node("d", hid="bad"),
    ]
    assert [p.id for p in sort_siblings_oldest_first(people)] == ["a", "c", "b", "d"]
