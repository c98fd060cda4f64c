from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_json_vault.application.enumeration import Entry, count_keys, list_entries, list_keys

KEY = st.text(alphabet="abcdef", min_size=1, max_size=4)
TREE = st.recursive(
    st.one_of(st.integers(), st.lists(st.integers(), max_size=2)),
    lambda children: st.dictionaries(KEY, children, max_size=3),
    max_leaves=12,
)
DOCUMENT = st.dictionaries(KEY, TREE, max_size=4)


def test_nested_listing_is_pre_order() -> None:
    doc = {"users": {"admin": {"settings": {"theme": "dark"}}}}
    assert list_keys(doc, include_nested=True) == [
        "users",
        "users.admin",
        "users.admin.settings",
        "users.admin.settings.theme",
    ]


def test_sibling_subtrees_follow_insertion_order() -> None:
    doc = {"b": {"y": 1, "x": 2}, "a": 3}
    assert list_keys(doc, include_nested=True) == ["b", "b.y", "b.x", "a"]
    assert list_keys(doc, include_nested=False) == ["b", "a"]


def test_arrays_are_leaves() -> None:
    doc = {"tags": [{"hidden": 1}], "empty": {}}
    assert list_keys(doc, include_nested=True) == ["tags", "empty"]


def test_list_entries_keeps_whole_values() -> None:
    doc = {"a": {"b": 1}, "c": [1]}
    assert list_entries(doc) == [Entry("a", {"b": 1}, False), Entry("c", [1], False)]


@given(DOCUMENT)
def test_parents_precede_children(doc) -> None:
    keys = list_keys(doc, include_nested=True)
    seen: set[str] = set()
    for key in keys:
        if "." in key:
            assert key.rsplit(".", 1)[0] in seen
        seen.add(key)
    assert len(keys) == len(set(keys))


@given(DOCUMENT, st.booleans())
def test_count_matches_listing(doc, nested) -> None:
    assert count_keys(doc, nested) == len(list_keys(doc, nested))
