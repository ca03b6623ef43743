# type: ignore
from datetime import datetime

import pytest

from elasticmodel.model import AttributeStore


@pytest.mark.parametrize(
    "cast, value, expected",
    [
        ("int", "42", 42),
        ("integer", 4.0, 4),
        ("float", "1.5", 1.5),
        ("string", 42, "42"),
        ("bool", "yes", True),
        ("bool", "false", False),
        ("boolean", 0, False),
        ("json", '{"a": [1, 2]}', {"a": [1, 2]}),
        ("array", [1, 2], [1, 2]),
        ("datetime", "2024-01-02T03:04:05", datetime(2024, 1, 2, 3, 4, 5)),
        ("unknown", "foo", "foo"),
    ],
)
def test_cast(cast, value, expected):
    store = AttributeStore(casts={"field": cast})
    store.set("field", value)
    assert store.get("field") == expected
    assert store.get_raw("field") == value


def test_none_is_not_cast():
    store = AttributeStore(casts={"views": "int"})
    store.set("views", None)
    assert store.get("views") is None
    assert store.get("missing", "default") == "default"


def test_dirty_tracking():
    store = AttributeStore(casts={"views": "int", "active": "bool"})
    store.set_raw({"title": "Foo", "views": 10, "active": True}, sync=True)
    assert store.is_clean()

    store.set("views", "10")
    store.set("active", 1)
    assert store.is_clean()

    store.set("title", "Bar")
    store.set("tags", ["a"])
    assert store.get_dirty() == {"title": "Bar", "tags": ["a"]}
    assert store.is_dirty("tags")
    assert not store.is_dirty("views")

    store.sync_changes()
    assert store.was_changed("title")
    assert not store.was_changed("views")

    store.sync_original_attribute("title")
    assert store.get_dirty() == {"tags": ["a"]}
    assert store.get_original("title") == "Bar"


def test_removed_attribute_is_not_dirty():
    store = AttributeStore()
    store.set_raw({"title": "Foo", "status": "draft"}, sync=True)

    store.remove("status")
    assert not store.has("status")
    assert store.get_dirty() == {}
    assert store.is_clean()
    assert store.get_original("status") == "draft"


def test_original_is_a_snapshot():
    store = AttributeStore()
    store.set_raw({"tags": ["a"]}, sync=True)
    store.get_raw("tags").append("b")

    assert store.get_raw_original("tags") == ["a"]
    assert store.is_dirty("tags")


def test_type_change_is_dirty():
    store = AttributeStore()
    store.set_raw({"views": 10}, sync=True)
    store.set("views", "10")
    assert store.is_dirty("views")


def test_merge_casts():
    store = AttributeStore(casts={"views": "int"})
    store.merge_casts({"score": "float"})
    assert store.get_casts() == {"views": "int", "score": "float"}
    assert store.has_cast("score")
    assert not store.has_cast("score", ("int",))
