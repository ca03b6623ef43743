# type: ignore
import json
from datetime import datetime

from common.elasticsearch import hit, search_response

from elasticmodel import Collection, Model, Pagination


class Event(Model):
    guarded = []
    casts = {"starts_at": "datetime"}


def get_models(count):
    return [
        Model({"_id": str(i), "title": f"Post {i}"}) for i in range(count)
    ]


def test_from_response():
    response = search_response(
        [hit("1", {"title": "Foo"}, score=1.2)],
        total=10,
        scroll_id="scroll-1",
        suggest={"title": [{"text": "foo", "options": []}]},
        aggregations={"status": {"buckets": [{"key": "draft"}]}},
    )
    collection = Collection.from_response(response, get_models(1))

    assert collection.total == 10
    assert collection.max_score == 1.2
    assert collection.duration == 5
    assert collection.timed_out is False
    assert collection.scroll_id == "scroll-1"
    assert collection.shards["total"] == 1
    assert collection.get_suggestions("title") == [
        {"text": "foo", "options": []}
    ]
    assert collection.get_aggregations() == {
        "status": {"buckets": [{"key": "draft"}]}
    }
    assert collection.get_aggregations("missing") is None


def test_total_as_number():
    response = {"hits": {"total": 7, "hits": []}}
    assert Collection.from_response(response).total == 7
    assert Collection.from_response({}).total == 0


def test_sequence():
    models = get_models(3)
    collection = Collection(models)

    assert len(collection) == 3
    assert collection.total == 3
    assert collection[1] is models[1]
    assert collection[1:] == models[1:]
    assert collection.first() is models[0]
    assert collection.last() is models[2]
    assert collection.get_ids() == ["0", "1", "2"]
    assert collection.map(lambda m: m["title"]) == [
        "Post 0",
        "Post 1",
        "Post 2",
    ]
    assert json.loads(collection.to_json()) == collection.to_list()


def test_empty():
    collection = Collection()
    assert collection.is_empty()
    assert collection.first() is None
    assert collection.last("default") == "default"
    assert collection.to_list() == []


def test_pagination():
    page = Pagination(Collection(get_models(10)), total=25, per_page=10)

    assert page.last_page == 3
    assert page.on_first_page()
    assert page.has_pages()
    assert page.has_more_pages()
    assert page.previous_page() is None
    assert page.next_page() == 2
    assert page.first_item() == 1
    assert page.last_item() == 10

    page = Pagination(
        Collection(get_models(5)), total=25, per_page=10, current_page=3
    )
    assert not page.has_more_pages()
    assert page.next_page() is None
    assert page.first_item() == 21
    assert page.last_item() == 25
    assert page.to_dict()["from"] == 21
    assert page.to_dict()["last_page"] == 3


def test_pagination_single_page():
    page = Pagination(Collection(), total=0, per_page=10)
    assert page.last_page == 1
    assert not page.has_pages()
    assert page.first_item() is None
    assert page.last_item() is None
    assert page.to_dict() == {
        "current_page": 1,
        "data": [],
        "from": None,
        "last_page": 1,
        "per_page": 10,
        "to": None,
        "total": 0,
    }


def test_to_json_with_datetime_casts():
    event = Event({"title": "Launch", "starts_at": datetime(2024, 1, 2, 3, 4)})
    expected = [{"title": "Launch", "starts_at": "2024-01-02 03:04:00"}]

    collection = Collection([event])
    assert json.loads(collection.to_json()) == expected
    assert json.loads(event.to_json()) == expected[0]

    page = Pagination(collection, total=1, per_page=10)
    assert json.loads(page.to_json())["data"] == expected
