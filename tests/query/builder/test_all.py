# type: ignore
import json

import pytest
from common.elasticsearch import get_connection

from elasticmodel import BadRequestError, RegexpFlag


def new_query():
    return get_connection().new_query()


def bool_query(**groups):
    return {"query": {"bool": groups}}


def test_empty_query():
    assert new_query().to_dict() == {}


def test_compile_is_deterministic():
    query = (
        new_query()
        .where("status", "published")
        .where("views", ">", 10)
        .should("match", {"title": "foo"})
        .exclude("secret")
        .order_by("created_at", "desc")
    )
    assert query.to_dict() == query.to_dict()
    assert query.to_json() == query.to_json()


def test_compile_does_not_mutate_state():
    query = new_query().where("foo", "bar")
    body = query.to_dict()
    body["query"]["bool"]["filter"].append({"term": {"baz": "quz"}})
    assert query.to_dict() == bool_query(filter=[{"term": {"foo": "bar"}}])


def test_clone_is_independent():
    query = new_query().where("foo", "bar").take(5)
    clone = query.clone()
    clone.where("baz", "quz").take(20).exclude("secret")

    assert query.to_dict() == bool_query(filter=[{"term": {"foo": "bar"}}])
    assert query.get_size() == 5
    assert clone.to_dict() == {
        "query": {
            "bool": {
                "filter": [
                    {"term": {"foo": "bar"}},
                    {"term": {"baz": "quz"}},
                ]
            }
        },
        "_source": {"includes": [], "excludes": ["secret"]},
    }


def test_source_omitted_until_filtered():
    assert "_source" not in new_query().where("foo", "bar").to_dict()
    assert new_query().exclude([]).to_dict() == {
        "_source": {"includes": [], "excludes": []}
    }


def test_exclude_deduplicates():
    query = (
        new_query()
        .exclude(["foo", "bar", "baz"])
        .exclude(["foo"])
        .exclude(["bar", "baz"])
        .exclude(["bar", "quz"])
    )
    assert query.to_dict() == {
        "_source": {
            "includes": [],
            "excludes": ["foo", "bar", "baz", "quz"],
        }
    }


def test_include_and_exclude_are_disjoint():
    query = (
        new_query()
        .include(["foo", "bar", "baz"])
        .exclude(["foo", "bar"])
        .exclude(["quz"])
    )
    assert query.to_dict() == {
        "_source": {"includes": ["baz"], "excludes": ["foo", "bar", "quz"]}
    }
    query.include("foo")
    assert query.get_includes() == ["baz", "foo"]
    assert query.get_excludes() == ["bar", "quz"]


def test_where_equality_forms():
    expected = bool_query(filter=[{"term": {"foo": "bar"}}])
    assert new_query().where("foo", "bar").to_dict() == expected
    assert new_query().where("foo", "=", "bar").to_dict() == expected


def test_where_operator_token_as_value():
    assert new_query().where("foo", "exists").to_dict() == bool_query(
        must=[{"exists": {"field": "foo"}}]
    )


@pytest.mark.parametrize(
    "operator, range_key",
    [(">", "gt"), (">=", "gte"), ("<", "lt"), ("<=", "lte")],
)
def test_where_range(operator, range_key):
    query = new_query().where("views", operator, 42)
    assert query.to_dict() == bool_query(
        filter=[{"range": {"views": {range_key: 42}}}]
    )
    query = new_query().where_not("views", operator, 42)
    assert query.to_dict() == bool_query(
        must_not=[{"range": {"views": {range_key: 42}}}]
    )


def test_where_not_equal():
    assert new_query().where("foo", "!=", "bar").to_dict() == bool_query(
        must_not=[{"term": {"foo": "bar"}}]
    )
    assert new_query().where_not("foo", "!=", "bar").to_dict() == (
        bool_query(filter=[{"term": {"foo": "bar"}}])
    )


def test_where_like():
    assert new_query().where("foo", "like", "bar").to_dict() == bool_query(
        must=[{"match": {"foo": "bar"}}]
    )
    assert new_query().where_not("foo", "like", "bar").to_dict() == (
        bool_query(must_not=[{"match": {"foo": "bar"}}])
    )


def test_where_unknown_operator_is_equality():
    assert new_query().where_not("foo", "!!invalid", "bar").to_dict() == (
        bool_query(must_not=[{"term": {"foo": "bar"}}])
    )
    assert new_query().where("foo", "!!invalid", "bar").to_dict() == (
        bool_query(filter=[{"term": {"foo": "bar"}}])
    )


@pytest.mark.parametrize(
    "negate, value, group",
    [
        (False, True, "must"),
        (False, False, "must_not"),
        (True, True, "must_not"),
        (True, False, "must"),
    ],
)
def test_where_exists(negate, value, group):
    query = new_query()
    if negate:
        query.where_not("foo", "exists", value)
    else:
        query.where("foo", "exists", value)
    assert query.to_dict() == bool_query(
        **{group: [{"exists": {"field": "foo"}}]}
    )


def test_where_exists_shortcut():
    assert new_query().where_exists("foo", False).to_dict() == bool_query(
        must_not=[{"exists": {"field": "foo"}}]
    )


def test_where_in():
    assert new_query().where_in("foo", ["a", "b"]).to_dict() == bool_query(
        filter=[{"terms": {"foo": ["a", "b"]}}]
    )
    assert new_query().where_not_in("foo", "a").to_dict() == bool_query(
        must_not=[{"terms": {"foo": ["a"]}}]
    )


def test_where_between():
    expected = bool_query(filter=[{"range": {"views": {"gte": 1, "lte": 9}}}])
    assert new_query().where_between("views", 1, 9).to_dict() == expected
    assert new_query().where_between("views", [1, 9]).to_dict() == expected
    assert new_query().where_not_between("views", (1, 9)).to_dict() == (
        bool_query(must_not=[{"range": {"views": {"gte": 1, "lte": 9}}}])
    )


def test_group_order():
    query = (
        new_query()
        .should("match", {"a": 1})
        .must_not("term", {"b": 2})
        .must("match", {"c": 3})
        .filter("term", {"d": 4})
    )
    groups = query.to_dict()["query"]["bool"]
    assert list(groups.keys()) == ["filter", "must", "must_not", "should"]


def test_minimum_should_match():
    query = new_query().minimum_should_match(1).where("foo", "bar")
    assert query.to_dict() == bool_query(filter=[{"term": {"foo": "bar"}}])

    query.should("match", {"title": "baz"})
    assert query.to_dict() == bool_query(
        filter=[{"term": {"foo": "bar"}}],
        should=[{"match": {"title": "baz"}}],
        minimum_should_match=1,
    )


def test_id_filter():
    assert new_query().id("foo").to_dict() == bool_query(
        filter=[{"term": {"_id": "foo"}}]
    )
    assert new_query().id("foo").id(None).to_dict() == {}
    assert new_query().where("a", "b").id("foo").to_dict() == bool_query(
        filter=[{"term": {"_id": "foo"}}, {"term": {"a": "b"}}]
    )


def test_match_all():
    assert new_query().all().to_dict() == {"query": {"match_all": {}}}
    assert new_query().all(42).to_dict() == {
        "query": {"match_all": {"boost": 42.0}}
    }
    assert new_query().none().to_dict() == {"query": {"match_none": {}}}


def test_root_query_with_clauses():
    assert new_query().all().where("foo", "bar").to_dict() == bool_query(
        filter=[{"term": {"foo": "bar"}}],
        must=[{"match_all": {}}],
    )
    query = new_query().must("match", {"a": 1}).none()
    assert query.to_dict() == bool_query(
        must=[{"match_none": {}}, {"match": {"a": 1}}]
    )


def test_term_filters():
    assert new_query().term_filter("foo", "bar", 2).to_dict() == bool_query(
        filter=[{"term": {"foo": "bar", "boost": 2.0}}]
    )
    assert new_query().terms_filter("foo", "bar").to_dict() == bool_query(
        filter=[{"terms": {"foo": ["bar"]}}]
    )
    assert new_query().terms_filter("foo", ["a", "b"], 1.5).to_dict() == (
        bool_query(filter=[{"terms": {"foo": ["a", "b"], "boost": 1.5}}])
    )


def test_range_filter():
    expected = bool_query(filter=[{"range": {"views": {"gt": 1}}}])
    assert new_query().range_filter("views", "gt", 1).to_dict() == expected
    assert (
        new_query().range_filter("views", {"gt": 1}).to_dict() == expected
    )
    query = new_query().range_filter("views", lambda q, field: {"gt": 1})
    assert query.to_dict() == expected


def test_text_filters():
    assert new_query().match_filter("foo", "bar").to_dict() == bool_query(
        filter=[{"match": {"foo": "bar"}}]
    )
    assert new_query().prefix_filter("foo", "ba").to_dict() == bool_query(
        filter=[{"prefix": {"foo": {"value": "ba"}}}]
    )
    query = new_query().prefix_filter("foo", "ba", case_sensitive=False)
    assert query.to_dict() == bool_query(
        filter=[
            {"prefix": {"foo": {"value": "ba", "case_insensitive": True}}}
        ]
    )
    query = new_query().wildcard_filter("foo", "b*r", boost=2)
    assert query.to_dict() == bool_query(
        filter=[{"wildcard": {"foo": {"value": "b*r", "boost": 2.0}}}]
    )


def test_regexp_filter():
    assert new_query().regexp_filter("foo", "b.*").to_dict() == bool_query(
        filter=[{"regexp": {"foo": "b.*"}}]
    )

    flags = RegexpFlag.INTERVAL | RegexpFlag.ALL
    query = new_query().regexp_filter(
        "foo", "b.*", flags, case_sensitive=False, max_determinized_states=5
    )
    assert query.to_dict() == bool_query(
        filter=[
            {
                "regexp": {
                    "foo": {
                        "value": "b.*",
                        "flags": "ALL|INTERVAL",
                        "case_insensitive": True,
                        "max_determinized_states": 5,
                    }
                }
            }
        ]
    )

    raw = {"value": "b.*", "flags": "NONE"}
    assert new_query().regexp_filter("foo", raw).to_dict() == bool_query(
        filter=[{"regexp": {"foo": raw}}]
    )


def test_regexp_flags_to_string():
    assert RegexpFlag.to_string(RegexpFlag.ANYSTRING | RegexpFlag.NONE) == (
        "NONE|ANYSTRING"
    )
    assert RegexpFlag.to_string(0) == ""


@pytest.mark.parametrize(
    "flags",
    [
        RegexpFlag.ANYSTRING | RegexpFlag.INTERSECTION,
        RegexpFlag.INTERSECTION | RegexpFlag.ANYSTRING,
    ],
)
def test_regexp_flags_canonical_order(flags):
    assert RegexpFlag.to_string(flags) == "INTERSECTION|ANYSTRING"
    query = new_query().regexp_filter("foo", "b.*", flags)
    regexp = {"value": "b.*", "flags": "INTERSECTION|ANYSTRING"}
    assert query.to_dict() == bool_query(
        filter=[{"regexp": {"foo": regexp}}]
    )


def test_distance_filter():
    query = new_query().distance_filter("location", [1.5, 2.5], "10km")
    assert query.to_dict() == bool_query(
        filter=[
            {"geo_distance": {"location": [1.5, 2.5], "distance": "10km"}}
        ]
    )


def test_nested():
    inner = new_query().where("comments.author", "foo")
    assert new_query().nested("comments", inner).to_dict() == {
        "query": {
            "nested": {
                "score_mode": "avg",
                "path": "comments",
                "query": {
                    "bool": {
                        "filter": [{"term": {"comments.author": "foo"}}]
                    }
                },
            }
        }
    }
    query = new_query().nested("comments", new_query(), score_mode="max")
    assert query.to_dict() == {
        "query": {
            "nested": {
                "score_mode": "max",
                "path": "comments",
                "query": {"match_all": {}},
            }
        }
    }


def test_pinned():
    assert new_query().pinned(["1", "2"]).to_dict() == {
        "query": {
            "pinned": {"ids": ["1", "2"], "organic": {"match_none": {}}}
        }
    }
    organic = new_query().where("foo", "like", "bar")
    assert new_query().pinned("1", organic).to_dict() == {
        "query": {
            "pinned": {
                "ids": ["1"],
                "organic": {"bool": {"must": [{"match": {"foo": "bar"}}]}},
            }
        }
    }


def test_body_merges_with_clauses():
    query = new_query().body({"foo": "bar"}).filter("term", {"a": "b"})
    assert query.to_dict() == {
        "foo": "bar",
        "query": {"bool": {"filter": [{"term": {"a": "b"}}]}},
    }

    query = new_query().body(
        {"query": {"bool": {"filter": [{"term": {"x": 1}}]}}}
    )
    query.where("y", 2)
    assert query.to_dict() == bool_query(
        filter=[{"term": {"x": 1}}, {"term": {"y": 2}}]
    )


def test_set_path():
    query = new_query().set("query.bool.should.0.match", {"foo": "bar"})
    assert query.to_dict() == bool_query(should=[{"match": {"foo": "bar"}}])
    query = new_query().set("size", 5).set("track_total_hits", True)
    assert query.to_dict() == {"size": 5, "track_total_hits": True}


def test_set_path_rejects_key_in_list():
    query = new_query().set("foo.0", 1)
    with pytest.raises(BadRequestError):
        query.set("foo.bar", 2)


def test_aggregations():
    query = (
        new_query()
        .aggregate("status")
        .aggregate("authors", "author.keyword")
        .aggregate("views", {"avg": {"field": "views"}})
    )
    assert query.to_dict() == {
        "aggs": {
            "status": {"terms": {"field": "status"}},
            "authors": {"terms": {"field": "author.keyword"}},
            "views": {"avg": {"field": "views"}},
        }
    }


def test_output_shaping():
    query = (
        new_query()
        .group_by("author")
        .order_by("created_at", "desc")
        .order_by({"_score": "desc"})
        .highlight(["title", "body"], pre_tags=["<em>"])
        .highlight({"summary": {"number_of_fragments": 1}})
        .suggest("title", {"text": "foo", "term": {"field": "title"}})
    )
    assert query.to_dict() == {
        "sort": [{"created_at": "desc"}, {"_score": "desc"}],
        "highlight": {
            "fields": {
                "title": {},
                "body": {},
                "summary": {"number_of_fragments": 1},
            },
            "pre_tags": ["<em>"],
        },
        "suggest": {"title": {"text": "foo", "term": {"field": "title"}}},
        "collapse": {"field": "author"},
    }


def test_compiled_key_order():
    query = (
        new_query()
        .group_by("author")
        .suggest("s", {"text": "x"})
        .highlight("title")
        .order_by("views")
        .aggregate("status")
        .exclude("secret")
        .where("foo", "bar")
        .body({"track_total_hits": True})
    )
    assert list(query.to_dict().keys()) == [
        "track_total_hits",
        "query",
        "_source",
        "aggs",
        "sort",
        "highlight",
        "suggest",
        "collapse",
    ]


def test_build_query_defaults():
    assert new_query().build_query() == {"body": {}, "from": 0, "size": 10}


def test_build_query():
    query = (
        new_query()
        .index("posts")
        .where("foo", "bar")
        .skip(5)
        .take(20)
        .ignore(404, [400, 404])
        .search_type("dfs_query_then_fetch")
        .scroll("2m")
    )
    assert query.build_query() == {
        "body": bool_query(filter=[{"term": {"foo": "bar"}}]),
        "from": 5,
        "size": 20,
        "client": {"ignore": [404, 400]},
        "search_type": "dfs_query_then_fetch",
        "scroll": "2m",
        "index": "posts",
    }


def test_apply_ignores_keeps_client_options():
    query = new_query().ignore(404)
    params = query.apply_ignores({"client": {"request_timeout": 5}})
    assert params == {"client": {"request_timeout": 5, "ignore": [404]}}
    assert new_query().apply_ignores({"id": "1"}) == {"id": "1"}


def test_connection_default_index():
    query = get_connection(index="posts").new_query()
    assert query.get_index() == "posts"
    assert query.build_query()["index"] == "posts"


def test_to_json():
    query = new_query().where("foo", "bar")
    assert json.loads(query.to_json()) == query.to_dict()
