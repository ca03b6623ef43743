from typing import Any
from unittest.mock import MagicMock

from elasticmodel import (
    Connection,
    ConnectionResolver,
    EventDispatcher,
    ScopeRegistry,
)


def get_client() -> MagicMock:
    """Mock Elasticsearch client.

    client.options returns the client itself, so endpoint calls made
    with transport options are recorded on the same mock.
    """
    client = MagicMock()
    client.options.return_value = client
    return client


def get_connection(client: Any = None, **kwargs: Any) -> Connection:
    return Connection(client=client or get_client(), **kwargs)


def get_services(client: Any = None, **kwargs: Any) -> dict[str, Any]:
    connection = get_connection(client, **kwargs)
    return {
        "resolver": ConnectionResolver.from_connection(connection),
        "scopes": ScopeRegistry(),
        "dispatcher": EventDispatcher(),
    }


def hit(id: str, source: dict, index: str = "posts", score=1.0) -> dict:
    return {"_index": index, "_id": id, "_score": score, "_source": source}


def search_response(
    hits: list[dict],
    total: int | None = None,
    scroll_id: str | None = None,
    **kwargs: Any,
) -> dict:
    response: dict[str, Any] = {
        "took": 5,
        "timed_out": False,
        "_shards": {"total": 1, "successful": 1, "skipped": 0, "failed": 0},
        "hits": {
            "total": {
                "value": len(hits) if total is None else total,
                "relation": "eq",
            },
            "max_score": max((h["_score"] for h in hits), default=None),
            "hits": hits,
        },
    }
    if scroll_id is not None:
        response["_scroll_id"] = scroll_id
    response.update(kwargs)
    return response
