from __future__ import annotations

__all__ = ["Collection"]

import json
from collections.abc import Sequence
from typing import Any, Callable, Iterator, overload

from ._models import SearchResponse


class Collection(Sequence):
    """Models of one search response with the response envelope.

    Attributes:
        total: Total hits.
        max_score: Maximum score.
        duration: Milliseconds the search took.
        timed_out: A value indicating whether the search timed out.
        scroll_id: Scroll id to continue a scroll.
        shards: Shard report.
        suggestions: Suggestions by name.
        aggregations: Aggregation results by name.
    """

    total: int
    max_score: float | None
    duration: int | None
    timed_out: bool
    scroll_id: str | None
    shards: dict[str, Any] | None
    suggestions: dict[str, Any]
    aggregations: dict[str, Any]

    _items: list[Any]

    def __init__(
        self,
        items: list[Any] | None = None,
        total: int | None = None,
        max_score: float | None = None,
        duration: int | None = None,
        timed_out: bool = False,
        scroll_id: str | None = None,
        shards: dict[str, Any] | None = None,
        suggestions: dict[str, Any] | None = None,
        aggregations: dict[str, Any] | None = None,
    ):
        self._items = list(items or [])
        self.total = total if total is not None else len(self._items)
        self.max_score = max_score
        self.duration = duration
        self.timed_out = timed_out
        self.scroll_id = scroll_id
        self.shards = shards
        self.suggestions = suggestions or {}
        self.aggregations = aggregations or {}

    @classmethod
    def from_response(
        cls,
        response: dict | SearchResponse,
        items: list[Any] | None = None,
    ) -> Collection:
        if not isinstance(response, SearchResponse):
            response = SearchResponse.from_dict(response)
        return cls(
            items=items,
            total=response.get_total(),
            max_score=response.hits.max_score,
            duration=response.took,
            timed_out=response.timed_out,
            scroll_id=response.scroll_id,
            shards=response.shards,
            suggestions=response.suggest,
            aggregations=response.aggregations,
        )

    @overload
    def __getitem__(self, index: int) -> Any: ...

    @overload
    def __getitem__(self, index: slice) -> list[Any]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Collection(total={self.total}, items={self._items!r})"

    def first(self, default: Any = None) -> Any:
        return self._items[0] if self._items else default

    def last(self, default: Any = None) -> Any:
        return self._items[-1] if self._items else default

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def map(self, func: Callable[[Any], Any]) -> list[Any]:
        return [func(item) for item in self._items]

    def get_ids(self) -> list[Any]:
        return [item.get_id() for item in self._items]

    def get_suggestions(self, name: str | None = None) -> Any:
        if name is None:
            return self.suggestions
        return self.suggestions.get(name)

    def get_aggregations(self, name: str | None = None) -> Any:
        if name is None:
            return self.aggregations
        return self.aggregations.get(name)

    def to_list(self) -> list[dict]:
        return [item.to_dict() for item in self._items]

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_list(), indent=indent, default=str)
