from __future__ import annotations

from enum import IntFlag
from typing import Any

from ..core import DataModel, DataModelField


class RegexpFlag(IntFlag):
    """Regular expression operator flags."""

    ALL = 1
    NONE = 2
    COMPLEMENT = 4
    INTERVAL = 8
    INTERSECTION = 16
    ANYSTRING = 32

    @classmethod
    def to_string(cls, flags: int) -> str:
        """Pipe joined flag names in definition order."""
        return "|".join(
            str(flag.name) for flag in cls if int(flags) & flag.value
        )


class TotalHits(DataModel):
    value: int = 0
    relation: str = "eq"


class SearchHits(DataModel):
    total: int | TotalHits | None = None
    max_score: float | None = None
    hits: list[dict[str, Any]] = DataModelField(default_factory=list)


class SearchResponse(DataModel):
    """Search response envelope.

    Attributes:
        scroll_id: Scroll id to continue a scroll.
        took: Milliseconds taken.
        timed_out: A value indicating whether the search timed out.
        shards: Shard report.
        hits: Hits with total and max score.
        suggest: Suggestions by name.
        aggregations: Aggregation results by name.
    """

    scroll_id: str | None = DataModelField(alias="_scroll_id", default=None)
    took: int | None = None
    timed_out: bool = False
    shards: dict[str, Any] | None = DataModelField(
        alias="_shards", default=None
    )
    hits: SearchHits = DataModelField(default_factory=SearchHits)
    suggest: dict[str, Any] | None = None
    aggregations: dict[str, Any] | None = None

    def get_total(self) -> int:
        total = self.hits.total
        if isinstance(total, TotalHits):
            return total.value
        return int(total or 0)
