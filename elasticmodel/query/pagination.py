from __future__ import annotations

__all__ = ["Pagination"]

import json
import math
from collections.abc import Sequence
from typing import Any, Iterator

from .collection import Collection


class Pagination(Sequence):
    """One page of a search with the page numbers."""

    items: Collection
    total: int
    per_page: int
    current_page: int
    last_page: int
    page_name: str

    def __init__(
        self,
        items: Collection,
        total: int,
        per_page: int,
        current_page: int = 1,
        page_name: str = "page",
    ):
        self.items = items
        self.total = total
        self.per_page = per_page
        self.current_page = current_page
        self.page_name = page_name
        self.last_page = max(math.ceil(total / per_page), 1)

    def __getitem__(self, index):
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def has_pages(self) -> bool:
        return self.current_page != 1 or self.has_more_pages()

    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    def on_first_page(self) -> bool:
        return self.current_page <= 1

    def next_page(self) -> int | None:
        return self.current_page + 1 if self.has_more_pages() else None

    def previous_page(self) -> int | None:
        return self.current_page - 1 if self.current_page > 1 else None

    def first_item(self) -> int | None:
        if len(self.items) == 0:
            return None
        return (self.current_page - 1) * self.per_page + 1

    def last_item(self) -> int | None:
        first = self.first_item()
        if first is None:
            return None
        return first + len(self.items) - 1

    def to_dict(self) -> dict:
        return {
            "current_page": self.current_page,
            "data": self.items.to_list(),
            "from": self.first_item(),
            "last_page": self.last_page,
            "per_page": self.per_page,
            "to": self.last_item(),
            "total": self.total,
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)
