from __future__ import annotations

__all__ = ["SearchResponseIterator"]

from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from ..connection import Connection


class SearchResponseIterator:
    """Iterates raw search responses page by page with a scroll.

    Iteration stops at the first page without hits. The scroll
    context is cleared when iteration ends.
    """

    _connection: Connection
    _params: dict[str, Any]
    _scroll: str
    _scroll_id: str | None

    def __init__(
        self,
        connection: Connection,
        params: dict[str, Any],
        scroll: str | None = None,
    ):
        self._connection = connection
        self._params = dict(params)
        self._scroll = scroll or self._params.get("scroll") or "1m"
        self._params["scroll"] = self._scroll
        self._scroll_id = None

    def set_scroll_timeout(self, scroll: str) -> SearchResponseIterator:
        self._scroll = scroll
        self._params["scroll"] = scroll
        return self

    def __iter__(self) -> Iterator[dict]:
        self.clear_scroll()
        try:
            response = self._connection.search(self._params)
            while True:
                self._scroll_id = response.get("_scroll_id")
                if not response.get("hits", {}).get("hits"):
                    break
                yield response
                if not self._scroll_id:
                    break
                response = self._connection.scroll(
                    {"scroll_id": self._scroll_id, "scroll": self._scroll}
                )
        finally:
            self.clear_scroll()

    def clear_scroll(self) -> None:
        if self._scroll_id:
            self._connection.clear_scroll(
                {"scroll_id": self._scroll_id, "client": {"ignore": [404]}}
            )
            self._scroll_id = None
