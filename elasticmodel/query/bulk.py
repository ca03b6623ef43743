from __future__ import annotations

__all__ = ["Bulk"]

from typing import TYPE_CHECKING, Any

from ..core import get_logger

if TYPE_CHECKING:
    from .builder import Builder

logger = get_logger(__name__)


class Bulk:
    """Sequences index, update and delete actions into one request.

    The pending index and id apply to the next action only. With
    autocommit_after set, the body is sent once that many actions
    have accumulated.
    """

    _query: Builder
    _autocommit_after: int | None
    _index: str | None
    _id: str | None
    _body: list[dict]
    _operation_count: int
    _last_result: dict | None

    def __init__(self, query: Builder, autocommit_after: int | None = None):
        """Initialize.

        Args:
            query:
                Builder providing the connection and default index.
            autocommit_after:
                Number of actions after which the body is committed.
        """
        self._query = query
        self._autocommit_after = autocommit_after
        self._index = None
        self._id = None
        self._body = []
        self._operation_count = 0
        self._last_result = None

    def index(self, index: str | None = None) -> Bulk:
        self._index = index
        return self

    def id(self, id: str | None = None) -> Bulk:
        self._id = id
        return self

    def auto_commit_after(self, count: int | None) -> Bulk:
        self._autocommit_after = count
        return self

    def insert(self, data: dict) -> Bulk:
        return self.action("index", data)

    def create(self, data: dict) -> Bulk:
        return self.action("create", data)

    def update(self, data: dict) -> Bulk:
        return self.action("update", data)

    def delete(self) -> Bulk:
        return self.action("delete")

    def action(self, type: str, data: dict | None = None) -> Bulk:
        metadata: dict[str, Any] = dict()
        index = self._index or self._query.get_index()
        if index:
            metadata["_index"] = index
        if self._id is not None:
            metadata["_id"] = self._id
        self._body.append({type: metadata})
        if data is not None:
            self._body.append({"doc": data} if type == "update" else data)

        self._operation_count += 1
        self._index = None
        self._id = None

        if (
            self._autocommit_after
            and self._operation_count >= self._autocommit_after
        ):
            self.commit()
        return self

    def body(self) -> list[dict]:
        return list(self._body)

    def get_operation_count(self) -> int:
        return self._operation_count

    def get_last_result(self) -> dict | None:
        """Response of the latest commit that sent a request."""
        return self._last_result

    def commit(self) -> dict | None:
        if not self._body:
            return None
        params = self._query.apply_ignores({"body": self._body})
        logger.debug("Committing %s bulk actions", self._operation_count)
        result = self._query.get_connection().bulk(params)
        self._body = []
        self._operation_count = 0
        self._last_result = result
        return result
