from __future__ import annotations

import copy
from typing import Any

from ._conditions import CLAUSE_GROUPS, MUST, SHOULD
from ._helper import merge, set_path


class QueryBody:
    """Accumulates request body fragments and compiles the body.

    Compiled key order is the raw body, then query, _source, aggs,
    sort, highlight, suggest and collapse. Boolean clause groups are
    emitted in filter, must, must_not, should order and only when
    they hold clauses.
    """

    _raw: dict[str, Any]
    _clauses: dict[str, list[dict]]
    _roots: list[dict]
    _minimum_should_match: int | str | None

    _source_set: bool
    _includes: list[str]
    _excludes: list[str]

    _aggregations: dict[str, dict]
    _sort: list[dict]
    _highlight: dict[str, Any] | None
    _suggest: dict[str, dict]
    _collapse: dict[str, Any] | None

    def __init__(self) -> None:
        self._raw = dict()
        self._clauses = {group: [] for group in CLAUSE_GROUPS}
        self._roots = []
        self._minimum_should_match = None

        self._source_set = False
        self._includes = []
        self._excludes = []

        self._aggregations = dict()
        self._sort = []
        self._highlight = None
        self._suggest = dict()
        self._collapse = None

    def clone(self) -> QueryBody:
        return copy.deepcopy(self)

    def add_clause(self, group: str, clause: dict) -> None:
        self._clauses[group].append(clause)

    def add_root(self, query: dict) -> None:
        self._roots.append(query)

    def minimum_should_match(self, value: int | str | None) -> None:
        self._minimum_should_match = value

    def has_clauses(self, group: str | None = None) -> bool:
        if group is not None:
            return len(self._clauses[group]) > 0
        return any(self._clauses[group] for group in CLAUSE_GROUPS)

    def get_clauses(self, group: str) -> list[dict]:
        return list(self._clauses[group])

    def set_raw(self, path: str, value: Any) -> None:
        set_path(self._raw, path, value)

    def merge_raw(self, body: dict) -> None:
        self._raw = merge(self._raw, copy.deepcopy(body))

    def include(self, fields: list[str]) -> None:
        self._source_set = True
        for field in fields:
            if field in self._excludes:
                self._excludes.remove(field)
            if field not in self._includes:
                self._includes.append(field)

    def exclude(self, fields: list[str]) -> None:
        self._source_set = True
        for field in fields:
            if field in self._includes:
                self._includes.remove(field)
            if field not in self._excludes:
                self._excludes.append(field)

    def get_includes(self) -> list[str]:
        return list(self._includes)

    def get_excludes(self) -> list[str]:
        return list(self._excludes)

    def aggregate(self, name: str, definition: dict) -> None:
        self._aggregations[name] = definition

    def sort(self, clause: dict) -> None:
        self._sort.append(clause)

    def highlight(self, fields: dict[str, dict], options: dict) -> None:
        highlight = self._highlight or {"fields": {}}
        highlight.update(options)
        highlight["fields"] = {**highlight.get("fields", {}), **fields}
        self._highlight = highlight

    def suggest(self, name: str, definition: dict) -> None:
        self._suggest[name] = definition

    def collapse(self, definition: dict) -> None:
        self._collapse = definition

    def compile(self, id: str | None = None) -> dict:
        """Compile the request body.

        Args:
            id:
                Document id, emitted as the first filter clause.

        Returns:
            Request body. Fragments are deep copies, so mutating the
            result does not change the accumulated state.
        """
        body = copy.deepcopy(self._raw)

        query = self._compile_query(id)
        if query is not None:
            _put(body, "query", query)

        if self._source_set:
            _put(
                body,
                "_source",
                {
                    "includes": list(self._includes),
                    "excludes": list(self._excludes),
                },
            )
        if self._aggregations:
            _put(body, "aggs", copy.deepcopy(self._aggregations))
        if self._sort:
            _put(body, "sort", copy.deepcopy(self._sort))
        if self._highlight is not None:
            _put(body, "highlight", copy.deepcopy(self._highlight))
        if self._suggest:
            _put(body, "suggest", copy.deepcopy(self._suggest))
        if self._collapse is not None:
            _put(body, "collapse", copy.deepcopy(self._collapse))
        return body

    def _compile_query(self, id: str | None) -> dict | None:
        clauses = {
            group: copy.deepcopy(self._clauses[group])
            for group in CLAUSE_GROUPS
        }
        if id is not None:
            clauses["filter"].insert(0, {"term": {"_id": id}})
        roots = copy.deepcopy(self._roots)

        if not any(clauses.values()):
            if not roots:
                return None
            if len(roots) == 1:
                return roots[0]
        clauses[MUST] = roots + clauses[MUST]

        bool_query: dict[str, Any] = dict()
        for group in CLAUSE_GROUPS:
            if clauses[group]:
                bool_query[group] = clauses[group]
        if clauses[SHOULD] and self._minimum_should_match is not None:
            bool_query["minimum_should_match"] = self._minimum_should_match
        return {"bool": bool_query}


def _put(body: dict, key: str, value: Any) -> None:
    current = body.get(key)
    if isinstance(current, dict) and isinstance(value, dict):
        body[key] = merge(current, value)
    elif isinstance(current, list) and isinstance(value, list):
        body[key] = current + value
    else:
        body[key] = value
