"""
Fluent query builder.
"""

from __future__ import annotations

__all__ = ["Builder"]

import copy
import hashlib
import json
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Callable, Iterator

from ..cache import FOREVER, Cache, CacheLookup
from ..core import get_logger
from ..core.exceptions import (
    BadRequestError,
    DocumentNotFoundError,
    IndexNotConfiguredError,
    ScopeNotFoundError,
)
from ._body import QueryBody
from ._conditions import (
    FILTER,
    MUST,
    MUST_NOT,
    NOT_SET,
    SHOULD,
    ConditionTranslator,
)
from ._helper import to_list
from ._models import RegexpFlag, SearchResponse
from .bulk import Bulk
from .collection import Collection
from .index import Index
from .iterators import SearchResponseIterator
from .pagination import Pagination

if TYPE_CHECKING:
    from ..connection import Connection
    from ..model import Model
    from .abstract_query import AbstractQuery

logger = get_logger(__name__)

DEFAULT_SIZE = 10
DEFAULT_SKIP = 0
DEFAULT_SCROLL = "1m"
DEFAULT_PAGE_NAME = "page"

CLIENT = "client"
CLIENT_IGNORE = "ignore"


class Builder:
    """Accumulates query state and executes it on a connection.

    Mutating methods change the builder in place and return it.
    Compiling never touches the builder: clone() takes a snapshot, the
    registered global scopes are applied to that snapshot, and the
    snapshot is compiled. Compiling the same state twice gives equal
    output.
    """

    _connection: Connection
    _model: Model | None
    _body: QueryBody
    _translator: ConditionTranslator

    _index: str | None
    _id: str | None
    _skip: int
    _size: int
    _ignores: list[int]
    _scroll: str | None
    _scroll_id: str | None
    _search_type: str | None

    _cache_ttl: int | None
    _cache_key: str | None
    _cache_prefix: str

    _scopes: dict[str, Any]
    _removed_scopes: list[str]

    def __init__(self, connection: Connection, model: Model | None = None):
        """Initialize.

        Args:
            connection:
                Connection the query executes on.
            model:
                Model hydrated from search hits. A plain model is
                used when not set.
        """
        self._connection = connection
        self._model = model
        self._body = QueryBody()
        self._translator = ConditionTranslator()

        self._index = None
        self._id = None
        self._skip = DEFAULT_SKIP
        self._size = DEFAULT_SIZE
        self._ignores = []
        self._scroll = None
        self._scroll_id = None
        self._search_type = None

        self._cache_ttl = None
        self._cache_key = None
        self._cache_prefix = connection.cache_prefix

        self._scopes = dict()
        self._removed_scopes = []

    def __iter__(self) -> Iterator[Model]:
        return iter(self.get())

    def clone(self) -> Builder:
        """Snapshot the builder.

        The clone shares the connection and model but owns copies of
        the body fragments, ignores and scopes.
        """
        builder = copy.copy(self)
        builder._body = self._body.clone()
        builder._ignores = list(self._ignores)
        builder._scopes = dict(self._scopes)
        builder._removed_scopes = list(self._removed_scopes)
        return builder

    # Targeting

    def get_connection(self) -> Connection:
        return self._connection

    def get_model(self) -> Model:
        if self._model is None:
            from ..connection import ConnectionResolver
            from ..model import Model

            self._model = Model(
                resolver=ConnectionResolver.from_connection(self._connection)
            )
        return self._model

    def set_model(self, model: Model) -> Builder:
        self._model = model
        return self

    def index(self, index: str | None) -> Builder:
        self._index = index
        return self

    def get_index(self) -> str | None:
        return self._index

    def id(self, id: str | None = None) -> Builder:
        self._id = id
        return self

    def get_id(self) -> str | None:
        return self._id

    def take(self, size: int = DEFAULT_SIZE) -> Builder:
        self._size = size
        return self

    def get_size(self) -> int:
        return self._size

    def skip(self, skip: int = DEFAULT_SKIP) -> Builder:
        self._skip = skip
        return self

    def get_skip(self) -> int:
        return self._skip

    def ignore(self, *codes: int | list[int]) -> Builder:
        for code in to_list(*codes):
            if int(code) not in self._ignores:
                self._ignores.append(int(code))
        return self

    def get_ignores(self) -> list[int]:
        return list(self._ignores)

    def search_type(self, type: str | None) -> Builder:
        self._search_type = type
        return self

    def get_search_type(self) -> str | None:
        return self._search_type

    def scroll(self, scroll: str = DEFAULT_SCROLL) -> Builder:
        self._scroll = scroll
        return self

    def get_scroll(self) -> str | None:
        return self._scroll

    def scroll_id(self, scroll_id: str | None) -> Builder:
        self._scroll_id = scroll_id
        return self

    def get_scroll_id(self) -> str | None:
        return self._scroll_id

    # Source filtering

    def include(self, *fields: str | list[str]) -> Builder:
        self._body.include(to_list(*fields))
        return self

    def exclude(self, *fields: str | list[str]) -> Builder:
        self._body.exclude(to_list(*fields))
        return self

    def get_includes(self) -> list[str]:
        return self._body.get_includes()

    def get_excludes(self) -> list[str]:
        return self._body.get_excludes()

    # Clauses

    def filter(self, type: str, params: Any) -> Builder:
        self._body.add_clause(FILTER, {type: params})
        return self

    def must(self, type: str, params: Any) -> Builder:
        self._body.add_clause(MUST, {type: params})
        return self

    def must_not(self, type: str, params: Any) -> Builder:
        self._body.add_clause(MUST_NOT, {type: params})
        return self

    def should(self, type: str, params: Any) -> Builder:
        self._body.add_clause(SHOULD, {type: params})
        return self

    def minimum_should_match(self, value: int | str | None) -> Builder:
        """Set minimum should match.

        Only emitted when the query holds should clauses.
        """
        self._body.minimum_should_match(value)
        return self

    def term_filter(
        self, field: str, value: Any, boost: float | None = None
    ) -> Builder:
        params: dict[str, Any] = {field: value}
        if boost is not None:
            params["boost"] = float(boost)
        return self.filter("term", params)

    def terms_filter(
        self, field: str, values: Any, boost: float | None = None
    ) -> Builder:
        params: dict[str, Any] = {field: to_list(values)}
        if boost is not None:
            params["boost"] = float(boost)
        return self.filter("terms", params)

    def range_filter(
        self,
        field: str,
        operator: str | dict | Callable[[Builder, str], dict],
        value: Any = None,
    ) -> Builder:
        """Add a range filter.

        Args:
            field:
                Field name.
            operator:
                Range operator (gt, gte, lt, lte) used with value, a
                mapping of range parameters, or a callable receiving
                the builder and field that returns the parameters.
            value:
                Value for a single operator.
        """
        if callable(operator):
            params = operator(self, field)
        elif isinstance(operator, dict):
            params = operator
        else:
            params = {operator: value}
        return self.filter("range", {field: params})

    def match_filter(self, field: str, value: Any) -> Builder:
        return self.filter("match", {field: value})

    def prefix_filter(
        self, field: str, value: str, case_sensitive: bool = True
    ) -> Builder:
        params: dict[str, Any] = {"value": value}
        if not case_sensitive:
            params["case_insensitive"] = True
        return self.filter("prefix", {field: params})

    def wildcard_filter(
        self,
        field: str,
        value: str,
        boost: float | None = None,
        case_sensitive: bool = True,
    ) -> Builder:
        params: dict[str, Any] = {"value": value}
        if boost is not None:
            params["boost"] = float(boost)
        if not case_sensitive:
            params["case_insensitive"] = True
        return self.filter("wildcard", {field: params})

    def regexp_filter(
        self,
        field: str,
        value: str | dict,
        flags: int | str | None = None,
        case_sensitive: bool = True,
        max_determinized_states: int | None = None,
    ) -> Builder:
        """Add a regexp filter.

        Args:
            field:
                Field name.
            value:
                Regular expression, or a mapping of regexp options
                passed as is.
            flags:
                RegexpFlag bits or a flag string like "ALL".
            case_sensitive:
                False to match case insensitively.
            max_determinized_states:
                Maximum number of automaton states.
        """
        if isinstance(value, dict):
            return self.filter("regexp", {field: value})
        options: dict[str, Any] = dict()
        if flags is not None:
            options["flags"] = (
                RegexpFlag.to_string(flags)
                if isinstance(flags, int)
                else flags
            )
        if not case_sensitive:
            options["case_insensitive"] = True
        if max_determinized_states is not None:
            options["max_determinized_states"] = max_determinized_states
        if not options:
            return self.filter("regexp", {field: value})
        return self.filter("regexp", {field: {"value": value, **options}})

    def distance_filter(
        self, field: str, geo_point: Any, distance: str
    ) -> Builder:
        return self.filter(
            "geo_distance", {field: geo_point, "distance": distance}
        )

    def all(self, boost: float | None = None) -> Builder:
        params: dict[str, Any] = dict()
        if boost is not None:
            params["boost"] = float(boost)
        self._body.add_root({"match_all": params})
        return self

    def none(self) -> Builder:
        self._body.add_root({"match_none": {}})
        return self

    def nested(
        self,
        path: str,
        query: dict | Builder,
        score_mode: str = "avg",
    ) -> Builder:
        self._body.add_root(
            {
                "nested": {
                    "score_mode": score_mode,
                    "path": path,
                    "query": self._to_query_fragment(query),
                }
            }
        )
        return self

    def pinned(
        self, ids: list[str], organic: dict | Builder | None = None
    ) -> Builder:
        if organic is None:
            organic_query: dict = {"match_none": {}}
        else:
            organic_query = self._to_query_fragment(organic)
        self._body.add_root(
            {"pinned": {"ids": to_list(ids), "organic": organic_query}}
        )
        return self

    def _to_query_fragment(self, query: dict | Builder) -> dict:
        if isinstance(query, Builder):
            return query.to_dict().get("query", {"match_all": {}})
        return query

    # Conditions

    def where(
        self,
        field: str,
        operator: Any = None,
        value: Any = NOT_SET,
    ) -> Builder:
        """Add a condition.

        where(field, value) is an equality check unless value is an
        operator token, so where("status", "exists") checks existence.
        Pass the operator explicitly to compare against such values.

        Args:
            field:
                Field name.
            operator:
                One of =, !=, >, >=, <, <=, like, exists, or the value
                when called with two arguments.
            value:
                Value to compare against.
        """
        operator, value = ConditionTranslator.normalize(operator, value)
        group, clause = self._translator.translate(field, operator, value)
        self._body.add_clause(group, clause)
        return self

    def where_not(
        self,
        field: str,
        operator: Any = None,
        value: Any = NOT_SET,
    ) -> Builder:
        operator, value = ConditionTranslator.normalize(operator, value)
        group, clause = self._translator.translate(
            field, operator, value, negate=True
        )
        self._body.add_clause(group, clause)
        return self

    def where_in(self, field: str, values: Any) -> Builder:
        group, clause = self._translator.translate_in(field, to_list(values))
        self._body.add_clause(group, clause)
        return self

    def where_not_in(self, field: str, values: Any) -> Builder:
        group, clause = self._translator.translate_in(
            field, to_list(values), negate=True
        )
        self._body.add_clause(group, clause)
        return self

    def where_between(
        self, field: str, first: Any, last: Any = None
    ) -> Builder:
        first, last = _between_bounds(first, last)
        group, clause = self._translator.translate_between(field, first, last)
        self._body.add_clause(group, clause)
        return self

    def where_not_between(
        self, field: str, first: Any, last: Any = None
    ) -> Builder:
        first, last = _between_bounds(first, last)
        group, clause = self._translator.translate_between(
            field, first, last, negate=True
        )
        self._body.add_clause(group, clause)
        return self

    def where_exists(self, field: str, exists: bool = True) -> Builder:
        return self.where(field, "exists", exists)

    # Raw body and output shaping

    def body(self, body: dict) -> Builder:
        self._body.merge_raw(body)
        return self

    def set(self, path: str, value: Any) -> Builder:
        """Set a raw body value by dotted path like "query.bool.should.0"."""
        self._body.set_raw(path, value)
        return self

    def aggregate(
        self, name: str, field_or_body: str | dict | None = None
    ) -> Builder:
        if isinstance(field_or_body, dict):
            definition = field_or_body
        else:
            definition = {"terms": {"field": field_or_body or name}}
        self._body.aggregate(name, definition)
        return self

    def group_by(self, field: str) -> Builder:
        self._body.collapse({"field": field})
        return self

    def order_by(self, field: str | dict, direction: str = "asc") -> Builder:
        if isinstance(field, dict):
            self._body.sort(field)
        else:
            self._body.sort({field: direction})
        return self

    def highlight(self, *fields: str | list | dict, **options: Any) -> Builder:
        field_map: dict[str, dict] = dict()
        for field in fields:
            if isinstance(field, dict):
                field_map.update(field)
            else:
                for name in to_list(field):
                    field_map[name] = {}
        self._body.highlight(field_map, options)
        return self

    def suggest(self, name: str, definition: dict) -> Builder:
        self._body.suggest(name, definition)
        return self

    # Cache

    def remember(
        self,
        ttl: int | timedelta | datetime | None,
        key: str | None = None,
    ) -> Builder:
        """Cache the raw search result.

        Args:
            ttl:
                Seconds, timedelta or expiry datetime. -1 caches
                forever, a falsy value or a past datetime disables
                caching.
            key:
                Cache key, generated from the compiled query when
                not set.
        """
        self._cache_ttl = _normalize_ttl(ttl)
        self._cache_key = key
        return self

    def remember_forever(self, key: str | None = None) -> Builder:
        return self.remember(FOREVER, key)

    def cache_prefix(self, prefix: str) -> Builder:
        self._cache_prefix = prefix
        return self

    def get_cache_ttl(self) -> int | None:
        return self._cache_ttl

    def get_cache_key(self) -> str:
        key = self._cache_key or self.generate_cache_key()
        return f"{self._cache_prefix}.{key}"

    def generate_cache_key(self) -> str:
        params = self.build_query()
        try:
            data = json.dumps(params, sort_keys=True, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            logger.warning(
                "Query is not JSON serializable, hashing its repr: %s", e
            )
            data = repr(params)
        return hashlib.md5(data.encode("utf-8")).hexdigest()

    # Scopes

    def with_global_scope(self, identifier: str, scope: Any) -> Builder:
        self._scopes[identifier] = scope
        extend = getattr(scope, "extend", None)
        if callable(extend):
            extend(self)
        return self

    def without_global_scope(self, scope: Any) -> Builder:
        from ..model.scopes import scope_identifier

        identifier = scope_identifier(scope)
        self._scopes.pop(identifier, None)
        if identifier not in self._removed_scopes:
            self._removed_scopes.append(identifier)
        return self

    def without_global_scopes(self, scopes: list | None = None) -> Builder:
        """Remove global scopes, all registered ones when None."""
        if scopes is None:
            scopes = list(self._scopes.keys())
        for scope in scopes:
            self.without_global_scope(scope)
        return self

    def removed_scopes(self) -> list[str]:
        return list(self._removed_scopes)

    def apply_scopes(self) -> Builder:
        """Clone the builder and apply its global scopes to the clone.

        Scopes run in registration order. The returned clone has no
        pending scopes left.
        """
        builder = self.clone()
        scopes = builder._scopes
        builder._scopes = dict()
        for scope in scopes.values():
            builder._call_scope(scope)
        return builder

    def _call_scope(self, scope: Any) -> None:
        apply = getattr(scope, "apply", None)
        if callable(apply):
            apply(self, self.get_model())
        else:
            scope(self)

    def scope(self, name: str, *args: Any) -> Builder:
        """Apply a named scope registered on the model."""
        model = self.get_model()
        if not model.has_named_scope(name):
            raise ScopeNotFoundError(
                f"Scope {name} is not registered on {type(model).__name__}"
            )
        result = model.call_named_scope(name, self, *args)
        return result if isinstance(result, Builder) else self

    def scopes(self, scopes: str | list | dict) -> Builder:
        """Apply several named scopes.

        Args:
            scopes:
                A scope name, a list of names or (name, args) pairs,
                or a mapping of name to argument list.
        """
        builder = self
        for name, args in _parse_scopes(scopes):
            builder = builder.scope(name, *args)
        return builder

    def apply(self, query: AbstractQuery) -> Builder:
        """Compile a reusable query onto a clone of this builder."""
        query.set_builder(self)
        return query.build()

    # Compile

    def to_dict(self) -> dict:
        builder = self.apply_scopes()
        return builder._body.compile(builder._id)

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def build_query(self) -> dict:
        """Compile the search request parameters."""
        builder = self.apply_scopes()
        params: dict[str, Any] = {
            "body": builder._body.compile(builder._id),
            "from": builder._skip,
            "size": builder._size,
        }
        builder.apply_ignores(params)
        if builder._search_type:
            params["search_type"] = builder._search_type
        if builder._scroll:
            params["scroll"] = builder._scroll
        if builder._index:
            params["index"] = builder._index
        return params

    def apply_ignores(self, params: dict) -> dict:
        """Add the ignore list under client options, keeping the others."""
        if self._ignores:
            client = dict(params.get(CLIENT) or {})
            client[CLIENT_IGNORE] = list(self._ignores)
            params[CLIENT] = client
        return params

    # Read

    def get(self, scroll_id: str | None = None) -> Collection:
        result = self._get_result(scroll_id or self._scroll_id)
        if not result:
            return Collection([])
        return self._transform_result(result)

    def raw(self) -> dict:
        return self._connection.search(self.build_query())

    def first(self, scroll_id: str | None = None) -> Model | None:
        self.take(1)
        return self.get(scroll_id).first()

    def first_or(
        self,
        callback: Callable[[], Any] | None = None,
        scroll_id: str | None = None,
    ) -> Any:
        model = self.first(scroll_id)
        if model is None and callback is not None:
            return callback()
        return model

    def first_or_fail(self, scroll_id: str | None = None) -> Model:
        model = self.first(scroll_id)
        if model is None:
            raise DocumentNotFoundError(
                model=type(self.get_model()),
                ids=[self._id] if self._id is not None else [],
                query=self.to_dict(),
            )
        return model

    def first_where(
        self,
        field: str,
        operator: Any = None,
        value: Any = NOT_SET,
    ) -> Model | None:
        return self.where(field, operator, value).first()

    def count(self) -> int:
        """Count matching documents.

        Pagination, scroll, source filtering and sorting are dropped
        since the count endpoint does not take them.
        """
        params = self.build_query()
        for key in ("from", "size", "scroll", "search_type"):
            params.pop(key, None)
        body = params.get("body", {})
        for key in ("_source", "sort"):
            body.pop(key, None)
        response = self._connection.count(params)
        return int(response["count"])

    def paginate(
        self,
        per_page: int = DEFAULT_SIZE,
        page_name: str = DEFAULT_PAGE_NAME,
        page: int | None = None,
    ) -> Pagination:
        if page is None:
            page = self._resolve_page(page_name)
        self.take(per_page)
        self.skip(page * per_page - per_page)
        collection = self.get()
        return Pagination(
            collection,
            total=collection.total,
            per_page=per_page,
            current_page=page,
            page_name=page_name,
        )

    def cursor(self, scroll: str = DEFAULT_SCROLL) -> Iterator[Model]:
        """Iterate models across all scroll pages."""
        params = self.build_query()
        params["scroll"] = scroll
        iterator = SearchResponseIterator(self._connection, params, scroll)
        model = self.get_model()
        for response in iterator:
            for hit in response.get("hits", {}).get("hits", []):
                yield model.new_from_builder(hit)

    def clear(self, scroll_id: str | None = None) -> dict | None:
        """Clear a scroll context."""
        scroll_id = scroll_id or self._scroll_id
        if not scroll_id:
            return None
        params = self.apply_ignores({"scroll_id": scroll_id})
        response = self._connection.clear_scroll(params)
        if scroll_id == self._scroll_id:
            self._scroll_id = None
        return response

    def _resolve_page(self, page_name: str) -> int:
        resolver = self._connection.page_resolver
        value = resolver(page_name) if resolver is not None else None
        try:
            page = int(value) if value is not None else 1
        except (TypeError, ValueError):
            page = 1
        return page if page >= 1 else 1

    def _get_result(self, scroll_id: str | None) -> dict | None:
        if not self._cache_ttl:
            return self._perform_search(scroll_id)

        cache = self._connection.get_cache()
        if cache is None:
            return self._perform_search(scroll_id)

        key = self.get_cache_key()
        result = self._lookup_cache(cache, key)
        if result is not None:
            logger.debug("Cache hit for %s", key)
            return result

        result = self._perform_search(scroll_id)
        logger.debug("Caching result for %s", key)
        cache.set(key, result, self._cache_ttl)
        return result

    def _lookup_cache(self, cache: Cache, key: str) -> dict | None:
        try:
            lookup = cache.get(key)
        except Exception as e:
            logger.warning("Cache lookup for %s failed: %s", key, e)
            return None
        if not isinstance(lookup, CacheLookup):
            lookup = (
                CacheLookup.miss()
                if lookup is None
                else CacheLookup.hit(lookup)
            )
        if not lookup.is_hit:
            logger.debug("Cache miss for %s", key)
            return None
        if not isinstance(lookup.value, dict):
            logger.warning("Cache entry for %s is corrupted", key)
            return None
        return lookup.value

    def _perform_search(self, scroll_id: str | None) -> dict | None:
        if scroll_id:
            scroll = self._scroll or DEFAULT_SCROLL
            return self._connection.scroll(
                self.apply_ignores({"scroll": scroll, "scroll_id": scroll_id})
            )
        result = self._connection.search(self.build_query())
        if self._scroll and isinstance(result, dict):
            self._scroll_id = result.get("_scroll_id", self._scroll_id)
        return result

    def _transform_result(self, result: dict) -> Collection:
        response = SearchResponse.from_dict(result)
        model = self.get_model()
        items = [model.new_from_builder(hit) for hit in response.hits.hits]
        return Collection.from_response(response, items)

    # Write

    def insert(self, attributes: dict, id: str | None = None) -> dict:
        params: dict[str, Any] = {
            "body": {
                k: v
                for k, v in attributes.items()
                if k not in ("_id", "_index")
            }
        }
        self.apply_ignores(params)
        if self._index:
            params["index"] = self._index
        id = id if id is not None else self._id
        if id is not None:
            params["id"] = id
        return self._connection.insert(params)

    def update(self, attributes: dict, id: str | None = None) -> dict:
        doc = {
            k: v
            for k, v in attributes.items()
            if k not in ("_highlight", "_index", "_score", "_id")
        }
        params = self._document_params(id, {"body": {"doc": doc}})
        return self._connection.update(params)

    def delete(
        self, id: str | None = None, parameters: dict | None = None
    ) -> dict:
        params = self._document_params(id, copy.deepcopy(parameters or {}))
        return self._connection.delete(params)

    def script(
        self,
        script: str,
        params: dict | None = None,
        id: str | None = None,
    ) -> dict:
        body = {"script": {"source": script, "params": params or {}}}
        return self._connection.update(
            self._document_params(id, {"body": body})
        )

    def increment(self, field: str, count: int = 1) -> dict:
        return self.script(
            f"ctx._source.{field} += params.count", {"count": count}
        )

    def decrement(self, field: str, count: int = 1) -> dict:
        return self.script(
            f"ctx._source.{field} -= params.count", {"count": count}
        )

    def bulk(self, data: dict | Callable[[Bulk], Any]) -> dict | None:
        """Send several actions in one bulk request.

        Args:
            data:
                Mapping of id to attributes, each indexed, or a callable
                that receives a Bulk builder.

        Returns the response of the last request sent, including one
        sent by an automatic commit.
        """
        bulk = Bulk(self)
        if callable(data):
            data(bulk)
        else:
            for id, attributes in data.items():
                bulk.id(id).insert(attributes)
        bulk.commit()
        return bulk.get_last_result()

    def _document_params(self, id: str | None, params: dict) -> dict:
        id = id if id is not None else self._id
        if id is None:
            raise BadRequestError("Document id must be specified")
        params["id"] = id
        if self._index:
            params["index"] = self._index
        return self.apply_ignores(params)

    # Index management

    def create_index(
        self,
        name: str | None = None,
        callback: Callable[[Index], Any] | None = None,
    ) -> dict:
        index = self._new_index(name)
        if callback is not None:
            callback(index)
        return index.create()

    def drop_index(self, name: str | None = None) -> None:
        self._new_index(name).drop()

    def index_exists(self, name: str | None = None) -> bool:
        return self._new_index(name).exists()

    def _new_index(self, name: str | None) -> Index:
        name = name or self._index
        if not name:
            raise IndexNotConfiguredError("No index configured")
        index = Index(self._connection, name)
        if self._ignores:
            index.ignores(*self._ignores)
        return index


def _between_bounds(first: Any, last: Any) -> tuple[Any, Any]:
    if isinstance(first, (list, tuple)) and len(first) == 2:
        return first[0], first[1]
    return first, last


def _normalize_ttl(ttl: int | timedelta | datetime | None) -> int | None:
    """Convert a ttl to seconds.

    An expiry datetime in the past gives 0, which disables caching for
    the query instead of storing an already expired entry.
    """
    if ttl is None:
        return None
    if isinstance(ttl, timedelta):
        return int(ttl.total_seconds())
    if isinstance(ttl, datetime):
        now = datetime.now(ttl.tzinfo)
        return max(int((ttl - now).total_seconds()), 0)
    return int(ttl)


def _parse_scopes(scopes: str | list | dict) -> list[tuple[str, list]]:
    if isinstance(scopes, str):
        return [(scopes, [])]
    if isinstance(scopes, dict):
        return [(name, to_list(args)) for name, args in scopes.items()]
    parsed: list[tuple[str, list]] = []
    for item in scopes:
        if isinstance(item, str):
            parsed.append((item, []))
        elif isinstance(item, dict):
            parsed.extend(_parse_scopes(item))
        else:
            name, args = item
            parsed.append((name, to_list(args)))
    return parsed
