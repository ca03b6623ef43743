"""
Elasticsearch connection.
"""

from __future__ import annotations

__all__ = ["Connection"]

from typing import Any, Callable

from elastic_transport import ApiResponse
from elasticsearch import Elasticsearch

from ..cache import Cache
from ..core import get_logger
from ..core.exceptions import BadRequestError
from ..query.builder import Builder
from ._config import DEFAULT_CACHE_PREFIX, ConnectionConfig

logger = get_logger(__name__)


class Connection:
    """Binds an Elasticsearch client to a cache and a default index.

    Requests take the parameter maps compiled by the query builder.
    Transport options live under the "client" key: "ignore" is passed
    to the client as ignore_status, the rest as client options.
    """

    config: ConnectionConfig | None
    cache: Cache | None
    index: str | None
    cache_prefix: str
    page_resolver: Callable[[str], int | None] | None

    _client: Any
    _init: bool

    def __init__(
        self,
        client: Any = None,
        cache: Cache | None = None,
        index: str | None = None,
        cache_prefix: str | None = None,
        config: ConnectionConfig | dict | None = None,
        page_resolver: Callable[[str], int | None] | None = None,
    ):
        """Initialize.

        Args:
            client:
                Elasticsearch client. Created from config when not set.
            cache:
                Cache used by remembered queries.
            index:
                Default index for new queries.
            cache_prefix:
                Prefix for generated cache keys, defaults to "es".
            config:
                Connection config used to create the client.
            page_resolver:
                Resolves the current page number from a page
                parameter name. Pagination starts at page 1 without it.
        """
        if isinstance(config, dict):
            config = ConnectionConfig.from_dict(config)
        self.config = config
        self.cache = cache
        self.index = index or (config.index if config else None)
        self.cache_prefix = cache_prefix or (
            config.cache_prefix if config else DEFAULT_CACHE_PREFIX
        )
        self.page_resolver = page_resolver

        self._client = client
        self._init = client is not None

    @property
    def client(self) -> Any:
        if not self._init:
            if self.config is None:
                raise BadRequestError(
                    "Elasticsearch client or config must be specified"
                )
            self._client = Elasticsearch(**self.config.to_client_params())
            self._init = True
        return self._client

    @classmethod
    def create(
        cls,
        config: ConnectionConfig | dict,
        cache: Cache | None = None,
        **kwargs: Any,
    ) -> Connection:
        return cls(config=config, cache=cache, **kwargs)

    def get_client(self) -> Any:
        return self.client

    def get_cache(self) -> Cache | None:
        return self.cache

    def get_default_index(self) -> str | None:
        return self.index

    def new_query(self) -> Builder:
        """Create a fresh query builder bound to this connection."""
        query = Builder(self)
        if self.index:
            query.index(self.index)
        return query

    def search(self, params: dict) -> Any:
        return self._request("search", params)

    def count(self, params: dict) -> Any:
        return self._request("count", params)

    def insert(self, params: dict) -> Any:
        if not params.get("index") and self.index:
            params = {**params, "index": self.index}
        return self._request("index", params)

    def update(self, params: dict) -> Any:
        return self._request("update", params)

    def delete(self, params: dict) -> Any:
        return self._request("delete", params)

    def bulk(self, params: dict) -> Any:
        return self._request("bulk", params)

    def scroll(self, params: dict) -> Any:
        return self._request("scroll", params)

    def clear_scroll(self, params: dict) -> Any:
        return self._request("clear_scroll", params)

    def create_index(self, params: dict) -> Any:
        return self._request("indices.create", params)

    def drop_index(self, params: dict) -> Any:
        return self._request("indices.delete", params)

    def index_exists(self, params: dict) -> bool:
        return bool(self._request("indices.exists", params))

    def put_mapping(self, params: dict) -> Any:
        return self._request("indices.put_mapping", params)

    def update_aliases(self, params: dict) -> Any:
        return self._request("indices.update_aliases", params)

    def _request(self, endpoint: str, params: dict) -> Any:
        args = dict(params)
        options = dict(args.pop("client", None) or {})
        if "ignore" in options:
            options["ignore_status"] = options.pop("ignore")
        if "from" in args:
            args["from_"] = args.pop("from")

        client = self.client
        if options:
            client = client.options(**options)
        func = client
        for name in endpoint.split("."):
            func = getattr(func, name)

        logger.debug(
            "Sending %s request to index %s", endpoint, args.get("index")
        )
        return _unwrap(func(**args))


def _unwrap(response: Any) -> Any:
    if isinstance(response, ApiResponse):
        return response.body
    return response
