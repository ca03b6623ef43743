from __future__ import annotations

__all__ = ["Index"]

from typing import TYPE_CHECKING, Any

from ..core.exceptions import BadRequestError

if TYPE_CHECKING:
    from ..connection import Connection


class Index:
    """Index settings, mappings and aliases with index operations."""

    name: str

    _connection: Connection
    _shards: int | None
    _replicas: int | None
    _ignores: list[int]
    _aliases: dict[str, Any]
    _mappings: dict[str, Any]

    def __init__(self, connection: Connection, name: str):
        """Initialize.

        Args:
            connection:
                Connection the index operations run on.
            name:
                Index name.
        """
        self.name = name
        self._connection = connection
        self._shards = None
        self._replicas = None
        self._ignores = []
        self._aliases = dict()
        self._mappings = dict()

    def __str__(self) -> str:
        return self.name

    def get_name(self) -> str:
        return self.name

    def get_connection(self) -> Connection:
        return self._connection

    def set_connection(self, connection: Connection) -> None:
        self._connection = connection

    def shards(self, shards: int) -> Index:
        self._shards = shards
        return self

    def replicas(self, replicas: int) -> Index:
        self._replicas = replicas
        return self

    def ignores(self, *codes: int) -> Index:
        self._ignores = list(dict.fromkeys(codes))
        return self

    def alias(self, alias: str, options: dict | str | None = None) -> Index:
        """Add an alias.

        Args:
            alias:
                Alias name.
            options:
                Alias options, or a routing key string.
        """
        if options is not None and not isinstance(options, (dict, str)):
            raise BadRequestError(
                "Alias options may be a dict, a routing key string or None"
            )
        if isinstance(options, str):
            options = {"routing": options}
        self._aliases[alias] = options or {}
        return self

    def mapping(self, mappings: dict | None = None) -> Index:
        self._mappings = mappings or {}
        return self

    def create(self) -> dict:
        body: dict[str, Any] = dict()
        settings: dict[str, Any] = dict()
        if self._shards is not None:
            settings["number_of_shards"] = self._shards
        if self._replicas is not None:
            settings["number_of_replicas"] = self._replicas
        if settings:
            body["settings"] = settings
        if self._aliases:
            body["aliases"] = self._aliases
        if self._mappings:
            body["mappings"] = self._mappings
        params: dict[str, Any] = {"index": self.name, "body": body}
        return self._connection.create_index(self._with_ignores(params))

    def drop(self) -> None:
        self._connection.drop_index(self._with_ignores({"index": self.name}))

    def exists(self) -> bool:
        return self._connection.index_exists({"index": self.name})

    def update_mapping(self) -> dict:
        params = {"index": self.name, "body": self._mappings}
        return self._connection.put_mapping(self._with_ignores(params))

    def update_aliases(self) -> dict:
        actions = [
            {"add": {"index": self.name, "alias": alias, **options}}
            for alias, options in self._aliases.items()
        ]
        params = {"body": {"actions": actions}}
        return self._connection.update_aliases(self._with_ignores(params))

    def count(self) -> int:
        return self._connection.new_query().index(self.name).count()

    def _with_ignores(self, params: dict) -> dict:
        if self._ignores:
            params["client"] = {"ignore": list(self._ignores)}
        return params
