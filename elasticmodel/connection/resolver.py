from __future__ import annotations

__all__ = ["ConnectionResolver", "load_connections"]

from typing import Any

import yaml

from ..cache import Cache
from ..core.exceptions import ConnectionNotConfiguredError
from ._config import ConnectionConfig
from .connection import Connection

DEFAULT_CONNECTION = "default"


class ConnectionResolver:
    """Named connections with a default."""

    _connections: dict[str, Connection]
    _default: str

    def __init__(
        self,
        connections: dict[str, Connection] | None = None,
        default: str = DEFAULT_CONNECTION,
    ):
        self._connections = dict(connections or {})
        self._default = default

    @classmethod
    def from_connection(cls, connection: Connection) -> ConnectionResolver:
        return cls({DEFAULT_CONNECTION: connection})

    @classmethod
    def from_config(
        cls,
        config: dict[str, ConnectionConfig | dict],
        default: str | None = None,
        cache: Cache | None = None,
    ) -> ConnectionResolver:
        connections = {
            name: Connection.create(value, cache=cache)
            for name, value in config.items()
        }
        if default is None:
            default = next(iter(config), DEFAULT_CONNECTION)
        return cls(connections, default)

    def connection(self, name: str | None = None) -> Connection:
        name = name or self._default
        if name not in self._connections:
            raise ConnectionNotConfiguredError(
                f"Connection {name} is not configured"
            )
        return self._connections[name]

    def add_connection(self, name: str, connection: Connection) -> None:
        self._connections[name] = connection

    def has_connection(self, name: str) -> bool:
        return name in self._connections

    def get_default_connection(self) -> str:
        return self._default

    def set_default_connection(self, name: str) -> None:
        self._default = name


def load_connections(
    path: str,
    cache: Cache | None = None,
) -> ConnectionResolver:
    """Load connections from a YAML file.

    The file holds a "connections" mapping of name to connection config
    and an optional "default" connection name.
    """
    with open(path, "r") as file:
        data: dict[str, Any] = yaml.load(file, Loader=yaml.FullLoader) or {}
    return ConnectionResolver.from_config(
        data.get("connections", {}),
        default=data.get("default"),
        cache=cache,
    )
