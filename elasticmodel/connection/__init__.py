from ._config import DEFAULT_CACHE_PREFIX, ConnectionConfig
from .connection import Connection
from .resolver import ConnectionResolver, load_connections

__all__ = [
    "Connection",
    "ConnectionConfig",
    "ConnectionResolver",
    "DEFAULT_CACHE_PREFIX",
    "load_connections",
]
