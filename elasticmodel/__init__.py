from .cache import Cache, CacheLookup, CacheStatus
from .connection import (
    Connection,
    ConnectionConfig,
    ConnectionResolver,
    load_connections,
)
from .core.exceptions import (
    BadRequestError,
    BaseError,
    ConnectionNotConfiguredError,
    DocumentNotFoundError,
    IndexNotConfiguredError,
    InvalidScopeError,
    MassAssignmentError,
    NotFoundError,
    ScopeNotFoundError,
)
from .model import EventDispatcher, Model, Scope, ScopeRegistry
from .query import (
    AbstractQuery,
    Builder,
    Bulk,
    Collection,
    Index,
    Pagination,
    RegexpFlag,
)

__all__ = [
    "AbstractQuery",
    "BadRequestError",
    "BaseError",
    "Builder",
    "Bulk",
    "Cache",
    "CacheLookup",
    "CacheStatus",
    "Collection",
    "Connection",
    "ConnectionConfig",
    "ConnectionNotConfiguredError",
    "ConnectionResolver",
    "DocumentNotFoundError",
    "EventDispatcher",
    "Index",
    "IndexNotConfiguredError",
    "InvalidScopeError",
    "MassAssignmentError",
    "Model",
    "NotFoundError",
    "Pagination",
    "RegexpFlag",
    "Scope",
    "ScopeNotFoundError",
    "ScopeRegistry",
    "load_connections",
]
