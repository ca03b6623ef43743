from ._attributes import AttributeStore
from ._events import EVENTS, HALTING_EVENTS, EventDispatcher
from .model import Model
from .scopes import Scope, ScopeRegistry, scope_identifier

__all__ = [
    "AttributeStore",
    "EVENTS",
    "EventDispatcher",
    "HALTING_EVENTS",
    "Model",
    "Scope",
    "ScopeRegistry",
    "scope_identifier",
]
