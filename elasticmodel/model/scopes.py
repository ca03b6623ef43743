from __future__ import annotations

__all__ = ["Scope", "ScopeRegistry", "scope_identifier"]

from typing import TYPE_CHECKING, Any, Callable

from ..core.exceptions import InvalidScopeError

if TYPE_CHECKING:
    from ..query import Builder
    from .model import Model


class Scope:
    """Global scope applied to every query of a model."""

    def apply(self, builder: Builder, model: Model) -> None:
        raise NotImplementedError


def scope_identifier(scope: Any) -> str:
    """Identifier a global scope is registered under.

    Strings are identifiers already. Scope objects and classes are
    identified by class, other callables by object identity.
    """
    if isinstance(scope, str):
        return scope
    if isinstance(scope, type):
        return f"{scope.__module__}.{scope.__qualname__}"
    if isinstance(scope, Scope):
        return scope_identifier(type(scope))
    if callable(scope):
        return f"closure:{id(scope)}"
    raise InvalidScopeError(f"Scope {scope!r} has no identifier")


class ScopeRegistry:
    """Global and named scopes of model classes.

    Global scopes belong to the exact model class they were added for
    and keep their registration order. Named scopes are inherited by
    subclasses. The registry also tracks which model classes booted
    against it.
    """

    _global: dict[type, dict[str, Any]]
    _named: dict[type, dict[str, Callable[..., Any]]]
    _booted: set[type]

    def __init__(self) -> None:
        self._global = dict()
        self._named = dict()
        self._booted = set()

    def add_global_scope(
        self,
        model_type: type,
        scope: Any,
        implementation: Any = None,
    ) -> Any:
        """Add a global scope.

        Args:
            model_type:
                Model class.
            scope:
                Identifier string used with implementation, or a Scope
                object, or a callable receiving the builder.
            implementation:
                Scope object or callable when scope is an identifier.

        Returns:
            Registered implementation.

        Raises:
            InvalidScopeError:
                Call shape not supported.
        """
        if isinstance(scope, str) and _is_scope(implementation):
            identifier = scope
        elif implementation is None and _is_scope(scope):
            identifier = scope_identifier(scope)
            implementation = scope
        else:
            raise InvalidScopeError(
                "Global scope must be a callable or a Scope instance"
            )
        self._global.setdefault(model_type, {})[identifier] = implementation
        return implementation

    def get_global_scope(self, model_type: type, scope: Any) -> Any:
        return self._global.get(model_type, {}).get(scope_identifier(scope))

    def get_global_scopes(self, model_type: type) -> dict[str, Any]:
        return dict(self._global.get(model_type, {}))

    def has_global_scope(self, model_type: type, scope: Any) -> bool:
        return self.get_global_scope(model_type, scope) is not None

    def add_named_scope(
        self,
        model_type: type,
        name: str,
        scope: Callable[..., Any],
    ) -> None:
        if not callable(scope):
            raise InvalidScopeError(f"Named scope {name} must be callable")
        self._named.setdefault(model_type, {})[name] = scope

    def get_named_scope(
        self, model_type: type, name: str
    ) -> Callable[..., Any] | None:
        for cls in model_type.__mro__:
            scopes = self._named.get(cls)
            if scopes and name in scopes:
                return scopes[name]
        return None

    def has_named_scope(self, model_type: type, name: str) -> bool:
        return self.get_named_scope(model_type, name) is not None

    def mark_booted(self, model_type: type) -> bool:
        """Mark a model class booted.

        Returns:
            True when the class was not booted before.
        """
        if model_type in self._booted:
            return False
        self._booted.add(model_type)
        return True

    def is_booted(self, model_type: type) -> bool:
        return model_type in self._booted

    def clear(self, model_type: type | None = None) -> None:
        """Forget scopes and boot state, for one class or all."""
        if model_type is None:
            self._global.clear()
            self._named.clear()
            self._booted.clear()
            return
        self._global.pop(model_type, None)
        self._named.pop(model_type, None)
        self._booted.discard(model_type)


def _is_scope(value: Any) -> bool:
    if isinstance(value, Scope):
        return True
    return callable(value) and not isinstance(value, type)
