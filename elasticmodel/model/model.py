"""
Document model.
"""

from __future__ import annotations

__all__ = ["Model"]

import json
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterator

from ..core.exceptions import (
    ConnectionNotConfiguredError,
    DocumentNotFoundError,
    MassAssignmentError,
)
from ..query._helper import to_list
from ._attributes import AttributeStore
from ._events import HALTING_EVENTS, EventDispatcher
from .scopes import ScopeRegistry

if TYPE_CHECKING:
    from ..connection import Connection, ConnectionResolver
    from ..query import Builder, Collection

FIELD_ID = "_id"
FIELD_INDEX = "_index"
FIELD_SCORE = "_score"
FIELD_HIGHLIGHT = "highlight"


class Model:
    """One Elasticsearch document.

    Subclasses declare the index, connection name, mass assignment
    rules and casts as class attributes:

        class Post(Model):
            index = "posts"
            fillable = ["title", "status"]
            casts = {"views": "int"}

    Connections, scopes and event listeners come from the objects
    passed to the constructor, falling back to the ones bound on the
    class with Model.bind. Boot hooks (booting, boot, booted) run on
    the first instance created for each class and scope registry.
    """

    index: ClassVar[str | None] = None
    connection: ClassVar[str | None] = None
    fillable: ClassVar[list[str]] = []
    guarded: ClassVar[list[str]] = ["*"]
    casts: ClassVar[dict[str, str]] = {}
    hidden: ClassVar[list[str]] = []
    included: ClassVar[list[str]] = []
    excluded: ClassVar[list[str]] = []

    __resolver__: ClassVar[ConnectionResolver | None] = None
    __scopes__: ClassVar[ScopeRegistry | None] = None
    __dispatcher__: ClassVar[EventDispatcher | None] = None

    was_recently_created: bool

    _resolver: ConnectionResolver | None
    _scopes: ScopeRegistry
    _dispatcher: EventDispatcher
    _attributes: AttributeStore
    _metadata: dict[str, Any]
    _index: str | None
    _connection_name: str | None
    _exists: bool
    _events_muted: bool

    def __init__(
        self,
        attributes: dict[str, Any] | None = None,
        exists: bool = False,
        *,
        resolver: ConnectionResolver | None = None,
        scopes: ScopeRegistry | None = None,
        dispatcher: EventDispatcher | None = None,
    ):
        """Initialize.

        Args:
            attributes:
                Attributes to mass assign.
            exists:
                A value indicating whether the document is stored.
            resolver:
                Connection resolver.
            scopes:
                Scope registry.
            dispatcher:
                Event dispatcher.
        """
        cls = type(self)
        self._resolver = resolver or cls.__resolver__
        self._scopes = scopes or cls.__scopes__ or ScopeRegistry()
        self._dispatcher = (
            dispatcher or cls.__dispatcher__ or EventDispatcher()
        )

        self._attributes = AttributeStore(casts=cls.casts)
        self._metadata = dict()
        self._index = cls.index
        self._connection_name = cls.connection
        self._exists = exists
        self._events_muted = False
        self.was_recently_created = False

        self._boot_if_not_booted()
        self._attributes.sync_original()

        # The plain model has no fillable list to declare.
        if cls is Model:
            self.force_fill(attributes or {})
        else:
            self.fill(attributes or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_attributes()!r})"

    def __getitem__(self, key: str) -> Any:
        return self.get_attribute(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set_attribute(key, value)

    def __delitem__(self, key: str) -> None:
        # Removal is not tracked as a dirty change.
        self._attributes.remove(key)

    def __contains__(self, key: str) -> bool:
        return self.get_attribute(key) is not None

    @classmethod
    def bind(
        cls,
        resolver: ConnectionResolver | None = None,
        scopes: ScopeRegistry | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        """Bind default collaborators for this class and subclasses."""
        if resolver is not None:
            cls.__resolver__ = resolver
        if scopes is not None:
            cls.__scopes__ = scopes
        if dispatcher is not None:
            cls.__dispatcher__ = dispatcher

    @classmethod
    def unbind(cls) -> None:
        for name in ("__resolver__", "__scopes__", "__dispatcher__"):
            if name in cls.__dict__:
                delattr(cls, name)

    # Boot

    def _boot_if_not_booted(self) -> None:
        if not self._scopes.mark_booted(type(self)):
            return
        self._fire_event("booting")
        self.booting()
        self.boot()
        self.booted()
        self._fire_event("booted")

    def booting(self) -> None:
        pass

    def boot(self) -> None:
        pass

    def booted(self) -> None:
        """Register global and named scopes or listeners here."""
        pass

    # Attributes

    def get_attribute(self, key: str) -> Any:
        if not key:
            return None
        if key in self._metadata:
            return self._metadata[key]
        if key == FIELD_INDEX:
            return self.get_index()
        if key == FIELD_SCORE:
            return self.get_score()
        return self._attributes.get(key)

    def set_attribute(self, key: str, value: Any) -> Model:
        self._attributes.set(key, value)
        return self

    def get_attributes(self) -> dict[str, Any]:
        return self._attributes.all()

    def set_raw_attributes(
        self, attributes: dict[str, Any], sync: bool = False
    ) -> Model:
        self._attributes.set_raw(attributes, sync)
        return self

    def fill(self, attributes: dict[str, Any]) -> Model:
        """Mass assign attributes.

        Keys that are not fillable are skipped, or raise
        MassAssignmentError when the model is totally guarded.
        """
        totally_guarded = self.totally_guarded()
        for key, value in self._fillable_from(attributes).items():
            if self.is_fillable(key):
                self.set_attribute(key, value)
            elif totally_guarded:
                raise MassAssignmentError(key, type(self))
        return self

    def force_fill(self, attributes: dict[str, Any]) -> Model:
        for key, value in attributes.items():
            self.set_attribute(key, value)
        return self

    def is_fillable(self, key: str) -> bool:
        fillable = type(self).fillable
        if key in fillable:
            return True
        if self.is_guarded(key):
            return False
        return not fillable and "." not in key and not key.startswith("_")

    def is_guarded(self, key: str) -> bool:
        guarded = type(self).guarded
        if not guarded:
            return False
        return guarded == ["*"] or key in guarded

    def totally_guarded(self) -> bool:
        cls = type(self)
        return not cls.fillable and cls.guarded == ["*"]

    def _fillable_from(self, attributes: dict[str, Any]) -> dict[str, Any]:
        fillable = type(self).fillable
        if fillable:
            return {k: v for k, v in attributes.items() if k in fillable}
        return attributes

    def get_dirty(self) -> dict[str, Any]:
        return self._attributes.get_dirty()

    def is_dirty(self, *keys: str) -> bool:
        return self._attributes.is_dirty(*keys)

    def is_clean(self, *keys: str) -> bool:
        return self._attributes.is_clean(*keys)

    def was_changed(self, *keys: str) -> bool:
        return self._attributes.was_changed(*keys)

    def get_changes(self) -> dict[str, Any]:
        return self._attributes.get_changes()

    def get_original(self, key: str | None = None, default: Any = None) -> Any:
        return self._attributes.get_original(key, default)

    def sync_original(self) -> Model:
        self._attributes.sync_original()
        return self

    def sync_changes(self) -> Model:
        self._attributes.sync_changes()
        return self

    def merge_casts(self, casts: dict[str, str]) -> Model:
        self._attributes.merge_casts(casts)
        return self

    # Metadata

    def get_id(self) -> str | None:
        id = self.get_attribute(FIELD_ID)
        return str(id) if id else None

    def get_key(self) -> Any:
        return self.get_attribute(FIELD_ID)

    def get_index(self) -> str | None:
        return self._index

    def set_index(self, index: str | None) -> Model:
        self._index = index
        return self

    def get_score(self) -> float | None:
        return self._metadata.get(FIELD_SCORE)

    def get_highlights(self, field: str | None = None) -> Any:
        highlights = self._metadata.get(FIELD_HIGHLIGHT) or {}
        if field is None:
            return highlights
        return highlights.get(field)

    def get_result_metadata(self) -> dict[str, Any]:
        return dict(self._metadata)

    def get_result_metadata_value(self, key: str) -> Any:
        return self._metadata.get(key)

    def set_result_metadata(self, metadata: dict[str, Any]) -> Model:
        self._metadata = dict(metadata)
        return self

    def get_included(self) -> list[str]:
        return list(type(self).included)

    def get_excluded(self) -> list[str]:
        return list(type(self).excluded)

    @property
    def exists(self) -> bool:
        return self._exists

    # Connection and queries

    def get_connection_name(self) -> str | None:
        return self._connection_name

    def set_connection_name(self, name: str | None) -> Model:
        self._connection_name = name
        return self

    def get_connection(self) -> Connection:
        if self._resolver is None:
            raise ConnectionNotConfiguredError(
                f"No connection resolver for {type(self).__name__}"
            )
        return self._resolver.connection(self._connection_name)

    def new_query(self) -> Builder:
        """Create a builder with this model's global scopes registered.

        The scopes run when the query compiles, so they can still be
        removed with without_global_scope until then.
        """
        query = self.get_connection().new_query()
        for identifier, scope in self.get_global_scopes().items():
            query.with_global_scope(identifier, scope)
        query.set_model(self)
        if index := self.get_index():
            query.index(index)
        if included := self.get_included():
            query.include(included)
        if excluded := self.get_excluded():
            query.exclude(excluded)
        return query

    def new_instance(
        self,
        attributes: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
        exists: bool = False,
        index: str | None = None,
    ) -> Model:
        model = type(self)(
            exists=exists,
            resolver=self._resolver,
            scopes=self._scopes,
            dispatcher=self._dispatcher,
        )
        model.set_raw_attributes(attributes or {}, sync=True)
        model.set_connection_name(self.get_connection_name())
        model.set_result_metadata(metadata or {})
        model.set_index(index or self.get_index())
        model.merge_casts(self._attributes.get_casts())
        model._fire_event("retrieved")
        return model

    def new_from_builder(self, hit: dict[str, Any]) -> Model:
        """Hydrate a stored model from a search hit."""
        metadata = {k: v for k, v in hit.items() if k != "_source"}
        return self.new_instance(
            attributes=hit.get("_source") or {},
            metadata=metadata,
            exists=True,
            index=hit.get(FIELD_INDEX),
        )

    @classmethod
    def query(cls) -> Builder:
        return cls().new_query()

    @classmethod
    def all(cls, scroll_id: str | None = None) -> Collection:
        return cls.query().all().get(scroll_id)

    @classmethod
    def find(cls, id: str) -> Model | None:
        return cls.query().id(id).take(1).first()

    @classmethod
    def find_or_fail(cls, id: str) -> Model:
        model = cls.find(id)
        if model is None:
            raise DocumentNotFoundError(model=cls, ids=[id])
        return model

    @classmethod
    def create(
        cls, attributes: dict[str, Any], id: str | None = None
    ) -> Model:
        metadata = {FIELD_ID: id} if id is not None else {}
        model = cls().new_instance(attributes, metadata)
        model.save()
        return model

    @classmethod
    def destroy(cls, *ids: Any) -> int:
        """Delete documents by id.

        Returns:
            Number of deleted documents.
        """
        id_list = to_list(*ids)
        if not id_list:
            return 0
        count = 0
        for model in cls.query().where_in(FIELD_ID, id_list).get():
            if model.delete():
                count += 1
        return count

    # Lifecycle

    def save(self) -> bool:
        """Insert the document, or update its dirty attributes.

        Returns:
            False when a listener stopped the save.
        """
        query = self.new_query()
        if not self._fire_event("saving"):
            return False
        if self._exists:
            saved = not self.is_dirty() or self._perform_update(query)
        else:
            saved = self._perform_insert(query)
        if saved:
            self._finish_save()
        return saved

    def save_quietly(self) -> bool:
        with self.without_events():
            return self.save()

    def delete(self) -> bool:
        if not self._exists:
            return False
        if not self._fire_event("deleting"):
            return False
        self.new_query().id(self._get_key_for_save()).delete()
        self._exists = False
        self._fire_event("deleted")
        return True

    def replicate(self, except_: list[str] | None = None) -> Model:
        """Copy the attributes into a new, unsaved model without the id."""
        excluded = {FIELD_ID, *(except_ or [])}
        attributes = {
            k: v for k, v in self.get_attributes().items() if k not in excluded
        }
        model = type(self)(
            resolver=self._resolver,
            scopes=self._scopes,
            dispatcher=self._dispatcher,
        )
        model.set_raw_attributes(attributes)
        model.set_connection_name(self.get_connection_name())
        model.set_index(self.get_index())
        model._fire_event("replicating")
        return model

    def is_same(self, other: Any) -> bool:
        return (
            isinstance(other, Model)
            and other.get_key() is not None
            and self.get_key() == other.get_key()
            and self.get_index() == other.get_index()
            and self.get_connection_name() == other.get_connection_name()
        )

    def is_not(self, other: Any) -> bool:
        return not self.is_same(other)

    def _perform_insert(self, query: Builder) -> bool:
        if not self._fire_event("creating"):
            return False
        attributes = self.get_attributes()
        id = self.get_key()
        if id:
            if not attributes:
                return True
            query.insert(attributes, id)
        else:
            result = query.insert(attributes)
            if result.get(FIELD_INDEX):
                self.set_index(result[FIELD_INDEX])
            self.set_attribute(FIELD_ID, result[FIELD_ID])
        self._exists = True
        self.was_recently_created = True
        self._fire_event("created")
        return True

    def _perform_update(self, query: Builder) -> bool:
        if not self._fire_event("updating"):
            return False
        dirty = self.get_dirty()
        if not dirty:
            return True
        query.id(self._get_key_for_save()).update(dirty)
        self.sync_changes()
        self._fire_event("updated")
        return True

    def _finish_save(self) -> None:
        self._fire_event("saved")
        self.sync_original()

    def _get_key_for_save(self) -> Any:
        original = self._attributes.get_raw_original(FIELD_ID)
        return original if original is not None else self.get_key()

    # Events

    def listen(self, event: str, callback: Callable[[Any], Any]) -> None:
        self._dispatcher.listen(type(self), event, callback)

    def observe(self, observer: Any) -> None:
        self._dispatcher.observe(type(self), observer)

    @contextmanager
    def without_events(self) -> Iterator[Model]:
        muted = self._events_muted
        self._events_muted = True
        try:
            yield self
        finally:
            self._events_muted = muted

    def _fire_event(self, event: str) -> bool:
        if self._events_muted:
            return True
        return self._dispatcher.dispatch(
            event, self, halt=event in HALTING_EVENTS
        )

    # Scopes

    def add_global_scope(self, scope: Any, implementation: Any = None) -> Any:
        return self._scopes.add_global_scope(
            type(self), scope, implementation
        )

    def get_global_scope(self, scope: Any) -> Any:
        return self._scopes.get_global_scope(type(self), scope)

    def get_global_scopes(self) -> dict[str, Any]:
        return self._scopes.get_global_scopes(type(self))

    def has_global_scope(self, scope: Any) -> bool:
        return self._scopes.has_global_scope(type(self), scope)

    def add_named_scope(self, name: str, scope: Callable[..., Any]) -> None:
        self._scopes.add_named_scope(type(self), name, scope)

    def has_named_scope(self, name: str) -> bool:
        return self._scopes.has_named_scope(type(self), name)

    def call_named_scope(self, name: str, builder: Builder, *args) -> Any:
        scope = self._scopes.get_named_scope(type(self), name)
        if scope is None:
            return builder.scope(name, *args)
        return scope(builder, *args)

    # Routing

    def get_route_key(self) -> Any:
        return self.get_attribute(self.get_route_key_name())

    def get_route_key_name(self) -> str:
        return FIELD_ID

    def resolve_route_binding(
        self, value: Any, field: str | None = None
    ) -> Model | None:
        return self.new_query().first_where(
            field or self.get_route_key_name(), "=", value
        )

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        hidden = type(self).hidden
        return {
            k: v
            for k, v in self._attributes.cast_all().items()
            if k not in hidden
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)
