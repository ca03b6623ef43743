from __future__ import annotations

import copy
import json
from datetime import datetime
from typing import Any

INT_CASTS = ("int", "integer")
FLOAT_CASTS = ("float", "double", "real")
STR_CASTS = ("str", "string")
BOOL_CASTS = ("bool", "boolean")
JSON_CASTS = ("json", "array", "object", "dict", "list")
DATETIME_CASTS = ("date", "datetime")
NUMERIC_CASTS = INT_CASTS + FLOAT_CASTS


class AttributeStore:
    """Document attributes with casts and dirty tracking.

    Dirty state is the difference between the current attributes and
    the original snapshot taken by sync_original.
    """

    _attributes: dict[str, Any]
    _original: dict[str, Any]
    _changes: dict[str, Any]
    _casts: dict[str, str]

    def __init__(self, casts: dict[str, str] | None = None):
        self._attributes = dict()
        self._original = dict()
        self._changes = dict()
        self._casts = dict(casts or {})

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._attributes:
            return default
        return self.cast(key, self._attributes[key])

    def get_raw(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if isinstance(value, datetime) and self.has_cast(key, DATETIME_CASTS):
            value = value.isoformat()
        self._attributes[key] = value

    def has(self, key: str) -> bool:
        return key in self._attributes

    def remove(self, key: str) -> None:
        self._attributes.pop(key, None)

    def all(self) -> dict[str, Any]:
        return dict(self._attributes)

    def cast_all(self) -> dict[str, Any]:
        return {
            key: self.cast(key, value)
            for key, value in self._attributes.items()
        }

    def set_raw(self, attributes: dict[str, Any], sync: bool = False) -> None:
        self._attributes = dict(attributes)
        if sync:
            self.sync_original()

    def get_casts(self) -> dict[str, str]:
        return dict(self._casts)

    def merge_casts(self, casts: dict[str, str]) -> None:
        self._casts.update(casts)

    def has_cast(self, key: str, types: tuple | None = None) -> bool:
        if key not in self._casts:
            return False
        return types is None or self._casts[key].lower() in types

    def cast(self, key: str, value: Any) -> Any:
        if value is None or key not in self._casts:
            return value
        type = self._casts[key].lower()
        if type in INT_CASTS:
            return int(value)
        if type in FLOAT_CASTS:
            return float(value)
        if type in STR_CASTS:
            return str(value)
        if type in BOOL_CASTS:
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            return bool(value)
        if type in JSON_CASTS:
            return json.loads(value) if isinstance(value, str) else value
        if type in DATETIME_CASTS:
            if isinstance(value, str):
                return datetime.fromisoformat(value)
            return value
        return value

    def sync_original(self) -> None:
        self._original = copy.deepcopy(self._attributes)

    def sync_original_attribute(self, *keys: str) -> None:
        for key in keys:
            if key in self._attributes:
                self._original[key] = copy.deepcopy(self._attributes[key])
            else:
                self._original.pop(key, None)

    def sync_changes(self) -> None:
        self._changes = self.get_dirty()

    def get_original(self, key: str | None = None, default: Any = None) -> Any:
        if key is None:
            return {
                k: self.cast(k, v) for k, v in self._original.items()
            }
        if key not in self._original:
            return default
        return self.cast(key, self._original[key])

    def get_raw_original(
        self, key: str | None = None, default: Any = None
    ) -> Any:
        if key is None:
            return dict(self._original)
        return self._original.get(key, default)

    def get_dirty(self) -> dict[str, Any]:
        """Attributes whose value differs from the original snapshot.

        Keys removed since the snapshot are not reported, so a save
        after remove() leaves the stored field untouched.
        """
        return {
            key: value
            for key, value in self._attributes.items()
            if not self.original_is_equivalent(key)
        }

    def get_changes(self) -> dict[str, Any]:
        return dict(self._changes)

    def is_dirty(self, *keys: str) -> bool:
        return _has_changes(self.get_dirty(), keys)

    def is_clean(self, *keys: str) -> bool:
        return not self.is_dirty(*keys)

    def was_changed(self, *keys: str) -> bool:
        return _has_changes(self._changes, keys)

    def original_is_equivalent(self, key: str) -> bool:
        if key not in self._original:
            return False
        current = self._attributes.get(key)
        original = self._original[key]
        if type(current) is type(original) and current == original:
            return True
        if current is None or original is None:
            return False
        if self.has_cast(key, NUMERIC_CASTS + BOOL_CASTS):
            return self.cast(key, current) == self.cast(key, original)
        return False


def _has_changes(changes: dict[str, Any], keys: tuple) -> bool:
    if not keys:
        return len(changes) > 0
    return any(key in changes for key in keys)
