"""
In Memory Cache.
"""

from __future__ import annotations

__all__ = ["Memory"]

import copy
from datetime import datetime, timezone
from threading import Lock
from typing import Any

from .._models import CacheLookup
from ..component import FOREVER, Cache


class Memory(Cache):
    # key -> {"value": ..., "expiry": timestamp | None}
    _db: dict[str, dict]
    _lock: Lock

    def __init__(self, **kwargs):
        """Initialize."""
        self._db = dict()
        self._lock = Lock()

    def get(self, key: str) -> CacheLookup:
        with self._lock:
            item = self._db.get(key)
            if item is None:
                return CacheLookup.miss()
            if has_expired(item):
                self._db.pop(key)
                return CacheLookup.miss()
            return CacheLookup.hit(copy.deepcopy(item["value"]))

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        expiry: float | None = None
        if ttl is not None and ttl != FOREVER:
            expiry = datetime.now(timezone.utc).timestamp() + ttl
        with self._lock:
            self._db[key] = {"value": copy.deepcopy(value), "expiry": expiry}

    def delete(self, key: str) -> bool:
        with self._lock:
            item = self._db.pop(key, None)
        return item is not None and not has_expired(item)

    def clear(self) -> None:
        with self._lock:
            self._db.clear()


def has_expired(item: dict) -> bool:
    expiry_time: float | None = item["expiry"]
    current_time = datetime.now(timezone.utc).timestamp()
    if expiry_time is not None and current_time >= expiry_time:
        return True
    return False
