from __future__ import annotations

from enum import Enum
from typing import Any

from ..core import DataModel


class CacheStatus(str, Enum):
    """Cache lookup status."""

    HIT = "hit"
    MISS = "miss"


class CacheLookup(DataModel):
    """Cache lookup result.

    Attributes:
        status: Hit or miss.
        value: Cached value, None on a miss.
    """

    status: CacheStatus
    value: Any = None

    @property
    def is_hit(self) -> bool:
        return self.status == CacheStatus.HIT

    @staticmethod
    def hit(value: Any) -> CacheLookup:
        return CacheLookup(status=CacheStatus.HIT, value=value)

    @staticmethod
    def miss() -> CacheLookup:
        return CacheLookup(status=CacheStatus.MISS)
