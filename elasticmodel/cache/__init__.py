from ._models import CacheLookup, CacheStatus
from .component import FOREVER, Cache
from .providers import Memory, Redis

__all__ = [
    "Cache",
    "CacheLookup",
    "CacheStatus",
    "FOREVER",
    "Memory",
    "Redis",
]
