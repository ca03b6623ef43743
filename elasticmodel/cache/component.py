from typing import Any

from ._models import CacheLookup

FOREVER = -1


class Cache:
    """Key value cache used to remember search results.

    A TTL of -1 means the entry never expires. None also stores
    without expiry.
    """

    def get(self, key: str) -> CacheLookup:
        """Get cached value.

        Args:
            key:
                Cache key.

        Returns:
            Cache lookup with hit or miss status.
        """
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Set cached value.

        Args:
            key:
                Cache key.
            value:
                JSON serializable value.
            ttl:
                Time to live in seconds, -1 for no expiry.
        """
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key:
                Cache key.

        Returns:
            A value indicating whether the key existed.
        """
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError
