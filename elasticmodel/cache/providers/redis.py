"""
Redis Cache.
"""

from __future__ import annotations

__all__ = ["Redis"]

import json
from typing import Any

from ...core.exceptions import BadRequestError
from .._models import CacheLookup
from ..component import FOREVER, Cache


class Redis(Cache):
    url: str | None
    host: str | None
    port: int | None
    db: int
    username: str | None
    password: str | None
    options: dict | None

    _client: Any
    _init: bool

    def __init__(
        self,
        url: str | None = None,
        host: str | None = None,
        port: int | None = None,
        db: int = 0,
        username: str | None = None,
        password: str | None = None,
        options: dict | None = None,
        client: Any = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            url:
                Redis url.
            host:
                Redis host, used with port when url is not set.
            port:
                Redis port.
            db:
                Redis database number.
            username:
                Redis username.
            password:
                Redis password.
            options:
                Native options to the redis client.
            client:
                Existing redis client to use instead of creating one.
        """
        self.url = url
        self.host = host
        self.port = port
        self.db = db
        self.username = username
        self.password = password
        self.options = options

        self._client = client
        self._init = client is not None

    @property
    def client(self) -> Any:
        if not self._init:
            self._client = self._get_client()
            self._init = True
        return self._client

    def _get_client(self) -> Any:
        import redis

        roptions = self.options if self.options else {}
        if self.url is not None:
            return redis.from_url(
                self.url, decode_responses=True, **roptions
            )
        elif self.host is not None and self.port is not None:
            return redis.Redis(
                host=self.host,
                port=self.port,
                db=self.db,
                username=self.username,
                password=self.password,
                decode_responses=True,
                **roptions,
            )
        raise BadRequestError(
            "Redis initialization needs url or host and port"
        )

    def get(self, key: str) -> CacheLookup:
        value = self.client.get(key)
        if value is None:
            return CacheLookup.miss()
        return CacheLookup.hit(json.loads(value))

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        data = json.dumps(value)
        if ttl is None or ttl == FOREVER:
            self.client.set(key, data)
        else:
            self.client.set(key, data, ex=ttl)

    def delete(self, key: str) -> bool:
        return bool(self.client.delete(key))

    def clear(self) -> None:
        self.client.flushdb()
