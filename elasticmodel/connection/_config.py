from __future__ import annotations

import os
from typing import Any

from dotenv import dotenv_values

from ..core import DataModel

DEFAULT_CACHE_PREFIX = "es"
DEFAULT_ENV_PREFIX = "ELASTICSEARCH_"


class ConnectionConfig(DataModel):
    """Elasticsearch connection config.

    Attributes:
        hosts: Elasticsearch hosts.
        cloud_id: Elasticsearch cloud id.
        api_key: Elasticsearch api key.
        basic_auth: Elasticsearch basic auth.
        bearer_auth: Elasticsearch bearer auth.
        opaque_id: Elasticsearch opaque id.
        headers: Elasticsearch http headers.
        verify_certs: Elasticsearch verify certs.
        ca_certs: Elasticsearch ca certs.
        client_cert: Elasticsearch client cert.
        client_key: Elasticsearch client key.
        ssl_assert_hostname: Elasticsearch ssl assert hostname.
        ssl_assert_fingerprint: Elasticsearch ssl assert fingerprint.
        request_timeout: Default request timeout in seconds.
        index: Default index for queries on this connection.
        cache_prefix: Prefix for remembered query cache keys.
        nparams: Native parameters to Elasticsearch client.
    """

    hosts: str | list[str] | dict[str, Any] | list[dict[str, Any]] | None = (
        None
    )
    cloud_id: str | None = None
    api_key: str | list[str] | None = None
    basic_auth: str | list[str] | None = None
    bearer_auth: str | None = None
    opaque_id: str | None = None
    headers: dict[str, str] | None = None
    verify_certs: bool | None = None
    ca_certs: str | None = None
    client_cert: str | None = None
    client_key: str | None = None
    ssl_assert_hostname: str | None = None
    ssl_assert_fingerprint: str | None = None
    request_timeout: float | None = None

    index: str | None = None
    cache_prefix: str = DEFAULT_CACHE_PREFIX
    nparams: dict[str, Any] = {}

    def to_client_params(self) -> dict:
        def _add_if_not_none(key, value):
            return {key: value} if value is not None else {}

        def _convert_if_list(value):
            return tuple(value) if isinstance(value, list) else value

        args = {
            **_add_if_not_none("hosts", self.hosts),
            **_add_if_not_none("cloud_id", self.cloud_id),
            **_add_if_not_none("api_key", _convert_if_list(self.api_key)),
            **_add_if_not_none(
                "basic_auth", _convert_if_list(self.basic_auth)
            ),
            **_add_if_not_none("bearer_auth", self.bearer_auth),
            **_add_if_not_none("opaque_id", self.opaque_id),
            **_add_if_not_none("headers", self.headers),
            **_add_if_not_none("verify_certs", self.verify_certs),
            **_add_if_not_none("ca_certs", self.ca_certs),
            **_add_if_not_none("client_cert", self.client_cert),
            **_add_if_not_none("client_key", self.client_key),
            **_add_if_not_none(
                "ssl_assert_hostname", self.ssl_assert_hostname
            ),
            **_add_if_not_none(
                "ssl_assert_fingerprint", self.ssl_assert_fingerprint
            ),
            **_add_if_not_none("request_timeout", self.request_timeout),
        }

        if self.nparams is not None:
            args.update(self.nparams)

        return args

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        path: str | None = ".env",
    ) -> ConnectionConfig:
        """Load config from a dotenv file and the environment.

        Process environment variables win over the file.

        Args:
            prefix:
                Variable name prefix, defaults to "ELASTICSEARCH_".
            path:
                ENV file path, defaults to ".env". None skips the file.
        """
        values: dict[str, Any] = dict()
        items: dict[str, Any] = dict()
        if path is not None and os.path.exists(path):
            items.update(dotenv_values(path) or {})
        items.update(os.environ)
        for name in cls.model_fields:
            if name in ("headers", "nparams"):
                continue
            key = f"{prefix}{name.upper()}"
            if key in items and items[key] is not None:
                values[name] = items[key]
        hosts = values.get("hosts")
        if isinstance(hosts, str) and "," in hosts:
            values["hosts"] = [h.strip() for h in hosts.split(",") if h]
        return cls.from_dict(values)
