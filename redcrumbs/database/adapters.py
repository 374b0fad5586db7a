"""
Persistence adapter registry.

The store reaches Redis through an adapter registered under ADAPTER_NAME. The
adapter knows how to connect (server, credentials, TLS) and how to turn a
logical resource name such as "Crumb" into a storage name such as
"redcrumbs:crumbs".
"""
import logging
import re
from typing import Any, Callable, Mapping, Optional

import inflection
from redis import Redis, SSLConnection

from redcrumbs.core.exceptions import AdapterNotFoundError
from redcrumbs.database.namespace import Namespace

logger = logging.getLogger(__name__)

ADAPTER_NAME = "redcrumbs"

# Connection options copied from the source pool and forwarded to the Redis client
CLIENT_OPTIONS = ("host", "port", "path", "username", "password", "db")
SSL_OPTIONS = (
    "ssl_keyfile", "ssl_certfile", "ssl_cert_reqs",
    "ssl_ca_certs", "ssl_ca_path", "ssl_check_hostname",
)

# Pool kwargs whose Redis() parameter has a different name
CLIENT_ARGUMENT_NAMES = {"path": "unix_socket_path"}

NamingConvention = Callable[[str], str]


def default_naming_convention(name: str) -> str:
    """Pluralize the underscored name and flatten path separators."""
    storage_name = inflection.pluralize(inflection.underscore(name))
    return re.sub(r"::|[./]", "_", storage_name)


def namespaced_naming_convention(namespace: str) -> NamingConvention:
    """Naming convention that prefixes storage names with "<namespace>:"."""
    def convention(name: str) -> str:
        return f"{namespace}:{default_naming_convention(name)}"
    return convention


class RedisAdapter:
    """
    Adapter for one Redis-backed repository.

    Args:
        name: Identifier the adapter is registered under
        options: Connection options (host or path, port, username, password, db, ssl)
    """

    def __init__(self, name: str, options: Mapping[str, Any]):
        self.name = name
        self.options = dict(options)
        self.resource_naming_convention: NamingConvention = default_naming_convention
        self._client: Optional[Redis] = None

    @property
    def client(self) -> Redis:
        """Redis client built from the adapter options on first use."""
        if self._client is None:
            kwargs = {
                CLIENT_ARGUMENT_NAMES.get(key, key): self.options[key]
                for key in (*CLIENT_OPTIONS, "ssl", *SSL_OPTIONS)
                if self.options.get(key) is not None
            }
            self._client = Redis(**kwargs)
        return self._client

    def storage_name(self, resource_name: str) -> str:
        return self.resource_naming_convention(resource_name)

    def key(self, resource_name: str, identifier: Any) -> str:
        """Storage key of a single record."""
        return f"{self.storage_name(resource_name)}:{identifier}"

    def __repr__(self) -> str:
        return f"RedisAdapter({self.name!r}, host={self.options.get('host')!r}, port={self.options.get('port')!r})"


class AdapterRegistry:
    """Adapters by identifier."""

    def __init__(self):
        self._adapters: dict[str, RedisAdapter] = {}

    def setup(self, identifier: str, options: Mapping[str, Any]) -> RedisAdapter:
        """Register an adapter under identifier, replacing any previous one."""
        adapter = RedisAdapter(identifier, options)
        self._adapters[identifier] = adapter
        return adapter

    def get(self, identifier: str) -> RedisAdapter:
        try:
            return self._adapters[identifier]
        except KeyError:
            raise AdapterNotFoundError(identifier) from None

    def clear(self) -> None:
        self._adapters.clear()

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._adapters


# Process-wide registry
adapters = AdapterRegistry()


def connection_options(connection: Namespace) -> dict[str, Any]:
    """
    Server, credentials and TLS settings of the client behind a connection.

    A source pool using SSLConnection registers ssl=True plus its ssl_* kwargs.
    """
    pool = getattr(connection.redis, "connection_pool", None)
    kwargs = getattr(pool, "connection_kwargs", None) or {}
    options: dict[str, Any] = {"adapter": "redis"}
    for key in CLIENT_OPTIONS:
        if kwargs.get(key) is not None:
            options[key] = kwargs[key]
    connection_class = getattr(pool, "connection_class", None)
    if isinstance(connection_class, type) and issubclass(connection_class, SSLConnection):
        options["ssl"] = True
        for key in SSL_OPTIONS:
            if kwargs.get(key) is not None:
                options[key] = kwargs[key]
    return options


def register_adapter(
    connection: Namespace,
    registry: Optional[AdapterRegistry] = None,
) -> RedisAdapter:
    """
    Register the connection's server with the adapter registry.

    Installs a naming convention so storage names carry the connection's
    namespace.

    Args:
        connection: Namespaced connection to register
        registry: Registry to register with (defaults to the process-wide one)

    Returns:
        The registered adapter
    """
    if registry is None:
        registry = adapters

    options = connection_options(connection)
    adapter = registry.setup(ADAPTER_NAME, options)
    adapter.resource_naming_convention = namespaced_naming_convention(connection.namespace)

    logger.info(
        "Registered %s adapter for %s:%s (namespace=%s)",
        ADAPTER_NAME,
        options.get("host", options.get("path")),
        options.get("port"),
        connection.namespace,
    )
    return adapter
