"""
Connection wiring for the crumb store.

A connection descriptor is one of:
    - "host:port", "host:port:db" or either followed by "/namespace"
    - a Redis URL ("redis://", "rediss://", "unix://")
    - an existing Namespace wrapper (used as-is)
    - any other object, taken to be a raw Redis client

parse_descriptor() turns the value into one of the descriptor models below and
connect() on that model yields the namespaced handle the store works with.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict
from redis import Redis

from redcrumbs.database.namespace import Namespace

DEFAULT_NAMESPACE = "redcrumbs"
URL_SCHEMES = ("redis://", "rediss://", "unix://")


class UrlDescriptor(BaseModel):
    """A Redis URL, handed to the client library untouched."""
    model_config = ConfigDict(frozen=True)

    url: str

    def connect(self) -> Namespace:
        return Namespace(DEFAULT_NAMESPACE, Redis.from_url(self.url))


class ServerDescriptor(BaseModel):
    """host:port[:db][/namespace]"""
    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    db: Optional[int] = None
    namespace: str = DEFAULT_NAMESPACE

    def connect(self) -> Namespace:
        kwargs: dict[str, Any] = {"host": self.host, "port": self.port}
        if self.db is not None:
            kwargs["db"] = self.db
        return Namespace(self.namespace, Redis(**kwargs))


class NamespacedDescriptor(BaseModel):
    """An already wrapped connection."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    connection: Namespace

    def connect(self) -> Namespace:
        return self.connection


class ClientDescriptor(BaseModel):
    """A raw client, wrapped in the default namespace."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    client: Any

    def connect(self) -> Namespace:
        return Namespace(DEFAULT_NAMESPACE, self.client)


ConnectionDescriptor = Union[
    UrlDescriptor, ServerDescriptor, NamespacedDescriptor, ClientDescriptor
]


def is_url(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(URL_SCHEMES)


def parse_url(value: str) -> UrlDescriptor:
    return UrlDescriptor(url=value)


def parse_server_string(value: str) -> ServerDescriptor:
    """
    Parse "host:port[:db][/namespace]".

    A missing host or port raises ValueError from the split; a non-numeric
    port or db raises pydantic's ValidationError. Neither is caught here.
    """
    server, _, namespace = value.partition("/")
    host, port, *db = server.split(":", 2)
    fields: dict[str, Any] = {"host": host, "port": port}
    if db:
        fields["db"] = db[0]
    if namespace:
        fields["namespace"] = namespace
    return ServerDescriptor(**fields)


def parse_namespaced(value: Namespace) -> NamespacedDescriptor:
    return NamespacedDescriptor(connection=value)


def parse_client(value: Any) -> ClientDescriptor:
    return ClientDescriptor(client=value)


def parse_descriptor(value: Any) -> ConnectionDescriptor:
    """Classify a connection descriptor. The first matching form wins."""
    if is_url(value):
        return parse_url(value)
    if isinstance(value, str):
        return parse_server_string(value)
    if isinstance(value, Namespace):
        return parse_namespaced(value)
    return parse_client(value)


def build_connection(value: Any) -> Namespace:
    """Return the namespaced connection described by value."""
    return parse_descriptor(value).connect()
