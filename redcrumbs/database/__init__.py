"""
Database module - connection wiring, key namespacing and adapters.
"""
from redcrumbs.database.adapters import (
    ADAPTER_NAME,
    AdapterRegistry,
    RedisAdapter,
    adapters,
    register_adapter,
)
from redcrumbs.database.connections import (
    DEFAULT_NAMESPACE,
    build_connection,
    parse_descriptor,
)
from redcrumbs.database.namespace import Namespace

__all__ = [
    "ADAPTER_NAME",
    "AdapterRegistry",
    "RedisAdapter",
    "adapters",
    "register_adapter",
    "DEFAULT_NAMESPACE",
    "build_connection",
    "parse_descriptor",
    "Namespace",
]
