"""
Core utilities - exceptions shared across redcrumbs.
"""
from redcrumbs.core.exceptions import (
    RedcrumbsError,
    ConfigurationError,
    AdapterNotFoundError,
)

__all__ = [
    "RedcrumbsError",
    "ConfigurationError",
    "AdapterNotFoundError",
]
