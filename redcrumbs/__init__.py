"""
Redcrumbs - track user activity against target entities, stored in Redis.
"""
from redcrumbs.config import EntityIdentity, Settings, get_settings, reset_settings
from redcrumbs.core.exceptions import AdapterNotFoundError, ConfigurationError, RedcrumbsError
from redcrumbs.database import DEFAULT_NAMESPACE, Namespace, adapters
from redcrumbs.models import Crumb, crumb_classes, resolve_crumb_class

__all__ = [
    "EntityIdentity",
    "Settings",
    "get_settings",
    "reset_settings",
    "AdapterNotFoundError",
    "ConfigurationError",
    "RedcrumbsError",
    "DEFAULT_NAMESPACE",
    "Namespace",
    "adapters",
    "Crumb",
    "crumb_classes",
    "resolve_crumb_class",
]
