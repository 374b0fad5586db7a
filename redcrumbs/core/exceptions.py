"""
Exceptions raised by redcrumbs.

Errors from redis-py (connection refused, bad URL, auth) are not wrapped;
they reach the caller as raised by the client library.
"""


class RedcrumbsError(Exception):
    """Base class for redcrumbs errors."""


class ConfigurationError(RedcrumbsError):
    """Raised when a configured value cannot be used (e.g. a bad crumb class)."""


class AdapterNotFoundError(RedcrumbsError, LookupError):
    """Raised when no adapter is registered under the requested identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No adapter registered under {identifier!r}")
