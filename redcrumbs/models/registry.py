"""
Crumb class registry and resolution of the configured crumb class.

Applications register their crumb subclasses at startup:

    @crumb_classes.register
    class AuditCrumb(Crumb):
        ...

and select one with settings.class_name = "AuditCrumb". A dotted import path
("myapp.crumbs.AuditCrumb") also works without registration.
"""
import importlib
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from redcrumbs.config import Settings, get_settings
from redcrumbs.core.exceptions import ConfigurationError
from redcrumbs.models.crumb import Crumb

logger = logging.getLogger(__name__)


class ClassLookup(BaseModel):
    """Result of looking up a crumb class by name. value is None on a miss."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    found: bool
    value: Any = None


def _is_missing(error: ModuleNotFoundError, module_name: str) -> bool:
    """True when the error is about module_name itself (or one of its parents)."""
    missing = error.name or ""
    return module_name == missing or module_name.startswith(f"{missing}.")


class CrumbClassRegistry:
    """Crumb classes by name."""

    def __init__(self):
        self._classes: dict[str, type] = {}

    def register(self, cls: Optional[type] = None, *, name: Optional[str] = None):
        """
        Register a crumb class under name (defaults to the class name).

        Works as a plain call or as a decorator, with or without a name.
        """
        def decorator(klass: type) -> type:
            self._classes[name or klass.__name__] = klass
            return klass

        if cls is None:
            return decorator
        return decorator(cls)

    def lookup(self, name: str) -> ClassLookup:
        """
        Find a class by registered name or dotted import path.

        Only a missing module or attribute counts as a miss. Any other error
        raised while importing the module propagates.
        """
        if name in self._classes:
            return ClassLookup(name=name, found=True, value=self._classes[name])

        module_name, _, attribute = name.rpartition(".")
        if not module_name:
            return ClassLookup(name=name, found=False)

        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if _is_missing(e, module_name):
                return ClassLookup(name=name, found=False)
            raise

        if not hasattr(module, attribute):
            return ClassLookup(name=name, found=False)
        return ClassLookup(name=name, found=True, value=getattr(module, attribute))

    def __contains__(self, name: str) -> bool:
        return name in self._classes


# Process-wide registry, pre-populated with the built-in crumb class
crumb_classes = CrumbClassRegistry()
crumb_classes.register(Crumb)


def resolve_crumb_class(
    settings: Optional[Settings] = None,
    registry: Optional[CrumbClassRegistry] = None,
) -> type[Crumb]:
    """
    Return the crumb class configured by settings.class_name.

    Falls back to Crumb when no class is configured or the name is unknown.
    Recomputed on every call.

    Raises:
        ConfigurationError: the name resolves to something that is not a
            Crumb subclass
    """
    if settings is None:
        settings = get_settings()
    if registry is None:
        registry = crumb_classes

    name = settings.class_name
    if not name:
        return Crumb

    lookup = registry.lookup(name)
    if not lookup.found:
        logger.warning("Crumb class %r not found, using %s", name, Crumb.__name__)
        return Crumb

    klass = lookup.value
    if not isinstance(klass, type) or not issubclass(klass, Crumb):
        raise ConfigurationError(
            f"Invalid crumb class {name!r}: must inherit from redcrumbs.models.Crumb"
        )
    return klass
