"""
Crumb model - a single recorded activity (a creator acted on a target).
"""
from datetime import datetime, timezone
from typing import Any, Iterable, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from redcrumbs.config import Settings, get_settings
from redcrumbs.database.adapters import ADAPTER_NAME, AdapterRegistry, adapters

DEFAULT_SUBJECT_KEY = "id"


def read_attribute(entity: Any, name: str) -> Any:
    """Read an attribute from an object or a mapping, None when absent."""
    if isinstance(entity, dict):
        return entity.get(name)
    return getattr(entity, name, None)


def snapshot_attributes(entity: Any, names: Iterable[str]) -> dict[str, Any]:
    """
    Copy the named attributes of an entity.

    Args:
        entity: Object or mapping to read from (None gives an empty snapshot)
        names: Attribute names to copy

    Returns:
        Dict of attribute name -> value
    """
    if entity is None:
        return {}
    return {name: read_attribute(entity, name) for name in sorted(names)}


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _identifier(entity: Any, primary_key: str) -> Optional[str]:
    value = read_attribute(entity, primary_key) if entity is not None else None
    return None if value is None else str(value)


class Crumb(BaseModel):
    """
    Base crumb record. Custom crumb classes must inherit from it.
    """
    id: Optional[str] = Field(
        default_factory=lambda: uuid4().hex,
        description="Record identifier",
    )
    subject_type: Optional[str] = Field(None, description="Class name of the changed object")
    subject_id: Optional[str] = None
    creator_id: Optional[str] = None
    target_id: Optional[str] = None
    modifications: dict[str, Any] = Field(default_factory=dict)
    creator_attributes: dict[str, Any] = Field(default_factory=dict)
    target_attributes: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def build(
        cls,
        subject: Any = None,
        creator: Any = None,
        target: Any = None,
        modifications: Optional[dict[str, Any]] = None,
        settings: Optional[Settings] = None,
    ) -> "Crumb":
        """
        Build a crumb, snapshotting creator and target attributes.

        Creator and target ids are read from the configured primary keys.
        """
        if settings is None:
            settings = get_settings()

        return cls(
            subject_type=type(subject).__name__ if subject is not None else None,
            subject_id=_identifier(subject, DEFAULT_SUBJECT_KEY),
            creator_id=_identifier(creator, settings.creator_primary_key),
            target_id=_identifier(target, settings.target_primary_key),
            modifications=modifications or {},
            creator_attributes=snapshot_attributes(creator, settings.store_creator_attributes),
            target_attributes=snapshot_attributes(target, settings.store_target_attributes),
        )

    @classmethod
    def storage_name(cls, registry: Optional[AdapterRegistry] = None) -> str:
        """Name crumbs of this class are stored under, e.g. "redcrumbs:crumbs"."""
        if registry is None:
            registry = adapters
        return registry.get(ADAPTER_NAME).storage_name(cls.__name__)

    def storage_key(self, registry: Optional[AdapterRegistry] = None) -> str:
        if self.id is None:
            raise ValueError("Crumb has no id, cannot build its storage key")
        if registry is None:
            registry = adapters
        return registry.get(ADAPTER_NAME).key(type(self).__name__, self.id)

    def expires_at(self, settings: Optional[Settings] = None) -> Optional[datetime]:
        """When the crumb expires, None if mortality is not configured."""
        if settings is None:
            settings = get_settings()
        if settings.mortality is None:
            return None
        return self.created_at + settings.mortality

    def is_expired(
        self,
        now: Optional[datetime] = None,
        settings: Optional[Settings] = None,
    ) -> bool:
        expires_at = self.expires_at(settings)
        if expires_at is None:
            return False
        if now is None:
            now = datetime.now(timezone.utc)
        return _as_utc(now) >= _as_utc(expires_at)

