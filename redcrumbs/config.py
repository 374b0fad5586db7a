"""
Redcrumbs configuration loaded from environment variables.

Values can also be assigned at startup:

    settings = get_settings()
    settings.creator_class_sym = "account"
    settings.mortality = timedelta(days=30)
    settings.connection = "localhost:6379/myapp"
"""
import logging
from datetime import timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redcrumbs.database.adapters import AdapterRegistry, register_adapter
from redcrumbs.database.connections import build_connection
from redcrumbs.database.namespace import Namespace

if TYPE_CHECKING:
    from redcrumbs.models.crumb import Crumb
    from redcrumbs.models.registry import CrumbClassRegistry

logger = logging.getLogger(__name__)

DEFAULT_CLASS_SYM = "user"
DEFAULT_PRIMARY_KEY = "id"


class EntityIdentity(BaseModel):
    """Which class and primary key identify one side of a crumb."""
    model_config = ConfigDict(frozen=True)

    class_sym: str
    primary_key: str


class Settings(BaseSettings):
    """Redcrumbs settings from environment variables."""

    # Creator / target identity
    creator_class_sym: str = DEFAULT_CLASS_SYM
    creator_primary_key: str = DEFAULT_PRIMARY_KEY
    target_class_sym: str = DEFAULT_CLASS_SYM
    target_primary_key: str = DEFAULT_PRIMARY_KEY

    # Attributes snapshotted when a crumb is created
    store_creator_attributes: set[str] = Field(default_factory=set)
    store_target_attributes: set[str] = Field(default_factory=set)

    # Time-to-live of a crumb, None for no expiry
    mortality: Optional[timedelta] = None

    # Crumb class override (registered name or dotted path)
    class_name: Optional[str] = None

    # Connection descriptor used when no connection has been assigned
    redis_url: Optional[str] = None

    _connection: Optional[Namespace] = PrivateAttr(default=None)

    model_config = SettingsConfigDict(
        env_prefix="REDCRUMBS_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator(
        "creator_class_sym",
        "creator_primary_key",
        "target_class_sym",
        "target_primary_key",
        mode="before",
    )
    @classmethod
    def default_when_blank(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value

    @property
    def creator_identity(self) -> EntityIdentity:
        return EntityIdentity(
            class_sym=self.creator_class_sym,
            primary_key=self.creator_primary_key,
        )

    @property
    def target_identity(self) -> EntityIdentity:
        return EntityIdentity(
            class_sym=self.target_class_sym,
            primary_key=self.target_primary_key,
        )

    @property
    def connection(self) -> Optional[Namespace]:
        """
        The namespaced connection to the crumb store.

        Wired from redis_url on first access when nothing was assigned.
        """
        if self._connection is None and self.redis_url:
            self.connect(self.redis_url)
        return self._connection

    @connection.setter
    def connection(self, descriptor: Any) -> None:
        self.connect(descriptor)

    def connect(
        self,
        descriptor: Any,
        registry: Optional[AdapterRegistry] = None,
    ) -> Namespace:
        """
        Wire the crumb store to a connection and register its adapter.

        Args:
            descriptor: "host:port[:db][/namespace]", a Redis URL, a
                Namespace or a raw Redis client
            registry: Adapter registry (defaults to the process-wide one)

        Returns:
            The stored namespaced connection
        """
        connection = build_connection(descriptor)
        self._connection = connection
        register_adapter(connection, registry)
        logger.info("Crumb store connected (namespace=%s)", connection.namespace)
        return connection

    def disconnect(self) -> None:
        """Close the underlying client and forget the connection."""
        if self._connection is None:
            return
        self._connection.redis.close()
        self._connection = None

    def crumb_class(self, registry: Optional["CrumbClassRegistry"] = None) -> type["Crumb"]:
        """Crumb class new crumbs are built with. See resolve_crumb_class."""
        from redcrumbs.models.registry import resolve_crumb_class

        return resolve_crumb_class(self, registry)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    get_settings.cache_clear()
