"""Store configuration: pydantic schema, environment settings, and store factory."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from multilist import registry
from multilist.context import ListContext
from multilist.exceptions import ConfigurationError
from multilist.keys import DEFAULT_NAMESPACE
from multilist.stores import InMemoryListStore, ListStore, SQLiteListStore

logger = logging.getLogger(__name__)

StoreType = Literal["memory", "sqlite", "redis"]


class StoreConfigSchema(BaseModel):
    """Store configuration for a NestedList context.

    Attributes:
        type:      Store type ("memory", "sqlite" or "redis")
        path:      Path to SQLite database file (for sqlite type)
        url:       Redis connection URL (for redis type)
        namespace: Key prefix for every list in this context
    """

    type: StoreType = "memory"
    path: str = ""
    url: str = ""
    namespace: str = Field(default=DEFAULT_NAMESPACE, min_length=1)


class MultiListSettings(BaseSettings):
    """Environment-driven configuration, read from ``MULTILIST_*`` variables."""

    model_config = SettingsConfigDict(env_prefix="MULTILIST_", extra="ignore")

    STORE_TYPE: StoreType = "memory"
    SQLITE_PATH: str = ""
    REDIS_URL: str = ""
    NAMESPACE: str = DEFAULT_NAMESPACE

    def to_schema(self) -> StoreConfigSchema:
        return StoreConfigSchema(
            type=self.STORE_TYPE,
            path=self.SQLITE_PATH,
            url=self.REDIS_URL,
            namespace=self.NAMESPACE,
        )


def create_store(config: StoreConfigSchema) -> ListStore:
    """Create a store from configuration.

    Raises:
        ConfigurationError: If a required connection parameter is missing.
    """
    if config.type == "sqlite":
        if not config.path:
            raise ConfigurationError("SQLite store requires 'path' configuration")
        return SQLiteListStore(config.path)
    if config.type == "redis":
        if not config.url:
            raise ConfigurationError("Redis store requires 'url' configuration")
        from multilist.stores.redis_store import RedisListStore

        return RedisListStore(url=config.url)
    return InMemoryListStore()


def create_context(config: StoreConfigSchema) -> ListContext:
    """Build an independent :class:`ListContext` from *config*."""
    return ListContext(store=create_store(config), namespace=config.namespace)


def configure_from_settings(settings: MultiListSettings | None = None) -> ListContext:
    """Install the store and namespace described by *settings* process-wide.

    Reads the environment when *settings* is omitted.
    """
    settings = settings or MultiListSettings()
    config = settings.to_schema()
    store = registry.configure_store(create_store(config))
    registry.set_namespace(config.namespace)
    logger.info("multilist configured: store=%s namespace=%s", config.type, config.namespace)
    return ListContext(store=store, namespace=config.namespace)
