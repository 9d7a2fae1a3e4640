"""Tests for store configuration and the store factory."""

import pytest
from pydantic import ValidationError

from multilist import ConfigurationError, NestedList, current_namespace, current_store
from multilist.config import (
    MultiListSettings,
    StoreConfigSchema,
    configure_from_settings,
    create_context,
    create_store,
)
from multilist.stores import InMemoryListStore, SQLiteListStore
from multilist.stores.redis_store import RedisListStore


class TestStoreConfigSchema:
    def test_defaults(self):
        config = StoreConfigSchema()
        assert config.type == "memory"
        assert config.namespace == "redismultilist"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            StoreConfigSchema(type="mongo")

    def test_empty_namespace_rejected(self):
        with pytest.raises(ValidationError):
            StoreConfigSchema(namespace="")


class TestCreateStore:
    def test_memory(self):
        assert isinstance(create_store(StoreConfigSchema()), InMemoryListStore)

    def test_sqlite(self):
        store = create_store(StoreConfigSchema(type="sqlite", path=":memory:"))
        assert isinstance(store, SQLiteListStore)
        store.close()

    def test_sqlite_requires_path(self):
        with pytest.raises(ConfigurationError, match="path"):
            create_store(StoreConfigSchema(type="sqlite"))

    def test_redis(self):
        store = create_store(StoreConfigSchema(type="redis", url="redis://localhost:6379/0"))
        assert isinstance(store, RedisListStore)

    def test_redis_requires_url(self):
        with pytest.raises(ConfigurationError, match="url"):
            create_store(StoreConfigSchema(type="redis"))

    def test_create_context(self):
        ctx = create_context(StoreConfigSchema(namespace="app"))
        assert ctx.namespace == "app"
        lst = NestedList("k", context=ctx)
        lst.push("v")
        assert ctx.store.range("app:k", 0, -1) == ["v"]


class TestSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MULTILIST_STORE_TYPE", "sqlite")
        monkeypatch.setenv("MULTILIST_SQLITE_PATH", ":memory:")
        monkeypatch.setenv("MULTILIST_NAMESPACE", "envns")

        config = MultiListSettings().to_schema()

        assert config.type == "sqlite"
        assert config.path == ":memory:"
        assert config.namespace == "envns"

    def test_defaults_without_environment(self, monkeypatch):
        for name in ("STORE_TYPE", "SQLITE_PATH", "REDIS_URL", "NAMESPACE"):
            monkeypatch.delenv(f"MULTILIST_{name}", raising=False)
        settings = MultiListSettings()
        assert settings.STORE_TYPE == "memory"
        assert settings.NAMESPACE == "redismultilist"

    def test_configure_from_settings_installs_registry(self):
        settings = MultiListSettings(STORE_TYPE="memory", NAMESPACE="configured")

        ctx = configure_from_settings(settings)

        assert current_store() is ctx.store
        assert current_namespace() == "configured"
        NestedList("k").push("v")
        assert ctx.store.range("configured:k", 0, -1) == ["v"]
