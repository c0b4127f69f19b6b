"""Tests for the configuration layer and CacheProperties binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from nscache.config import Config, config_properties
from nscache.properties import CacheProperties


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"app": {"name": "test-service", "port": 8080}})
        assert config.get("app.name") == "test-service"
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_zero_is_not_missing(self):
        assert Config({"nscache": {"cache": {"max_entries": 0}}}).get("nscache.cache.max_entries", 5) == 0

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("NSCACHE_CACHE_NAMESPACE", "from-env")
        config = Config({"nscache": {"cache": {"namespace": "from-file"}}})
        assert config.get("nscache.cache.namespace") == "from-env"

    def test_placeholder_with_default(self):
        config = Config({"nscache": {"cache": {"namespace": "${NSCACHE_TEST_UNSET_VAR:fallback}"}}})
        assert config.get("nscache.cache.namespace") == "fallback"

    def test_placeholder_config_reference(self):
        config = Config({"app": {"name": "shop"}, "nscache": {"cache": {"namespace": "${app.name}"}}})
        assert config.get("nscache.cache.namespace") == "shop"

    def test_unresolvable_placeholder(self):
        config = Config({"key": "${NSCACHE_TEST_UNSET_VAR}"})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("key")

    def test_defaults(self):
        config = Config.defaults()
        assert config.get("nscache.cache.namespace") == "cache"
        assert config.get("nscache.cache.max_entries") == 50000
        assert config.get("nscache.logging.format") == "console"

    def test_load_yaml_file_over_defaults(self, tmp_path: Path):
        config_file = tmp_path / "nscache.yaml"
        config_file.write_text("nscache:\n  cache:\n    namespace: users\n")
        config = Config.from_file(config_file)
        assert config.get("nscache.cache.namespace") == "users"
        assert config.get("nscache.cache.max_entries") == 50000
        assert config.loaded_sources[-1] == str(config_file)

    def test_load_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "nscache.toml"
        config_file.write_text('[nscache.cache]\nnamespace = "orders"\nmax_entries = 10\n')
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("nscache.cache.namespace") == "orders"
        assert config.get("nscache.cache.max_entries") == 10

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "nscache.yaml").write_text("nscache:\n  cache:\n    max_entries: 100\n")
        (tmp_path / "nscache-test.yaml").write_text("nscache:\n  cache:\n    max_entries: 1\n")
        config = Config.from_file(tmp_path / "nscache.yaml", active_profiles=["test"])
        assert config.get("nscache.cache.max_entries") == 1

    def test_missing_file_keeps_defaults(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("nscache.cache.namespace") == "cache"


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///test.db"
            pool_size: int = 5

        config = Config({"database": {"url": "postgresql://localhost/mydb", "pool_size": 20}})
        db_config = config.bind(DatabaseConfig)
        assert db_config.url == "postgresql://localhost/mydb"
        assert db_config.pool_size == 20

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)

    def test_bind_cache_properties_defaults(self):
        props = Config.defaults().bind(CacheProperties)
        assert props.namespace == "cache"
        assert props.max_entries == 50000
        assert props.provider == "auto"
        assert props.redis == {}

    def test_bind_cache_properties_env_coercion(self, monkeypatch):
        monkeypatch.setenv("NSCACHE_CACHE_MAX_ENTRIES", "25")
        props = Config({}).bind(CacheProperties)
        assert props.max_entries == 25

    def test_bind_null_max_entries_keeps_default(self):
        config = Config({"nscache": {"cache": {"max_entries": None}}})
        assert config.bind(CacheProperties).max_entries == 50000

    def test_bind_zero_max_entries_is_unbounded(self):
        config = Config({"nscache": {"cache": {"max_entries": 0}}})
        assert config.bind(CacheProperties).max_entries == 0

    def test_bind_redis_section(self):
        config = Config({"nscache": {"cache": {"redis": {"url": "redis://cache:6379/1"}}}})
        assert config.bind(CacheProperties).redis == {"url": "redis://cache:6379/1"}
