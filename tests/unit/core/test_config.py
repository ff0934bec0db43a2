"""Unit tests for layered YAML configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_share.core.config import AuthMode, Settings
from recipe_share.core.config.yaml_source import (
    CONFIG_DIR_ENV,
    DEFAULT_CONFIG_DIR,
    deep_merge,
    load_yaml_dir,
)


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


class TestDeepMerge:
    def test_nested_keys_merge(self) -> None:
        base = {"database": {"host": "localhost", "port": 5432}, "debug": False}
        override = {"database": {"host": "db"}, "debug": True}

        assert deep_merge(base, override) == {
            "database": {"host": "db", "port": 5432},
            "debug": True,
        }

    def test_does_not_mutate_inputs(self) -> None:
        base = {"a": {"b": 1}}

        deep_merge(base, {"a": {"b": 2}})

        assert base == {"a": {"b": 1}}

    def test_lists_are_replaced(self) -> None:
        assert deep_merge({"tags": [1, 2]}, {"tags": [3]}) == {"tags": [3]}


class TestLoadYamlDir:
    def test_merges_in_name_order(self, tmp_path: Path) -> None:
        (tmp_path / "a.yaml").write_text("server:\n  port: 8000\n  host: 0.0.0.0\n")
        (tmp_path / "b.yaml").write_text("server:\n  port: 9000\n")
        (tmp_path / "ignored.txt").write_text("server: nope\n")

        assert load_yaml_dir(tmp_path) == {"server": {"port": 9000, "host": "0.0.0.0"}}

    def test_empty_file(self, tmp_path: Path) -> None:
        (tmp_path / "empty.yaml").write_text("")

        assert load_yaml_dir(tmp_path) == {}

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert load_yaml_dir(tmp_path / "absent") == {}

    @pytest.mark.parametrize(
        "layer",
        [
            "base",
            "environments/development",
            "environments/test",
            "environments/production",
        ],
    )
    def test_shipped_config_parses(self, layer: str) -> None:
        assert load_yaml_dir(DEFAULT_CONFIG_DIR / layer)

    def test_test_environment_selects_in_memory_sqlite(self) -> None:
        data = load_yaml_dir(DEFAULT_CONFIG_DIR / "environments" / "test")

        assert data["database"]["url"] == "sqlite+aiosqlite:///:memory:"


class TestSettings:
    def test_test_environment_overrides(self) -> None:
        settings = Settings()

        assert settings.is_testing
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.rate_limiting.enabled is False
        assert settings.auth.mode is AuthMode.HEADER

    def test_base_values_survive_overrides(self) -> None:
        settings = Settings()

        assert settings.rate_limiting.submissions == "10/minute"
        assert settings.recipes.public_page_size == 50

    def test_auth_mode_parsed_case_insensitively(self) -> None:
        assert Settings(auth={"mode": " Local_JWT "}).auth.mode is AuthMode.LOCAL_JWT

    def test_unknown_auth_mode_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid auth mode"):
            Settings(auth={"mode": "magic"})

    def test_init_values_win(self) -> None:
        settings = Settings(rate_limiting={"enabled": True})

        assert settings.rate_limiting.enabled is True
        assert settings.rate_limiting.default == "100/minute"

    def test_environment_variable_nesting(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MODERATION__STRICT_TRANSITIONS", "true")

        assert Settings().moderation.strict_transitions is True

    def test_postgres_url_assembled(self) -> None:
        settings = Settings(
            database={"url": None, "host": "db", "port": 5433, "name": "recipes"},
            DATABASE_PASSWORD="s3cret",
        )

        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.database_url.endswith(":s3cret@db:5433/recipes")

    def test_custom_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "app.yaml").write_text("app:\n  name: Cookbook\n")
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))

        settings = Settings()

        assert settings.app.name == "Cookbook"
        assert settings.database.url is None

    @pytest.mark.parametrize(
        ("env", "production", "non_production"),
        [
            ("production", True, False),
            ("test", False, True),
            ("staging", False, False),
        ],
    )
    def test_environment_flags(
        self, env: str, production: bool, non_production: bool
    ) -> None:
        settings = Settings(APP_ENV=env)

        assert settings.is_production is production
        assert settings.is_non_production is non_production
