"""Settings source backed by the ``config/`` directory tree.

``config/base/*.yaml`` is read first, then ``config/environments/<APP_ENV>/``
is layered on top of it. Within a directory, files are applied in name order.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


CONFIG_DIR_ENV = "RECIPE_SHARE_CONFIG_DIR"

# src/recipe_share/core/config/ -> project root
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[4] / "config"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """New dict with ``override`` laid over ``base``; only mappings recurse."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def load_yaml_dir(directory: Path) -> dict[str, Any]:
    """A missing directory or an empty file contributes nothing."""
    if not directory.is_dir():
        return {}
    layers = (
        yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        for path in sorted(directory.glob("*.yaml"))
    )
    merged: dict[str, Any] = {}
    for layer in layers:
        merged = deep_merge(merged, layer)
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Top-level YAML keys map onto ``Settings`` fields.

    ``RECIPE_SHARE_CONFIG_DIR`` points the source at another tree.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        root = Path(os.getenv(CONFIG_DIR_ENV) or DEFAULT_CONFIG_DIR)
        env = os.getenv("APP_ENV", "development")
        self._data = deep_merge(
            load_yaml_dir(root / "base"),
            load_yaml_dir(root / "environments" / env),
        )

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, dict | list)

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)
