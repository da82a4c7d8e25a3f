# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered settings loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from desktop_catalog.config import CONFIG_FILENAME, CatalogSettings, ConfigError, load_settings
from desktop_catalog.config.sources import TomlConfigSource, deep_merge


def test_defaults_without_any_files(tmp_path: Path) -> None:
    settings = load_settings(tmp_path, env={})

    assert settings.root is None
    assert settings.root_name == "collector"
    assert settings.follow_symlinks is True
    assert settings.log_level == "WARNING"
    assert settings.numeric_log_level == logging.WARNING


def test_precedence_pyproject_then_file_then_env(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
[tool.desktop-catalog]
root-name = "from-pyproject"
use-emoji = false
log-level = "info"
""".strip(),
        encoding="utf-8",
    )
    (tmp_path / CONFIG_FILENAME).write_text(
        """
root_name = "from-file"
root = "desktop"
""".strip(),
        encoding="utf-8",
    )

    settings = load_settings(tmp_path, env={"DESKTOP_CATALOG_ROOT_NAME": "from-env", "UNRELATED": "1"})

    assert settings.root_name == "from-env"
    assert settings.use_emoji is False
    assert settings.log_level == "INFO"
    assert settings.root == (tmp_path / "desktop").resolve()


def test_env_values_are_coerced(tmp_path: Path) -> None:
    settings = load_settings(tmp_path, env={"DESKTOP_CATALOG_FOLLOW_SYMLINKS": "false"})

    assert settings.follow_symlinks is False


def test_explicit_config_file_with_includes_and_env_expansion(tmp_path: Path) -> None:
    base = tmp_path / "base.toml"
    base.write_text('root_name = "base"\nuse_color = false\n', encoding="utf-8")
    config = tmp_path / "custom.toml"
    config.write_text('include = ["base.toml"]\nroot = "$HOME_DIR/desktop"\n', encoding="utf-8")

    settings = load_settings(tmp_path, config_file=config, env={"HOME_DIR": str(tmp_path)})

    assert settings.root_name == "base"
    assert settings.use_color is False
    assert settings.root == tmp_path / "desktop"


def test_missing_explicit_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_settings(tmp_path, config_file=tmp_path / "absent.toml", env={})


def test_circular_includes_are_rejected(tmp_path: Path) -> None:
    first = tmp_path / "first.toml"
    second = tmp_path / "second.toml"
    first.write_text('include = "second.toml"\n', encoding="utf-8")
    second.write_text('include = "first.toml"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="Circular include"):
        TomlConfigSource(first, env={}).load()


def test_config_file_changes_are_seen_on_reload(tmp_path: Path) -> None:
    config = tmp_path / CONFIG_FILENAME
    config.write_text('root_name = "first"\n', encoding="utf-8")
    assert load_settings(tmp_path, env={}).root_name == "first"

    config.write_text('root_name = "second"\nuse_color = false\n', encoding="utf-8")
    settings = load_settings(tmp_path, env={})

    assert settings.root_name == "second"
    assert settings.use_color is False


def test_included_table_is_not_shared_between_loads(tmp_path: Path) -> None:
    base = tmp_path / "base.toml"
    base.write_text('root_name = "base"\n', encoding="utf-8")
    config = tmp_path / "custom.toml"
    config.write_text('include = "base.toml"\n', encoding="utf-8")

    first = TomlConfigSource(config, env={}).load()
    assert isinstance(first, dict)
    first["root_name"] = "mutated"
    second = TomlConfigSource(config, env={}).load()

    assert second["root_name"] == "base"


def test_circular_include_through_parent_path(tmp_path: Path) -> None:
    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / "top.toml").write_text('include = "nested/inner.toml"\n', encoding="utf-8")
    (nested / "inner.toml").write_text('include = "../top.toml"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="Circular include"):
        TomlConfigSource(tmp_path / "top.toml", env={}).load()


def test_invalid_values_raise_config_error(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text('root_name = "a/b"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings(tmp_path, env={})


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("root_name = \n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_settings(tmp_path, env={})


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("colour = true\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(tmp_path, env={})


def test_settings_validate_log_level() -> None:
    settings = CatalogSettings(log_level=logging.DEBUG)

    assert settings.log_level == "DEBUG"
    with pytest.raises(ValueError):
        settings.log_level = "chatty"


def test_deep_merge_prefers_override() -> None:
    assert deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}}) == {"a": {"b": 1, "c": 3}}
