# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered settings loading with predictable precedence."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .models import CatalogSettings, ConfigError
from .sources import (
    ConfigSource,
    DefaultConfigSource,
    EnvConfigSource,
    PyProjectConfigSource,
    TomlConfigSource,
    deep_merge,
)

LOGGER = logging.getLogger(__name__)

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
CONFIG_FILENAME: Final[str] = ".desktop-catalog.toml"


def default_sources(
    project_root: Path,
    *,
    config_file: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> list[ConfigSource]:
    """Return the standard source chain, lowest precedence first.

    Args:
        project_root: Directory searched for ``pyproject.toml`` and the config file.
        config_file: Explicit TOML file replacing ``.desktop-catalog.toml``.
        env: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        list[ConfigSource]: Defaults, pyproject, TOML file, then environment.

    Raises:
        ConfigError: If an explicit ``config_file`` does not exist.
    """

    if config_file is not None and not config_file.exists():
        raise ConfigError(f"Configuration file {config_file} does not exist")
    toml_path = config_file if config_file is not None else project_root / CONFIG_FILENAME
    return [
        DefaultConfigSource(),
        PyProjectConfigSource(project_root / PYPROJECT_FILENAME, env=env),
        TomlConfigSource(toml_path, env=env),
        EnvConfigSource(env),
    ]


def merge_sources(sources: Sequence[ConfigSource], *, project_root: Path) -> CatalogSettings:
    """Merge ``sources`` in order and validate the result.

    Args:
        sources: Sources ordered from lowest to highest precedence.
        project_root: Directory anchoring a relative ``root`` setting.

    Returns:
        CatalogSettings: Validated settings.

    Raises:
        ConfigError: If no sources are supplied or the merged data is invalid.
    """

    if not sources:
        raise ValueError("at least one configuration source is required")
    merged: dict[str, Any] = {}
    for source in sources:
        fragment = source.load()
        if fragment:
            LOGGER.debug("configuration from %s: %s", source.describe(), sorted(fragment))
        merged = deep_merge(merged, fragment)
    try:
        settings = CatalogSettings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    if settings.root is not None and not settings.root.is_absolute():
        settings.root = (project_root / settings.root).resolve()
    return settings


def load_settings(
    project_root: Path,
    *,
    config_file: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CatalogSettings:
    """Load settings for ``project_root`` from the standard source chain.

    Args:
        project_root: Directory supplying ``pyproject.toml`` and ``.desktop-catalog.toml``.
        config_file: Optional explicit TOML file.
        env: Optional environment mapping used instead of :data:`os.environ`.

    Returns:
        CatalogSettings: Validated settings.
    """

    root = project_root.resolve()
    sources = default_sources(root, config_file=config_file, env=env)
    return merge_sources(sources, project_root=root)


__all__ = ["CONFIG_FILENAME", "PYPROJECT_FILENAME", "default_sources", "load_settings", "merge_sources"]
