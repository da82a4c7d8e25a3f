# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for catalog builds and the command line."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..catalog.address import SEPARATOR
from ..catalog.collector import DEFAULT_ROOT_NAME

LOG_LEVELS: Final[tuple[str, ...]] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class CatalogSettings(BaseModel):
    """Settings controlling how a catalog is built and presented.

    Attributes:
        root: Directory scanned when none is given explicitly.
        root_name: Top-level catalog segment the root collector is stored under.
        follow_symlinks: Whether symbolic links are followed during the scan.
        use_color: Whether console output may use colour.
        use_emoji: Whether console output may use emoji glyphs.
        log_level: Threshold for diagnostic logging.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    root: Path | None = None
    root_name: str = DEFAULT_ROOT_NAME
    follow_symlinks: bool = True
    use_color: bool = True
    use_emoji: bool = True
    log_level: str = Field(default="WARNING")

    @field_validator("root_name")
    @classmethod
    def _validate_root_name(cls, value: str) -> str:
        if not value or SEPARATOR in value:
            raise ValueError(f"root_name must be a single non-empty segment without '{SEPARATOR}'")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            value = logging.getLevelName(value)
        text = str(value).strip().upper()
        if text not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return text

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as a plain mapping."""

        return self.model_dump()

    @property
    def numeric_log_level(self) -> int:
        """Return :attr:`log_level` as a :mod:`logging` constant."""

        return int(logging.getLevelName(self.log_level))


__all__ = ["LOG_LEVELS", "CatalogSettings", "ConfigError"]
