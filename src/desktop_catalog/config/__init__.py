# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public configuration surface."""

from __future__ import annotations

from .loader import CONFIG_FILENAME, load_settings
from .models import CatalogSettings, ConfigError

__all__ = ["CONFIG_FILENAME", "CatalogSettings", "ConfigError", "load_settings"]
