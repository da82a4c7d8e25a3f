# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Hierarchical component catalog built from a directory tree."""

from __future__ import annotations

from . import handlers
from .builder import CatalogBuild, build_catalog, collector_entry
from .catalog import (
    DEFAULT_REGISTRY,
    AddressNotFound,
    BuildContext,
    CatalogError,
    CatalogSealed,
    CatalogStore,
    Category,
    CategoryNotFound,
    Collector,
    DirectoryUnreadable,
    Globber,
    Handler,
    HandlerRegistry,
    Item,
    Leaf,
    MalformedAddress,
    NodeCollision,
    PathAddress,
    TypeResolver,
    UnknownHandlerType,
    register_handler,
)
from .config import CatalogSettings, ConfigError, load_settings

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REGISTRY",
    "AddressNotFound",
    "BuildContext",
    "CatalogBuild",
    "CatalogError",
    "CatalogSealed",
    "CatalogSettings",
    "CatalogStore",
    "Category",
    "CategoryNotFound",
    "Collector",
    "ConfigError",
    "DirectoryUnreadable",
    "Globber",
    "Handler",
    "HandlerRegistry",
    "Item",
    "Leaf",
    "MalformedAddress",
    "NodeCollision",
    "PathAddress",
    "TypeResolver",
    "UnknownHandlerType",
    "build_catalog",
    "collector_entry",
    "handlers",
    "load_settings",
    "register_handler",
]
