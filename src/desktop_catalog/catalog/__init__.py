# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for the hierarchical component catalog."""

from __future__ import annotations

from typing import Final

from .address import PathAddress
from .collector import BuildContext, Collector
from .errors import (
    AddressNotFound,
    CatalogError,
    CatalogSealed,
    CategoryNotFound,
    DirectoryUnreadable,
    MalformedAddress,
    NodeCollision,
    UnknownHandlerType,
)
from .globber import Globber
from .item import Handler, Item
from .nodes import Category, Leaf, Node
from .resolver import DEFAULT_REGISTRY, HandlerRegistry, TypeResolver, register_handler
from .store import CatalogStore

__all__: Final[tuple[str, ...]] = (
    "DEFAULT_REGISTRY",
    "AddressNotFound",
    "BuildContext",
    "CatalogError",
    "CatalogSealed",
    "CatalogStore",
    "Category",
    "CategoryNotFound",
    "Collector",
    "DirectoryUnreadable",
    "Globber",
    "Handler",
    "HandlerRegistry",
    "Item",
    "Leaf",
    "MalformedAddress",
    "Node",
    "NodeCollision",
    "PathAddress",
    "TypeResolver",
    "UnknownHandlerType",
    "register_handler",
)
