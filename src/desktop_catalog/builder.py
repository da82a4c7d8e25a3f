# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""High-level entry point that scans a directory into a sealed catalog."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .catalog.address import PathAddress
from .catalog.collector import COLLECTOR_KEY, BuildContext, Collector
from .catalog.errors import AddressNotFound
from .catalog.resolver import HandlerType
from .catalog.store import CatalogStore
from .config import CatalogSettings
from .handlers import Instance

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CatalogBuild:
    """Result of one catalog build.

    Attributes:
        store: Sealed store holding the catalog.
        root: Root collector that drove the build.
    """

    store: CatalogStore
    root: Collector

    @property
    def root_address(self) -> PathAddress:
        """Return the address of the root collector's category."""

        return self.root.built_address


def build_catalog(
    root: Path,
    *,
    registry: Mapping[str, HandlerType] | None = None,
    settings: CatalogSettings | None = None,
    root_collector: type[Collector] = Instance,
) -> CatalogBuild:
    """Scan ``root`` into a fresh, sealed :class:`CatalogStore`.

    Args:
        root: Directory to scan.
        registry: Handler table; ``None`` selects the built-in table.
        settings: Optional settings supplying ``root_name`` and ``follow_symlinks``.
        root_collector: Collector class instantiated for ``root``.

    Returns:
        CatalogBuild: Sealed store plus the root collector.

    Raises:
        CatalogError: Any catalog failure aborts the build and propagates.
    """

    active = settings or CatalogSettings()
    store = CatalogStore()
    context = BuildContext.for_registry(registry, follow_symlinks=active.follow_symlinks)
    LOGGER.debug("building catalog for %s as /%s", root, active.root_name)
    collector = root_collector.build_root(store, root, context=context, root_name=active.root_name)
    store.seal()
    LOGGER.debug(
        "catalog for %s sealed (%d leaves)",
        root,
        sum(1 for _ in store.leaves()),
    )
    return CatalogBuild(store=store, root=collector)


def collector_entry(store: CatalogStore, address: PathAddress | str) -> Collector:
    """Return the collector that built the subtree at ``address``.

    Args:
        store: Built catalog.
        address: Address of a collector category.

    Returns:
        Collector: Collector stored under ``address``/``collector``.

    Raises:
        AddressNotFound: If no collector entry exists at ``address``.
    """

    base = address if isinstance(address, PathAddress) else PathAddress.parse(address)
    item = store.get_item(base.join(COLLECTOR_KEY))
    if not isinstance(item, Collector):
        raise AddressNotFound("no collector entry", address=base)
    return item


__all__ = ["CatalogBuild", "build_catalog", "collector_entry"]
