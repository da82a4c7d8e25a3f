# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Recursive builder turning a directory subtree into a catalog subtree."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Self

from .address import PathAddress
from .errors import DirectoryUnreadable, UnknownHandlerType
from .globber import Globber
from .nodes import Category, Leaf
from .resolver import DEFAULT_REGISTRY, HandlerType, TypeResolver, directory_key, file_key
from .store import CatalogStore

LOGGER = logging.getLogger(__name__)

COLLECTOR_KEY: Final[str] = "collector"
FILES_CATEGORY: Final[str] = "files"
DIRECTORIES_CATEGORY: Final[str] = "directories"
DEFAULT_ROOT_NAME: Final[str] = "collector"


@dataclass(slots=True, frozen=True)
class BuildContext:
    """Collaborators shared by every collector taking part in one build.

    Attributes:
        resolver: Resolver mapping entry names to handler classes.
        globber: Directory lister used for every collector.
    """

    resolver: TypeResolver = field(default_factory=lambda: TypeResolver(DEFAULT_REGISTRY))
    globber: Globber = field(default_factory=Globber)

    @classmethod
    def for_registry(
        cls,
        registry: Mapping[str, HandlerType] | None = None,
        *,
        follow_symlinks: bool = True,
    ) -> BuildContext:
        """Return a context resolving against ``registry`` (defaults to the built-in table).

        Args:
            registry: Handler table; ``None`` selects :data:`DEFAULT_REGISTRY`.
            follow_symlinks: Whether symbolic links are followed while listing.

        Returns:
            BuildContext: Context ready to be handed to a root collector.
        """

        table = DEFAULT_REGISTRY if registry is None else registry
        return cls(resolver=TypeResolver(table), globber=Globber(follow_symlinks=follow_symlinks))


class Collector:
    """Directory handler that catalogs its children and recurses into subdirectories.

    A collector registers a category for itself, stores itself under the
    ``collector`` key of that category, then files every child entry: files
    under ``files`` and subdirectories (themselves collectors) under
    ``directories``. Traversal is depth-first and iterative, so tree depth is
    not bounded by the interpreter's recursion limit.

    Subclasses customise behaviour through :meth:`prepare` and
    :meth:`catalog_property`; :meth:`build` drives the whole subtree.
    """

    def __init__(
        self,
        store: CatalogStore,
        address: PathAddress,
        source: Path,
        *,
        context: BuildContext | None = None,
    ) -> None:
        """Bind the collector to its catalog address and source directory.

        Args:
            store: Catalog store receiving every node of the subtree.
            address: Address assigned by the parent collector.
            source: Directory scanned by this collector.
            context: Shared collaborators; defaults to the built-in handler table.
        """

        self._store = store
        self.address = address
        self.source = Path(source).absolute()
        self._context = context if context is not None else BuildContext()
        self._lineage: frozenset[Path] = frozenset()
        self._category: PathAddress | None = None

    @classmethod
    def build_root(
        cls,
        store: CatalogStore,
        source: Path,
        *,
        context: BuildContext | None = None,
        root_name: str = DEFAULT_ROOT_NAME,
    ) -> Self:
        """Create the root collector for ``source`` and build the whole tree.

        Args:
            store: Empty store receiving the catalog.
            source: Root directory to scan.
            context: Shared collaborators for the build.
            root_name: Top-level segment of the catalog (``collector`` by default).

        Returns:
            Self: The fully built root collector.
        """

        collector = cls(store, PathAddress.root().join(root_name), Path(source), context=context)
        return collector.build()

    @property
    def store(self) -> CatalogStore:
        """Return the catalog store this collector writes into."""

        return self._store

    @property
    def context(self) -> BuildContext:
        """Return the collaborators shared across the build."""

        return self._context

    @property
    def built_address(self) -> PathAddress:
        """Return the address of this collector's category.

        Raises:
            RuntimeError: If :meth:`build` has not run yet.
        """

        if self._category is None:
            raise RuntimeError(f"{type(self).__name__} at /{self.address} has not been built")
        return self._category

    def catalog_property(self) -> str:
        """Return the segment naming this collector's category.

        Returns:
            str: Last segment of :attr:`address` (the directory basename).
        """

        return self.address.last_segment()

    def prepare(self) -> None:
        """Hook invoked after self-registration and before children are cataloged."""

    def file_handlers(self) -> tuple[object, ...]:
        """Return the handlers stored under this collector's ``files`` category.

        Returns:
            tuple[object, ...]: Handlers in insertion order; empty when there are no files.
        """

        return tuple(self._category_items(FILES_CATEGORY, Leaf))

    def child_collectors(self) -> tuple[Collector, ...]:
        """Return the collectors built for this collector's subdirectories."""

        children: list[Collector] = []
        for node in self._category_items(DIRECTORIES_CATEGORY, Category):
            entry = node.child(COLLECTOR_KEY)
            if isinstance(entry, Leaf) and isinstance(entry.item, Collector):
                children.append(entry.item)
        return tuple(children)

    def _category_items(self, name: str, kind: type[Leaf] | type[Category]) -> list[Any]:
        category = self._store.get(self.built_address)
        if not isinstance(category, Category):
            return []
        bucket = category.child(name)
        if not isinstance(bucket, Category):
            return []
        nodes = [node for node in bucket.view().values() if isinstance(node, kind)]
        if kind is Leaf:
            return [node.item for node in nodes]
        return nodes

    def build(self) -> Self:
        """Catalog this collector's subtree depth-first.

        Returns:
            Self: The built collector.

        Raises:
            DirectoryUnreadable: If a directory cannot be listed or forms a cycle.
            UnknownHandlerType: If an entry has no registered handler.
            NodeCollision: If two siblings claim the same catalog key.
        """

        pending: list[Collector] = [self]
        while pending:
            collector = pending.pop()
            children = collector._build_node()
            pending.extend(reversed(children))
        return self

    def _build_node(self) -> list[Collector]:
        """Catalog this collector's own entries and return unbuilt child collectors."""

        real_source = self._guard_source()
        store = self._store
        category = store.add_category(self.address.parent(), self.catalog_property())
        store.add_leaf(category, COLLECTOR_KEY, self)
        self._category = category
        LOGGER.debug("collector %s registered at /%s", type(self).__name__, category)
        self.prepare()

        globber = self._context.globber
        files = globber.list_files(self.source)
        if files:
            files_category = store.add_category(category, FILES_CATEGORY)
            for filename in files:
                self._add_file(files_category, filename)

        directories = globber.list_directories(self.source)
        children: list[Collector] = []
        if directories:
            directories_category = store.add_category(category, DIRECTORIES_CATEGORY)
            lineage = self._lineage | {real_source}
            for dirname in directories:
                child = self._create_child(directories_category, dirname)
                child._lineage = lineage
                children.append(child)
        return children

    def _add_file(self, files_category: PathAddress, filename: str) -> None:
        address = files_category.join(file_key(filename))
        path = self.source / filename
        handler_cls = self._context.resolver.resolve_file(filename, path=path, address=address)
        if isinstance(handler_cls, type) and issubclass(handler_cls, Collector):
            raise UnknownHandlerType(
                handler_cls.__name__,
                address=address,
                path=path,
                reason=f"file resolves to collector '{handler_cls.__name__}'",
            )
        handler = handler_cls(self._store, address, path)
        built = handler.build()
        self._store.add_leaf(files_category, built.catalog_property(), built)

    def _create_child(self, directories_category: PathAddress, dirname: str) -> Collector:
        address = directories_category.join(directory_key(dirname))
        path = self.source / dirname
        handler_cls = self._context.resolver.resolve_directory(dirname, path=path, address=address)
        if not (isinstance(handler_cls, type) and issubclass(handler_cls, Collector)):
            raise UnknownHandlerType(
                handler_cls.__name__,
                address=address,
                path=path,
                reason=f"directory handler '{handler_cls.__name__}' is not a collector",
            )
        return handler_cls(self._store, address, path, context=self._context)

    def _guard_source(self) -> Path:
        if not self.source.is_dir():
            raise DirectoryUnreadable("not an existing directory", address=self.address, path=self.source)
        real_source = self.source.resolve()
        if real_source in self._lineage:
            raise DirectoryUnreadable(
                f"directory cycle back to {real_source}",
                address=self.address,
                path=self.source,
            )
        return real_source

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address='/{self.address}', source='{self.source}')"


__all__ = [
    "COLLECTOR_KEY",
    "DEFAULT_ROOT_NAME",
    "DIRECTORIES_CATEGORY",
    "FILES_CATEGORY",
    "BuildContext",
    "Collector",
]
