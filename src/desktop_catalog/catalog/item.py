# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Handler contract shared by catalog leaves and collectors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, Self, runtime_checkable

from .address import PathAddress

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .store import CatalogStore


@runtime_checkable
class Handler(Protocol):
    """Structural contract the catalog requires from every handler it instantiates.

    Handlers are constructed with ``(store, address, source)``, fully built via
    :meth:`build`, and stored under the key returned by :meth:`catalog_property`.
    """

    address: PathAddress
    source: Path

    def build(self) -> Handler:
        """Perform handler-specific setup and return the handler."""

        raise NotImplementedError

    def catalog_property(self) -> str:
        """Return the key under which the handler is stored."""

        raise NotImplementedError


class Item(ABC):
    """Base class for file handlers stored as catalog leaves.

    Subclasses implement :meth:`build`; the default property key is the last
    segment of the assigned address, i.e. the file's basename without its
    extension.

    Attributes:
        extension: Optional file extension (without the dot) the handler expects.
    """

    extension: ClassVar[str | None] = None

    def __init__(self, store: CatalogStore, address: PathAddress, source: Path) -> None:
        """Bind the handler to its catalog location and source file.

        Args:
            store: Catalog store the handler belongs to.
            address: Address assigned to the handler by its collector.
            source: Absolute path of the file the handler represents.
        """

        self._store = store
        self.address = address
        self.source = source

    @property
    def store(self) -> CatalogStore:
        """Return the catalog store that owns this handler."""

        return self._store

    @property
    def name(self) -> str:
        """Return the handler's basename without extension."""

        return self.address.last_segment()

    @abstractmethod
    def build(self) -> Self:
        """Perform handler-specific setup and return ``self``."""

    def catalog_property(self) -> str:
        """Return the key under which this handler is stored in its category.

        Returns:
            str: Last segment of :attr:`address`.
        """

        return self.address.last_segment()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address='/{self.address}', source='{self.source}')"


__all__ = ["Handler", "Item"]
