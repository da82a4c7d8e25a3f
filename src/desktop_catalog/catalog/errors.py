# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by catalog construction and lookup."""

from __future__ import annotations

from pathlib import Path


class CatalogError(RuntimeError):
    """Base class for every failure raised while building or reading a catalog.

    Attributes:
        address: Catalog address involved in the failure, when known.
        path: Filesystem path involved in the failure, when known.
    """

    default_message = "catalog failure"

    def __init__(
        self,
        message: str | None = None,
        *,
        address: object | None = None,
        path: Path | str | None = None,
    ) -> None:
        """Create the error and render ``address``/``path`` into the message.

        Args:
            message: Human-readable description of the failure.
            address: Catalog address (or its string form) being processed.
            path: Filesystem path being processed.
        """

        self.address = address
        self.path = Path(path) if path is not None else None
        super().__init__(self._render(message or self.default_message))

    def _render(self, message: str) -> str:
        details: list[str] = []
        if self.address is not None:
            details.append(f"address=/{self.address}")
        if self.path is not None:
            details.append(f"path={self.path}")
        if not details:
            return message
        return f"{message} ({', '.join(details)})"


class MalformedAddress(CatalogError):
    """Raised when an address string or segment violates the address invariants."""

    default_message = "malformed catalog address"


class DirectoryUnreadable(CatalogError):
    """Raised when a directory is missing, not a directory, or cannot be listed."""

    default_message = "directory cannot be read"


class UnknownHandlerType(CatalogError):
    """Raised when no handler is registered for a discriminator."""

    default_message = "no handler registered"

    def __init__(
        self,
        discriminator: str | None,
        *,
        address: object | None = None,
        path: Path | str | None = None,
        reason: str | None = None,
    ) -> None:
        """Record the unresolved ``discriminator`` alongside the usual context.

        Args:
            discriminator: Capitalised name that failed to resolve, if one was derived.
            address: Catalog address the handler would have occupied.
            path: Filesystem entry that triggered the lookup.
            reason: Optional override for the leading message text.
        """

        self.discriminator = discriminator
        if reason is None:
            reason = (
                f"no handler registered for '{discriminator}'"
                if discriminator
                else "entry has no discriminator"
            )
        super().__init__(reason, address=address, path=path)


class NodeCollision(CatalogError):
    """Raised when an insert targets a location occupied by an incompatible node."""

    default_message = "catalog node collision"


class CategoryNotFound(CatalogError):
    """Raised when a leaf is inserted under an address that is not a category."""

    default_message = "category not found"


class AddressNotFound(CatalogError):
    """Raised when a lookup cannot traverse the requested address."""

    default_message = "address not found"


class CatalogSealed(CatalogError):
    """Raised when a sealed (fully built) catalog is mutated."""

    default_message = "catalog is read-only once built"


__all__ = (
    "AddressNotFound",
    "CatalogError",
    "CatalogSealed",
    "CategoryNotFound",
    "DirectoryUnreadable",
    "MalformedAddress",
    "NodeCollision",
    "UnknownHandlerType",
)
