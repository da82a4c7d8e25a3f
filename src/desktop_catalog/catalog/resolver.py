# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Naming-convention dispatch from filesystem entries to handler types."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePath

from .address import PathAddress
from .errors import UnknownHandlerType
from .item import Handler

LOGGER = logging.getLogger(__name__)

HandlerType = type[Handler]


def discriminator(name: str) -> str:
    """Return the canonical discriminator for ``name``.

    The transform is :meth:`str.capitalize`: the first character is upper-cased
    and the remainder lower-cased, so ``"panel"``, ``"Panel"`` and ``"PANEL"``
    all map to ``"Panel"``.

    Args:
        name: File extension or directory basename.

    Returns:
        str: Capitalised discriminator.
    """

    return name.capitalize()


def file_extension(filename: str) -> str | None:
    """Return the last extension of ``filename`` without the dot, if any."""

    suffix = PurePath(filename).suffix
    return suffix[1:] if suffix else None


def file_key(filename: str) -> str:
    """Return the address segment used for ``filename`` (its name minus the last extension)."""

    return PurePath(filename).stem


def directory_key(dirname: str) -> str:
    """Return the address segment used for ``dirname`` (the basename verbatim)."""

    return dirname


class HandlerRegistry(Mapping[str, HandlerType]):
    """Static table mapping discriminators to handler classes.

    ``HandlerRegistry`` behaves like a read-only mapping whose keys are
    discriminators (``"Ini"``, ``"Panel"``) and whose values are handler
    classes. Registration happens explicitly, typically at import time.
    """

    def __init__(self) -> None:
        """Initialise an empty handler registry."""

        self._handlers: dict[str, HandlerType] = {}

    def register(self, handler: HandlerType, *, name: str | None = None) -> HandlerType:
        """Register ``handler`` under ``name`` (defaults to the class name).

        Args:
            handler: Handler class to register.
            name: Optional discriminator overriding the class name.

        Returns:
            HandlerType: ``handler`` unchanged, so the method doubles as a decorator.

        Raises:
            ValueError: If ``name`` is not in canonical capitalised form or is
                already registered.
        """

        key = name or handler.__name__
        if not key or key != discriminator(key):
            raise ValueError(f"Handler name '{key}' is not a canonical discriminator (expected '{discriminator(key)}')")
        if key in self._handlers:
            raise ValueError(f"Handler '{key}' already registered")
        self._handlers[key] = handler
        return handler

    def reset(self) -> None:
        """Remove every registered handler."""

        self._handlers.clear()

    def try_get(self, name: str) -> HandlerType | None:
        """Return the handler registered as ``name`` or ``None``."""

        return self._handlers.get(name)

    def copy(self) -> HandlerRegistry:
        """Return a new registry holding the same registrations."""

        clone = HandlerRegistry()
        clone._handlers.update(self._handlers)
        return clone

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._handlers))

    def __getitem__(self, name: str) -> HandlerType:
        return self._handlers[name]


@dataclass(slots=True, frozen=True)
class TypeResolver:
    """Resolve filesystem entries to handler classes by naming convention.

    Attributes:
        registry: Handler table consulted for every lookup.
    """

    registry: Mapping[str, HandlerType]

    def resolve_file(
        self,
        filename: str,
        *,
        path: Path | None = None,
        address: PathAddress | None = None,
    ) -> HandlerType:
        """Return the handler registered for the extension of ``filename``.

        Args:
            filename: Basename such as ``"wallpaper.ini"``.
            path: Full path of the entry, used for error context.
            address: Address the handler would occupy, used for error context.

        Returns:
            HandlerType: Registered handler class.

        Raises:
            UnknownHandlerType: If the file has no extension or no handler is registered.
        """

        extension = file_extension(filename)
        if extension is None:
            raise UnknownHandlerType(
                None,
                address=address,
                path=path or filename,
                reason=f"file '{filename}' has no extension to dispatch on",
            )
        return self._lookup(discriminator(extension), path=path or Path(filename), address=address)

    def resolve_directory(
        self,
        dirname: str,
        *,
        path: Path | None = None,
        address: PathAddress | None = None,
    ) -> HandlerType:
        """Return the handler registered for directory ``dirname``.

        Args:
            dirname: Directory basename such as ``"panel"``.
            path: Full path of the entry, used for error context.
            address: Address the handler would occupy, used for error context.

        Returns:
            HandlerType: Registered handler class.

        Raises:
            UnknownHandlerType: If no handler is registered for the directory name.
        """

        return self._lookup(discriminator(dirname), path=path or Path(dirname), address=address)

    def _lookup(self, name: str, *, path: Path, address: PathAddress | None) -> HandlerType:
        handler = self.registry.get(name)
        if handler is None:
            raise UnknownHandlerType(name, address=address, path=path)
        LOGGER.debug("resolved %s -> %s", path, handler.__name__)
        return handler


DEFAULT_REGISTRY = HandlerRegistry()


def register_handler(handler: HandlerType, *, name: str | None = None) -> HandlerType:
    """Register ``handler`` with :data:`DEFAULT_REGISTRY`.

    Args:
        handler: Handler class to register.
        name: Optional discriminator overriding the class name.

    Returns:
        HandlerType: ``handler`` unchanged.
    """

    return DEFAULT_REGISTRY.register(handler, name=name)


__all__ = [
    "DEFAULT_REGISTRY",
    "HandlerRegistry",
    "HandlerType",
    "TypeResolver",
    "directory_key",
    "discriminator",
    "file_extension",
    "file_key",
    "register_handler",
]
