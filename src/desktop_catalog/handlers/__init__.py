# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Built-in handler table registered with :data:`DEFAULT_REGISTRY`."""

from __future__ import annotations

from ..catalog.resolver import DEFAULT_REGISTRY, HandlerType, register_handler
from .directories import Applications, Dir, Folder, Instance, Panel, Users
from .files import Desktop, HandlerBuildError, Ini, Json

BUILTIN_HANDLERS: tuple[HandlerType, ...] = (
    Ini,
    Desktop,
    Json,
    Panel,
    Applications,
    Users,
    Folder,
    Dir,
    Instance,
)


def register_builtin_handlers() -> None:
    """Register every built-in handler not yet present in :data:`DEFAULT_REGISTRY`."""

    for handler in BUILTIN_HANDLERS:
        if DEFAULT_REGISTRY.try_get(handler.__name__) is None:
            register_handler(handler)


register_builtin_handlers()

__all__ = [
    "BUILTIN_HANDLERS",
    "Applications",
    "Desktop",
    "Dir",
    "Folder",
    "HandlerBuildError",
    "Ini",
    "Instance",
    "Json",
    "Panel",
    "Users",
    "register_builtin_handlers",
]
