# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Built-in directory handlers; every directory in a scanned tree is a collector."""

from __future__ import annotations

import logging

from ..catalog.collector import Collector
from .files import Desktop, Ini

LOGGER = logging.getLogger(__name__)


class Instance(Collector):
    """Root collector representing one desktop instance."""

    def prepare(self) -> None:
        LOGGER.debug("instance rooted at %s", self.source)


class Folder(Collector):
    """Generic directory without extra semantics."""


class Dir(Folder):
    """Alias of :class:`Folder` for trees that name generic directories ``dir``."""


class Panel(Collector):
    """Panel configuration directory; its INI files describe panel plugins."""

    def plugins(self) -> tuple[Ini, ...]:
        """Return the INI handlers cataloged directly under this panel."""

        return tuple(handler for handler in self.file_handlers() if isinstance(handler, Ini))


class Applications(Collector):
    """Directory of application launchers."""

    def desktop_entries(self, *, include_hidden: bool = False) -> tuple[Desktop, ...]:
        """Return the ``.desktop`` handlers cataloged under this directory.

        Args:
            include_hidden: Whether entries marked ``Hidden``/``NoDisplay`` are included.

        Returns:
            tuple[Desktop, ...]: Matching desktop entries in catalog order.
        """

        return tuple(
            handler
            for handler in self.file_handlers()
            if isinstance(handler, Desktop) and (include_hidden or not handler.hidden)
        )


class Users(Collector):
    """Directory holding one subdirectory per user account."""

    def usernames(self) -> tuple[str, ...]:
        """Return the names of the user subdirectories."""

        return tuple(child.catalog_property() for child in self.child_collectors())


__all__ = ["Applications", "Dir", "Folder", "Instance", "Panel", "Users"]
