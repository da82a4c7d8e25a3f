# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Built-in file handlers stored as catalog leaves."""

from __future__ import annotations

import configparser
import json
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, Self

from ..catalog.address import PathAddress
from ..catalog.errors import CatalogError
from ..catalog.item import Item

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..catalog.store import CatalogStore

DESKTOP_ENTRY_SECTION: Final[str] = "Desktop Entry"


class HandlerBuildError(CatalogError):
    """Raised when a built-in handler cannot parse its source file."""

    default_message = "handler failed to build"


class Ini(Item):
    """INI configuration file such as an LXQt panel or session configuration."""

    extension = "ini"

    def __init__(self, store: CatalogStore, address: PathAddress, source: Path) -> None:
        super().__init__(store, address, source)
        self.sections: dict[str, dict[str, str]] = {}

    def build(self) -> Self:
        """Parse the file into :attr:`sections`.

        Returns:
            Self: The built handler.

        Raises:
            HandlerBuildError: If the file cannot be read or parsed.
        """

        parser = _read_config(self, configparser.ConfigParser(interpolation=None))
        self.sections = {name: dict(parser.items(name, raw=True)) for name in parser.sections()}
        return self

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        """Return ``key`` from ``section`` or ``default``."""

        return self.sections.get(section, {}).get(key, default)


class Desktop(Item):
    """Freedesktop ``.desktop`` entry describing a launchable application."""

    extension = "desktop"

    def __init__(self, store: CatalogStore, address: PathAddress, source: Path) -> None:
        super().__init__(store, address, source)
        self.entry: dict[str, str] = {}

    def build(self) -> Self:
        """Parse the ``[Desktop Entry]`` group.

        Returns:
            Self: The built handler.

        Raises:
            HandlerBuildError: If the file is unreadable or lacks a ``[Desktop Entry]`` group.
        """

        parser = configparser.ConfigParser(interpolation=None, strict=False)
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        parser = _read_config(self, parser)
        if not parser.has_section(DESKTOP_ENTRY_SECTION):
            raise HandlerBuildError(
                f"missing [{DESKTOP_ENTRY_SECTION}] group",
                address=self.address,
                path=self.source,
            )
        self.entry = dict(parser.items(DESKTOP_ENTRY_SECTION, raw=True))
        return self

    @property
    def display_name(self) -> str:
        """Return the ``Name`` key, falling back to the file stem."""

        return self.entry.get("Name", self.name)

    @property
    def exec_line(self) -> str | None:
        """Return the ``Exec`` command line, if declared."""

        return self.entry.get("Exec")

    @property
    def hidden(self) -> bool:
        """Return ``True`` when the entry sets ``Hidden`` or ``NoDisplay``."""

        return any(self.entry.get(key, "").lower() == "true" for key in ("Hidden", "NoDisplay"))


class Json(Item):
    """JSON document stored verbatim."""

    extension = "json"

    def __init__(self, store: CatalogStore, address: PathAddress, source: Path) -> None:
        super().__init__(store, address, source)
        self.data: Any = None

    def build(self) -> Self:
        """Load the document into :attr:`data`.

        Returns:
            Self: The built handler.

        Raises:
            HandlerBuildError: If the file cannot be read or is not valid JSON.
        """

        try:
            with self.source.open("r", encoding="utf-8") as stream:
                self.data = json.load(stream)
        except json.JSONDecodeError as exc:
            raise HandlerBuildError(f"invalid JSON: {exc.msg}", address=self.address, path=self.source) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise HandlerBuildError(f"cannot read file: {exc}", address=self.address, path=self.source) from exc
        return self

    @property
    def is_object(self) -> bool:
        """Return ``True`` when the document is a JSON object."""

        return isinstance(self.data, Mapping)


def _read_config(item: Item, parser: configparser.ConfigParser) -> configparser.ConfigParser:
    """Read ``item.source`` into ``parser`` translating failures to :class:`HandlerBuildError`."""

    try:
        with item.source.open("r", encoding="utf-8") as stream:
            parser.read_file(stream, source=str(item.source))
    except configparser.Error as exc:
        raise HandlerBuildError(f"invalid configuration: {exc}", address=item.address, path=item.source) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise HandlerBuildError(f"cannot read file: {exc}", address=item.address, path=item.source) from exc
    return parser


__all__ = ["DESKTOP_ENTRY_SECTION", "Desktop", "HandlerBuildError", "Ini", "Json"]
