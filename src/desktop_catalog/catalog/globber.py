# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem listing utilities feeding the catalog collectors."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import DirectoryUnreadable

LOGGER = logging.getLogger(__name__)

HIDDEN_PREFIX: Final[str] = "."


@dataclass(slots=True, frozen=True)
class Globber:
    """List the immediate children of a directory split into files and directories.

    Attributes:
        follow_symlinks: When ``False`` symbolic links are skipped entirely;
            otherwise they are classified by their target.
    """

    follow_symlinks: bool = True

    @staticmethod
    def ignore_entry(name: str) -> bool:
        """Return ``True`` when ``name`` denotes a hidden entry.

        Args:
            name: Basename of a directory entry.

        Returns:
            bool: ``True`` for names starting with ``.``.
        """

        return name.startswith(HIDDEN_PREFIX)

    def list_files(self, directory: Path) -> tuple[str, ...]:
        """Return sorted basenames of regular files directly under ``directory``.

        Args:
            directory: Directory to list.

        Returns:
            tuple[str, ...]: Visible file basenames in lexicographic order.

        Raises:
            DirectoryUnreadable: If ``directory`` is missing or cannot be listed.
        """

        names = self._select(directory, Path.is_file)
        LOGGER.debug("files under %s: %s", directory, names)
        return names

    def list_directories(self, directory: Path) -> tuple[str, ...]:
        """Return sorted basenames of subdirectories directly under ``directory``.

        Args:
            directory: Directory to list.

        Returns:
            tuple[str, ...]: Visible directory basenames in lexicographic order.

        Raises:
            DirectoryUnreadable: If ``directory`` is missing or cannot be listed.
        """

        names = self._select(directory, Path.is_dir)
        LOGGER.debug("directories under %s: %s", directory, names)
        return names

    def _select(self, directory: Path, predicate: Callable[[Path], bool]) -> tuple[str, ...]:
        """Return visible entry names under ``directory`` that satisfy ``predicate``.

        Args:
            directory: Directory to list.
            predicate: Classifier applied to each child path.

        Returns:
            tuple[str, ...]: Sorted matching basenames.

        Raises:
            DirectoryUnreadable: If listing ``directory`` fails.
        """

        if not directory.is_dir():
            raise DirectoryUnreadable("not an existing directory", path=directory)
        try:
            children = list(directory.iterdir())
        except OSError as exc:
            raise DirectoryUnreadable(f"cannot list directory: {exc.strerror or exc}", path=directory) from exc
        names: list[str] = []
        for child in children:
            if self.ignore_entry(child.name):
                continue
            if child.is_symlink() and not self.follow_symlinks:
                continue
            if predicate(child):
                names.append(child.name)
        return tuple(sorted(names))


__all__ = ["HIDDEN_PREFIX", "Globber"]
