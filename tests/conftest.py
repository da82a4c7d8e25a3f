# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from desktop_catalog.catalog import DEFAULT_REGISTRY, HandlerRegistry

TreeLayout = Mapping[str, "TreeLayout | str"]

PANEL_INI = "[General]\nposition=Bottom\n"
CLOCK_INI = "[Clock]\nformat=HH:mm\n"
NOTES_INI = "[Notes]\ntitle=Reminders\n"
FIREFOX_DESKTOP = "[Desktop Entry]\nType=Application\nName=Firefox\nExec=firefox %u\n"
HIDDEN_DESKTOP = "[Desktop Entry]\nType=Application\nName=Helper\nNoDisplay=true\n"


def write_tree(root: Path, layout: TreeLayout) -> Path:
    """Materialise ``layout`` under ``root``; mappings become directories, strings file contents."""

    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        target = root / name
        if isinstance(value, Mapping):
            write_tree(target, value)
        else:
            target.write_text(value, encoding="utf-8")
    return root


@pytest.fixture
def tree_writer() -> Callable[[Path, TreeLayout], Path]:
    """Return the helper that writes directory trees from nested mappings."""

    return write_tree


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Return a small desktop-style tree exercising files, directories and hidden entries."""

    return write_tree(
        tmp_path / "instance",
        {
            "notes.ini": NOTES_INI,
            "panel.ini": PANEL_INI,
            ".hidden.ini": "[Ignored]\n",
            ".cache": {"junk.ini": "[Junk]\n"},
            "panel": {"clock.ini": CLOCK_INI},
            "applications": {
                "firefox.desktop": FIREFOX_DESKTOP,
                "helper.desktop": HIDDEN_DESKTOP,
            },
        },
    )


@pytest.fixture
def registry() -> HandlerRegistry:
    """Return a private copy of the built-in handler table."""

    return DEFAULT_REGISTRY.copy()
