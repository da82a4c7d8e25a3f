# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the high-level catalog build entry point."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from desktop_catalog import (
    AddressNotFound,
    CatalogSealed,
    CatalogSettings,
    build_catalog,
    collector_entry,
)
from desktop_catalog.handlers import Folder, Ini, Instance


class _Desktop(Folder):
    """Alternative root collector."""


def test_build_catalog_returns_sealed_store(sample_tree: Path) -> None:
    result = build_catalog(sample_tree)

    assert result.store.sealed
    assert isinstance(result.root, Instance)
    assert str(result.root_address) == "collector"
    with pytest.raises(CatalogSealed):
        result.store.add_category("collector", "late")


def test_build_catalog_honours_settings(sample_tree: Path) -> None:
    settings = CatalogSettings(root_name="desktop")

    result = build_catalog(sample_tree, settings=settings, root_collector=_Desktop)

    assert isinstance(result.root, _Desktop)
    assert isinstance(result.store.get_item("/desktop/files/notes"), Ini)
    assert collector_entry(result.store, "desktop") is result.root


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_build_catalog_can_skip_symlinks(tmp_path: Path) -> None:
    root = tmp_path / "root"
    (root / "panel").mkdir(parents=True)
    (root / "panel" / "clock.ini").write_text("[Clock]\n", encoding="utf-8")
    (root / "linked.ini").symlink_to(root / "panel" / "clock.ini")

    following = build_catalog(root)
    skipping = build_catalog(root, settings=CatalogSettings(follow_symlinks=False))

    assert "/collector/files/linked" in following.store
    assert "/collector/files/linked" not in skipping.store


def test_collector_entry_rejects_non_collector_addresses(sample_tree: Path) -> None:
    result = build_catalog(sample_tree)

    with pytest.raises(AddressNotFound):
        collector_entry(result.store, "/collector/files")
    with pytest.raises(AddressNotFound):
        collector_entry(result.store, "/collector/directories/missing")
