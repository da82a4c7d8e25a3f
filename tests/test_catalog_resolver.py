# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for naming-convention handler dispatch."""

from __future__ import annotations

from pathlib import Path

import pytest

from desktop_catalog.catalog import HandlerRegistry, TypeResolver, UnknownHandlerType
from desktop_catalog.catalog.resolver import discriminator, file_extension, file_key
from desktop_catalog.handlers import Desktop, Folder, Ini, Json, Panel


@pytest.mark.parametrize(
    ("name", "expected"),
    [("ini", "Ini"), ("INI", "Ini"), ("panel", "Panel"), ("Panel", "Panel"), ("pAnEl", "Panel")],
)
def test_discriminator_capitalises(name: str, expected: str) -> None:
    assert discriminator(name) == expected


def test_file_naming_uses_last_extension() -> None:
    assert file_extension("archive.tar.json") == "json"
    assert file_key("archive.tar.json") == "archive.tar"
    assert file_extension("README") is None
    assert file_key("README") == "README"


def test_resolver_dispatches_files_and_directories(registry: HandlerRegistry) -> None:
    resolver = TypeResolver(registry)

    assert resolver.resolve_file("wallpaper.ini") is Ini
    assert resolver.resolve_file("Firefox.DESKTOP") is Desktop
    assert resolver.resolve_file("state.json") is Json
    assert resolver.resolve_directory("panel") is Panel
    assert resolver.resolve_directory("PANEL") is Panel


def test_unknown_extension_reports_discriminator(registry: HandlerRegistry, tmp_path: Path) -> None:
    resolver = TypeResolver(registry)

    with pytest.raises(UnknownHandlerType) as excinfo:
        resolver.resolve_file("image.png", path=tmp_path / "image.png")

    assert excinfo.value.discriminator == "Png"
    assert excinfo.value.path == tmp_path / "image.png"


def test_file_without_extension_is_unknown(registry: HandlerRegistry) -> None:
    with pytest.raises(UnknownHandlerType, match="no extension") as excinfo:
        TypeResolver(registry).resolve_file("README")

    assert excinfo.value.discriminator is None


def test_unknown_directory_is_rejected(registry: HandlerRegistry) -> None:
    with pytest.raises(UnknownHandlerType, match="Wallpapers"):
        TypeResolver(registry).resolve_directory("wallpapers")


def test_registry_rejects_duplicates_and_non_canonical_names() -> None:
    registry = HandlerRegistry()
    registry.register(Folder)

    with pytest.raises(ValueError, match="already registered"):
        registry.register(Folder)
    with pytest.raises(ValueError, match="canonical"):
        registry.register(Folder, name="wallpapers")

    registry.register(Folder, name="Wallpapers")
    assert list(registry) == ["Folder", "Wallpapers"]
    assert registry.try_get("Missing") is None

    registry.reset()
    assert len(registry) == 0


def test_registry_copy_is_independent(registry: HandlerRegistry) -> None:
    clone = registry.copy()
    clone.register(Folder, name="Extra")

    assert "Extra" in clone
    assert "Extra" not in registry
