# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for tree and JSON rendering of catalogs."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.console import Console

from desktop_catalog import AddressNotFound, CatalogStore, PathAddress, build_catalog
from desktop_catalog.render import describe_node, dump_json, render_tree


def _render_text(renderable: object) -> str:
    console = Console(width=200, record=True, no_color=True)
    console.print(renderable)
    return console.export_text()


def test_dump_json_mirrors_catalog_layout(sample_tree: Path) -> None:
    result = build_catalog(sample_tree)

    payload = json.loads(dump_json(result.store))

    collector = payload["collector"]
    assert collector["collector"]["handler"] == "Instance"
    assert collector["files"]["notes"] == {
        "handler": "Ini",
        "key": "notes",
        "source": str(sample_tree.absolute() / "notes.ini"),
    }
    assert collector["directories"]["panel"]["collector"]["handler"] == "Panel"
    assert list(collector["directories"]) == ["applications", "panel"]


def test_dump_json_for_subtree_and_leaf(sample_tree: Path) -> None:
    result = build_catalog(sample_tree)

    subtree = json.loads(dump_json(result.store, address=PathAddress.parse("collector/directories/panel")))
    leaf = json.loads(dump_json(result.store, address=PathAddress.parse("collector/files/notes"), indent=None))

    assert set(subtree) == {"collector", "files"}
    assert leaf["handler"] == "Ini"


def test_render_tree_lists_handlers(sample_tree: Path) -> None:
    result = build_catalog(sample_tree)

    text = _render_text(render_tree(result.store, show_sources=True))

    assert "collector" in text
    assert "notes [Ini]" in text
    assert "firefox [Desktop]" in text
    assert str(sample_tree.absolute() / "notes.ini") in text


def test_render_tree_for_missing_address(sample_tree: Path) -> None:
    result = build_catalog(sample_tree)

    with pytest.raises(AddressNotFound):
        render_tree(result.store, address=PathAddress.parse("collector/nowhere"))


@pytest.mark.parametrize("indent", [None, 0, 2, 4])
def test_dump_json_matches_stdlib_layout(sample_tree: Path, indent: int | None) -> None:
    result = build_catalog(sample_tree)
    panel = PathAddress.parse("collector/directories/panel")
    leaf = PathAddress.parse("collector/files/notes")

    assert dump_json(result.store, indent=indent) == json.dumps(result.store.to_plain(), indent=indent)
    assert dump_json(result.store, address=panel, indent=indent) == json.dumps(
        describe_node(result.store.get(panel)), indent=indent
    )
    assert dump_json(result.store, address=leaf, indent=indent) == json.dumps(
        describe_node(result.store.get(leaf)), indent=indent
    )


def test_dump_json_of_empty_store() -> None:
    assert dump_json(CatalogStore()) == "{}"
