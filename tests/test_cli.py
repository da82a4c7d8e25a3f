# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the catalog commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from desktop_catalog.cli.app import app
from desktop_catalog.config import CONFIG_FILENAME


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each CLI test from an empty directory without catalog environment overrides."""

    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    for key in ("DESKTOP_CATALOG_ROOT", "DESKTOP_CATALOG_ROOT_NAME", "DESKTOP_CATALOG_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    return cwd


def test_scan_json_outputs_catalog(sample_tree: Path, workdir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["scan", str(sample_tree), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["collector"]["files"]["notes"]["handler"] == "Ini"
    assert payload["collector"]["directories"]["applications"]["files"]["firefox"]["handler"] == "Desktop"


def test_scan_prints_tree_and_summary(sample_tree: Path, workdir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["scan", str(sample_tree), "--no-color", "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert "notes [Ini]" in result.output
    assert "clock [Ini]" in result.output
    assert "Cataloged 5 file(s) in 3 collector(s)" in result.output


def test_scan_uses_configured_root(sample_tree: Path, workdir: Path) -> None:
    (workdir / CONFIG_FILENAME).write_text(
        f'root = "{sample_tree.as_posix()}"\nroot_name = "desktop"\n',
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(app, ["scan", "--json"])

    assert result.exit_code == 0, result.output
    assert "desktop" in json.loads(result.stdout)


def test_scan_without_root_fails(workdir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["scan", "--no-emoji", "--no-color"])

    assert result.exit_code == 1
    assert "no root directory" in result.output


def test_scan_reports_unknown_handlers(tmp_path: Path, workdir: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    (root / "photo.png").write_bytes(b"")
    runner = CliRunner()

    result = runner.invoke(app, ["scan", str(root), "--no-emoji", "--no-color"])

    assert result.exit_code == 1
    assert "no handler registered for 'Png'" in result.output


def test_scan_with_missing_config_file_fails(sample_tree: Path, workdir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["scan", str(sample_tree), "--config", str(workdir / "nope.toml"), "--no-emoji"])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_get_prints_leaf_as_json(sample_tree: Path, workdir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["get", str(sample_tree), "/collector/directories/panel/files/clock", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["handler"] == "Ini"
    assert payload["source"] == str(sample_tree.absolute() / "panel" / "clock.ini")


def test_get_unknown_address_fails(sample_tree: Path, workdir: Path) -> None:
    runner = CliRunner()

    missing = runner.invoke(app, ["get", str(sample_tree), "/collector/files/absent", "--no-emoji"])
    malformed = runner.invoke(app, ["get", str(sample_tree), "//collector", "--no-emoji"])

    assert missing.exit_code == 1
    assert "address not found" in missing.output
    assert malformed.exit_code == 1
    assert "empty segment" in malformed.output


def test_handlers_lists_builtin_table(workdir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["handlers"])

    assert result.exit_code == 0, result.output
    assert "Panel" in result.output
    assert "Desktop" in result.output


def test_scan_warns_about_empty_trees(tmp_path: Path, workdir: Path) -> None:
    root = tmp_path / "empty"
    root.mkdir()
    runner = CliRunner()

    result = runner.invoke(app, ["scan", str(root), "--no-emoji", "--no-color"])

    assert result.exit_code == 0, result.output
    assert "No files found" in result.output
    assert "Cataloged 0 file(s) in 1 collector(s)" in result.output


def test_get_prints_subtree(sample_tree: Path, workdir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["get", str(sample_tree), "collector/directories/panel", "--no-emoji", "--no-color"])

    assert result.exit_code == 0, result.output
    assert "Node /collector/directories/panel" in result.output
    assert "clock [Ini]" in result.output
