# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the catalog commands."""

from __future__ import annotations

import typer

from .commands import get_command, handlers_command, scan_command

app = typer.Typer(
    help="Scan a directory tree into a hierarchical component catalog.",
    no_args_is_help=True,
    add_completion=False,
)
app.command(name="scan")(scan_command)
app.command(name="get")(get_command)
app.command(name="handlers")(handlers_command)

__all__ = ["app"]
