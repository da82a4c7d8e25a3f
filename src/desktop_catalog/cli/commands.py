# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Catalog CLI commands: ``scan``, ``get`` and ``handlers``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ..builder import CatalogBuild, build_catalog
from ..catalog.address import PathAddress
from ..catalog.collector import Collector
from ..catalog.errors import CatalogError
from ..catalog.resolver import DEFAULT_REGISTRY
from ..config import CatalogSettings, ConfigError, load_settings
from ..console import get_console_manager
from ..logging import configure_logging, section
from ..render import dump_json, render_tree
from .shared import CLIError, CLILogger, build_cli_logger


@dataclass(slots=True)
class ScanInputs:
    """Capture CLI parameters shared by the catalog commands."""

    root: Path | None
    config_file: Path | None = None
    no_color: bool = False
    no_emoji: bool = False
    verbose: bool = False


@dataclass(slots=True)
class ScanContext:
    """Resolved settings, logger and console for one command invocation."""

    settings: CatalogSettings
    root: Path
    logger: CLILogger
    console: Console


def prepare_context(inputs: ScanInputs) -> ScanContext:
    """Load settings and build the logger/console for a command.

    Args:
        inputs: Raw CLI parameters.

    Returns:
        ScanContext: Resolved settings and output helpers.

    Raises:
        CLIError: If configuration is invalid or no root directory is known.
    """

    try:
        settings = load_settings(Path.cwd(), config_file=inputs.config_file)
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc
    if inputs.no_color:
        settings.use_color = False
    if inputs.no_emoji:
        settings.use_emoji = False
    if inputs.verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings.numeric_log_level, use_color=settings.use_color)
    root = inputs.root or settings.root
    if root is None:
        raise CLIError("no root directory given and none configured")
    logger = build_cli_logger(emoji=settings.use_emoji, debug=inputs.verbose, no_color=not settings.use_color)
    console = get_console_manager().get(color=settings.use_color, emoji=settings.use_emoji)
    return ScanContext(settings=settings, root=root, logger=logger, console=console)


def _build(context: ScanContext) -> CatalogBuild:
    context.logger.debug(f"root={context.root} root_name={context.settings.root_name}")
    try:
        return build_catalog(context.root, settings=context.settings)
    except CatalogError as exc:
        raise CLIError(str(exc)) from exc


def run_scan(inputs: ScanInputs, *, as_json: bool = False, show_sources: bool = False) -> int:
    """Build the catalog for ``inputs.root`` and print it.

    Args:
        inputs: Raw CLI parameters.
        as_json: Emit JSON instead of a tree.
        show_sources: Include leaf source paths in the tree.

    Returns:
        int: ``0`` on success, the error's exit code otherwise.
    """

    logger = build_cli_logger(emoji=not inputs.no_emoji, no_color=inputs.no_color)
    try:
        context = prepare_context(inputs)
        logger = context.logger
        result = _build(context)
    except CLIError as exc:
        logger.fail(str(exc))
        return exc.exit_code
    if as_json:
        logger.echo(dump_json(result.store))
        return 0
    section(f"Catalog of {context.root}", use_color=context.settings.use_color)
    context.console.print(render_tree(result.store, show_sources=show_sources))
    leaves = sum(1 for _ in result.store.leaves())
    collectors = sum(1 for _, leaf in result.store.leaves() if isinstance(leaf.item, Collector))
    if leaves == collectors:
        logger.warn(f"No files found under {context.root}")
    logger.ok(f"Cataloged {leaves - collectors} file(s) in {collectors} collector(s)")
    return 0


def run_get(inputs: ScanInputs, address: str, *, as_json: bool = False) -> int:
    """Build the catalog and print the node at ``address``.

    Args:
        inputs: Raw CLI parameters.
        address: Catalog address such as ``/collector/files/notes``.
        as_json: Emit JSON instead of a tree.

    Returns:
        int: ``0`` on success, the error's exit code otherwise.
    """

    logger = build_cli_logger(emoji=not inputs.no_emoji, no_color=inputs.no_color)
    try:
        context = prepare_context(inputs)
        logger = context.logger
        result = _build(context)
        try:
            target = PathAddress.parse(address)
            if as_json:
                logger.echo(dump_json(result.store, address=target))
            else:
                tree = render_tree(result.store, address=target, show_sources=True)
                logger.info(f"Node /{target}")
                context.console.print(tree)
        except CatalogError as exc:
            raise CLIError(str(exc)) from exc
    except CLIError as exc:
        logger.fail(str(exc))
        return exc.exit_code
    return 0


def run_handlers(*, console: Console | None = None) -> int:
    """Print the registered discriminators and their handler classes.

    Args:
        console: Optional console used for output.

    Returns:
        int: Always ``0``.
    """

    table = Table(title="Registered handlers")
    table.add_column("Discriminator", style="bold")
    table.add_column("Handler")
    table.add_column("Kind")
    for name, handler in DEFAULT_REGISTRY.items():
        if issubclass(handler, Collector):
            kind = "directory"
        else:
            extension = getattr(handler, "extension", None)
            kind = f"file (.{extension})" if extension else "file"
        table.add_row(name, f"{handler.__module__}.{handler.__qualname__}", kind)
    (console or get_console_manager().get(color=True, emoji=True)).print(table)
    return 0


RootArgument = Annotated[
    Path | None,
    typer.Argument(help="Directory to scan; defaults to the configured root."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Explicit configuration TOML file."),
]
NoColorOption = Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")]
NoEmojiOption = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]
JsonOption = Annotated[bool, typer.Option("--json", help="Emit JSON instead of a tree.")]


def scan_command(
    root: RootArgument = None,
    as_json: JsonOption = False,
    sources: Annotated[bool, typer.Option("--sources", help="Show leaf source paths.")] = False,
    config: ConfigOption = None,
    no_color: NoColorOption = False,
    no_emoji: NoEmojiOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Scan ROOT and print the resulting catalog."""

    inputs = ScanInputs(root=root, config_file=config, no_color=no_color, no_emoji=no_emoji, verbose=verbose)
    raise typer.Exit(code=run_scan(inputs, as_json=as_json, show_sources=sources))


def get_command(
    root: Annotated[Path, typer.Argument(help="Directory to scan.")],
    address: Annotated[str, typer.Argument(help="Catalog address, e.g. /collector/files/notes.")],
    as_json: JsonOption = False,
    config: ConfigOption = None,
    no_color: NoColorOption = False,
    no_emoji: NoEmojiOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Scan ROOT and print the node stored at ADDRESS."""

    inputs = ScanInputs(root=root, config_file=config, no_color=no_color, no_emoji=no_emoji, verbose=verbose)
    raise typer.Exit(code=run_get(inputs, address, as_json=as_json))


def handlers_command() -> None:
    """List the registered handler types."""

    raise typer.Exit(code=run_handlers())


__all__ = [
    "ScanContext",
    "ScanInputs",
    "get_command",
    "handlers_command",
    "prepare_context",
    "run_get",
    "run_handlers",
    "run_scan",
    "scan_command",
]
