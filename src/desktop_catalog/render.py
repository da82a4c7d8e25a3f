# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rendering helpers turning a catalog into Rich trees or JSON."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from pathlib import Path

from rich.text import Text
from rich.tree import Tree

from .catalog.address import PathAddress
from .catalog.nodes import Category, Leaf, Node
from .catalog.store import CatalogStore, PlainNode, plain_node


def render_tree(store: CatalogStore, *, address: PathAddress | None = None, show_sources: bool = False) -> Tree:
    """Return a Rich tree of the catalog (or of the subtree at ``address``).

    Args:
        store: Catalog to render.
        address: Optional subtree root; defaults to the catalog root.
        show_sources: Whether leaves list their source paths.

    Returns:
        Tree: Renderable tree with categories in bold and leaves labelled by handler.
    """

    start = address or PathAddress.root()
    node = store.get(start)
    label = f"/{start}" if not start.is_root else "/"
    tree = Tree(Text(label, style="bold"))
    if isinstance(node, Leaf):
        tree.add(_leaf_label(start.last_segment(), node, show_sources=show_sources))
        return tree
    pending: list[tuple[Tree, Category]] = [(tree, node)]
    while pending:
        branch, category = pending.pop()
        for name, child in category.children.items():
            if isinstance(child, Category):
                sub = branch.add(Text(name, style="bold blue"))
                pending.append((sub, child))
            else:
                branch.add(_leaf_label(name, child, show_sources=show_sources))
    return tree


def dump_json(store: CatalogStore, *, address: PathAddress | None = None, indent: int | None = 2) -> str:
    """Return the catalog (or the subtree at ``address``) serialised as JSON.

    Args:
        store: Catalog to serialise.
        address: Optional subtree root.
        indent: JSON indentation; ``None`` for compact output.

    Returns:
        str: JSON document.
    """

    if address is None or address.is_root:
        payload: object = store.to_plain()
    else:
        payload = describe_node(store.get(address))
    return "".join(_iter_json(payload, indent=indent))


def describe_node(node: Node) -> PlainNode:
    """Return a JSON-friendly description of ``node``."""

    return plain_node(node)


def _iter_json(payload: object, *, indent: int | None) -> Iterator[str]:
    """Yield the JSON text of ``payload`` chunk by chunk without recursing into mappings.

    Mappings are expanded with an explicit stack so nesting depth is unbounded;
    every other value is encoded by :func:`json.dumps`. For catalog payloads
    (mappings of strings and ``None``) the output matches
    ``json.dumps(payload, indent=indent)``.
    """

    if not isinstance(payload, Mapping) or not payload:
        yield json.dumps(payload, indent=indent)
        return
    separator = "," if indent is not None else ", "

    def newline(depth: int) -> str:
        return "" if indent is None else "\n" + " " * (indent * depth)

    yield "{"
    stack: list[tuple[Iterator[tuple[object, object]], int]] = [(iter(payload.items()), 1)]
    first = True
    while stack:
        entries, depth = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            yield newline(depth - 1) + "}"
            first = False
            continue
        key, value = entry
        if not first:
            yield separator
        yield newline(depth) + json.dumps(str(key)) + ": "
        if isinstance(value, Mapping) and value:
            yield "{"
            stack.append((iter(value.items()), depth + 1))
            first = True
        else:
            yield json.dumps(value, indent=indent)
            first = False


def _leaf_label(name: str, leaf: Leaf, *, show_sources: bool) -> Text:
    text = Text(name)
    text.append(f" [{leaf.handler_name}]", style="green")
    if show_sources:
        source = getattr(leaf.item, "source", None)
        if isinstance(source, Path):
            text.append(f" {source}", style="dim")
    return text


__all__ = ["describe_node", "dump_json", "render_tree"]
