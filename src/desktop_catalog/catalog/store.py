# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tree-structured registry holding every node produced by a catalog build."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Final, TypeAlias

from .address import PathAddress, coerce_address
from .errors import AddressNotFound, CatalogSealed, CategoryNotFound, NodeCollision
from .nodes import Category, Leaf, Node

LOGGER = logging.getLogger(__name__)

ROOT_NAME: Final[str] = ""

PlainNode: TypeAlias = dict[str, "PlainNode"] | dict[str, str | None]


class CatalogStore:
    """Nested mapping of categories and leaves addressed by :class:`PathAddress`.

    ``add_category``, ``add_leaf`` and ``get`` are the whole mutation/lookup
    contract; every insert either succeeds completely or leaves the tree
    untouched. Once :meth:`seal` has been called the store is read-only.
    """

    def __init__(self) -> None:
        """Initialise an empty store with a single root category."""

        self._root = Category(ROOT_NAME)
        self._sealed = False

    @property
    def root(self) -> Category:
        """Return the root category node."""

        return self._root

    @property
    def sealed(self) -> bool:
        """Return ``True`` once the store no longer accepts mutations."""

        return self._sealed

    def seal(self) -> None:
        """Mark the store read-only; subsequent mutations raise :class:`CatalogSealed`."""

        self._sealed = True

    def add_category(self, parent: PathAddress | str, name: str) -> PathAddress:
        """Create, or return, the category ``name`` beneath ``parent``.

        Missing categories along ``parent`` are created on the way down. The
        walk never passes through a leaf.

        Args:
            parent: Address of the category receiving the new child.
            name: Segment naming the child category.

        Returns:
            PathAddress: Address of the (possibly pre-existing) child category.

        Raises:
            NodeCollision: If ``parent`` or the target location is occupied by a leaf.
            MalformedAddress: If ``name`` is not a valid segment.
            CatalogSealed: If the store has been sealed.
        """

        self._ensure_mutable()
        parent_address = coerce_address(parent)
        target = parent_address.join(name)

        # Validate the whole path first so a collision leaves no partial categories.
        cursor = self._root
        for depth, segment in enumerate(target.segments):
            existing = cursor.child(segment)
            if existing is None:
                break
            if isinstance(existing, Leaf):
                raise NodeCollision(
                    f"cannot create category through leaf '{segment}'",
                    address=PathAddress(target.segments[: depth + 1]),
                )
            cursor = existing

        cursor = self._root
        for segment in target.segments:
            with cursor.lock:
                child = cursor.child(segment)
                if child is None:
                    child = Category(segment)
                    cursor.children[segment] = child
                    LOGGER.debug("category created under /%s: %s", parent_address, segment)
                elif isinstance(child, Leaf):
                    raise NodeCollision(
                        f"cannot create category through leaf '{segment}'",
                        address=target,
                    )
            cursor = child
        return target

    def add_leaf(self, category: PathAddress | str, key: str, item: object) -> PathAddress:
        """Insert ``item`` under ``key`` inside the category at ``category``.

        Args:
            category: Address of an existing category.
            key: Segment under which ``item`` is stored.
            item: Handler instance to store.

        Returns:
            PathAddress: Address of the inserted leaf.

        Raises:
            CategoryNotFound: If ``category`` does not resolve to a category.
            NodeCollision: If ``key`` is already taken by another node.
            MalformedAddress: If ``key`` is not a valid segment.
            CatalogSealed: If the store has been sealed.
        """

        self._ensure_mutable()
        category_address = coerce_address(category)
        target = category_address.join(key)
        node = self._find(category_address)
        if not isinstance(node, Category):
            raise CategoryNotFound(
                "leaf parent is not a category",
                address=category_address,
            )
        with node.lock:
            existing = node.child(key)
            if existing is not None:
                if isinstance(existing, Leaf) and existing.item is item:
                    return target
                raise NodeCollision(
                    f"'{key}' is already occupied by {_describe(existing)}",
                    address=target,
                    path=_source_of(item),
                )
            node.children[key] = Leaf(key=key, item=item)
        LOGGER.debug("leaf inserted at /%s: %s", target, type(item).__name__)
        return target

    def get(self, address: PathAddress | str) -> Node:
        """Return the node stored at ``address``.

        Args:
            address: Address, or address string, to look up.

        Returns:
            Node: Category or leaf located at ``address``.

        Raises:
            AddressNotFound: If any segment along ``address`` is missing.
            MalformedAddress: If ``address`` is a malformed string.
        """

        resolved = coerce_address(address)
        node = self._find(resolved)
        if node is None:
            raise AddressNotFound(address=resolved)
        return node

    def get_item(self, address: PathAddress | str) -> object:
        """Return the handler stored in the leaf at ``address``.

        Raises:
            AddressNotFound: If ``address`` is missing or names a category.
        """

        node = self.get(address)
        if not isinstance(node, Leaf):
            raise AddressNotFound("address names a category, not a leaf", address=coerce_address(address))
        return node.item

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, (PathAddress, str)):
            return False
        return self._find(coerce_address(address)) is not None

    def walk(self) -> Iterator[tuple[PathAddress, Node]]:
        """Yield ``(address, node)`` pairs depth-first in insertion order.

        The root category itself is not yielded.
        """

        stack: list[tuple[PathAddress, Iterator[tuple[str, Node]]]] = [
            (PathAddress.root(), iter(self._root.children.items())),
        ]
        while stack:
            address, entries = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue
            name, child = entry
            child_address = address.join(name)
            yield child_address, child
            if isinstance(child, Category):
                stack.append((child_address, iter(child.children.items())))

    def leaves(self) -> Iterator[tuple[PathAddress, Leaf]]:
        """Yield every leaf together with its address."""

        for address, node in self.walk():
            if isinstance(node, Leaf):
                yield address, node

    def to_plain(self) -> dict[str, PlainNode]:
        """Return a JSON-friendly nested representation of the tree.

        Returns:
            dict[str, PlainNode]: Categories become dictionaries; leaves become
            ``{"handler", "key", "source"}`` records.
        """

        return _plain_category(self._root)

    def _find(self, address: PathAddress) -> Node | None:
        cursor: Node = self._root
        for segment in address.segments:
            if not isinstance(cursor, Category):
                return None
            child = cursor.child(segment)
            if child is None:
                return None
            cursor = child
        return cursor

    def _ensure_mutable(self) -> None:
        if self._sealed:
            raise CatalogSealed()


def plain_node(node: Node) -> PlainNode:
    """Return a JSON-friendly copy of ``node`` built without recursion.

    Args:
        node: Category or leaf to convert.

    Returns:
        PlainNode: Nested dictionaries for categories, a leaf record otherwise.
    """

    if isinstance(node, Leaf):
        return _plain_leaf(node)
    return _plain_category(node)


def _plain_category(category: Category) -> dict[str, PlainNode]:
    payload: dict[str, PlainNode] = {}
    pending: list[tuple[Category, dict[str, PlainNode]]] = [(category, payload)]
    while pending:
        current, target = pending.pop()
        for name, child in current.children.items():
            if isinstance(child, Category):
                nested: dict[str, PlainNode] = {}
                target[name] = nested
                pending.append((child, nested))
            else:
                target[name] = _plain_leaf(child)
    return payload


def _plain_leaf(leaf: Leaf) -> dict[str, str | None]:
    source = _source_of(leaf.item)
    return {
        "handler": leaf.handler_name,
        "key": leaf.key,
        "source": str(source) if source is not None else None,
    }


def _describe(node: Node) -> str:
    if isinstance(node, Category):
        return "a category"
    return f"a {node.handler_name} leaf"


def _source_of(item: object) -> Path | None:
    source = getattr(item, "source", None)
    return source if isinstance(source, Path) else None


__all__ = ["ROOT_NAME", "CatalogStore", "PlainNode", "plain_node"]
