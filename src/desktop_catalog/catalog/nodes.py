# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Node types stored inside the catalog tree."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TypeAlias


@dataclass(slots=True, eq=False)
class Category:
    """Internal tree node mapping names to child nodes.

    Attributes:
        name: Segment under which the category is stored (empty for the root).
        children: Child nodes keyed by segment, in insertion order.
        lock: Lock serialising mutations of ``children``.
    """

    name: str
    children: dict[str, Node] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def child(self, name: str) -> Node | None:
        """Return the child stored under ``name`` or ``None``."""

        return self.children.get(name)

    def view(self) -> Mapping[str, Node]:
        """Return the children as a read-only mapping."""

        return _ReadOnlyChildren(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)


@dataclass(frozen=True, slots=True)
class Leaf:
    """Terminal node wrapping one built handler.

    Attributes:
        key: Property key the handler declared via ``catalog_property()``.
        item: Handler instance stored at this node.
    """

    key: str
    item: object

    @property
    def handler_name(self) -> str:
        """Return the class name of the stored handler."""

        return type(self.item).__name__


Node: TypeAlias = Category | Leaf


class _ReadOnlyChildren(Mapping[str, Node]):
    """Mapping proxy exposing category children without mutation helpers."""

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, Node]) -> None:
        self._data = data

    def __getitem__(self, key: str) -> Node:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)


__all__ = ["Category", "Leaf", "Node"]
