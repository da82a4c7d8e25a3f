# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Slash-delimited addresses locating nodes inside the catalog tree."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final

from .errors import MalformedAddress

SEPARATOR: Final[str] = "/"


@dataclass(frozen=True, slots=True)
class PathAddress:
    """Immutable sequence of non-empty segments identifying a catalog node.

    The empty sequence is the root address. Addresses compare and hash by their
    segments, so ``PathAddress.parse("/a/b") == PathAddress.parse("a/b")``.

    Attributes:
        segments: Ordered address segments, outermost first.
    """

    segments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate every segment after dataclass initialisation.

        Raises:
            MalformedAddress: If a segment is empty or contains the separator.
        """

        for segment in self.segments:
            _validate_segment(segment, context=self.segments)

    @classmethod
    def root(cls) -> PathAddress:
        """Return the root address.

        Returns:
            PathAddress: Address with no segments.
        """

        return cls(())

    @classmethod
    def parse(cls, text: str) -> PathAddress:
        """Parse ``text`` into an address, stripping one optional leading separator.

        Args:
            text: Separator-joined address string such as ``"/collector/files"``.

        Returns:
            PathAddress: Parsed address. An empty remainder denotes the root.

        Raises:
            MalformedAddress: If any segment is empty after stripping.
        """

        body = text[len(SEPARATOR) :] if text.startswith(SEPARATOR) else text
        if not body:
            return cls(())
        parts = tuple(body.split(SEPARATOR))
        if any(not part for part in parts):
            raise MalformedAddress(f"empty segment in address '{text}'")
        return cls(parts)

    @property
    def is_root(self) -> bool:
        """Return ``True`` when the address has no segments."""

        return not self.segments

    def join(self, segment: str) -> PathAddress:
        """Return a child address extending this one by ``segment``.

        Args:
            segment: Segment appended to the address.

        Returns:
            PathAddress: New address one level deeper.

        Raises:
            MalformedAddress: If ``segment`` is empty or contains the separator.
        """

        _validate_segment(segment, context=self.segments)
        return PathAddress((*self.segments, segment))

    def parent(self) -> PathAddress:
        """Return the address one level up.

        Returns:
            PathAddress: Address without the last segment.

        Raises:
            MalformedAddress: If called on the root address.
        """

        if not self.segments:
            raise MalformedAddress("the root address has no parent")
        return PathAddress(self.segments[:-1])

    def last_segment(self) -> str:
        """Return the final segment of the address.

        Returns:
            str: Last segment.

        Raises:
            MalformedAddress: If called on the root address.
        """

        if not self.segments:
            raise MalformedAddress("the root address has no last segment")
        return self.segments[-1]

    def to_string(self) -> str:
        """Return the separator-joined form without a leading separator."""

        return SEPARATOR.join(self.segments)

    def __str__(self) -> str:
        return self.to_string()

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)


def join(parent: PathAddress, segment: str) -> PathAddress:
    """Return ``parent`` extended by ``segment``.

    Args:
        parent: Address to extend.
        segment: Segment appended to ``parent``.

    Returns:
        PathAddress: Joined address.
    """

    return parent.join(segment)


def coerce_address(value: PathAddress | str) -> PathAddress:
    """Return ``value`` as a :class:`PathAddress`, parsing strings."""

    if isinstance(value, PathAddress):
        return value
    return PathAddress.parse(value)


def _validate_segment(segment: str, *, context: tuple[str, ...]) -> None:
    if not isinstance(segment, str) or not segment:
        raise MalformedAddress(
            "address segments must be non-empty strings",
            address=SEPARATOR.join(context),
        )
    if SEPARATOR in segment:
        raise MalformedAddress(
            f"address segment '{segment}' contains '{SEPARATOR}'",
            address=SEPARATOR.join(context),
        )


__all__ = ["SEPARATOR", "PathAddress", "coerce_address", "join"]
