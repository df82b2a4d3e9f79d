"""Inline markup value type and the closed set of markup kinds."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any


class MarkupType(IntEnum):
    """Inline styling kinds.

    The integer values define the total order used as the primary sort key
    of a markup list. Never reorder or insert values between existing ones:
    overlap removal stops scanning as soon as it sees a higher type.
    """

    BOLD = 1
    ITALIC = 2
    CODE = 3
    LINK = 4


@dataclass
class Markup:
    """A styled half-open range ``[start, end)`` over a serialization's text.

    Attributes:
        type: Kind of styling.
        start: First styled character index (inclusive).
        end: Index after the last styled character (exclusive).
        href: Link target. Only set for ``MarkupType.LINK``.
    """

    type: MarkupType
    start: int
    end: int
    href: str | None = None

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.type, self.start, self.end)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def overlaps(self, start: int, end: int) -> bool:
        """True if this markup shares at least one character with ``[start, end)``."""
        return self.start < end and self.end > start

    def copy(self, **changes: Any) -> Markup:
        """Return an independent markup, optionally with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form. ``href`` is omitted when absent."""
        data: dict[str, Any] = {
            "type": int(self.type),
            "start": self.start,
            "end": self.end,
        }
        if self.href is not None:
            data["href"] = self.href
        return data
