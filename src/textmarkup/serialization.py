"""The Serialization value: a text block plus its sorted inline markups.

Two kinds of operation live here. Builder operations (``add_markup``,
``add_markups``, ``remove_markup``, ``merge_adjacent``) edit the markup list
in place and return ``self`` so calls chain. Derivations (``substr``,
``substring``, ``replace``, ``append``, ``copy``) leave the receiver alone
and return a new Serialization holding its own markup copies.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, StrictStr, ValidationError

from textmarkup import markups as ops
from textmarkup.config import get_settings
from textmarkup.errors import ConstructionError, DeserializationError
from textmarkup.models import Markup, MarkupType
from textmarkup.replace import substitute

if TYPE_CHECKING:
    import re

    from textmarkup.replace import Substitution

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# JSON payload schema
# ---------------------------------------------------------------------------


class _MarkupPayload(BaseModel):
    type: MarkupType
    start: int
    end: int
    href: str | None = None


class _SerializationPayload(BaseModel):
    type: StrictStr = Field(min_length=1)
    text: StrictStr
    markups: list[_MarkupPayload] | None = None


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class Serialization:
    """Rich text handled like a string.

    Attributes:
        type: Lowercase block tag name, e.g. ``"p"`` or ``"h2"``.
        text: Plain text content. ``length`` always follows it.
        markups: Markups sorted by ``(type, start, end)``. The constructor
            stores copies, never the caller's own objects.
    """

    def __init__(
        self,
        tag: str | None = None,
        text: str = "",
        markups: Iterable[Markup] | None = None,
    ) -> None:
        if tag is None:
            tag = get_settings().serialization.default_tag
        if not isinstance(tag, str) or not tag.strip():
            msg = f"Serialization tag must be a non-empty string, got {tag!r}"
            raise ConstructionError(msg)
        if not isinstance(text, str):
            msg = f"Serialization text must be a string, got {type(text).__name__}"
            raise ConstructionError(msg)

        self.type = tag.lower()
        self.text = text
        self.markups: list[Markup] = []
        if markups is not None:
            ops.add_markups(self.markups, (markup.copy() for markup in markups))

    @property
    def length(self) -> int:
        """Length of ``text``. Derived, so it can never go stale."""
        return len(self.text)

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        return (
            f"Serialization(type={self.type!r}, text={self.text!r}, "
            f"markups={self.markups!r})"
        )

    def __str__(self) -> str:
        return self.to_html()

    # -----------------------------------------------------------------------
    # Builder operations (mutate, return self)
    # -----------------------------------------------------------------------

    def add_markup(self, markup: Markup) -> Serialization:
        """Insert *markup* in sort order. Ranges are not validated."""
        ops.add_markup(self.markups, markup)
        return self

    def add_markups(self, markups: Markup | Iterable[Markup]) -> Serialization:
        """Insert each markup in input order; a single markup is accepted too."""
        if isinstance(markups, Markup):
            return self.add_markup(markups)
        ops.add_markups(self.markups, markups)
        return self

    def remove_markup(self, markup: Markup) -> Serialization:
        """Clear ``markup.type`` from ``[markup.start, markup.end)``.

        Links are matched by type only; their ``href`` is ignored.
        """
        ops.remove_markup(self.markups, markup)
        return self

    def merge_adjacent(self) -> Serialization:
        """Fuse touching or overlapping markups of the same type."""
        self.markups = ops.merge_adjacent(self.markups)
        return self

    # -----------------------------------------------------------------------
    # Derivations (return a new Serialization)
    # -----------------------------------------------------------------------

    def copy(self) -> Serialization:
        """Independent copy with the same tag, text and markups."""
        duplicate = Serialization(self.type, self.text)
        duplicate.markups = [markup.copy() for markup in self.markups]
        return duplicate

    def replace(
        self,
        pattern: str | re.Pattern[str],
        substitution: Substitution,
        count: int = 0,
        flags: int = 0,
    ) -> Serialization:
        """Substitute matches of *pattern*, moving markups to follow the text.

        Works like ``re.sub(pattern, substitution, self.text, count, flags)``.
        A callable *substitution* may return ``False`` to leave a match as is.
        """
        text, markups = substitute(
            self.text, self.markups, pattern, substitution, count, flags
        )
        result = Serialization(self.type, text)
        result.markups = markups
        return result

    def substr(self, start: int = 0, length: int | None = None) -> Serialization:
        """Return *length* characters from *start*, with their markups.

        A negative *start* counts from the end. *length* defaults to the
        rest of the text and is clamped to it. Markups are clipped to the
        slice and re-based to its start.
        """
        result = Serialization(self.type)

        if not self.length or (length is not None and length <= 0):
            return result

        while start < 0:
            start = self.length + start

        if length is None or start + length > self.length:
            length = self.length - start
        if length <= 0:
            return result

        end = start + length
        result.text = self.text[start:end]

        for markup in self.markups:
            if markup.overlaps(start, end):
                result.add_markup(
                    markup.copy(
                        start=max(markup.start, start) - start,
                        end=min(markup.end, end) - start,
                    )
                )

        return result

    def substring(self, start: int = 0, end: int | None = None) -> Serialization:
        """Return the characters in ``[start, end)``, with their markups.

        Bounds are swapped if inverted and negative bounds count as 0.
        """
        if end is None:
            end = self.length
        if end < start:
            start, end = end, start
        start = max(start, 0)
        end = max(end, 0)
        return self.substr(start, end - start)

    def __getitem__(self, key: int | slice) -> Serialization:
        if isinstance(key, slice):
            start, stop, step = key.indices(self.length)
            if step != 1:
                msg = "Serialization slices do not support a step"
                raise ValueError(msg)
            if stop <= start:
                return Serialization(self.type)
            return self.substr(start, stop - start)

        index = key + self.length if key < 0 else key
        if not 0 <= index < self.length:
            msg = "Serialization index out of range"
            raise IndexError(msg)
        return self.substr(index, 1)

    def append(self, other: Serialization | str | None) -> Serialization:
        """Concatenate *other* after this serialization.

        Appending a Serialization shifts its markups past this text and then
        merges, so a style running up to the seam joins one starting there.
        Appending a plain string extends every markup that ends at the end
        of this text over the new characters; nothing is merged.
        """
        if other is None or (isinstance(other, str) and not other):
            return self.copy()

        if isinstance(other, str):
            result = self.copy()
            for markup in result.markups:
                if markup.end == self.length:
                    markup.end += len(other)
            result.text += other
            return result

        result = Serialization(self.type, self.text + other.text)
        for markup in self.markups:
            result.add_markup(markup.copy())
        for markup in other.markups:
            result.add_markup(
                markup.copy(
                    start=markup.start + self.length,
                    end=markup.end + self.length,
                )
            )
        return result.merge_adjacent()

    def __add__(self, other: Serialization | str) -> Serialization:
        if not isinstance(other, (Serialization, str)):
            return NotImplemented
        return self.append(other)

    # -----------------------------------------------------------------------
    # Equality
    # -----------------------------------------------------------------------

    def equals(self, other: Serialization) -> bool:
        """Structural, order-sensitive comparison.

        Markups are compared index by index without normalising, so the
        same styling split or ordered differently compares unequal.
        """
        if (
            self.type != other.type
            or self.text != other.text
            or len(self.markups) != len(other.markups)
        ):
            return False
        return all(
            mine == theirs
            for mine, theirs in zip(self.markups, other.markups, strict=True)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Serialization):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    # -----------------------------------------------------------------------
    # Construction and serialized forms
    # -----------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str, tag: str | None = None) -> Serialization:
        """Markup-free serialization of *text*. *tag* defaults to the configured tag."""
        return cls(tag, text)

    @classmethod
    def from_html(cls, html: str) -> Serialization:
        """Serialize the first element of an HTML fragment."""
        from textmarkup.html.convert import from_html

        return from_html(html)

    def to_html(self) -> str:
        """Render as an HTML element string."""
        from textmarkup.html.render import to_html

        return to_html(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "text": self.text,
            "markups": [markup.to_dict() for markup in self.markups],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, payload: str | bytes | Mapping[str, Any]) -> Serialization:
        """Rebuild a serialization from its JSON form.

        ``type`` (non-empty string) and ``text`` (string) are required;
        ``markups`` defaults to none. Markups are put into sort order.

        Raises:
            DeserializationError: If the payload is not valid JSON or a
                required field is missing or of the wrong kind.
        """
        try:
            if isinstance(payload, (str, bytes)):
                data = _SerializationPayload.model_validate_json(payload)
            else:
                data = _SerializationPayload.model_validate(payload)
        except ValidationError as e:
            logger.warning(
                "Rejected serialization payload: %d error(s)", e.error_count()
            )
            first = e.errors()[0]
            where = ".".join(str(part) for part in first["loc"]) or "payload"
            msg = f"Invalid serialization payload at {where}: {first['msg']}"
            raise DeserializationError(msg) from e

        markups = [
            Markup(type=m.type, start=m.start, end=m.end, href=m.href)
            for m in data.markups or []
        ]
        try:
            return cls(data.type, data.text, markups)
        except ConstructionError as e:
            raise DeserializationError(str(e)) from e
