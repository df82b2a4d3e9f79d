"""Serialization to HTML rendering.

Splits the text at every markup boundary and keeps a stack of open inline
wrappers. At each boundary the stack is unwound down to the deepest wrapper
still in effect, then the newly active markups are opened, longest first.
Overlapping markups of different types therefore nest consistently, at the
cost of reopening a wrapper where another one ends inside it.
"""

from __future__ import annotations

import html as html_module
from itertools import pairwise
from typing import TYPE_CHECKING

from textmarkup.models import Markup, MarkupType

if TYPE_CHECKING:
    from textmarkup.serialization import Serialization

_TYPE_TAGS: dict[MarkupType, str] = {
    MarkupType.BOLD: "strong",
    MarkupType.ITALIC: "em",
    MarkupType.CODE: "code",
    MarkupType.LINK: "a",
}


def _open_tag(markup: Markup) -> str:
    tag = _TYPE_TAGS[markup.type]
    if markup.type is MarkupType.LINK and markup.href is not None:
        return f'<{tag} href="{html_module.escape(markup.href)}">'
    return f"<{tag}>"


def _close_tag(markup: Markup) -> str:
    return f"</{_TYPE_TAGS[markup.type]}>"


def _escape_text(text: str) -> str:
    return html_module.escape(text, quote=False).replace("\n", "<br>")


def to_html(serialization: Serialization) -> str:
    """Render *serialization* as ``<type>…</type>`` with nested inline wrappers.

    Markups are clipped to the text; empty ones are skipped.
    """
    length = serialization.length
    markups = [
        markup.copy(start=max(markup.start, 0), end=min(markup.end, length))
        for markup in serialization.markups
    ]
    markups = [markup for markup in markups if not markup.is_empty]

    boundaries = sorted(
        {0, length}
        | {markup.start for markup in markups}
        | {markup.end for markup in markups}
    )

    out: list[str] = [f"<{serialization.type}>"]
    stack: list[int] = []

    for seg_start, seg_end in pairwise(boundaries):
        active = {
            i
            for i, markup in enumerate(markups)
            if markup.start <= seg_start and markup.end >= seg_end
        }

        keep = 0
        while keep < len(stack) and stack[keep] in active:
            keep += 1
        for i in reversed(stack[keep:]):
            out.append(_close_tag(markups[i]))
        del stack[keep:]

        opening = sorted(
            active.difference(stack),
            key=lambda i: (-markups[i].end, markups[i].sort_key),
        )
        for i in opening:
            out.append(_open_tag(markups[i]))
            stack.append(i)

        out.append(_escape_text(serialization.text[seg_start:seg_end]))

    for i in reversed(stack):
        out.append(_close_tag(markups[i]))
    out.append(f"</{serialization.type}>")
    return "".join(out)
