"""HTML element to Serialization conversion.

Walks the DOM via selectolax child/next iteration (which exposes text
nodes) and records every inline styling element as a markup over the
flattened text.

Mapping rules:
- ``<b>``/``<strong>`` → BOLD, ``<i>``/``<em>`` → ITALIC, ``<code>`` → CODE
- ``<a href>`` → LINK carrying the href (anchors without href are plain text)
- ``<br>`` → ``\\n``
- script / style / noscript / template → skipped entirely
- any other element contributes its text only
"""

from __future__ import annotations

import logging
from typing import Any

from selectolax.lexbor import LexborHTMLParser, LexborNode

from textmarkup.errors import ConstructionError
from textmarkup.models import Markup, MarkupType
from textmarkup.serialization import Serialization

logger = logging.getLogger(__name__)

_STRIP_TAGS = frozenset(("script", "style", "noscript", "template"))

_TAG_TYPES: dict[str, MarkupType] = {
    "b": MarkupType.BOLD,
    "strong": MarkupType.BOLD,
    "i": MarkupType.ITALIC,
    "em": MarkupType.ITALIC,
    "code": MarkupType.CODE,
    "a": MarkupType.LINK,
}


def _is_element(node: Any) -> bool:
    # selectolax tags text as "-text" and comments with a leading punctuation mark
    tag = getattr(node, "tag", None)
    return isinstance(tag, str) and tag[:1].isalpha()


def from_element(node: LexborNode) -> Serialization:
    """Serialize an element node: its tag, flattened text and inline markups.

    Raises:
        ConstructionError: If *node* is not a selectolax element node.
    """
    if not isinstance(node, LexborNode) or not _is_element(node):
        msg = "Serialization can only serialize element nodes."
        raise ConstructionError(msg)

    chars: list[str] = []
    markups: list[Markup] = []

    def _walk(current: LexborNode) -> None:
        tag = current.tag

        if tag == "-text":
            text = current.text_content
            if text:
                chars.extend(text)
            return

        if not _is_element(current) or tag in _STRIP_TAGS:
            return

        if tag == "br":
            chars.append("\n")
            return

        start = len(chars)
        child = current.child
        while child is not None:
            _walk(child)
            child = child.next
        end = len(chars)

        markup_type = _TAG_TYPES.get(tag)
        if markup_type is None or end <= start:
            return
        if markup_type is MarkupType.LINK:
            href = current.attributes.get("href")
            if href is None:
                return
            markups.append(Markup(markup_type, start, end, href=href))
        else:
            markups.append(Markup(markup_type, start, end))

    child = node.child
    while child is not None:
        _walk(child)
        child = child.next

    serialization = Serialization(node.tag, "".join(chars), markups)
    return serialization.merge_adjacent()


def from_html(html: str) -> Serialization:
    """Serialize the first element found in an HTML fragment or document body.

    Raises:
        ConstructionError: If *html* is not a string or holds no element.
    """
    if not isinstance(html, str):
        msg = f"Expected an HTML string, got {type(html).__name__}"
        raise ConstructionError(msg)

    tree = LexborHTMLParser(html)
    root = tree.body if tree.body is not None else tree.root
    child = root.child if root is not None else None
    while child is not None:
        if _is_element(child):
            return from_element(child)
        child = child.next

    logger.debug("No element found in HTML input of length %d", len(html))
    msg = "Serialization can only serialize element nodes."
    raise ConstructionError(msg)
