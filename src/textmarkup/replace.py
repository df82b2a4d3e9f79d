"""Pattern substitution with markup re-basing.

Mirrors ``re.sub`` on the text while moving markups so they keep covering
the same characters. For every match, markups inside the matched span are
dropped, markups straddling one edge of it are truncated at that edge, and
everything after it shifts by the change in length. Matches are processed
left to right, each one in the coordinate space left by the previous ones.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from textmarkup.models import Markup

logger = logging.getLogger(__name__)

Substitution: TypeAlias = str | Callable[[re.Match[str]], str | Literal[False]]


def _rebase(markups: list[Markup], start: int, end: int, delta: int) -> list[Markup]:
    """Re-base *markups* for ``[start, end)`` being replaced by text *delta* longer."""
    rebased: list[Markup] = []

    for markup in markups:
        if markup.end <= start:
            pass
        elif markup.start >= end:
            markup.start += delta
            markup.end += delta
        elif start <= markup.start and markup.end <= end:
            # Entirely inside the replaced text
            continue
        elif markup.start <= start and markup.end >= end:
            markup.end += delta
        elif markup.start < start:
            markup.end = start
        else:
            markup.start = end + delta
            markup.end += delta

        if not markup.is_empty:
            rebased.append(markup)

    rebased.sort(key=lambda m: m.sort_key)
    return rebased


def _compile(pattern: str | re.Pattern[str], flags: int) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        if flags:
            msg = "cannot process flags argument with a compiled pattern"
            raise ValueError(msg)
        return pattern
    return re.compile(pattern, flags)


def substitute(
    text: str,
    markups: list[Markup],
    pattern: str | re.Pattern[str],
    substitution: Substitution,
    count: int = 0,
    flags: int = 0,
) -> tuple[str, list[Markup]]:
    """Replace matches of *pattern* in *text* and re-base copies of *markups*.

    Args:
        text: Source text. Left untouched.
        markups: Sorted source markups. Left untouched; copies are returned.
        pattern: Regular expression string or compiled pattern.
        substitution: Replacement template (expanded like ``re.sub``, so
            ``\\1`` and ``\\g<name>`` work) or a callable taking the match.
            A callable returning ``False`` or the matched text leaves that
            match, and every markup, exactly as it was.
        count: Maximum number of matches to replace. 0 replaces all.
        flags: ``re`` flags, only valid with a string pattern.

    Returns:
        ``(new_text, new_markups)``.
    """
    regex = _compile(pattern, flags)
    rebased = [markup.copy() for markup in markups]

    pieces: list[str] = []
    last = 0
    offset = 0
    replaced = 0

    for match in regex.finditer(text):
        if count and replaced >= count:
            break
        replaced += 1

        if callable(substitution):
            result = substitution(match)
            if result is False or result == match.group():
                continue
            if not isinstance(result, str):
                kind = type(result).__name__
                msg = f"substitution must return str or False, not {kind}"
                raise TypeError(msg)
            replacement = result
        else:
            replacement = match.expand(substitution)

        pieces.append(text[last : match.start()])
        pieces.append(replacement)
        last = match.end()

        start = match.start() + offset
        end = match.end() + offset
        delta = len(replacement) - (end - start)
        rebased = _rebase(rebased, start, end, delta)
        offset += delta

    pieces.append(text[last:])
    logger.debug("Replaced %d match(es) of %r", replaced, regex.pattern)
    return "".join(pieces), rebased
