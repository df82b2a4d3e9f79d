"""Range algebra over sorted markup lists.

Pure list operations used by ``Serialization``. Every list handled here is
sorted ascending by ``(type, start, end)``; each function preserves that
order. Same-type overlap is allowed by ``add_markup`` and only cleared by
``remove_markup`` and ``merge_adjacent``.
"""

# Pattern: Functional Core (list in, list out; no I/O)

from __future__ import annotations

import logging
from bisect import bisect_left
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from textmarkup.models import Markup

logger = logging.getLogger(__name__)


def _sort_key(markup: Markup) -> tuple[int, int, int]:
    return markup.sort_key


def add_markup(markups: list[Markup], markup: Markup) -> list[Markup]:
    """Insert *markup* into *markups* keeping ``(type, start, end)`` order.

    An entry with a key equal to existing entries goes in front of them.
    The range is not validated and nothing is merged.

    Returns:
        The same list, for chaining.
    """
    index = bisect_left(markups, markup.sort_key, key=_sort_key)
    markups.insert(index, markup)
    return markups


def add_markups(markups: list[Markup], to_add: Iterable[Markup]) -> list[Markup]:
    """Insert each of *to_add* in input order. Duplicates are kept."""
    for markup in to_add:
        add_markup(markups, markup)
    return markups


def remove_markup(markups: list[Markup], target: Markup) -> list[Markup]:
    """Remove or truncate markups so none of ``target.type`` overlaps its range.

    A markup that fully contains the target range is split around it (both
    halves keep its ``href``) and the scan stops there, since the range is
    then clear. Partially overlapping markups are clamped to the outside of
    the range and dropped if nothing is left. ``href`` is never compared, so
    removing a link removes every link in the range.

    Returns:
        The same list, mutated in place.
    """
    i = 0
    while i < len(markups):
        markup = markups[i]

        if markup.type > target.type:
            break
        if markup.type != target.type:
            i += 1
            continue

        if markup.start <= target.start and markup.end >= target.end:
            before = markup.copy(end=target.start)
            after = markup.copy(start=target.end)
            pieces = [piece for piece in (before, after) if not piece.is_empty]
            markups[i : i + 1] = pieces
            break

        if target.start <= markup.start < target.end:
            markup.start = target.end
        if target.start < markup.end <= target.end:
            markup.end = target.start

        if markup.is_empty:
            logger.debug("Dropping %s cleared by %s", markup, target)
            del markups[i]
            continue

        i += 1

    # A pushed-forward start or split tail can overtake later same-type entries
    markups.sort(key=_sort_key)
    return markups


def merge_adjacent(markups: list[Markup]) -> list[Markup]:
    """Fuse same-type markups that touch or overlap.

    Runs of entries with ``next.start <= previous.end`` collapse into one
    markup spanning the whole run; the first ``href`` found in the run is
    kept. Merging an already merged list changes nothing.

    Returns:
        A new list. Merged entries are fresh copies; others are reused.
    """
    merged: list[Markup] = []

    for markup in markups:
        if merged:
            previous = merged[-1]
            if previous.type == markup.type and markup.start <= previous.end:
                merged[-1] = previous.copy(
                    end=max(previous.end, markup.end),
                    href=previous.href if previous.href is not None else markup.href,
                )
                continue
        merged.append(markup)

    return merged
