"""Invariant checks over generated serializations.

Inputs come from seeded ``random.Random`` instances so every run sees the
same cases.
"""

from __future__ import annotations

import random

import pytest

from textmarkup import Markup, MarkupType, Serialization

SEEDS = range(40)
_LINKS = ("https://a.example", "https://b.example")


def _random_markup(rng: random.Random, length: int) -> Markup:
    start = rng.randrange(0, length)
    end = rng.randrange(start + 1, length + 1)
    markup_type = rng.choice(list(MarkupType))
    href = rng.choice(_LINKS) if markup_type is MarkupType.LINK else None
    return Markup(markup_type, start, end, href=href)


def _random_serialization(seed: int) -> Serialization:
    rng = random.Random(seed)
    length = rng.randrange(1, 30)
    text = "".join(rng.choice("abc .…\n") for _ in range(length))
    markups = [_random_markup(rng, length) for _ in range(rng.randrange(0, 8))]
    return Serialization("p", text, markups)


def _is_sorted(markups: list[Markup]) -> bool:
    keys = [m.sort_key for m in markups]
    return keys == sorted(keys)


def _is_well_formed(s: Serialization) -> bool:
    return all(0 <= m.start < m.end <= s.length for m in s.markups)


@pytest.mark.parametrize("seed", SEEDS)
def test_sorted_after_every_insertion(seed: int) -> None:
    rng = random.Random(seed)
    s = Serialization("p", "x" * 20)
    for _ in range(15):
        s.add_markup(_random_markup(rng, 20))
        assert _is_sorted(s.markups)


@pytest.mark.parametrize("seed", SEEDS)
def test_remove_clears_range(seed: int) -> None:
    s = _random_serialization(seed).merge_adjacent()
    target = _random_markup(random.Random(seed + 1000), s.length)
    s.remove_markup(target)
    assert _is_sorted(s.markups)
    assert _is_well_formed(s)
    assert not any(
        m.type == target.type and m.overlaps(target.start, target.end)
        for m in s.markups
    )


@pytest.mark.parametrize("seed", SEEDS)
def test_merge_idempotent(seed: int) -> None:
    s = _random_serialization(seed)
    once = [m.copy() for m in s.merge_adjacent().markups]
    assert s.merge_adjacent().markups == once
    assert _is_sorted(once)


@pytest.mark.parametrize("seed", SEEDS)
def test_slice_append_round_trip(seed: int) -> None:
    s = _random_serialization(seed).merge_adjacent()
    for k in range(s.length + 1):
        assert s.substr(0, k).append(s.substr(k)).equals(s), k


@pytest.mark.parametrize("seed", SEEDS)
def test_derivations_stay_well_formed(seed: int) -> None:
    s = _random_serialization(seed)
    derived = [
        s.substr(seed % 7, 5),
        s.substring(3, seed % 11),
        s.replace("a", "xyz"),
        s.replace(r"\s", ""),
        s.append("tail"),
        s.append(s),
    ]
    for d in derived:
        assert d.length == len(d.text)
        assert _is_sorted(d.markups)
        assert _is_well_formed(d)
