"""Exceptions raised by textmarkup.

Range operations never raise: out-of-bounds or inverted ranges are clamped
or dropped. Only building a serialization from foreign input can fail.
"""

from __future__ import annotations


class TextMarkupError(Exception):
    """Base class for all textmarkup errors."""


class ConstructionError(TextMarkupError, TypeError):
    """The value handed to a constructor is not a usable element or tag."""


class DeserializationError(TextMarkupError, ValueError):
    """A JSON payload is malformed or lacks the required ``text``/``type``."""
