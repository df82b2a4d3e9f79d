"""Value types shared by the serialization core and its adapters."""

from textmarkup.models.markup import Markup, MarkupType

__all__ = ["Markup", "MarkupType"]
