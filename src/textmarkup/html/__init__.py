"""HTML adapters: element → Serialization and Serialization → HTML."""

from textmarkup.html.convert import from_element, from_html
from textmarkup.html.render import to_html

__all__ = ["from_element", "from_html", "to_html"]
