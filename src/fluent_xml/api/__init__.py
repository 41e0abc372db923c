"""Rendering API for XML documents.

Level 1 functions render a document in one call; Level 2 is the reusable,
configured :class:`XmlWriter`.
"""

from .writer import XmlWriter, append_to, render_result, to_string

__all__ = [
    "XmlWriter",
    "append_to",
    "render_result",
    "to_string",
]
