"""Character layer for XML rendering.

Provides the version-aware escaping policy applied to every attribute value
and text node written by the tree renderer.
"""

from .escaping import (
    CHARACTER_REFERENCES,
    DISCOURAGED_CHARS,
    NAMED_ENTITIES,
    NULL_VALUE_TEXT,
    XML10_DISCARDED_CHARS,
    XML11_DISCARDED_CHARS,
    XML11_RESTRICTED_CHARS,
    XmlVersion,
    escape,
    escape_value,
    escape_with_references,
)

__all__ = [
    "CHARACTER_REFERENCES",
    "DISCOURAGED_CHARS",
    "NAMED_ENTITIES",
    "NULL_VALUE_TEXT",
    "XML10_DISCARDED_CHARS",
    "XML11_DISCARDED_CHARS",
    "XML11_RESTRICTED_CHARS",
    "XmlVersion",
    "escape",
    "escape_value",
    "escape_with_references",
]
