"""Character escaping policy for rendered XML text and attribute values.

Escaping depends on the XML version declared by the document. Characters that
are structurally invalid in that version are dropped, discouraged characters
are emitted as decimal character references, and the five reserved characters
become named entities. A separate character-reference mode ignores the version
and only rewrites the reserved characters as numeric references.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

# Rendered in place of an absent attribute value
NULL_VALUE_TEXT = "null"

# Reserved characters as named entities
NAMED_ENTITIES: Dict[str, str] = {
    '"': "&quot;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
}

# Reserved characters as decimal character references
CHARACTER_REFERENCES: Dict[str, str] = {
    "'": "&#39;",
    "&": "&#38;",
    "<": "&#60;",
    ">": "&#62;",
    '"': "&#34;",
}

SURROGATE_RANGE_START = 0xD800
SURROGATE_RANGE_END = 0xDFFF

_SURROGATES = range(SURROGATE_RANGE_START, SURROGATE_RANGE_END + 1)
_NONCHARACTERS = (0xFFFE, 0xFFFF)

# C1 controls that both versions accept but discourage (U+0085 is NEL, kept)
DISCOURAGED_CHARS: FrozenSet[int] = frozenset(
    list(range(0x7F, 0x85)) + list(range(0x86, 0xA0))
)

XML10_DISCARDED_CHARS: FrozenSet[int] = frozenset(
    list(range(0x00, 0x09))
    + [0x0B, 0x0C]
    + list(range(0x0E, 0x20))
    + list(_NONCHARACTERS)
    + list(_SURROGATES)
)

XML11_DISCARDED_CHARS: FrozenSet[int] = frozenset(
    [0x00] + list(_NONCHARACTERS) + list(_SURROGATES)
)

# XML 1.1 restricted characters, legal only in reference form
XML11_RESTRICTED_CHARS: FrozenSet[int] = frozenset(
    list(range(0x01, 0x09)) + [0x0B, 0x0C] + list(range(0x0E, 0x20))
)


def _character_reference(code_point: int) -> str:
    return f"&#{code_point};"


def _build_table(
    discarded: Iterable[int],
    referenced: Iterable[int],
) -> Dict[int, Optional[str]]:
    """Build a ``str.translate`` table for one XML version."""
    table: Dict[int, Optional[str]] = {
        ord(char): entity for char, entity in NAMED_ENTITIES.items()
    }
    for code_point in discarded:
        table[code_point] = None
    for code_point in referenced:
        table[code_point] = _character_reference(code_point)
    return table


_CHARACTER_REFERENCE_TABLE: Dict[int, Optional[str]] = {
    ord(char): reference for char, reference in CHARACTER_REFERENCES.items()
}


class XmlVersion(Enum):
    """XML versions a document can declare, each with its own escaping table."""

    V10 = "1.0"
    V11 = "1.1"

    @property
    def version_number(self) -> str:
        """Version string as written in the XML declaration."""
        return self.value

    def escape(self, value: str) -> str:
        """Escape ``value`` for text or attribute content under this version."""
        return value.translate(_VERSION_TABLES[self])

    @classmethod
    def from_string(cls, value: str) -> "XmlVersion":
        """Look up a version by its declaration string or member name.

        Raises:
            ValueError: If ``value`` names no known version
        """
        for version in cls:
            if value in (version.value, version.name):
                return version
        valid = [version.value for version in cls]
        raise ValueError(f"Unknown XML version {value!r}, expected one of {valid}")


_VERSION_TABLES: Dict[XmlVersion, Dict[int, Optional[str]]] = {
    XmlVersion.V10: _build_table(XML10_DISCARDED_CHARS, DISCOURAGED_CHARS),
    XmlVersion.V11: _build_table(
        XML11_DISCARDED_CHARS, XML11_RESTRICTED_CHARS | DISCOURAGED_CHARS
    ),
}


def escape(version: XmlVersion, value: str) -> str:
    """Escape ``value`` with the table of ``version``."""
    return version.escape(value)


def escape_with_references(value: str) -> str:
    """Replace the reserved characters with decimal character references.

    No characters are dropped or otherwise rewritten in this mode.
    """
    return value.translate(_CHARACTER_REFERENCE_TABLE)


def escape_value(
    value: Any,
    version: XmlVersion = XmlVersion.V10,
    use_character_references: bool = False,
) -> str:
    """Escape an arbitrary attribute or text value for output.

    Args:
        value: Value to render; non-strings are converted with ``str()``
        version: Active XML version of the document being rendered
        use_character_references: Use numeric references for reserved
            characters instead of the version table

    Returns:
        Escaped text. ``None`` renders as the literal ``null``.
    """
    if value is None:
        return NULL_VALUE_TEXT

    text = value if isinstance(value, str) else str(value)
    if use_character_references:
        return escape_with_references(text)
    return version.escape(text)
