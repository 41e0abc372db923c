"""Output configuration for XML rendering.

This module provides the immutable formatting options consumed by every
renderable node, together with presets and dictionary/JSON round-tripping.
"""

import json
import os
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from fluent_xml.character.escaping import XmlVersion, escape_value

VALID_NEWLINES = ("\n", "\r\n", "\r")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class OutputConfiguration:
    """Formatting options that influence how a document tree is rendered.

    Instances are immutable. The active XML version is carried as a field and
    replaced by the document at render time through :meth:`with_version`, so a
    configuration handed to a render call is never modified by it.
    """

    # Break lines and indent nested content; off renders everything on one line
    pretty_print: bool = True
    # <a>text</a> instead of putting a sole text child on its own line
    single_line_text_elements: bool = True
    # <a/> instead of <a></a> for elements without content
    use_self_closing_tags: bool = True
    # &#39; instead of &apos; and friends; disables the version escaping table
    use_character_references: bool = False
    # Appended once per nesting level
    indent: str = "\t"
    newline: str = os.linesep
    xml_version: XmlVersion = XmlVersion.V10

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if not isinstance(self.indent, str):
            raise ConfigValidationError("indent must be a string", field_name="indent")
        if self.indent.strip():
            raise ConfigValidationError(
                "indent must only contain whitespace",
                field_name="indent",
                suggestions=['Use "\\t" or a number of spaces'],
            )
        if self.newline not in VALID_NEWLINES:
            raise ConfigValidationError(
                f"newline must be one of {list(VALID_NEWLINES)!r}",
                field_name="newline",
            )
        if not isinstance(self.xml_version, XmlVersion):
            raise ConfigValidationError(
                "xml_version must be an XmlVersion",
                field_name="xml_version",
                suggestions=["Use XmlVersion.from_string() for version strings"],
            )

    @property
    def line_ending(self) -> str:
        """Text written after each rendered line, empty unless pretty printing."""
        return self.newline if self.pretty_print else ""

    def with_version(self, version: XmlVersion) -> "OutputConfiguration":
        """Return a configuration whose escaping follows ``version``."""
        if version is self.xml_version:
            return self
        return replace(self, xml_version=version)

    def escape(self, value: Any) -> str:
        """Escape a text or attribute value under this configuration."""
        return escape_value(value, self.xml_version, self.use_character_references)

    def override(self, **kwargs: Any) -> "OutputConfiguration":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = OutputConfiguration().override(indent="  ", newline="\\n")
        """
        unknown = set(kwargs) - {item.name for item in fields(self)}
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {sorted(unknown)}",
                field_name=sorted(unknown)[0],
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, Enum):
                result[key] = value.name
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OutputConfiguration":
        """Create configuration from dictionary.

        Unknown keys are rejected; ``xml_version`` may be given by member name
        (``"V11"``) or declaration string (``"1.1"``).
        """
        known = {item.name for item in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {sorted(unknown)}",
                field_name=sorted(unknown)[0],
            )

        values = dict(data)
        version = values.get("xml_version")
        if isinstance(version, str):
            try:
                values["xml_version"] = XmlVersion.from_string(version)
            except ValueError as e:
                raise ConfigValidationError(str(e), field_name="xml_version") from e
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "OutputConfiguration":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def default(cls) -> "OutputConfiguration":
        """Pretty printed output with tab indentation and collapsed text elements."""
        return cls()

    @classmethod
    def compact(cls) -> "OutputConfiguration":
        """Everything on a single line without indentation."""
        return cls(pretty_print=False)

    @classmethod
    def expanded(cls) -> "OutputConfiguration":
        """Every child on its own line and explicit closing tags everywhere."""
        return cls(single_line_text_elements=False, use_self_closing_tags=False)

    @classmethod
    def character_references(cls) -> "OutputConfiguration":
        """Pretty printed output escaping reserved characters as &#N; references."""
        return cls(use_character_references=True)
