"""Fluent XML.

Builds XML documents as immutable in-memory trees and renders them to text
with configurable formatting and version-aware escaping.

Progressive API Disclosure:
- Level 1: Builder and functions - xml(), to_string(), append_to()
- Level 2: Configured writer - XmlWriter with OutputConfiguration
- Level 3: Node model - ElementNode, TextNode, ... rendered directly
"""

__version__ = "0.1.0"
__author__ = "Fluent XML Team"

# Progressive API disclosure - Level 1: Construction and simple rendering
# Progressive API disclosure - Level 2: Configured writer
from .api import XmlWriter, append_to, render_result, to_string
from .character import XmlVersion

# Configuration and result objects
from .shared import (
    ConfigError,
    ConfigValidationError,
    DocumentStatistics,
    OutputConfiguration,
    RenderResult,
)

# Tree model for direct use
from .tree import (
    CDataNode,
    CommentNode,
    DoctypeNode,
    DocumentBuilder,
    ElementBuilder,
    ElementNode,
    InvalidDoctypeError,
    ProcessingInstructionNode,
    TextNode,
    XmlConstructionError,
    XmlDocument,
    xml,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Construction and rendering functions
    "xml",
    "to_string",
    "append_to",
    "render_result",

    # Level 2: Configured writer
    "XmlWriter",

    # Configuration and results
    "OutputConfiguration",
    "XmlVersion",
    "RenderResult",
    "DocumentStatistics",

    # Tree model
    "DocumentBuilder",
    "ElementBuilder",
    "XmlDocument",
    "ElementNode",
    "TextNode",
    "CommentNode",
    "CDataNode",
    "ProcessingInstructionNode",
    "DoctypeNode",

    # Errors
    "ConfigError",
    "ConfigValidationError",
    "XmlConstructionError",
    "InvalidDoctypeError",
]
