"""Document tree model for XML rendering.

Key Components:
    ElementNode and the other node kinds: immutable tree that renders itself
    XmlDocument: Root container holding the prolog, DOCTYPE and top-level PIs
    DocumentBuilder / ElementBuilder: Append-only construction API
"""

from .builder import (
    DocumentBuilder,
    ElementBuilder,
    xml,
)
from .document import XmlDocument
from .nodes import (
    NODE_TYPES,
    CDataNode,
    CommentNode,
    DoctypeNode,
    ElementNode,
    InvalidDoctypeError,
    Node,
    ProcessingInstructionNode,
    TextNode,
    TextSink,
    XmlConstructionError,
    render_to_string,
)

__all__ = [
    "NODE_TYPES",
    "CDataNode",
    "CommentNode",
    "DoctypeNode",
    "DocumentBuilder",
    "ElementBuilder",
    "ElementNode",
    "InvalidDoctypeError",
    "Node",
    "ProcessingInstructionNode",
    "TextNode",
    "TextSink",
    "XmlConstructionError",
    "XmlDocument",
    "render_to_string",
    "xml",
]
