"""Node model and tree renderer for XML documents.

The tree is made of a closed set of immutable node kinds. Each node renders
itself to a text sink in a single forward pass; elements recurse into their
children, so rendering a root element renders the whole subtree.

Key Components:
    ElementNode: Named container with ordered attributes and children
    TextNode: Escaped character data
    CommentNode: ``<!-- ... -->``
    CDataNode: ``<![CDATA[ ... ]]>``
    ProcessingInstructionNode: ``<?target key="value"?>``
    DoctypeNode: ``<!DOCTYPE name PUBLIC "..." "...">``
"""

import io
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    Any,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Union,
)

from fluent_xml.shared.config import OutputConfiguration

CDATA_START = "<![CDATA["
CDATA_END = "]]>"
# "]]" closes the section before ">" which is carried into a reopened one
CDATA_END_REPLACEMENT = "]]" + CDATA_END + CDATA_START + ">"

COMMENT_DASHES = "--"
# Trailing quote kept for output compatibility with existing documents
COMMENT_DASHES_REPLACEMENT = "&#45;&#45;\""

AttributePairs = Tuple[Tuple[str, Any], ...]


class TextSink(Protocol):
    """Anything rendered output can be written to."""

    def write(self, text: str) -> Any:
        ...


class XmlConstructionError(ValueError):
    """Raised when a node cannot be constructed from the given values."""


class InvalidDoctypeError(XmlConstructionError):
    """Raised for a DOCTYPE with a public identifier but no system identifier."""


def _attribute_pairs(
    attributes: Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]
) -> AttributePairs:
    """Freeze attributes into ordered pairs with unique keys.

    A repeated key keeps its first position and its last value.
    """
    if not attributes:
        return ()
    items = attributes.items() if isinstance(attributes, Mapping) else attributes
    ordered = dict(items)
    for key in ordered:
        if not isinstance(key, str):
            raise TypeError("Attribute names must be strings")
    return tuple(ordered.items())


def _require_str(value: Any, what: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{what} must be a string, got {type(value).__name__}")


def _is_blank(text: str) -> bool:
    return not text.strip("\n\r").strip()


@dataclass(frozen=True)
class TextNode:
    """Character data placed directly inside an element."""

    content: str

    def __post_init__(self) -> None:
        _require_str(self.content, "Text content")

    def is_ignorable(self) -> bool:
        return self.content == ""

    def render(self, sink: TextSink, indent: str, config: OutputConfiguration) -> None:
        # Blank lines are suppressed; emptiness alone decides is_ignorable()
        if _is_blank(self.content):
            return
        sink.write(indent)
        sink.write(config.escape(self.content))
        sink.write(config.line_ending)

    def render_inline(self, sink: TextSink, config: OutputConfiguration) -> None:
        """Write the escaped content without indentation or line ending."""
        sink.write(config.escape(self.content))


@dataclass(frozen=True)
class CommentNode:
    """An XML comment."""

    content: str

    def __post_init__(self) -> None:
        _require_str(self.content, "Comment content")

    def is_ignorable(self) -> bool:
        return self.content == ""

    def render(self, sink: TextSink, indent: str, config: OutputConfiguration) -> None:
        sink.write(indent)
        sink.write("<!-- ")
        sink.write(self.content.replace(COMMENT_DASHES, COMMENT_DASHES_REPLACEMENT))
        sink.write(" -->")
        sink.write(config.line_ending)


@dataclass(frozen=True)
class CDataNode:
    """A CDATA section; content is written raw apart from terminator splitting."""

    content: str

    def __post_init__(self) -> None:
        _require_str(self.content, "CDATA content")

    def is_ignorable(self) -> bool:
        return self.content == ""

    def render(self, sink: TextSink, indent: str, config: OutputConfiguration) -> None:
        sink.write(indent)
        sink.write(CDATA_START)
        sink.write(self.content.replace(CDATA_END, CDATA_END_REPLACEMENT))
        sink.write(CDATA_END)
        sink.write(config.line_ending)


@dataclass(frozen=True)
class ProcessingInstructionNode:
    """A processing instruction with raw, unescaped pseudo-attributes."""

    target: str
    attributes: AttributePairs = ()

    def __post_init__(self) -> None:
        _require_str(self.target, "Processing instruction target")
        object.__setattr__(self, "attributes", _attribute_pairs(self.attributes))

    def is_ignorable(self) -> bool:
        return self.target == ""

    def render(self, sink: TextSink, indent: str, config: OutputConfiguration) -> None:
        sink.write(indent)
        sink.write("<?")
        sink.write(self.target)
        if self.attributes:
            sink.write(" ")
            sink.write(" ".join(f'{key}="{value}"' for key, value in self.attributes))
        sink.write("?>")
        sink.write(config.line_ending)


@dataclass(frozen=True)
class DoctypeNode:
    """Document type declaration.

    Args:
        name: Name of the document element the declaration applies to
        public_id: Public identifier; requires ``system_id``
        system_id: System identifier (URI of the external DTD subset)

    Raises:
        InvalidDoctypeError: If ``public_id`` is given without ``system_id``
    """

    name: str
    public_id: Optional[str] = None
    system_id: Optional[str] = None

    def __post_init__(self) -> None:
        _require_str(self.name, "DOCTYPE name")
        if self.public_id is not None and self.system_id is None:
            raise InvalidDoctypeError(
                "system_id must be provided if public_id is provided"
            )

    def is_ignorable(self) -> bool:
        return False

    def render(self, sink: TextSink, indent: str, config: OutputConfiguration) -> None:
        sink.write("<!DOCTYPE ")
        sink.write(self.name)
        if self.public_id is not None:
            sink.write(f' PUBLIC "{self.public_id}"')
        if self.system_id is not None:
            if self.public_id is None:
                sink.write(" SYSTEM")
            sink.write(f' "{self.system_id}"')
        sink.write(">")
        # Always terminated, even when pretty printing is off
        sink.write(config.newline)


@dataclass(frozen=True)
class ElementNode:
    """A named element with ordered attributes and child nodes.

    Attributes are stored as ordered ``(name, value)`` pairs. Values may be of
    any type and are converted with ``str()`` when rendered; ``None`` renders
    as ``null``.
    """

    name: str
    attributes: AttributePairs = ()
    children: Tuple["Node", ...] = field(default=())

    def __post_init__(self) -> None:
        _require_str(self.name, "Element name")
        object.__setattr__(self, "attributes", _attribute_pairs(self.attributes))
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, NODE_TYPES):
                raise TypeError(
                    f"Child must be one of the XML node types, got {type(child).__name__}"
                )
        object.__setattr__(self, "children", children)

    @property
    def attribute_map(self) -> Mapping[str, Any]:
        """Read-only view of the attributes in insertion order."""
        return MappingProxyType(dict(self.attributes))

    def get_attribute(self, name: str, default: Any = None) -> Any:
        """Get attribute value with optional default."""
        return self.attribute_map.get(name, default)

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return any(key == name for key, _ in self.attributes)

    def is_ignorable(self) -> bool:
        return False

    def is_content_empty(self) -> bool:
        """True if there are no children or only a single ignorable one."""
        if not self.children:
            return True
        return len(self.children) == 1 and self.children[0].is_ignorable()

    def render(self, sink: TextSink, indent: str, config: OutputConfiguration) -> None:
        line_ending = config.line_ending

        sink.write(indent)
        sink.write("<")
        sink.write(self.name)
        if self.attributes:
            sink.write(" ")
            sink.write(" ".join(
                f'{key}="{config.escape(value)}"' for key, value in self.attributes
            ))

        if self.is_content_empty():
            if config.use_self_closing_tags:
                sink.write("/>")
            else:
                sink.write(f"></{self.name}>")
            sink.write(line_ending)
            return

        only_child = self.children[0] if len(self.children) == 1 else None
        if (
            config.pretty_print
            and config.single_line_text_elements
            and isinstance(only_child, TextNode)
        ):
            sink.write(">")
            only_child.render_inline(sink, config)
            sink.write(f"</{self.name}>")
            sink.write(line_ending)
            return

        sink.write(">")
        sink.write(line_ending)
        child_indent = indent + config.indent if config.pretty_print else ""
        for child in self.children:
            child.render(sink, child_indent, config)
        sink.write(indent)
        sink.write(f"</{self.name}>")
        sink.write(line_ending)

    def walk(self, depth: int = 0) -> Iterator[Tuple["Node", int]]:
        """Yield every node of the subtree with its depth, in document order."""
        yield self, depth
        for child in self.children:
            if isinstance(child, ElementNode):
                yield from child.walk(depth + 1)
            else:
                yield child, depth + 1

    def iter_elements(self) -> Iterator["ElementNode"]:
        """Iterate over this element and all descendant elements."""
        for node, _ in self.walk():
            if isinstance(node, ElementNode):
                yield node

    def find(self, name: str) -> Optional["ElementNode"]:
        """Find first descendant element with matching name."""
        return next(
            (elem for elem in self.iter_elements() if elem is not self and elem.name == name),
            None,
        )

    def find_all(self, name: str) -> List["ElementNode"]:
        """Find all descendant elements with matching name."""
        return [
            elem for elem in self.iter_elements()
            if elem is not self and elem.name == name
        ]

    def to_string(self, config: Optional[OutputConfiguration] = None) -> str:
        """Render this element and its subtree as a fragment."""
        return render_to_string(self, config)


Node = Union[
    ElementNode,
    TextNode,
    CommentNode,
    CDataNode,
    ProcessingInstructionNode,
    DoctypeNode,
]

NODE_TYPES = (
    ElementNode,
    TextNode,
    CommentNode,
    CDataNode,
    ProcessingInstructionNode,
    DoctypeNode,
)


def render_to_string(
    node: Node,
    config: Optional[OutputConfiguration] = None,
    indent: str = "",
) -> str:
    """Render a single node (and its subtree) into a new string."""
    buffer = io.StringIO()
    node.render(buffer, indent, config or OutputConfiguration())
    return buffer.getvalue()
