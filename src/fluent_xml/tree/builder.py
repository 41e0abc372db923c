"""Fluent construction API for XML document trees.

Builders own a mutable scratch tree that only grows: content is appended,
attributes are set. Calling ``build()`` snapshots the scratch tree into the
immutable node model, which is what gets rendered.

Example:
    >>> root = xml("catalog")
    >>> root.version = "1.0"
    >>> with root.node("book", attributes={"id": "b1"}) as book:
    ...     book.node("title", "XML in a Nutshell")
    ...     book.comment("out of print")
    >>> document = root.build()
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from fluent_xml.character.escaping import XmlVersion
from fluent_xml.shared import OutputConfiguration, get_logger
from fluent_xml.tree.document import DEFAULT_ENCODING, XmlDocument
from fluent_xml.tree.nodes import (
    NODE_TYPES,
    CDataNode,
    CommentNode,
    DoctypeNode,
    ElementNode,
    Node,
    ProcessingInstructionNode,
    TextNode,
)

XMLNS = "xmlns"


class ElementBuilder:
    """Mutable, append-only builder for a single element and its subtree."""

    def __init__(self, name: str) -> None:
        if not isinstance(name, str):
            raise TypeError("Element name must be a string")
        self.name = name
        self._attributes: Dict[str, Any] = {}
        self._children: List[Union[Node, "ElementBuilder"]] = []

    def __enter__(self) -> "ElementBuilder":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None

    # Children

    def add(self, node: Node) -> "ElementBuilder":
        """Append an already constructed node."""
        if not isinstance(node, NODE_TYPES):
            raise TypeError(
                f"Child must be one of the XML node types, got {type(node).__name__}"
            )
        self._children.append(node)
        return self

    def text(self, value: str) -> "ElementBuilder":
        """Append a text node, escaped on output."""
        return self.add(TextNode(value))

    def comment(self, value: str) -> "ElementBuilder":
        """Append a ``<!-- value -->`` comment."""
        return self.add(CommentNode(value))

    def cdata(self, value: str) -> "ElementBuilder":
        """Append a ``<![CDATA[value]]>`` section."""
        return self.add(CDataNode(value))

    def processing_instruction(
        self,
        target: str,
        attributes: Optional[Mapping[str, str]] = None,
        **kwargs: str,
    ) -> "ElementBuilder":
        """Append a ``<?target key="value"?>`` instruction; values are not escaped."""
        return self.add(ProcessingInstructionNode(target, _merge(attributes, kwargs)))

    def node(
        self,
        name: str,
        value: Any = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> "ElementBuilder":
        """Append a child element and return its builder.

        A ``value`` other than ``None`` is added to the child as ``str(value)``
        text.
        """
        child = ElementBuilder(name)
        if attributes:
            child.attributes(attributes)
        if value is not None:
            child.text(value if isinstance(value, str) else str(value))
        self._children.append(child)
        return child

    @property
    def children(self) -> List[Union[Node, "ElementBuilder"]]:
        """Snapshot of the children appended so far."""
        return list(self._children)

    # Attributes

    def attribute(self, name: str, value: Any) -> "ElementBuilder":
        """Set an attribute; assigning ``None`` removes it."""
        if not isinstance(name, str):
            raise TypeError("Attribute name must be a string")
        if value is None:
            self._attributes.pop(name, None)
        else:
            self._attributes[name] = value
        return self

    def attributes(
        self,
        values: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> "ElementBuilder":
        """Set several attributes at once.

        Unlike :meth:`attribute`, ``None`` values are kept and render as ``null``.
        """
        for name, value in _merge(values, kwargs).items():
            if not isinstance(name, str):
                raise TypeError("Attribute name must be a string")
            self._attributes[name] = value
        return self

    def get_attribute(self, name: str, default: Any = None) -> Any:
        """Get attribute value with optional default."""
        return self._attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self._attributes

    def namespace(self, prefix: str, uri: str) -> "ElementBuilder":
        """Declare ``xmlns:prefix="uri"`` on this element."""
        return self.attribute(f"{XMLNS}:{prefix}", uri)

    @property
    def xmlns(self) -> Optional[str]:
        """Default namespace declared on this element."""
        return self.get_attribute(XMLNS)

    @xmlns.setter
    def xmlns(self, value: Optional[str]) -> None:
        self.attribute(XMLNS, value)

    def __getitem__(self, name: str) -> Any:
        return self._attributes.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.attribute(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def build(self) -> ElementNode:
        """Snapshot this builder into an immutable element tree."""
        return ElementNode(
            self.name,
            tuple(self._attributes.items()),
            tuple(
                child.build() if isinstance(child, ElementBuilder) else child
                for child in self._children
            ),
        )


class DocumentBuilder(ElementBuilder):
    """Builder for the root element that also holds document-level state.

    Assigning :attr:`version`, :attr:`encoding` or :attr:`standalone` turns the
    XML declaration on.
    """

    def __init__(self, name: str, correlation_id: Optional[str] = None) -> None:
        super().__init__(name)
        self.include_prolog = False
        self._encoding = DEFAULT_ENCODING
        self._version = XmlVersion.V10
        self._standalone: Optional[bool] = None
        self._doctype: Optional[DoctypeNode] = None
        self._instructions: List[ProcessingInstructionNode] = []
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "document_builder")

    @property
    def encoding(self) -> str:
        """Encoding named in the XML declaration; the output text is unaffected."""
        return self._encoding

    @encoding.setter
    def encoding(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("Encoding must be a string")
        self.include_prolog = True
        self._encoding = value

    @property
    def version(self) -> XmlVersion:
        """Declared XML version, which also selects the escaping rules."""
        return self._version

    @version.setter
    def version(self, value: Union[XmlVersion, str]) -> None:
        if isinstance(value, str):
            value = XmlVersion.from_string(value)
        if not isinstance(value, XmlVersion):
            raise TypeError("Version must be an XmlVersion or version string")
        self.include_prolog = True
        self._version = value

    @property
    def standalone(self) -> Optional[bool]:
        """Standalone flag of the XML declaration, omitted while ``None``."""
        return self._standalone

    @standalone.setter
    def standalone(self, value: Optional[bool]) -> None:
        if value is not None and not isinstance(value, bool):
            raise TypeError("Standalone must be a bool or None")
        self.include_prolog = True
        self._standalone = value

    @property
    def doctype_node(self) -> Optional[DoctypeNode]:
        """DOCTYPE set by the last successful :meth:`doctype` call."""
        return self._doctype

    def doctype(
        self,
        name: Optional[str] = None,
        public_id: Optional[str] = None,
        system_id: Optional[str] = None,
    ) -> DoctypeNode:
        """Set the DOCTYPE rendered ahead of the root element.

        Args:
            name: DOCTYPE name, defaults to the root element name
            public_id: Public identifier; requires ``system_id``
            system_id: System identifier

        Raises:
            InvalidDoctypeError: If ``public_id`` is given without ``system_id``;
                any previously set DOCTYPE is kept
        """
        doctype = DoctypeNode(
            name if name is not None else self.name,
            public_id=public_id,
            system_id=system_id,
        )
        self._doctype = doctype
        return doctype

    def global_processing_instruction(
        self,
        target: str,
        attributes: Optional[Mapping[str, str]] = None,
        **kwargs: str,
    ) -> "DocumentBuilder":
        """Add a processing instruction rendered before the root element."""
        self._instructions.append(
            ProcessingInstructionNode(target, _merge(attributes, kwargs))
        )
        return self

    def build(self) -> XmlDocument:  # type: ignore[override]
        """Snapshot the builder into an immutable :class:`XmlDocument`."""
        document = XmlDocument(
            root=super().build(),
            include_prolog=self.include_prolog,
            encoding=self._encoding,
            version=self._version,
            standalone=self._standalone,
            doctype=self._doctype,
            processing_instructions=tuple(self._instructions),
        )

        if self.logger.is_enabled_for(logging.DEBUG):
            statistics = document.statistics()
            self.logger.debug(
                "Document built",
                extra={
                    "root": self.name,
                    "version": self._version.version_number,
                    "include_prolog": self.include_prolog,
                    "element_count": statistics.element_count,
                    "max_depth": statistics.max_depth,
                },
            )
        return document

    def to_string(self, config: Optional[OutputConfiguration] = None) -> str:
        """Build and render the document."""
        return self.build().to_string(config)

    def __str__(self) -> str:
        return self.to_string()


def xml(
    name: str,
    init: Optional[Callable[[DocumentBuilder], Any]] = None,
    correlation_id: Optional[str] = None,
) -> DocumentBuilder:
    """Create a document builder for a root element called ``name``.

    Args:
        name: Root element name
        init: Optional callable populating the builder
        correlation_id: Optional correlation ID for logging

    Returns:
        The document builder
    """
    builder = DocumentBuilder(name, correlation_id)
    if init is not None:
        init(builder)
    return builder


def _merge(values: Optional[Mapping[str, Any]], extra: Mapping[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(values) if values else {}
    merged.update(extra)
    return merged
