"""Document root for rendering complete XML documents.

The document owns the state that sits outside the root element: the XML
declaration, the DOCTYPE and top-level processing instructions. It is the
entry point for producing final output and the place where the declared XML
version is folded into the output configuration.
"""

import io
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Tuple, TypeVar

from fluent_xml.character.escaping import XmlVersion
from fluent_xml.shared.config import OutputConfiguration
from fluent_xml.shared.result import DocumentStatistics
from fluent_xml.tree.nodes import (
    DoctypeNode,
    ElementNode,
    Node,
    ProcessingInstructionNode,
    TextSink,
)

DEFAULT_ENCODING = "UTF-8"

SinkT = TypeVar("SinkT", bound=TextSink)


@dataclass(frozen=True)
class XmlDocument:
    """Immutable XML document: a root element plus prolog state.

    ``include_prolog`` controls the ``<?xml ...?>`` declaration. Builders turn
    it on whenever the version, encoding or standalone flag is assigned.
    """

    root: ElementNode
    include_prolog: bool = False
    encoding: str = DEFAULT_ENCODING
    version: XmlVersion = XmlVersion.V10
    standalone: Optional[bool] = None
    doctype: Optional[DoctypeNode] = None
    processing_instructions: Tuple[ProcessingInstructionNode, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate document state."""
        if not isinstance(self.root, ElementNode):
            raise TypeError("Document root must be an ElementNode instance")
        if not isinstance(self.version, XmlVersion):
            raise TypeError("Document version must be an XmlVersion")
        if self.doctype is not None and not isinstance(self.doctype, DoctypeNode):
            raise TypeError("Document doctype must be a DoctypeNode instance")
        instructions = tuple(self.processing_instructions)
        for instruction in instructions:
            if not isinstance(instruction, ProcessingInstructionNode):
                raise TypeError(
                    "Top-level instructions must be ProcessingInstructionNode instances"
                )
        object.__setattr__(self, "processing_instructions", instructions)

    @property
    def name(self) -> str:
        """Name of the root element."""
        return self.root.name

    @property
    def attributes(self) -> Mapping[str, Any]:
        """Attributes of the root element."""
        return self.root.attribute_map

    @property
    def children(self) -> Tuple[Node, ...]:
        """Children of the root element."""
        return self.root.children

    def render(
        self,
        sink: TextSink,
        indent: str = "",
        config: Optional[OutputConfiguration] = None,
    ) -> None:
        """Render the prolog, doctype, top-level instructions and root element.

        Args:
            sink: Object with a ``write(str)`` method receiving the output
            indent: Base indentation of the root element
            config: Output configuration, defaults to ``OutputConfiguration()``
        """
        active = (config or OutputConfiguration()).with_version(self.version)

        if self.include_prolog:
            self._render_declaration(sink, active)

        if self.doctype is not None:
            self.doctype.render(sink, "", active)

        for instruction in self.processing_instructions:
            instruction.render(sink, "", active)

        self.root.render(sink, indent, active)

    def _render_declaration(self, sink: TextSink, config: OutputConfiguration) -> None:
        sink.write(f'<?xml version="{self.version.version_number}"')
        sink.write(f' encoding="{self.encoding}"')
        if self.standalone is not None:
            sink.write(f' standalone="{"yes" if self.standalone else "no"}"')
        sink.write("?>")
        sink.write(config.line_ending)

    def append_to(self, sink: SinkT, config: Optional[OutputConfiguration] = None) -> SinkT:
        """Render into ``sink`` and return it."""
        self.render(sink, "", config)
        return sink

    def to_string(self, config: Optional[OutputConfiguration] = None) -> str:
        """Render the document into a new string."""
        return self.append_to(io.StringIO(), config).getvalue()

    def __str__(self) -> str:
        return self.to_string()

    def iter_elements(self) -> Iterator[ElementNode]:
        """Iterate over all elements in document order."""
        return self.root.iter_elements()

    def find(self, name: str) -> Optional[ElementNode]:
        """Find first element with matching name, the root included."""
        if self.root.name == name:
            return self.root
        return self.root.find(name)

    def find_all(self, name: str) -> List[ElementNode]:
        """Find all elements with matching name, the root included."""
        return [elem for elem in self.iter_elements() if elem.name == name]

    def statistics(self) -> DocumentStatistics:
        """Calculate document-wide statistics."""
        element_count = 0
        node_count = 0
        attribute_count = 0
        max_depth = 0

        for node, depth in self.root.walk():
            node_count += 1
            if isinstance(node, ElementNode):
                max_depth = max(max_depth, depth)
                element_count += 1
                attribute_count += len(node.attributes)

        return DocumentStatistics(
            element_count=element_count,
            node_count=node_count,
            attribute_count=attribute_count,
            max_depth=max_depth,
        )
