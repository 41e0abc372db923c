"""Rendering API with progressive disclosure for XML documents.

Level 1 is a set of module functions taking a document (or a document builder)
and an optional configuration. Level 2 is :class:`XmlWriter`, which keeps a
configuration and correlation ID across renders and tracks usage statistics.
"""

import io
import time
from typing import Any, Dict, Optional, TypeVar, Union

from fluent_xml.shared import (
    OutputConfiguration,
    RenderMetrics,
    RenderResult,
    get_logger,
)
from fluent_xml.tree import DocumentBuilder, TextSink, XmlDocument

DocumentType = Union[XmlDocument, DocumentBuilder]

SinkT = TypeVar("SinkT", bound=TextSink)

MS_PER_SECOND = 1000


class _CountingSink:
    """Forwards writes to a sink and counts the characters written."""

    def __init__(self, sink: TextSink) -> None:
        self.sink = sink
        self.characters = 0

    def write(self, text: str) -> Any:
        result = self.sink.write(text)
        self.characters += len(text)
        return result


def _as_document(document: DocumentType) -> XmlDocument:
    if isinstance(document, DocumentBuilder):
        return document.build()
    if isinstance(document, XmlDocument):
        return document
    raise TypeError(
        f"Expected XmlDocument or DocumentBuilder, got {type(document).__name__}"
    )


def to_string(
    document: DocumentType,
    config: Optional[OutputConfiguration] = None,
) -> str:
    """Render a document to a string.

    Examples:
        >>> root = xml("greeting").text("hello")
        >>> to_string(root, OutputConfiguration(newline="\\n"))
        '<greeting>hello</greeting>\\n'
    """
    return _as_document(document).to_string(config)


def append_to(
    document: DocumentType,
    sink: SinkT,
    config: Optional[OutputConfiguration] = None,
) -> SinkT:
    """Render a document into ``sink`` and return the sink."""
    return _as_document(document).append_to(sink, config)


def render_result(
    document: DocumentType,
    config: Optional[OutputConfiguration] = None,
    correlation_id: Optional[str] = None,
) -> RenderResult:
    """Render a document and report metrics and document statistics."""
    return XmlWriter(config=config, correlation_id=correlation_id).render(document)


class XmlWriter:
    """Configured, reusable renderer for XML documents.

    Attributes:
        config: Output configuration applied to every render
        correlation_id: Correlation ID for log records and results

    Examples:
        >>> writer = XmlWriter(OutputConfiguration.compact())
        >>> writer.to_string(xml("empty"))
        '<empty/>'
    """

    def __init__(
        self,
        config: Optional[OutputConfiguration] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or OutputConfiguration()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_writer")

        self._render_count = 0
        self._total_processing_time = 0.0
        self._total_characters = 0

    def write(self, document: DocumentType, sink: SinkT) -> SinkT:
        """Render ``document`` into ``sink`` and return the sink.

        Exceptions raised by the sink are logged and propagated.
        """
        self._render_into(_as_document(document), sink)
        return sink

    def to_string(self, document: DocumentType) -> str:
        """Render ``document`` to a string."""
        return self.render(document).output

    def render(self, document: DocumentType) -> RenderResult:
        """Render ``document`` and collect metrics and statistics."""
        resolved = _as_document(document)
        statistics = resolved.statistics()

        buffer = io.StringIO()
        processing_time = self._render_into(
            resolved, buffer, {"element_count": statistics.element_count}
        )
        output = buffer.getvalue()

        metrics = RenderMetrics(
            processing_time_ms=processing_time,
            output_size_bytes=len(output.encode("utf-8", errors="surrogatepass")),
            output_characters=len(output),
            lines=len(output.splitlines()),
        )
        return RenderResult(
            output=output,
            metrics=metrics,
            statistics=statistics,
            encoding=resolved.encoding,
            correlation_id=self.correlation_id,
        )

    def _render_into(
        self,
        document: XmlDocument,
        sink: TextSink,
        extra: Optional[Dict[str, Any]] = None,
    ) -> float:
        """Render into ``sink``, log, record usage and return the elapsed milliseconds."""
        self.logger.debug(
            "Starting document render",
            extra={
                "root": document.name,
                "version": document.version.version_number,
                "pretty_print": self.config.pretty_print,
            },
        )

        start_time = time.perf_counter()
        counter = _CountingSink(sink)
        try:
            document.render(counter, "", self.config)
        except Exception:
            self.logger.error(
                "Document render failed",
                extra={"root": document.name, "sink_type": type(sink).__name__},
            )
            raise
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND

        self._record(processing_time, counter.characters)

        completion: Dict[str, Any] = {
            "root": document.name,
            "processing_time_ms": processing_time,
            "output_characters": counter.characters,
        }
        if extra:
            completion.update(extra)
        self.logger.info("Document rendered", extra=completion)
        return processing_time

    def with_config(self, **overrides: Any) -> "XmlWriter":
        """Create a writer sharing this one's correlation ID with overridden options."""
        return XmlWriter(self.config.override(**overrides), self.correlation_id)

    def reconfigure(self, config: OutputConfiguration) -> None:
        """Replace the output configuration used by later renders."""
        self.config = config
        self.logger.info(
            "Writer reconfigured",
            extra={"configuration": config.to_dict()},
        )

    def _record(self, processing_time_ms: float, characters: int) -> None:
        self._render_count += 1
        self._total_processing_time += processing_time_ms
        self._total_characters += characters

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get writer usage statistics."""
        return {
            "total_renders": self._render_count,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._render_count
                if self._render_count > 0 else 0.0
            ),
            "total_characters": self._total_characters,
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset writer usage statistics."""
        self._render_count = 0
        self._total_processing_time = 0.0
        self._total_characters = 0

        self.logger.info("Writer statistics reset")
