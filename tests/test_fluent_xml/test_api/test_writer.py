"""Tests for the rendering API."""

import io
import logging
from xml.etree import ElementTree

import pytest

import fluent_xml
from fluent_xml import (
    OutputConfiguration,
    RenderResult,
    XmlVersion,
    XmlWriter,
    append_to,
    render_result,
    to_string,
    xml,
)

CONFIG = OutputConfiguration(newline="\n")


@pytest.fixture
def builder():
    root = xml("catalog")
    root.version = XmlVersion.V10
    with root.node("book", attributes={"id": "b1"}) as book:
        book.node("title", "Tom & Jerry")
        book.comment("classic")
    return root


class TestLevelOneFunctions:
    """Module-level rendering functions."""

    def test_to_string_accepts_builder_and_document(self, builder):
        """Test builders are built before rendering."""
        assert to_string(builder, CONFIG) == to_string(builder.build(), CONFIG)

    def test_to_string_output(self, builder):
        """Test the full rendered document."""
        assert to_string(builder, CONFIG) == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<catalog>\n"
            '\t<book id="b1">\n'
            "\t\t<title>Tom &amp; Jerry</title>\n"
            "\t\t<!-- classic -->\n"
            "\t</book>\n"
            "</catalog>\n"
        )

    def test_append_to(self, builder):
        """Test append_to returns the sink it wrote to."""
        sink = io.StringIO()
        assert append_to(builder, sink, CONFIG) is sink
        assert sink.getvalue() == to_string(builder, CONFIG)

    def test_rejects_other_types(self):
        """Test only documents and document builders are rendered."""
        with pytest.raises(TypeError, match="Expected XmlDocument or DocumentBuilder"):
            to_string("<r/>")  # type: ignore[arg-type]

    def test_render_result(self, builder):
        """Test the measured render reports output, metrics and statistics."""
        result = render_result(builder, CONFIG, correlation_id="req-7")

        assert isinstance(result, RenderResult)
        assert result.output == to_string(builder, CONFIG)
        assert result.correlation_id == "req-7"
        assert result.metrics.output_characters == len(result.output)
        assert result.metrics.output_size_bytes == len(result.output.encode("utf-8"))
        assert result.metrics.lines == 7
        assert result.statistics.element_count == 3
        assert result.statistics.max_depth == 2
        assert result.processing_time_ms >= 0.0


class TestXmlWriter:
    """Configured writer."""

    def test_default_configuration(self):
        """Test the writer falls back to the default configuration."""
        assert XmlWriter().config == OutputConfiguration()

    def test_compact_writer(self, builder):
        """Test a compact writer renders on one line."""
        writer = XmlWriter(OutputConfiguration.compact())
        assert writer.to_string(builder) == (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<catalog><book id="b1"><title>Tom &amp; Jerry</title>'
            "<!-- classic --></book></catalog>"
        )

    def test_write_to_sink(self, builder):
        """Test write() renders into the sink and counts the render."""
        writer = XmlWriter(CONFIG)
        sink = writer.write(builder, io.StringIO())

        assert sink.getvalue() == to_string(builder, CONFIG)
        assert writer.statistics["total_renders"] == 1
        assert writer.statistics["total_characters"] == len(sink.getvalue())

    def test_write_logs_start_and_completion(self, builder, caplog):
        """Test write() logs both the start and the completion of a render."""
        writer = XmlWriter(CONFIG, correlation_id="req-4")
        with caplog.at_level(logging.DEBUG, logger="fluent_xml.api.writer"):
            sink = writer.write(builder, io.StringIO())

        messages = [record.getMessage() for record in caplog.records]
        assert messages == ["Starting document render", "Document rendered"]
        assert caplog.records[-1].output_characters == len(sink.getvalue())
        assert caplog.records[-1].correlation_id == "req-4"

    def test_sink_errors_propagate(self, builder, caplog):
        """Test a failing sink is logged and its exception re-raised."""

        class BrokenSink:
            def write(self, text):
                raise OSError("disk full")

        writer = XmlWriter(CONFIG, correlation_id="req-3")
        with caplog.at_level(logging.ERROR, logger="fluent_xml.api.writer"):
            with pytest.raises(OSError, match="disk full"):
                writer.write(builder, BrokenSink())

        record = caplog.records[-1]
        assert record.getMessage() == "Document render failed"
        assert record.correlation_id == "req-3"
        assert writer.statistics["total_renders"] == 0

    def test_with_config(self, builder):
        """Test with_config derives a writer with overridden options."""
        writer = XmlWriter(CONFIG, correlation_id="req-1")
        expanded = writer.with_config(use_self_closing_tags=False, indent="  ")

        assert expanded.correlation_id == "req-1"
        assert expanded.config.indent == "  "
        assert writer.config.indent == "\t"
        assert expanded.to_string(xml("empty")) == "<empty></empty>\n"

    def test_reconfigure(self):
        """Test reconfigure() affects later renders."""
        writer = XmlWriter(CONFIG)
        writer.reconfigure(OutputConfiguration.compact())
        assert writer.to_string(xml("a")) == "<a/>"

    def test_statistics_and_reset(self, builder):
        """Test usage statistics accumulate and reset."""
        writer = XmlWriter(CONFIG)
        writer.render(builder)
        writer.render(builder)

        statistics = writer.statistics
        assert statistics["total_renders"] == 2
        assert statistics["total_characters"] == 2 * len(to_string(builder, CONFIG))
        assert statistics["average_processing_time_ms"] >= 0.0

        writer.reset_statistics()
        assert writer.statistics["total_renders"] == 0
        assert writer.statistics["average_processing_time_ms"] == 0.0

    def test_render_logs_completion(self, builder, caplog):
        """Test each measured render emits an info record."""
        writer = XmlWriter(CONFIG, correlation_id="req-2")
        with caplog.at_level(logging.INFO, logger="fluent_xml.api.writer"):
            writer.render(builder)

        record = caplog.records[-1]
        assert record.getMessage() == "Document rendered"
        assert record.component == "xml_writer"
        assert record.element_count == 3


class TestPackage:
    """Top-level package exports."""

    def test_version(self):
        """Test the package version."""
        assert fluent_xml.__version__ == "0.1.0"

    def test_all_exports_resolve(self):
        """Test every name in __all__ is importable from the package."""
        for name in fluent_xml.__all__:
            assert hasattr(fluent_xml, name)


class TestRoundTrip:
    """Rendered output parses back to the original values."""

    def test_reserved_and_non_ascii_characters(self):
        """Test an XML parser recovers attribute values and text unchanged."""
        value = "a<b & c>d \"quoted\" 'single' café 漢字"
        root = xml("root")
        root["value"] = value
        root.node("text", value)
        with root.node("mixed") as mixed:
            mixed.text(value)
            mixed.comment("note")
        output = XmlWriter(CONFIG).to_string(root)

        parsed = ElementTree.fromstring(output)

        assert parsed.get("value") == value
        assert parsed.find("text").text == value
        assert parsed.find("mixed").text.strip() == value
