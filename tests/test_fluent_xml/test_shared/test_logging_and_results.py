"""Tests for correlation logging and render result objects."""

import logging

import pytest

from fluent_xml.shared import (
    CorrelationLogger,
    DocumentStatistics,
    RenderMetrics,
    RenderResult,
    get_logger,
)


class TestCorrelationLogger:
    """Records carry component and correlation ID."""

    def test_get_logger_defaults_component_to_module(self):
        """Test the component defaults to the last dotted name part."""
        logger = get_logger("fluent_xml.api.writer")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "writer"
        assert logger.correlation_id is None

    def test_records_include_extra(self, caplog):
        """Test emitted records carry correlation fields and caller extras."""
        logger = get_logger("fluent_xml.test", "req-1", "tester")

        with caplog.at_level(logging.INFO, logger="fluent_xml.test"):
            logger.info("rendered", extra={"element_count": 3})

        record = caplog.records[-1]
        assert record.component == "tester"
        assert record.correlation_id == "req-1"
        assert record.element_count == 3


class TestResults:
    """Metrics, statistics and result summaries."""

    def test_statistics_validation(self):
        """Test negative counts are rejected."""
        with pytest.raises(ValueError, match="element_count must be >= 0"):
            DocumentStatistics(element_count=-1)

    def test_characters_per_second(self):
        """Test throughput is derived from time and size."""
        assert RenderMetrics().characters_per_second == 0.0
        assert RenderMetrics(processing_time_ms=500.0, output_characters=100).characters_per_second == 200.0

    def test_result_summary(self):
        """Test the summary flattens metrics and statistics."""
        result = RenderResult(
            output="<a/>",
            metrics=RenderMetrics(output_characters=4, output_size_bytes=4, lines=1),
            statistics=DocumentStatistics(element_count=1, node_count=1),
            correlation_id="req-9",
        )

        summary = result.summary()

        assert str(result) == "<a/>"
        assert summary["element_count"] == 1
        assert summary["output_characters"] == 4
        assert summary["correlation_id"] == "req-9"
        assert summary["encoding"] == "UTF-8"
