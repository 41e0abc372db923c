"""Result objects for XML rendering operations.

This module defines the result returned by measured renders: the produced
text plus timing, size and document statistics.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DocumentStatistics:
    """Shape of a document tree."""

    element_count: int = 0
    node_count: int = 0
    attribute_count: int = 0
    max_depth: int = 0

    def __post_init__(self) -> None:
        """Validate statistics."""
        for name in ("element_count", "node_count", "attribute_count", "max_depth"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")


@dataclass
class RenderMetrics:
    """Performance metrics for a render operation."""

    processing_time_ms: float = 0.0
    output_size_bytes: int = 0
    output_characters: int = 0
    lines: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters rendered per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.output_characters * 1000.0) / self.processing_time_ms


@dataclass
class RenderResult:
    """Rendered output together with metrics and document statistics."""

    output: str = ""
    metrics: RenderMetrics = field(default_factory=RenderMetrics)
    statistics: DocumentStatistics = field(default_factory=DocumentStatistics)
    encoding: str = "UTF-8"
    correlation_id: Optional[str] = None

    def __str__(self) -> str:
        return self.output

    @property
    def processing_time_ms(self) -> float:
        """Get processing time in milliseconds."""
        return self.metrics.processing_time_ms

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the render."""
        return {
            "processing_time_ms": self.metrics.processing_time_ms,
            "output_size_bytes": self.metrics.output_size_bytes,
            "output_characters": self.metrics.output_characters,
            "lines": self.metrics.lines,
            "element_count": self.statistics.element_count,
            "node_count": self.statistics.node_count,
            "attribute_count": self.statistics.attribute_count,
            "max_depth": self.statistics.max_depth,
            "encoding": self.encoding,
            "correlation_id": self.correlation_id,
        }
