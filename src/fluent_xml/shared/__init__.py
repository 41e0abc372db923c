"""Shared utilities for XML document rendering.

This module provides the output configuration, result types and logging
helpers used across the tree and API layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    OutputConfiguration,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DocumentStatistics,
    RenderMetrics,
    RenderResult,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "OutputConfiguration",
    "CorrelationLogger",
    "get_logger",
    "DocumentStatistics",
    "RenderMetrics",
    "RenderResult",
]
