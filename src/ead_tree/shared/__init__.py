"""Shared utilities for ead-tree.

This module provides configuration objects, the error taxonomy, diagnostic
and metric types, and logging helpers used across all layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ConverterConfig,
    OutputConfig,
    SourceConfig,
    TreeConfig,
)
from .errors import (
    ConversionError,
    EmptyStackError,
    NameMismatchError,
    UnterminatedStreamError,
    UpstreamTokenizeError,
)
from .logging import CorrelationLogger, configure_logging, get_logger
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    resident_memory_bytes,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ConverterConfig",
    "OutputConfig",
    "SourceConfig",
    "TreeConfig",
    "ConversionError",
    "EmptyStackError",
    "NameMismatchError",
    "UnterminatedStreamError",
    "UpstreamTokenizeError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "resident_memory_bytes",
]
