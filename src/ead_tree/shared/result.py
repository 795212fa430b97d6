"""Diagnostic and metric types for ead-tree conversions.

This module defines the diagnostic entries and performance figures attached
to every successful conversion result.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional

import psutil


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Tree-shaping details, e.g. replaced text
    INFO = auto()       # Informational messages
    WARNING = auto()    # Tolerated irregularities in lenient mode


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    element: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagnostic to a JSON-friendly dictionary."""
        result: Dict[str, Any] = {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
        }
        if self.element is not None:
            result["element"] = self.element
        if self.details:
            result["details"] = dict(self.details)
        return result


@dataclass
class PerformanceMetrics:
    """Performance metrics for one conversion."""

    processing_time_ms: float = 0.0
    memory_used_bytes: int = 0
    bytes_read: int = 0
    events_processed: int = 0
    elements_created: int = 0
    max_depth: int = 0

    @property
    def events_per_second(self) -> float:
        """Calculate events processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.events_processed * 1000.0) / self.processing_time_ms

    @property
    def bytes_per_second(self) -> float:
        """Calculate input bytes consumed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.bytes_read * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processing_time_ms": self.processing_time_ms,
            "memory_used_bytes": self.memory_used_bytes,
            "bytes_read": self.bytes_read,
            "events_processed": self.events_processed,
            "elements_created": self.elements_created,
            "max_depth": self.max_depth,
        }


def resident_memory_bytes() -> int:
    """Resident set size of the current process, in bytes."""
    return psutil.Process().memory_info().rss
