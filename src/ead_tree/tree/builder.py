"""Event-to-tree reduction for ead-tree.

This module implements the state machine that turns a flat stream of open,
text and close events into a single nested ``Node`` tree. The builder keeps
an explicit stack of open nodes; a node is linked into its parent when it is
popped, and the node popped off an emptied stack becomes the root.
"""

import time
from collections import abc
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ead_tree.events import EventType, MarkupEvent
from ead_tree.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    EmptyStackError,
    NameMismatchError,
    PerformanceMetrics,
    TreeConfig,
    UnterminatedStreamError,
    get_logger,
    resident_memory_bytes,
)

from .node import Node
from .normalize import normalize_whitespace
from .stack import NodeStack

AttributeInput = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


class BuilderState(Enum):
    """Reduction states of the tree builder."""

    EMPTY = auto()      # No element open
    BUILDING = auto()   # At least one element open
    DONE = auto()       # Stream finished, root produced


@dataclass
class ConversionResult:
    """Finished tree plus the metadata gathered while building it."""

    root: Node
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    correlation_id: Optional[str] = None

    @property
    def element_count(self) -> int:
        return self.root.element_count

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_warnings(self) -> bool:
        return any(
            diag.severity == DiagnosticSeverity.WARNING for diag in self.diagnostics
        )

    def summary(self) -> Dict[str, Any]:
        """Summary statistics for logs and command-line reports."""
        by_severity: Dict[str, int] = {}
        for diagnostic in self.diagnostics:
            name = diagnostic.severity.name
            by_severity[name] = by_severity.get(name, 0) + 1

        return {
            "root": self.root.name,
            "element_count": self.element_count,
            "correlation_id": self.correlation_id,
            "performance": self.performance.to_dict(),
            "diagnostics_by_severity": by_severity,
        }


class TreeBuilder:
    """Reduces markup events into a single rooted ``Node`` tree.

    The builder can be driven event by event (``on_open``, ``on_text``,
    ``on_close``, ``finish``) or fed a whole iterable through ``build``.
    Every structural error is fatal and raised immediately.
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Reduction settings, defaults to strict close-name checks
            correlation_id: Optional correlation ID for conversion tracking
        """
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

        self._stack = NodeStack()
        self._root: Optional[Node] = None
        self._finished = False
        self._diagnostics: List[DiagnosticEntry] = []

        self._events_processed = 0
        self._elements_created = 0
        self._max_depth = 0

    @property
    def state(self) -> BuilderState:
        if self._finished:
            return BuilderState.DONE
        if self._stack:
            return BuilderState.BUILDING
        return BuilderState.EMPTY

    @property
    def root(self) -> Optional[Node]:
        return self._root

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def diagnostics(self) -> List[DiagnosticEntry]:
        return list(self._diagnostics)

    def reset(self) -> None:
        """Discard all reduction state so a new conversion can start."""
        self._stack.clear()
        self._root = None
        self._finished = False
        self._diagnostics = []
        self._events_processed = 0
        self._elements_created = 0
        self._max_depth = 0

    def _add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        element: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component="tree_builder",
                element=element,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def on_open(self, name: str, attributes: AttributeInput = ()) -> Node:
        """Open a new element and make it the innermost open node.

        Legal at any depth. A top-level element opened after the root has
        closed replaces that root once it closes itself.
        """
        pairs = attributes.items() if isinstance(attributes, abc.Mapping) else attributes
        node = Node(name=name, attributes=dict(pairs))
        self._stack.push(node)

        self._elements_created += 1
        # The root sits at depth 0.
        self._max_depth = max(self._max_depth, len(self._stack) - 1)
        return node

    def on_text(self, raw: str) -> None:
        """Set the normalized ``raw`` text on the innermost open node.

        Whitespace-only text is discarded before the stack is consulted, so
        formatting whitespace around the root is never an error.
        """
        text = normalize_whitespace(raw)
        if not text:
            return

        node = self._stack.peek()
        if node is None:
            raise EmptyStackError("Text", text)

        if (
            self.config.record_text_overwrites
            and node.text is not None
            and node.text != text
        ):
            self._add_diagnostic(
                DiagnosticSeverity.DEBUG,
                "Element text replaced by later text",
                element=node.name,
                details={"previous": node.text, "current": text},
            )
        node.text = text

    def on_close(self, name: Optional[str] = None) -> Node:
        """Close the innermost open element and link it into the tree.

        Args:
            name: Closing tag name; checked against the open element when given

        Returns:
            The closed node
        """
        node = self._stack.pop()
        if node is None:
            raise EmptyStackError("Close", name)

        if name is not None and name != node.name:
            if self.config.strict_close_names:
                raise NameMismatchError(node.name, name)
            self._add_diagnostic(
                DiagnosticSeverity.WARNING,
                f"Close tag </{name}> closed element <{node.name}>",
                element=node.name,
                details={"close_name": name, "path": self._stack.path()},
            )
            self.logger.debug(
                "Mismatched close tag tolerated",
                extra={"expected": node.name, "actual": name},
            )

        parent = self._stack.peek()
        if parent is None:
            if self._root is not None:
                self._add_diagnostic(
                    DiagnosticSeverity.WARNING,
                    f"Top-level element <{node.name}> replaced root <{self._root.name}>",
                    element=node.name,
                    details={"previous_root": self._root.name},
                )
            self._root = node
        else:
            parent.add_child(node)
        return node

    def finish(self) -> Node:
        """Signal end of stream and return the finished root.

        Raises:
            UnterminatedStreamError: if elements are still open or no element
                was ever produced
        """
        if self._stack or self._root is None:
            raise UnterminatedStreamError(self._stack.path())
        self._finished = True
        return self._root

    def feed(self, event: MarkupEvent) -> None:
        """Process a single event to completion."""
        self._events_processed += 1

        if event.type is EventType.OPEN:
            self.on_open(event.name, event.attributes)
        elif event.type is EventType.TEXT:
            self.on_text(event.text)
        elif event.type is EventType.CLOSE:
            self.on_close(event.name)
        elif event.type is EventType.END_OF_STREAM:
            self.finish()

    def build(self, events: Iterable[MarkupEvent]) -> ConversionResult:
        """Reduce ``events`` into a tree.

        Events are pulled one at a time; reduction stops at the first
        end-of-stream event or when ``events`` is exhausted.

        Args:
            events: Event iterable, typically a ``MarkupEventSource``

        Returns:
            ConversionResult holding the root node and conversion metadata

        Raises:
            ConversionError: on the first structural error
        """
        start_time = time.time()
        start_memory = resident_memory_bytes()
        self.reset()

        self.logger.info("Starting tree building")

        try:
            for event in events:
                self.feed(event)
                if self._finished:
                    break
            root = self.finish()
        except Exception as e:
            self.logger.debug(
                "Tree building failed",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "events_processed": self._events_processed,
                    "open_path": self._stack.path(),
                },
            )
            raise

        performance = PerformanceMetrics(
            processing_time_ms=(time.time() - start_time) * 1000,
            memory_used_bytes=max(0, resident_memory_bytes() - start_memory),
            events_processed=self._events_processed,
            elements_created=self._elements_created,
            max_depth=self._max_depth,
        )
        result = ConversionResult(
            root=root,
            performance=performance,
            diagnostics=list(self._diagnostics),
            correlation_id=self.correlation_id,
        )

        self.logger.info(
            "Tree building completed",
            extra={
                "root": root.name,
                "element_count": self._elements_created,
                "max_depth": self._max_depth,
                "processing_time_ms": performance.processing_time_ms,
            },
        )
        return result
