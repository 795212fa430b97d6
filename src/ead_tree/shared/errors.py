"""Error taxonomy for markup-to-tree conversion.

Every error here is fatal for the conversion in flight: no partial tree is
produced and no recovery is attempted.
"""

from typing import List, Optional, Sequence


class ConversionError(Exception):
    """Base exception for all conversion failures."""

    def __init__(
        self,
        message: str,
        element: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.element = element
        self.line = line
        self.column = column

    @property
    def kind(self) -> str:
        """Name of the error kind, used in user-facing diagnostics."""
        return type(self).__name__

    @property
    def location(self) -> Optional[str]:
        """Human readable source location, when the tokenizer supplied one."""
        if self.line is None:
            return None
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}, column {self.column}"

    def describe(self) -> str:
        """Single-line diagnostic naming the error kind and its context."""
        context = []
        if self.element is not None:
            context.append(f"element <{self.element}>")
        if self.location is not None:
            context.append(self.location)
        if not context:
            return f"{self.kind}: {self.message}"
        return f"{self.kind}: {self.message} ({', '.join(context)})"


class UpstreamTokenizeError(ConversionError):
    """Raised when the input is not well-formed markup at the lexical level."""


class EmptyStackError(ConversionError):
    """Raised when text or a close event arrives with no element open."""

    def __init__(self, event_kind: str, detail: Optional[str] = None) -> None:
        message = f"{event_kind} event with no open element"
        if detail:
            message = f"{message}: {detail!r}"
        super().__init__(message)
        self.event_kind = event_kind
        self.detail = detail


class UnterminatedStreamError(ConversionError):
    """Raised when the event stream ends while elements are still open."""

    def __init__(self, open_elements: Sequence[str]) -> None:
        self.open_elements: List[str] = list(open_elements)
        if self.open_elements:
            message = (
                "end of stream with unclosed elements: "
                + "/".join(self.open_elements)
            )
            element: Optional[str] = self.open_elements[-1]
        else:
            message = "end of stream before any element was produced"
            element = None
        super().__init__(message, element=element)


class NameMismatchError(ConversionError):
    """Raised when a close event names a different element than the open one."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"close tag </{actual}> does not match open element <{expected}>",
            element=expected,
        )
        self.expected = expected
        self.actual = actual
