"""Markup event types consumed by the tree builder."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Tuple

Attributes = Tuple[Tuple[str, str], ...]


class EventType(Enum):
    """Kinds of events produced by an event source."""

    OPEN = auto()           # Element start with name and attributes
    TEXT = auto()           # Raw character content
    CLOSE = auto()          # Element end
    END_OF_STREAM = auto()  # Source exhausted


@dataclass(frozen=True)
class MarkupEvent:
    """Single event in a markup stream.

    ``attributes`` keeps the order in which the source reported them; the
    tree builder collapses it into a mapping.
    """

    type: EventType
    name: Optional[str] = None
    attributes: Attributes = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate event payload against its type."""
        if self.type is EventType.OPEN and not self.name:
            raise ValueError("Open event requires an element name")
        if self.type is EventType.TEXT and self.text is None:
            raise ValueError("Text event requires text")

    @classmethod
    def open(
        cls, name: str, attributes: Iterable[Tuple[str, str]] = ()
    ) -> "MarkupEvent":
        return cls(EventType.OPEN, name=name, attributes=tuple(attributes))

    @classmethod
    def text_event(cls, raw: str) -> "MarkupEvent":
        return cls(EventType.TEXT, text=raw)

    @classmethod
    def close(cls, name: Optional[str] = None) -> "MarkupEvent":
        return cls(EventType.CLOSE, name=name)

    @classmethod
    def end_of_stream(cls) -> "MarkupEvent":
        return cls(EventType.END_OF_STREAM)
