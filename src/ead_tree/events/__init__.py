"""Markup event layer for ead-tree.

Key Components:
    MarkupEvent: One open, text, close or end-of-stream event
    EventType: Enumeration of event kinds
    MarkupEventSource: lxml-backed source turning bytes into events
"""

from .events import Attributes, EventType, MarkupEvent
from .source import MarkupEventSource, iter_events

__all__ = [
    "Attributes",
    "EventType",
    "MarkupEvent",
    "MarkupEventSource",
    "iter_events",
]
