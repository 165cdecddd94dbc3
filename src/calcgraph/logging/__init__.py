"""Structured event logging for calcgraph.

Provides an event schema, a filesystem NDJSON sink, and an emit helper
that never raises.
"""

from calcgraph.logging.events import (
    CalcEvent,
    EventLevel,
    EventType,
    emit,
    make_formula_event,
    redact_context,
    reset_sink,
    set_project_dir,
)
from calcgraph.logging.sink import EventSink

__all__ = [
    "CalcEvent",
    "EventLevel",
    "EventSink",
    "EventType",
    "emit",
    "make_formula_event",
    "redact_context",
    "reset_sink",
    "set_project_dir",
]
