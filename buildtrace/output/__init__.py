"""Trace output module."""

from .emitter import MINIMUM_EVENT_LENGTH_NS, TraceEmitter, TraceEvent
from .sink import FileTraceSink, ITraceSink, MemoryTraceSink

__all__ = [
    "MINIMUM_EVENT_LENGTH_NS",
    "TraceEmitter",
    "TraceEvent",
    "ITraceSink",
    "FileTraceSink",
    "MemoryTraceSink",
]
