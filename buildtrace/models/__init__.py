"""Data models for buildtrace."""

from .tracing import (
    Category,
    FunctionRecord,
    InclusionRecord,
    ScopeRecord,
    StageRecord,
    TimeSpan,
)
from .trace_format import DISPLAY_TIME_UNIT, TraceDocument, TraceEventRecord

__all__ = [
    # Records
    "Category",
    "TimeSpan",
    "InclusionRecord",
    "StageRecord",
    "ScopeRecord",
    "FunctionRecord",
    # Wire format
    "DISPLAY_TIME_UNIT",
    "TraceEventRecord",
    "TraceDocument",
]
