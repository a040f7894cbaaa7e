"""Build pipeline tracing: records host notifications as a Chrome trace."""

from .clock import Clock
from .errors import ConfigError, ContractViolation, SinkError, TraceError
from .models import Category, TraceDocument, TraceEventRecord
from .output import FileTraceSink, ITraceSink, MemoryTraceSink, TraceEmitter
from .paths import PathNormalizer
from .session import ITraceSession, TraceSession
from .storage import EventStore
from .tracker import FunctionRecorder, InclusionTracker, StageTracker

__all__ = [
    # Session
    "ITraceSession",
    "TraceSession",
    # Models
    "Category",
    "TraceDocument",
    "TraceEventRecord",
    # Components
    "Clock",
    "PathNormalizer",
    "EventStore",
    "InclusionTracker",
    "StageTracker",
    "FunctionRecorder",
    "TraceEmitter",
    "ITraceSink",
    "FileTraceSink",
    "MemoryTraceSink",
    # Errors
    "TraceError",
    "ContractViolation",
    "SinkError",
    "ConfigError",
]
