"""Span and record models collected during a run."""

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Event categories as written to the trace."""

    UNIT = "TU"
    INCLUSION = "PREPROCESS"
    FUNCTION = "FUNCTION"
    STRUCT = "STRUCT"
    NAMESPACE = "NAMESPACE"
    GIMPLE_PASS = "GIMPLE_PASS"
    RTL_PASS = "RTL_PASS"
    SIMPLE_IPA_PASS = "SIMPLE_IPA_PASS"
    IPA_PASS = "IPA_PASS"
    UNKNOWN = "UNKNOWN"


@dataclass
class TimeSpan:
    """Closed [start, end] interval in nanoseconds since the run epoch."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class InclusionRecord:
    """One included file. ``end`` stays None while the file is open."""

    file_id: str
    start: int
    end: int | None = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass
class StageRecord:
    """One completed optimization stage."""

    label: str
    category: Category
    order: int
    span: TimeSpan


@dataclass
class ScopeRecord:
    """A contiguous run of functions sharing an enclosing scope."""

    name: str
    category: Category
    span: TimeSpan


@dataclass
class FunctionRecord:
    """One parsed function."""

    signature: str
    file_id: str
    span: TimeSpan
