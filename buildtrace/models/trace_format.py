"""Wire models for the Chrome trace event format."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from .tracing import Category

DISPLAY_TIME_UNIT = "ns"


class TraceEventRecord(BaseModel):
    """One begin ("B") or end ("E") record."""

    name: str
    ph: Literal["B", "E"]
    cat: Category
    ts: float  # microseconds
    pid: int
    tid: int = 0
    args: dict[str, Any] = Field(default_factory=dict)


class TraceDocument(BaseModel):
    """The complete trace artifact."""

    displayTimeUnit: str = DISPLAY_TIME_UNIT
    beginningOfTime: int
    traceEvents: list[TraceEventRecord] = Field(default_factory=list)
