"""In-memory event store for one traced run."""

from ..models import (
    FunctionRecord,
    InclusionRecord,
    ScopeRecord,
    StageRecord,
)

CIRCULAR_SENTINEL = "CIRCULAR_POISON_VALUE"


class EventStore:
    """Ordered collections of spans accumulated over one run.

    Also carries ``last_boundary``, the instant the most recent sequential
    event (inclusion exit or parsed function) ended. The next function span
    starts strictly after it.
    """

    def __init__(self):
        self.inclusions: dict[str, InclusionRecord] = {}
        self.inclusion_stack: list[str] = []
        self.stages: list[StageRecord] = []
        self.pending_stage: StageRecord | None = None
        self.scopes: list[ScopeRecord] = []
        self.functions: list[FunctionRecord] = []
        self.last_boundary = 0
        self.last_function_had_scope = False

    def is_open(self, file_id: str) -> bool:
        """True while ``file_id`` has a start and no end."""
        record = self.inclusions.get(file_id)
        return record is not None and record.is_open

    def closed_inclusions(self) -> list[InclusionRecord]:
        """Closed inclusion records in first-seen order, sentinel excluded."""
        return [
            record
            for file_id, record in self.inclusions.items()
            if file_id != CIRCULAR_SENTINEL and not record.is_open
        ]

    def counts(self) -> dict[str, int]:
        return {
            "inclusions": len(self.closed_inclusions()),
            "open_inclusions": len(self.inclusion_stack),
            "stages": len(self.stages) + (1 if self.pending_stage else 0),
            "scopes": len(self.scopes),
            "functions": len(self.functions),
        }

    def clear(self) -> None:
        """Drop all recorded data."""
        self.inclusions.clear()
        self.inclusion_stack.clear()
        self.stages.clear()
        self.pending_stage = None
        self.scopes.clear()
        self.functions.clear()
        self.last_boundary = 0
        self.last_function_had_scope = False
