"""Interval tracking for nested inclusions and sequential stages."""

from ..clock import Clock
from ..errors import ContractViolation
from ..logging_config import get_logger
from ..models import Category, InclusionRecord, StageRecord, TimeSpan
from ..storage import CIRCULAR_SENTINEL, EventStore

logger = get_logger(__name__)

# Gap left after an inclusion exit so the next span never shares its instant
BOUNDARY_GAP_NS = 3


class InclusionTracker:
    """Stack of currently open file inclusions."""

    def __init__(self, store: EventStore, clock: Clock):
        self._store = store
        self._clock = clock

    def enter(self, file_id: str) -> str:
        """Open an inclusion. Returns the key pushed on the stack.

        Entering a file that is still open is a circular inclusion: the
        circular sentinel is pushed instead, and never reaches the output.
        """
        now = self._clock.now()

        if self._store.is_open(file_id):
            logger.debug("Circular inclusion of %s", file_id)
            file_id = CIRCULAR_SENTINEL

        # First-seen start wins
        if file_id not in self._store.inclusions:
            self._store.inclusions[file_id] = InclusionRecord(file_id=file_id, start=now)

        self._store.inclusion_stack.append(file_id)
        return file_id

    def leave(self) -> str:
        """Close the innermost open inclusion. Returns its key."""
        if not self._store.inclusion_stack:
            raise ContractViolation("file_leave without a matching file_enter")

        now = self._clock.now()
        file_id = self._store.inclusion_stack.pop()

        # First close wins
        record = self._store.inclusions[file_id]
        if record.is_open:
            record.end = now

        # Function ends may already sit past the clock; never move the boundary back
        self._store.last_boundary = max(self._store.last_boundary, now) + BOUNDARY_GAP_NS
        return file_id

    def force_close_all(self) -> None:
        """Close every open inclusion. Safe to call repeatedly."""
        while self._store.inclusion_stack:
            self.leave()

    @property
    def depth(self) -> int:
        return len(self._store.inclusion_stack)


class StageTracker:
    """Sequential stages: each new stage closes the previous one."""

    def __init__(self, store: EventStore, clock: Clock):
        self._store = store
        self._clock = clock

    def start_stage(self, label: str, category: Category, order: int) -> None:
        now = self._clock.now()

        pending = self._store.pending_stage
        if pending is not None:
            pending.span.end = now
            self._store.stages.append(pending)

        self._store.pending_stage = StageRecord(
            label=label,
            category=category,
            order=order,
            span=TimeSpan(start=now + 1, end=now + 1),
        )

    def flush(self) -> None:
        """Close the pending stage, if any, at the current instant."""
        pending = self._store.pending_stage
        if pending is None:
            return
        pending.span.end = max(self._clock.now(), pending.span.start)
        self._store.stages.append(pending)
        self._store.pending_stage = None
