"""Converts stored spans into a Chrome trace document and writes it."""

import os
from dataclasses import dataclass, field
from typing import Any

from ..clock import Clock
from ..errors import SinkError, TraceError
from ..logging_config import get_logger
from ..models import Category, TimeSpan, TraceDocument, TraceEventRecord
from ..paths import PathNormalizer
from ..storage import EventStore
from ..tracker import InclusionTracker, StageTracker
from .sink import ITraceSink

logger = get_logger(__name__)

# Events shorter than this are not worth showing
MINIMUM_EVENT_LENGTH_NS = 1_000_000

UNIT_NAME = "TU"


@dataclass
class TraceEvent:
    """A closed span ready for emission."""

    name: str
    category: Category
    span: TimeSpan
    args: dict[str, Any] = field(default_factory=dict)


class TraceEmitter:
    """Drains an EventStore into one trace document."""

    def __init__(
        self,
        store: EventStore,
        clock: Clock,
        normalizer: PathNormalizer,
        inclusions: InclusionTracker,
        stages: StageTracker,
        pid: int | None = None,
    ):
        self._store = store
        self._clock = clock
        self._normalizer = normalizer
        self._inclusions = inclusions
        self._stages = stages
        self._pid = os.getpid() if pid is None else pid
        self._next_uid = 0

    def collect(self) -> list[TraceEvent]:
        """Close everything still open and list events in emission order."""
        self._inclusions.force_close_all()
        self._stages.flush()

        store = self._store
        events = [TraceEvent(UNIT_NAME, Category.UNIT, TimeSpan(0, self._clock.now()))]

        for record in store.closed_inclusions():
            events.append(
                TraceEvent(
                    self._normalizer.resolve(record.file_id),
                    Category.INCLUSION,
                    TimeSpan(record.start, record.end),
                )
            )

        for stage in store.stages:
            events.append(
                TraceEvent(
                    stage.label,
                    stage.category,
                    stage.span,
                    {"static_pass_number": stage.order},
                )
            )

        for function in store.functions:
            events.append(
                TraceEvent(
                    function.signature,
                    Category.FUNCTION,
                    function.span,
                    {"file": self._normalizer.resolve(function.file_id)},
                )
            )

        for scope in store.scopes:
            events.append(TraceEvent(scope.name, scope.category, scope.span))

        return events

    def build_document(self, events: list[TraceEvent]) -> TraceDocument:
        """Pair surviving events into B/E records."""
        records: list[TraceEventRecord] = []
        for event in events:
            if event.span.duration < MINIMUM_EVENT_LENGTH_NS:
                continue
            uid = self._next_uid
            self._next_uid += 1
            records.append(self._record(event, "B", event.span.start, uid))
            records.append(self._record(event, "E", event.span.end, uid))

        return TraceDocument(
            beginningOfTime=self._clock.epoch_us,
            traceEvents=records,
        )

    def _record(
        self, event: TraceEvent, phase: str, ts: int, uid: int
    ) -> TraceEventRecord:
        return TraceEventRecord(
            name=event.name,
            ph=phase,
            cat=event.category,
            ts=ts / 1000,
            pid=self._pid,
            tid=0,
            args={"UID": uid, **event.args},
        )

    def emit(self, sink: ITraceSink) -> int:
        """Write the trace to ``sink`` and close it.

        Returns the number of emitted events (B/E pairs). Any failure is
        fatal: the sink is discarded and SinkError raised.
        """
        try:
            document = self.build_document(self.collect())
            sink.write(document.model_dump_json())
            sink.close()
        except SinkError:
            sink.discard()
            raise
        except (TraceError, OSError, ValueError) as e:
            sink.discard()
            raise SinkError(f"Couldn't serialize trace: {e}") from e

        count = len(document.traceEvents) // 2
        logger.info("Wrote trace with %d events", count)
        self._store.clear()
        return count
