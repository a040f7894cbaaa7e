"""Run-scoped tracing session driven by host notifications."""

from pathlib import Path
from typing import Protocol

from .clock import Clock
from .errors import ContractViolation
from .logging_config import get_logger
from .models import Category
from .output import ITraceSink, TraceEmitter
from .paths import PathNormalizer
from .storage import CIRCULAR_SENTINEL, EventStore
from .tracker import FunctionRecorder, InclusionTracker, StageTracker

logger = get_logger(__name__)

# Pseudo file the host reports for command-line macro definitions
COMMAND_LINE_FILE = "<command-line>"


class ITraceSession(Protocol):
    """Push-style API for one compilation unit."""

    def file_enter(self, path: str | None, directory: str | None = None) -> None:
        """The host started reading an included file."""
        ...

    def file_leave(self) -> None:
        """The host finished the innermost included file."""
        ...

    def declaration_finished(self) -> None:
        """A declaration was fully parsed; preprocessing is over."""
        ...

    def stage_begin(self, label: str, category: Category, order: int) -> None:
        """An optimization stage started."""
        ...

    def function_parsed(
        self,
        signature: str,
        file_path: str,
        enclosing_scope: str | None = None,
        scope_category: Category = Category.UNKNOWN,
    ) -> None:
        """A function body was parsed."""
        ...

    def run_finished(self) -> int:
        """Write the trace. Returns the number of emitted events."""
        ...


class TraceSession:
    """Owns all state of one traced run."""

    def __init__(self, sink: ITraceSink, clock: Clock | None = None):
        self._sink = sink
        self._clock = clock or Clock()
        self._store = EventStore()
        self._normalizer = PathNormalizer()
        self._inclusions = InclusionTracker(self._store, self._clock)
        self._stages = StageTracker(self._store, self._clock)
        self._functions = FunctionRecorder(self._store, self._clock)
        self._emitter = TraceEmitter(
            self._store,
            self._clock,
            self._normalizer,
            self._inclusions,
            self._stages,
        )
        self._finished = False
        self._emitted = 0

    def _check_open(self) -> None:
        if self._finished:
            raise ContractViolation("Run already finished")

    def file_enter(self, path: str | None, directory: str | None = None) -> None:
        """The host started reading an included file."""
        self._check_open()
        if not path or path == COMMAND_LINE_FILE:
            return

        file_id = self._inclusions.enter(path)
        if file_id == CIRCULAR_SENTINEL or not directory:
            return
        self._register_location(path, directory)

    def _register_location(self, path: str, directory: str) -> None:
        try:
            real_dir = Path(directory).resolve(strict=True)
            real_file = Path(path).resolve(strict=True)
        except OSError as e:
            logger.error("Couldn't resolve include location %s: %s", directory, e)
            return

        self._normalizer.register(str(real_file), str(real_dir))
        self._normalizer.alias(path, str(real_file))

    def file_leave(self) -> None:
        """The host finished the innermost included file."""
        self._check_open()
        self._inclusions.leave()

    def declaration_finished(self) -> None:
        """A declaration was fully parsed; preprocessing is over."""
        self._check_open()
        self._inclusions.force_close_all()

    def stage_begin(self, label: str, category: Category, order: int) -> None:
        """An optimization stage started."""
        self._check_open()
        self._stages.start_stage(label, Category(category), order)

    def function_parsed(
        self,
        signature: str,
        file_path: str,
        enclosing_scope: str | None = None,
        scope_category: Category = Category.UNKNOWN,
    ) -> None:
        """A function body was parsed."""
        self._check_open()
        self._functions.record_function(
            signature, file_path, enclosing_scope, Category(scope_category)
        )

    def run_finished(self) -> int:
        """Write the trace. Returns the number of emitted events."""
        self._check_open()
        self._finished = True
        self._emitted = self._emitter.emit(self._sink)
        return self._emitted

    def abandon(self) -> None:
        """Drop the run without writing a trace."""
        if self._finished:
            return
        self._finished = True
        logger.warning("Run abandoned before it finished; no trace written")
        self._sink.discard()
        self._store.clear()

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def sink(self) -> ITraceSink:
        return self._sink

    @property
    def store(self) -> EventStore:
        return self._store

    @property
    def normalizer(self) -> PathNormalizer:
        return self._normalizer

    def status(self) -> dict:
        """Current record counts."""
        return {
            "finished": self._finished,
            "emitted_events": self._emitted,
            **self._store.counts(),
        }
