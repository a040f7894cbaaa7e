"""Output sinks for the trace artifact."""

import io
from pathlib import Path
from typing import Protocol

from ..errors import SinkError
from ..logging_config import get_logger

logger = get_logger(__name__)


class ITraceSink(Protocol):
    """Destination for one serialized trace document."""

    def write(self, text: str) -> None:
        """Write the whole document."""
        ...

    def close(self) -> None:
        """Flush and close the destination."""
        ...

    def discard(self) -> None:
        """Close without leaving an artifact behind."""
        ...


class FileTraceSink:
    """Writes the trace to a file, removing it again if the write fails."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        try:
            self._file: io.TextIOBase | None = open(self.path, "w", encoding="utf-8")
        except OSError as e:
            raise SinkError(f"Couldn't open {self.path} for writing: {e}") from e

    @property
    def closed(self) -> bool:
        return self._file is None

    def write(self, text: str) -> None:
        if self._file is None:
            raise SinkError(f"Trace sink {self.path} is already closed")
        try:
            self._file.write(text)
        except (OSError, ValueError) as e:
            self.discard()
            raise SinkError(f"Couldn't write trace to {self.path}: {e}") from e

    def close(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as e:
            self._file = None
            self._unlink()
            raise SinkError(f"Couldn't close trace file {self.path}: {e}") from e
        self._file = None

    def discard(self) -> None:
        if self._file is not None:
            try:
                self._file.close()
            except OSError as e:
                logger.debug("Ignoring close error on %s: %s", self.path, e)
            self._file = None
        self._unlink()

    def _unlink(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Couldn't remove partial trace %s: %s", self.path, e)


class MemoryTraceSink:
    """Keeps the document in memory."""

    def __init__(self):
        self._buffer = io.StringIO()
        self.closed = False
        self.value: str | None = None

    def write(self, text: str) -> None:
        if self.closed:
            raise SinkError("Trace sink is already closed")
        self._buffer.write(text)

    def close(self) -> None:
        if not self.closed:
            self.value = self._buffer.getvalue()
            self.closed = True

    def discard(self) -> None:
        self._buffer = io.StringIO()
        self.value = None
        self.closed = True
