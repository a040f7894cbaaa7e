"""Project-level configuration and output destination helpers."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parent.parent

TRACE_FILE_ENV = "BUILDTRACE_TRACE_FILE"
TRACE_DIR_ENV = "BUILDTRACE_TRACE_DIR"

TRACE_FLAG = "trace"
TRACE_DIR_FLAG = "trace-dir"
TRACE_PREFIX = "trace_"
TRACE_SUFFIX = ".json"

PathLike = Union[str, Path]


@dataclass
class OutputSettings:
    """Where the trace artifact goes. At most one field is set."""

    trace_file: str | None = None
    trace_dir: str | None = None


def load_output_settings() -> OutputSettings:
    """Read the output selection from the environment."""
    return OutputSettings(
        trace_file=os.getenv(TRACE_FILE_ENV) or None,
        trace_dir=os.getenv(TRACE_DIR_ENV) or None,
    )


def parse_plugin_args(pairs: list[tuple[str, str]]) -> OutputSettings:
    """Parse host-style ``key=value`` plugin arguments.

    Accepts no argument (default temp file), ``trace=FILENAME`` or
    ``trace-dir=DIRECTORY``.
    """
    if not pairs:
        return OutputSettings()

    if len(pairs) == 1:
        key, value = pairs[0]
        if key == TRACE_FLAG:
            return OutputSettings(trace_file=value)
        if key == TRACE_DIR_FLAG:
            return OutputSettings(trace_dir=value)

    raise ConfigError(
        f"Arguments must be {TRACE_FLAG}=FILENAME or {TRACE_DIR_FLAG}=DIRECTORY"
    )


def select_output_settings(argv: list[str]) -> OutputSettings:
    """Output selection from ``key=value`` arguments, else the environment."""
    if not argv:
        return load_output_settings()

    pairs = []
    for item in argv:
        key, sep, value = item.partition("=")
        if not sep or not value:
            raise ConfigError(
                f"Arguments must be {TRACE_FLAG}=FILENAME or {TRACE_DIR_FLAG}=DIRECTORY"
            )
        pairs.append((key, value))
    return parse_plugin_args(pairs)


def _unique_trace_file(directory: PathLike) -> Path:
    try:
        fd, name = tempfile.mkstemp(
            prefix=TRACE_PREFIX, suffix=TRACE_SUFFIX, dir=str(directory)
        )
    except OSError as e:
        raise ConfigError(f"Can't create trace file in {directory}: {e}") from e
    os.close(fd)
    return Path(name)


def resolve_output_destination(
    trace_file: PathLike | None = None,
    trace_dir: PathLike | None = None,
) -> Path:
    """Resolve the output selection to a concrete file path.

    Unique files (directory or default selection) are created right away so
    an unwritable location fails at startup rather than at the end of the run.
    """
    if trace_file and trace_dir:
        raise ConfigError("Only one of trace file and trace directory may be set")

    if trace_file:
        return Path(trace_file)

    if trace_dir:
        directory = Path(trace_dir)
        if not directory.is_dir():
            raise ConfigError(f"Trace directory {directory} does not exist")
        return _unique_trace_file(directory)

    return _unique_trace_file(tempfile.gettempdir())
