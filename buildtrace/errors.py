"""Exception types raised by the trace engine."""


class TraceError(Exception):
    """Base class for trace engine errors."""


class ContractViolation(TraceError, RuntimeError):
    """Host notifications arrived unpaired or out of order."""


class SinkError(TraceError):
    """The trace artifact could not be written."""


class ConfigError(TraceError, ValueError):
    """Invalid output destination selection."""
