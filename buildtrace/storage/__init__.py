"""Event store module."""

from .store import CIRCULAR_SENTINEL, EventStore

__all__ = ["CIRCULAR_SENTINEL", "EventStore"]
