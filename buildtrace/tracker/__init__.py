"""Interval tracking module."""

from .functions import FunctionRecorder
from .tracker import BOUNDARY_GAP_NS, InclusionTracker, StageTracker

__all__ = ["BOUNDARY_GAP_NS", "FunctionRecorder", "InclusionTracker", "StageTracker"]
