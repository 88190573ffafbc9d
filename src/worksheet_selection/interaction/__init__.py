"""Mouse gesture arbitration."""

from .drag import DragDecision, DragGestureArbiter

__all__ = ["DragDecision", "DragGestureArbiter"]
