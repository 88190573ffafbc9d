"""SelectionNotifier: callback registry with a re-entrancy guard."""

from __future__ import annotations

import functools
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionEvent:
    """A change to the selection between two indices (inclusive).

    ``is_adjusting`` is True while a gesture is still being drawn.
    """

    first_index: int
    last_index: int
    is_adjusting: bool = False

    def to_dict(self) -> dict:
        return {
            "firstIndex": self.first_index,
            "lastIndex": self.last_index,
            "isAdjusting": self.is_adjusting,
        }


SelectionCallback = Callable[[SelectionEvent], Any]


class SelectionNotifier:
    """Delivers SelectionEvents to registered callbacks.

    While callbacks run, ``is_notifying`` is True. Mutators wrapped with
    :func:`guarded` that are called during that window are queued and run,
    in call order, once the current delivery has finished.
    """

    def __init__(self) -> None:
        self._callbacks: list[SelectionCallback] = []
        self._pending: deque[Callable[[], Any]] = deque()
        self._notifying = False

    @property
    def is_notifying(self) -> bool:
        return self._notifying

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def on_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(event)."""
        self._callbacks.append(callback)

    def remove_listener(self, callback: SelectionCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def defer(self, operation: Callable[[], Any]) -> None:
        self._pending.append(operation)

    def notify(self, event: SelectionEvent) -> None:
        """Deliver ``event`` to every callback, then run deferred mutators."""
        self._notifying = True
        try:
            for cb in list(self._callbacks):
                cb(event)
        except Exception:
            logger.warning(
                "Selection listener raised; discarding %d deferred change(s)",
                len(self._pending),
            )
            self._pending.clear()
            raise
        finally:
            self._notifying = False
        try:
            while self._pending:
                self._pending.popleft()()
        except Exception:
            logger.warning(
                "Deferred selection change raised; discarding %d queued change(s)",
                len(self._pending),
            )
            self._pending.clear()
            raise

    def __repr__(self) -> str:
        return (
            f"SelectionNotifier(listeners={len(self._callbacks)}, "
            f"pending={len(self._pending)})"
        )


def guarded(method: Callable) -> Callable:
    """Defer a mutator while its owner's notifier is delivering events.

    The owner exposes the notifier as ``self.notifier`` (None is allowed and
    means "not attached": the call goes straight through).
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        notifier = self.notifier
        if notifier is not None and notifier.is_notifying:
            logger.debug("Deferring %s during notification", method.__name__)
            notifier.defer(functools.partial(wrapper, self, *args, **kwargs))
            return None
        return method(self, *args, **kwargs)

    return wrapper
