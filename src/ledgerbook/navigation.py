from __future__ import annotations

import logging
from typing import Callable


logger = logging.getLogger(__name__)

DepthListener = Callable[[int], None]


class NavigationDepth:
    """
    How many screens deep the user currently is, with change notification.

    Owned by the presentation layer and passed to whatever needs it.
    """

    def __init__(self, initial: int = 0) -> None:
        self._depth = max(0, int(initial))
        self._listeners: list[DepthListener] = []

    @property
    def depth(self) -> int:
        return self._depth

    def increment(self) -> int:
        self._depth += 1
        self._notify()
        return self._depth

    def decrement(self) -> int:
        self._depth = max(0, self._depth - 1)
        self._notify()
        return self._depth

    def subscribe(self, callback: DepthListener) -> Callable[[], None]:
        """
        Register `callback(depth)`; returns a function that unsubscribes it.
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        # Copy: a listener may unsubscribe while we iterate.
        for cb in list(self._listeners):
            cb(self._depth)
        logger.debug("Navigation depth is now %d (listeners=%d)", self._depth, len(self._listeners))
