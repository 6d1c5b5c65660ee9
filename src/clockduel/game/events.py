"""
Lightweight event bus for round/match notifications.

The controller publishes what happened in a frame; the HUD, the match
logger and tests subscribe without the controller knowing about them.

Usage:
    bus = EventBus()
    bus.subscribe(GameEvents.ROUND_WON, on_round_won)
    bus.emit(GameEvents.ROUND_WON, player=PlayerId.P1, score=3)
"""

import logging
import threading
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)


class EventBus:
    """Synchronous publish/subscribe with priority ordering."""

    def __init__(self):
        self._listeners = defaultdict(list)  # event_name -> [(priority, callback)]
        self._lock = threading.Lock()

    def subscribe(self, event_name: str, callback: Callable, priority: int = 0):
        """Register a listener. Higher priority runs first."""
        with self._lock:
            self._listeners[event_name].append((priority, callback))
            self._listeners[event_name].sort(key=lambda x: -x[0])
        logger.debug("Subscribed to '%s': %s (priority=%d)",
                     event_name, getattr(callback, "__name__", callback), priority)

    def unsubscribe(self, event_name: str, callback: Callable):
        with self._lock:
            self._listeners[event_name] = [
                (p, cb) for p, cb in self._listeners[event_name] if cb is not callback
            ]

    def emit(self, event_name: str, **kwargs):
        """
        Call every listener of event_name with **kwargs.

        A listener that raises is logged and skipped; the remaining
        listeners still run.
        """
        with self._lock:
            listeners = list(self._listeners.get(event_name, []))

        for _priority, callback in listeners:
            try:
                callback(**kwargs)
            except Exception as e:
                logger.error("Event handler error [%s -> %s]: %s",
                             event_name, getattr(callback, "__name__", callback), e)

    def clear(self, event_name: str = None):
        with self._lock:
            if event_name:
                self._listeners.pop(event_name, None)
            else:
                self._listeners.clear()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return sum(len(cbs) for cbs in self._listeners.values())


class GameEvents:
    """Event names published by the match controller."""

    ROUND_STARTED = "round_started"
    ROUND_WON = "round_won"
    ROUND_TIED = "round_tied"
    ROUND_SOLVED = "round_solved"      # cooperative success
    ROUND_SKIPPED = "round_skipped"
    MATCH_OVER = "match_over"
    HANDS_MISSING = "hands_missing"
