"""
Lifecycle signals emitted while a site is built.

Events: ``parsing``, ``building``, ``rendered``, ``error``, ``built``.
"""

from collections import defaultdict


class Signals:
    """Minimal publish/subscribe registry for build progress."""

    EVENTS = ('parsing', 'building', 'rendered', 'error', 'built')

    def __init__(self):
        self._listeners = defaultdict(list)

    def on(self, event, callback):
        if event not in self.EVENTS:
            raise ValueError(f"Unknown event '{event}', expected one of {', '.join(self.EVENTS)}")
        self._listeners[event].append(callback)
        return callback

    def off(self, event, callback):
        if callback in self._listeners[event]:
            self._listeners[event].remove(callback)

    def emit(self, event, *args):
        for callback in list(self._listeners[event]):
            callback(*args)
