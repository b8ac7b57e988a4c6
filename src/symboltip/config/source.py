"""Snapshot-based source of QuickInfoFlags.

Consumers take one immutable snapshot per request. Replacing the flags
notifies subscribers; snapshots already handed out are unaffected.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from symboltip.config.models import QuickInfoFlags

if TYPE_CHECKING:
    from symboltip.config.models import SymbolTipConfig

log = structlog.get_logger()

ConfigListener = Callable[[QuickInfoFlags], None]


class MutableConfigSource:
    """Holds the current flags and the listeners interested in changes."""

    def __init__(self, flags: QuickInfoFlags | None = None) -> None:
        self._flags = flags or QuickInfoFlags()
        self._listeners: list[ConfigListener] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: SymbolTipConfig) -> MutableConfigSource:
        return cls(config.quick_info)

    def snapshot(self) -> QuickInfoFlags:
        return self._flags

    def update(self, flags: QuickInfoFlags) -> None:
        """Swap in new flags and notify listeners."""
        with self._lock:
            self._flags = flags
            listeners = list(self._listeners)
        log.debug("quick_info_flags_updated", listeners=len(listeners))
        for listener in listeners:
            listener(flags)

    def subscribe(self, listener: ConfigListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
