"""
Periodic Timers
===============
A minimal timer service used by the playback controller.

Why is this file needed?
------------------------
The controller only needs "call me every N ms until I say stop". Hiding the
Qt timer behind this protocol keeps the state machine free of Qt and lets
tests tick it by hand.

Classes:
    PeriodicTimer: The protocol.
    QtPeriodicTimer: QTimer backed implementation (needs a running Qt event loop).
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QTimer, Qt

logger = logging.getLogger(__name__)


class PeriodicTimer(Protocol):
    @property
    def is_active(self) -> bool: ...

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        """(Re)start ticking; any previous schedule is replaced."""
        ...

    def stop(self) -> None:
        """Cancel; no callback runs after this returns."""
        ...


class QtPeriodicTimer:
    def __init__(self) -> None:
        self._timer = QTimer()
        self._timer.setTimerType(Qt.PreciseTimer)
        self._callback: Optional[Callable[[], None]] = None
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    def _on_timeout(self) -> None:
        # A timeout already queued when stop() ran finds no callback
        if self._callback is not None:
            self._callback()
