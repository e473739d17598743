"""
Reveal Transitions
Per-frame scale ramp for beads that just became visible.
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional

from beadcrafter.config import REVEAL_DURATION_MS, REVEAL_FRAME_INTERVAL_MS
from beadcrafter.controller.timers import PeriodicTimer, QtPeriodicTimer

logger = logging.getLogger(__name__)

ScaleSetter = Callable[[float], None]


def elastic_ease(progress: float) -> float:
    """Overshooting ease, 0 -> 0 and 1 -> 1."""
    p = min(max(progress, 0.0), 1.0)
    return 1.0 - (1.0 - p) ** 3 * math.cos(p * math.pi * 2.0)


@dataclass
class _Transition:
    apply: ScaleSetter
    start_time: float
    start_scale: float
    target_scale: float


class RevealAnimator:
    """
    Runs reveal transitions on their own frame timer, independent of the
    playback timer. Progress is based on elapsed time, so a slow frame
    never stretches the transition.

    Starting a transition for a key that is still animating replaces it.
    """

    def __init__(
        self,
        timer: Optional[PeriodicTimer] = None,
        duration_ms: float = REVEAL_DURATION_MS,
        frame_interval_ms: int = REVEAL_FRAME_INTERVAL_MS,
        clock: Callable[[], float] = time.perf_counter,
        on_frame: Optional[Callable[[], None]] = None
    ) -> None:
        self._timer: PeriodicTimer = timer if timer is not None else QtPeriodicTimer()
        self._duration_s = duration_ms / 1000.0
        self._frame_interval_ms = frame_interval_ms
        self._clock = clock
        self._on_frame = on_frame
        self._transitions: Dict[Hashable, _Transition] = {}

    @property
    def active_count(self) -> int:
        return len(self._transitions)

    def is_animating(self, key: Hashable) -> bool:
        return key in self._transitions

    def start(self, key: Hashable, apply: ScaleSetter, start_scale: float = 0.0, target_scale: float = 1.0) -> None:
        apply(start_scale)
        self._transitions[key] = _Transition(
            apply=apply,
            start_time=self._clock(),
            start_scale=start_scale,
            target_scale=target_scale,
        )
        if not self._timer.is_active:
            self._timer.start(self._frame_interval_ms, self.advance)

    def cancel(self, key: Hashable) -> None:
        self._transitions.pop(key, None)
        if not self._transitions:
            self._timer.stop()

    def cancel_all(self) -> None:
        """Drop every transition; scales stay where they are."""
        self._transitions.clear()
        self._timer.stop()

    def advance(self) -> None:
        """One frame: update every transition, drop the finished ones."""
        if not self._transitions:
            self._timer.stop()
            return

        now = self._clock()
        finished = []
        for key, tr in self._transitions.items():
            progress = 1.0 if self._duration_s <= 0 else min((now - tr.start_time) / self._duration_s, 1.0)
            eased = elastic_ease(progress)
            tr.apply(tr.start_scale + (tr.target_scale - tr.start_scale) * eased)
            if progress >= 1.0:
                finished.append(key)

        for key in finished:
            del self._transitions[key]

        if not self._transitions:
            self._timer.stop()

        if self._on_frame is not None:
            self._on_frame()
