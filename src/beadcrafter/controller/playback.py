"""
Playback Controller
===================
Steps through the assembly order of a pattern, one bead at a time.

Why is this file needed?
------------------------
1. State Machine: It is the only writer of PlaybackState (current step,
   total steps, playing flag, speed). Two states: paused and playing.
2. Timing: While playing, one repeating timer advances the step. The period
   is BASE_INTERVAL_MS / speed; changing speed restarts the timer at once.
3. Synchronization: After every transition it updates the renderer (through
   the VisibilitySynchronizer) and then the step listeners, always with the
   new step.

Every transport operation is total: out of range seeks are clamped and calls
at a boundary (or with an empty pattern) do nothing. Nothing here raises.
"""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Callable, List, Optional

from beadcrafter.config import BASE_INTERVAL_MS
from beadcrafter.controller.timers import PeriodicTimer, QtPeriodicTimer
from beadcrafter.model.schema import PlaybackState
from beadcrafter.model.visibility import VisibilitySynchronizer

logger = logging.getLogger(__name__)

StepListener = Callable[[int], None]
PlayingListener = Callable[[bool], None]


class PlaybackController:
    def __init__(
        self,
        synchronizer: Optional[VisibilitySynchronizer] = None,
        timer: Optional[PeriodicTimer] = None,
        total_steps: int = 0,
        base_interval_ms: float = BASE_INTERVAL_MS
    ) -> None:
        self._synchronizer = synchronizer
        self._timer: PeriodicTimer = timer if timer is not None else QtPeriodicTimer()
        self._base_interval_ms = base_interval_ms
        self._state = PlaybackState(total_steps=max(0, total_steps))
        self._step_listeners: List[StepListener] = []
        self._playing_listeners: List[PlayingListener] = []
        self._disposed = False

    # ------------------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        """A copy; mutating it has no effect on the controller."""
        return replace(self._state)

    @property
    def current_step(self) -> int:
        return self._state.current_step

    @property
    def total_steps(self) -> int:
        return self._state.total_steps

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def speed(self) -> float:
        return self._state.speed

    @property
    def interval_ms(self) -> float:
        """Timer period for the current speed."""
        return self._base_interval_ms / self._state.speed

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    # ------------------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------------------

    def subscribe(self, listener: StepListener) -> Callable[[], None]:
        """Step-change subscription; returns an unsubscribe callable."""
        self._step_listeners.append(listener)
        return lambda: self._remove(self._step_listeners, listener)

    def subscribe_playing(self, listener: PlayingListener) -> Callable[[], None]:
        self._playing_listeners.append(listener)
        return lambda: self._remove(self._playing_listeners, listener)

    @staticmethod
    def _remove(listeners: list, listener) -> None:
        if listener in listeners:
            listeners.remove(listener)

    # ------------------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------------------

    def play(self) -> None:
        if self._disposed or self._state.is_playing:
            return
        if self._state.total_steps == 0:
            logger.debug("play() ignored, nothing to play.")
            return

        self._set_playing(True)
        logger.debug(f"Playing from step {self._state.current_step} every {self.interval_ms:.0f} ms.")
        self._timer.start(round(self.interval_ms), self._on_tick)

    def pause(self) -> None:
        if self._disposed:
            return
        self._timer.stop()
        if self._state.is_playing:
            self._set_playing(False)
            logger.debug(f"Paused at step {self._state.current_step}.")

    def stop(self) -> None:
        if self._disposed:
            return
        self.pause()
        if self._state.total_steps == 0:
            return
        self._state.current_step = 0
        self._notify()

    def step_forward(self) -> None:
        if self._disposed or self._state.current_step >= self._state.total_steps - 1:
            return
        self._state.current_step += 1
        self._notify()

    def step_backward(self) -> None:
        if self._disposed or self._state.current_step <= 0:
            return
        self._state.current_step -= 1
        self._notify()

    def go_to_step(self, step: int) -> None:
        if self._disposed or self._state.total_steps == 0:
            return
        self._state.current_step = self._clamp(step, self._state.total_steps)
        self._notify()

    def go_to_end(self) -> None:
        """Jump to the last step and show everything without pop-in."""
        if self._disposed or self._state.total_steps == 0:
            return
        self._state.current_step = self._state.total_steps - 1
        self._notify(show_all=True)

    def set_speed(self, speed: float) -> None:
        if self._disposed:
            return
        if not isinstance(speed, (int, float)) or not math.isfinite(speed) or speed <= 0:
            logger.warning(f"Ignoring invalid playback speed: {speed!r}")
            return

        self._state.speed = float(speed)
        # Restart so the new period applies now, not after the next tick
        if self._state.is_playing:
            self.pause()
            self.play()

    def set_total_steps(self, total_steps: int) -> None:
        """New layout: re-clamp the current step and resync the renderer."""
        if self._disposed:
            return
        total_steps = max(0, int(total_steps))
        self._state.total_steps = total_steps

        if total_steps == 0:
            self.pause()
            self._state.current_step = 0
        else:
            self._state.current_step = self._clamp(self._state.current_step, total_steps)

        self._notify()

    def dispose(self) -> None:
        if self._disposed:
            return
        self.pause()
        self._step_listeners.clear()
        self._playing_listeners.clear()
        self._synchronizer = None
        self._disposed = True
        logger.debug("Playback controller disposed.")

    # ------------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------------

    @staticmethod
    def _clamp(step: int, total_steps: int) -> int:
        return int(max(0, min(step, total_steps - 1)))

    def _on_tick(self) -> None:
        if self._disposed or not self._state.is_playing:
            return

        if self._state.current_step >= self._state.total_steps - 1:
            self.pause()
            return

        self._state.current_step += 1
        self._notify()

    def _set_playing(self, playing: bool) -> None:
        self._state.is_playing = playing
        for listener in list(self._playing_listeners):
            listener(playing)

    def _notify(self, show_all: bool = False) -> None:
        """State is already updated; renderer first, then listeners."""
        step = self._state.current_step
        if self._synchronizer is not None:
            if show_all:
                self._synchronizer.show_all()
            else:
                self._synchronizer.update_visibility(step)

        for listener in list(self._step_listeners):
            listener(step)
