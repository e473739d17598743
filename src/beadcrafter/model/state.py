"""
Viewer Session (State)
======================
This module defines the central state object of one running viewer.

Why is this file needed?
------------------------
1. State Management: It holds the current pattern and view settings in one
   place. Each viewer owns its own session; there are no module globals.
2. Derived data: Every change recomputes positions, segments and the total
   step count into an immutable AssemblySnapshot (explicit invalidation).
3. Decoupling: Views and the playback controller subscribe to snapshots;
   only the session writes them.

Classes:
    AssemblySnapshot: Immutable layout + connector output.
    ViewerSession: The container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Callable, List, Optional, Tuple

from beadcrafter.model.layout import compute_positions, compute_segments
from beadcrafter.model.schema import Pattern, ViewSettings, PositionedBead, StringSegment

logger = logging.getLogger(__name__)

SnapshotListener = Callable[["AssemblySnapshot"], None]


@dataclass(frozen=True)
class AssemblySnapshot:
    beads: Tuple[PositionedBead, ...] = ()
    segments: Tuple[StringSegment, ...] = ()
    settings: ViewSettings = field(default_factory=ViewSettings)

    @property
    def total_steps(self) -> int:
        return len(self.beads)


class ViewerSession:
    """
    Owns pattern + settings and the snapshot derived from them.
    Pass this instance to the controller and the views.
    """

    def __init__(self, pattern: Optional[Pattern] = None, settings: Optional[ViewSettings] = None) -> None:
        self._pattern: Optional[Pattern] = pattern
        self._settings: ViewSettings = settings or ViewSettings()
        self._listeners: List[SnapshotListener] = []
        self._snapshot: AssemblySnapshot = self._compute()

    @property
    def pattern(self) -> Optional[Pattern]:
        return self._pattern

    @property
    def settings(self) -> ViewSettings:
        return self._settings

    @property
    def snapshot(self) -> AssemblySnapshot:
        return self._snapshot

    def set_pattern(self, pattern: Optional[Pattern]) -> None:
        self._pattern = pattern
        if pattern is not None:
            duplicates = pattern.validate_identities()
            if duplicates:
                logger.warning(f"Pattern '{pattern.id}' has duplicate ids: {duplicates}")
        self._invalidate()

    def set_settings(self, settings: ViewSettings) -> None:
        self._settings = settings
        self._invalidate()

    def update_settings(self, **changes) -> None:
        """Shortcut, e.g. session.update_settings(row_spacing=0.8)."""
        self.set_settings(replace(self._settings, **changes))

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _compute(self) -> AssemblySnapshot:
        if self._pattern is None:
            return AssemblySnapshot(settings=self._settings)
        beads = compute_positions(self._pattern, self._settings)
        segments = compute_segments(beads)
        return AssemblySnapshot(beads=tuple(beads), segments=tuple(segments), settings=self._settings)

    def _invalidate(self) -> None:
        # The previous snapshot is dropped wholesale, no diffing
        self._snapshot = self._compute()
        logger.debug(f"Snapshot recomputed: {self._snapshot.total_steps} steps.")
        for listener in list(self._listeners):
            listener(self._snapshot)
