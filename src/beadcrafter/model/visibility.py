"""
Visibility Rules
Maps the current assembly step to what a renderer must show.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, TYPE_CHECKING

import numpy as np

from beadcrafter.model.schema import PositionedBead, StringSegment

if TYPE_CHECKING:
    import numpy.typing as npt


class VisibilitySynchronizer(Protocol):
    """Contract a rendering back-end implements for the playback controller."""

    def update_visibility(self, current_step: int) -> None:
        """Show beads up to current_step and reveal the bead placed at it."""
        ...

    def show_all(self) -> None:
        """Show everything at full scale, without reveal transitions."""
        ...


@dataclass(frozen=True)
class VisibilityFrame:
    bead_visible: npt.NDArray[np.bool_]
    segment_visible: npt.NDArray[np.bool_]
    # Indices (into the bead sequence) that just appeared at this step
    revealed: npt.NDArray[np.int_]


def compute_visibility(
    beads: Sequence[PositionedBead],
    segments: Sequence[StringSegment],
    current_step: int
) -> VisibilityFrame:
    """
    Beads are visible up to and including the current step. Strings lag one
    step behind (strict <), so a string appears once both ends exist.
    """
    bead_steps = np.fromiter((b.assembly_step for b in beads), dtype=np.int_, count=len(beads))
    seg_steps = np.fromiter((s.assembly_step for s in segments), dtype=np.int_, count=len(segments))

    return VisibilityFrame(
        bead_visible=bead_steps <= current_step,
        segment_visible=seg_steps < current_step,
        revealed=np.flatnonzero(bead_steps == current_step),
    )


def show_all_frame(beads: Sequence[PositionedBead], segments: Sequence[StringSegment]) -> VisibilityFrame:
    return VisibilityFrame(
        bead_visible=np.ones(len(beads), dtype=np.bool_),
        segment_visible=np.ones(len(segments), dtype=np.bool_),
        revealed=np.empty(0, dtype=np.int_),
    )
