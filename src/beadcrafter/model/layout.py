"""
Assembly Layout
===============
Maps a pattern to 3D bead positions and connecting string segments.

Why is this file needed?
------------------------
1. Build order: It assigns every bead its assembly step. Steps are dense,
   zero-based and follow row order, then group order, then bead order.
2. Geometry: It places beads in space from the view settings. Spacing never
   changes the build order.
3. Strings: It links consecutive beads (in build order) with segments. This
   is a visual proxy, not a physical routing of the two strands.

Both entry points are pure: same input, same output, no hidden counters.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from beadcrafter.config import SPLIT_SIDE_OFFSET_X, SPLIT_DEPTH_OFFSET_Z, SPLIT_ROW_DESCENT
from beadcrafter.model.schema import (
    Pattern, ViewSettings, Position, PositionedBead, StringSegment,
    RowType, GroupSide, StringSide
)

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _split_offsets(side: GroupSide) -> Tuple[float, float]:
    """(x, z) shared by every bead of a split group."""
    match side:
        case GroupSide.LEFT:
            return -SPLIT_SIDE_OFFSET_X, SPLIT_DEPTH_OFFSET_Z
        case GroupSide.RIGHT:
            return SPLIT_SIDE_OFFSET_X, SPLIT_DEPTH_OFFSET_Z
        case _:
            return 0.0, 0.0


def compute_positions(pattern: Pattern, settings: ViewSettings) -> List[PositionedBead]:
    """
    Compute 3D positions and assembly steps for all beads in a pattern.

    Rows stack downward (row i sits at y = -i * row_spacing). Single rows are
    centered on x = 0. Split rows place each group on its side and let the
    group's beads descend from the row baseline.
    """
    beads: List[PositionedBead] = []
    assembly_step = 0

    b_spacing = settings.bead_spacing
    r_spacing = settings.row_spacing

    for row_index, row in enumerate(pattern.rows):
        y = -row_index * r_spacing

        if row.row_type == RowType.SINGLE:
            row_width = (len(row.beads) - 1) * b_spacing
            start_x = -row_width / 2

            for bead_index, bead in enumerate(row.beads):
                beads.append(PositionedBead(
                    id=bead.id,
                    color_code=bead.color_code,
                    position=Position(start_x + bead_index * b_spacing, y, 0.0),
                    row_index=row_index,
                    bead_index=bead_index,
                    assembly_step=assembly_step,
                ))
                assembly_step += 1

        elif row.row_type == RowType.SPLIT and row.split_groups:
            # Group order is the declaration order, never re-sorted
            for group in row.split_groups:
                offset_x, offset_z = _split_offsets(group.side)

                for bead_index, bead in enumerate(group.beads):
                    local_y = y - bead_index * r_spacing * SPLIT_ROW_DESCENT
                    beads.append(PositionedBead(
                        id=bead.id,
                        color_code=bead.color_code,
                        position=Position(offset_x, local_y, offset_z),
                        row_index=row_index,
                        bead_index=bead_index,
                        assembly_step=assembly_step,
                        group_id=group.id,
                    ))
                    assembly_step += 1

    logger.debug(f"Layout of '{pattern.id}': {len(beads)} beads in {len(pattern.rows)} rows.")
    return beads


def compute_segments(positioned_beads: Sequence[PositionedBead]) -> List[StringSegment]:
    """
    Connect consecutive beads in build order.

    Segment i joins beads i and i+1 and takes the earlier bead's step. Sides
    alternate left/right by emission index. Beads far apart in space are
    still joined when they are neighbours in build order.
    """
    # sorted() is stable, ties keep their input order
    ordered = sorted(positioned_beads, key=lambda b: b.assembly_step)

    segments: List[StringSegment] = []
    for i in range(len(ordered) - 1):
        current = ordered[i]
        nxt = ordered[i + 1]
        segments.append(StringSegment(
            id=f"seg-{current.id}-{nxt.id}",
            start=current.position,
            end=nxt.position,
            side=StringSide.LEFT if i % 2 == 0 else StringSide.RIGHT,
            assembly_step=current.assembly_step,
        ))

    return segments


def compute_bounds(
    positioned_beads: Sequence[PositionedBead]
) -> Optional[Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]]:
    """Axis aligned (min, max) corners of the bead centers, None if empty."""
    if not positioned_beads:
        return None
    pts = np.array([b.position.to_array() for b in positioned_beads], dtype=np.float64)
    return pts.min(axis=0), pts.max(axis=0)
