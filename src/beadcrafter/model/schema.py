"""
Pattern Schema (Data Model)
===========================
Core data types for bead patterns and for everything derived from them.

Why is this file needed?
------------------------
1. Input types: Pattern / Row / SplitGroup / Bead describe WHAT is built.
2. Derived types: PositionedBead / StringSegment are immutable snapshots
   produced by the layout engine and consumed by the renderer.
3. Playback: PlaybackState is the record owned by the playback controller.

Classes:
    Pattern, Row, SplitGroup, Bead: Declarative pattern description.
    ViewSettings: Presentational spacing and string color.
    Position, PositionedBead, StringSegment: Layout output.
    PlaybackState: Current step / total steps / playing / speed.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Optional, TYPE_CHECKING

import numpy as np

from beadcrafter.config import DEFAULT_BEAD_SPACING, DEFAULT_ROW_SPACING, DEFAULT_STRING_COLOR

if TYPE_CHECKING:
    import numpy.typing as npt


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class RowType(StrEnum):
    SINGLE = "single"
    SPLIT = "split"

class GroupSide(StrEnum):
    """Which limb a split group represents."""
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"

class StringSide(StrEnum):
    LEFT = "left"
    RIGHT = "right"


# ------------------------------------------------------------------------------
# Pattern description
# ------------------------------------------------------------------------------
@dataclass
class Bead:
    id: str
    color_code: str  # e.g. "P", "W", "B", "MB"


@dataclass
class SplitGroup:
    """One limb-like strand of a split row."""
    id: str
    side: GroupSide
    beads: List[Bead] = field(default_factory=list)


@dataclass
class Row:
    """
    One horizontal row of the pattern.

    Single rows use 'beads'. Split rows use 'split_groups'; a split row with
    split_groups=None was declared without group data and yields no beads.
    """
    id: str
    row_type: RowType = RowType.SINGLE
    beads: List[Bead] = field(default_factory=list)
    split_groups: Optional[List[SplitGroup]] = None

    def emitted_beads(self) -> List[Bead]:
        """Beads in the order the layout engine emits them."""
        if self.row_type == RowType.SINGLE:
            return list(self.beads)
        if self.split_groups is None:
            return []
        return [bead for group in self.split_groups for bead in group.beads]


@dataclass
class Pattern:
    id: str
    name: str
    rows: List[Row] = field(default_factory=list)
    description: Optional[str] = None
    color_palette: List[str] = field(default_factory=list)

    def total_beads(self) -> int:
        return sum(len(row.emitted_beads()) for row in self.rows)

    def validate_identities(self) -> List[str]:
        """
        Returns ids that occur more than once (rows and beads are checked
        separately). An empty list means the pattern is well formed.
        """
        row_counts = Counter(row.id for row in self.rows)
        bead_ids: List[str] = []
        for row in self.rows:
            bead_ids.extend(b.id for b in row.beads)
            for group in row.split_groups or []:
                bead_ids.extend(b.id for b in group.beads)
        bead_counts = Counter(bead_ids)

        duplicates = [rid for rid, n in row_counts.items() if n > 1]
        duplicates += [bid for bid, n in bead_counts.items() if n > 1]
        return duplicates


@dataclass(frozen=True)
class ViewSettings:
    """Purely presentational; never influences assembly order."""
    bead_spacing: float = DEFAULT_BEAD_SPACING
    row_spacing: float = DEFAULT_ROW_SPACING
    string_color: str = DEFAULT_STRING_COLOR


# ------------------------------------------------------------------------------
# Derived (layout output)
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Position:
    x: float
    y: float
    z: float = 0.0

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


@dataclass(frozen=True)
class PositionedBead:
    id: str
    color_code: str
    position: Position
    row_index: int
    bead_index: int  # index within its row or split group
    assembly_step: int
    group_id: Optional[str] = None


@dataclass(frozen=True)
class StringSegment:
    id: str
    start: Position
    end: Position
    side: StringSide
    assembly_step: int  # step of the earlier bead


# ------------------------------------------------------------------------------
# Playback
# ------------------------------------------------------------------------------
@dataclass
class PlaybackState:
    current_step: int = 0
    total_steps: int = 0
    is_playing: bool = False
    speed: float = 1.0
