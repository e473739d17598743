"""Tests for bead placement and assembly order."""

import numpy as np
import pytest

from beadcrafter.config import SPLIT_SIDE_OFFSET_X, SPLIT_DEPTH_OFFSET_Z, SPLIT_ROW_DESCENT
from beadcrafter.model.layout import compute_positions, compute_bounds
from beadcrafter.model.patterns import gecko, penguin, split_row, single_row
from beadcrafter.model.schema import Pattern, GroupSide, Position, ViewSettings


class TestAssemblySteps:
    """Steps are dense, zero-based and follow declaration order."""

    def test_steps_are_dense(self, triangle_pattern, settings):
        """Five beads get steps 0..4."""
        beads = compute_positions(triangle_pattern, settings)

        assert [b.assembly_step for b in beads] == [0, 1, 2, 3, 4]

    def test_emission_order_follows_rows(self, triangle_pattern, settings):
        """Beads come out row by row, left to right."""
        beads = compute_positions(triangle_pattern, settings)

        assert [b.id for b in beads] == ["r1-b0", "r2-b0", "r2-b1", "r2-b2", "r3-b0"]
        assert [b.row_index for b in beads] == [0, 1, 1, 1, 2]
        assert [b.bead_index for b in beads] == [0, 0, 1, 2, 0]

    def test_count_matches_total_beads(self, settings):
        """Layout emits exactly the beads the pattern declares."""
        for pattern in (penguin(), gecko()):
            beads = compute_positions(pattern, settings)
            assert len(beads) == pattern.total_beads()
            assert sorted(b.assembly_step for b in beads) == list(range(len(beads)))

    def test_colors_are_carried(self, triangle_pattern, settings):
        beads = compute_positions(triangle_pattern, settings)

        assert [b.color_code for b in beads] == ["P", "W", "W", "W", "B"]

    def test_empty_pattern(self, empty_pattern, settings):
        """No rows, no beads."""
        assert compute_positions(empty_pattern, settings) == []

    def test_empty_row_emits_nothing(self, settings):
        """A single row with zero beads does not break the step sequence."""
        pattern = Pattern(id="p", name="p", rows=[single_row("r1", "P"), single_row("r2", ""), single_row("r3", "W")])

        beads = compute_positions(pattern, settings)

        assert [b.assembly_step for b in beads] == [0, 1]
        assert beads[1].position.y == pytest.approx(-2.0)


class TestSingleRowGeometry:
    """Single rows are centered on x = 0 and stack downward."""

    def test_row_is_centered(self, triangle_pattern, settings):
        beads = compute_positions(triangle_pattern, settings)
        middle_row = [b for b in beads if b.row_index == 1]

        assert [b.position.x for b in middle_row] == pytest.approx([-1.0, 0.0, 1.0])
        assert sum(b.position.x for b in middle_row) == pytest.approx(0.0)

    def test_one_bead_row_at_origin_x(self, triangle_pattern, settings):
        beads = compute_positions(triangle_pattern, settings)

        assert beads[0].position == Position(0.0, 0.0, 0.0)
        assert beads[4].position.x == pytest.approx(0.0)

    def test_rows_stack_downward(self, triangle_pattern):
        """Row i sits at y = -i * row_spacing."""
        beads = compute_positions(triangle_pattern, ViewSettings(bead_spacing=0.5, row_spacing=0.8))

        assert [b.position.y for b in beads] == pytest.approx([0.0, -0.8, -0.8, -0.8, -1.6])

    def test_bead_spacing_scales_x(self, triangle_pattern):
        beads = compute_positions(triangle_pattern, ViewSettings(bead_spacing=0.65, row_spacing=0.65))
        middle_row = [b for b in beads if b.row_index == 1]

        assert [b.position.x for b in middle_row] == pytest.approx([-0.65, 0.0, 0.65])

    def test_single_rows_are_flat(self, triangle_pattern, settings):
        beads = compute_positions(triangle_pattern, settings)

        assert all(b.position.z == 0.0 for b in beads)
        assert all(b.group_id is None for b in beads)


class TestSplitRows:
    """Split groups are placed on their side and descend from the baseline."""

    def test_split_steps_follow_group_order(self, split_pattern, settings):
        """Left group first, then right group, in declaration order."""
        beads = compute_positions(split_pattern, settings)

        assert [b.id for b in beads] == ["r1-b0", "r2-left-b0", "r2-left-b1", "r2-right-b0"]
        assert [b.assembly_step for b in beads] == [0, 1, 2, 3]
        assert [b.group_id for b in beads] == [None, "r2-left", "r2-left", "r2-right"]

    def test_split_offsets(self, split_pattern, settings):
        beads = compute_positions(split_pattern, settings)
        left_0, left_1, right_0 = beads[1], beads[2], beads[3]

        assert left_0.position.x == pytest.approx(-SPLIT_SIDE_OFFSET_X)
        assert left_0.position.z == pytest.approx(SPLIT_DEPTH_OFFSET_Z)
        assert right_0.position.x == pytest.approx(SPLIT_SIDE_OFFSET_X)
        assert right_0.position.z == pytest.approx(SPLIT_DEPTH_OFFSET_Z)
        # Every bead of a group shares the group's x
        assert left_1.position.x == pytest.approx(left_0.position.x)

    def test_split_beads_descend(self, split_pattern, settings):
        """local_y = y - k * row_spacing * descent."""
        beads = compute_positions(split_pattern, settings)

        assert beads[1].position.y == pytest.approx(-1.0)
        assert beads[2].position.y == pytest.approx(-1.0 - SPLIT_ROW_DESCENT)
        # Each group restarts at the row baseline
        assert beads[3].position.y == pytest.approx(-1.0)
        assert [b.bead_index for b in beads[1:]] == [0, 1, 0]

    def test_center_group_has_no_offset(self, settings):
        pattern = Pattern(id="p", name="p", rows=[split_row("r1", [(GroupSide.CENTER, "P P")])])

        beads = compute_positions(pattern, settings)

        assert [b.position.x for b in beads] == pytest.approx([0.0, 0.0])
        assert [b.position.z for b in beads] == pytest.approx([0.0, 0.0])

    def test_declared_order_is_kept(self, settings):
        """A right group declared first is also assembled first."""
        pattern = Pattern(
            id="p", name="p",
            rows=[split_row("r1", [(GroupSide.RIGHT, "P"), (GroupSide.LEFT, "W")])]
        )

        beads = compute_positions(pattern, settings)

        assert [b.color_code for b in beads] == ["P", "W"]
        assert beads[0].position.x > 0 > beads[1].position.x

    def test_split_row_without_groups_is_skipped(self, empty_split_pattern, settings):
        """No beads, no step gap, but later rows keep their row index."""
        beads = compute_positions(empty_split_pattern, settings)

        assert [b.assembly_step for b in beads] == [0, 1, 2]
        assert beads[2].row_index == 2
        assert beads[2].position.y == pytest.approx(-2.0)

    def test_gecko_limbs(self, settings):
        """Gecko: 12 body beads, 4 leg beads, 4 body beads, then 7 tail/leg beads."""
        beads = compute_positions(gecko(), settings)

        assert len(beads) == 27
        row_5 = [b for b in beads if b.row_index == 4]
        assert [b.assembly_step for b in row_5] == [12, 13, 14, 15]
        assert {b.group_id for b in row_5} == {"r5-left", "r5-right"}


class TestSettingsIndependence:
    """Spacing changes move beads but never change the build order."""

    def test_steps_unchanged_by_spacing(self, split_pattern):
        a = compute_positions(split_pattern, ViewSettings(bead_spacing=0.5, row_spacing=0.5))
        b = compute_positions(split_pattern, ViewSettings(bead_spacing=1.5, row_spacing=2.0))

        assert [(x.id, x.assembly_step) for x in a] == [(x.id, x.assembly_step) for x in b]

    def test_idempotent(self, split_pattern, settings):
        """Same input, same output."""
        assert compute_positions(split_pattern, settings) == compute_positions(split_pattern, settings)


class TestBounds:

    def test_bounds_of_triangle(self, triangle_pattern, settings):
        lo, hi = compute_bounds(compute_positions(triangle_pattern, settings))

        assert np.allclose(lo, [-1.0, -2.0, 0.0])
        assert np.allclose(hi, [1.0, 0.0, 0.0])

    def test_bounds_include_depth(self, split_pattern, settings):
        lo, hi = compute_bounds(compute_positions(split_pattern, settings))

        assert hi[2] == pytest.approx(SPLIT_DEPTH_OFFSET_Z)
        assert lo[0] == pytest.approx(-SPLIT_SIDE_OFFSET_X)

    def test_bounds_empty(self):
        assert compute_bounds([]) is None
