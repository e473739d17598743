"""Tests for mesh and material builders (geometry only, nothing is rendered)."""

import numpy as np
import pytest

from beadcrafter.config import BEAD_RADIUS
from beadcrafter.model.colors import BEAD_COLORS, DEFAULT_ROUGHNESS, FALLBACK_HEX, get_hex_by_code, is_metallic
from beadcrafter.model.schema import Position
from beadcrafter.view.widgets.bead_meshes import (
    bead_material, string_material, string_curve_points, string_geometry,
    pony_bead_geometry, keychain_loop_geometry, clear_caches, STRING_CURVE_SEGMENTS, STRING_BULGE
)


class TestMaterials:

    def test_basic_color(self):
        mat = bead_material("P")

        assert mat.color == "#FF69B4"
        assert mat.metallic == pytest.approx(0.1)
        assert mat.roughness == pytest.approx(0.4)

    def test_metallic_color(self):
        mat = bead_material("MG")

        assert mat.metallic == pytest.approx(0.8)
        assert mat.roughness == pytest.approx(0.15)

    def test_unknown_code_is_gray(self):
        mat = bead_material("??")

        assert mat.color == FALLBACK_HEX
        assert mat.metallic == pytest.approx(0.1)
        assert mat.roughness == pytest.approx(DEFAULT_ROUGHNESS)

    @pytest.mark.parametrize("code", [c.code for c in BEAD_COLORS])
    def test_follows_catalog(self, code):
        mat = bead_material(code)

        assert mat.color == get_hex_by_code(code)
        assert (mat.metallic > 0.5) is is_metallic(code)

    def test_kwargs_enable_pbr(self):
        kwargs = string_material("#3d3d3d").as_kwargs()

        assert kwargs == {"color": "#3d3d3d", "pbr": True, "metallic": 0.1, "roughness": 0.8}


class TestStringCurve:

    def test_endpoints(self):
        pts = string_curve_points(Position(0, 0, 0), Position(1, -1, 0))

        assert pts.shape == (STRING_CURVE_SEGMENTS + 1, 3)
        assert np.allclose(pts[0], [0, 0, 0])
        assert np.allclose(pts[-1], [1, -1, 0])

    def test_bulge_is_sideways(self):
        """Horizontal string bends in z by half the bulge at its middle."""
        pts = string_curve_points(Position(0, 0, 0), Position(2, 0, 0))
        middle = pts[STRING_CURVE_SEGMENTS // 2]

        assert middle[0] == pytest.approx(1.0)
        assert middle[2] == pytest.approx(STRING_BULGE / 2)

    def test_vertical_string_is_straight(self):
        pts = string_curve_points(Position(0, 0, 0), Position(0, -2, 0))

        assert np.allclose(pts[:, 0], 0.0)
        assert np.allclose(pts[:, 2], 0.0)

    def test_coincident_ends_have_no_geometry(self):
        assert string_geometry(Position(1, 1, 0), Position(1, 1, 0)) is None

    def test_tube_geometry(self):
        tube = string_geometry(Position(0, 0, 0), Position(0.65, 0, 0))

        assert tube is not None
        assert tube.n_points > 0


class TestBeadGeometry:

    def test_template_is_cached(self):
        clear_caches()

        assert pony_bead_geometry() is pony_bead_geometry()

    def test_bead_size(self):
        xmin, xmax, ymin, ymax, zmin, zmax = pony_bead_geometry().bounds

        # Outer radius of the torus is the bead radius
        assert ymax - ymin == pytest.approx(2 * BEAD_RADIUS, rel=0.05)

    def test_keychain_above_top(self):
        loop = keychain_loop_geometry(top_y=1.0)

        assert loop.n_points > 0
        assert loop.bounds[2] > 1.0
