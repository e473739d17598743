"""
Bead and String Meshes
Builds the PyVista geometry and material settings used by the 3D scene.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING

import numpy as np
import pyvista as pv

from beadcrafter.config import BEAD_RADIUS, STRING_RADIUS
from beadcrafter.model.colors import get_color_by_code, get_hex_by_code, get_roughness_by_code, is_metallic
from beadcrafter.model.schema import Position

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Templates are shared by every bead actor; actors carry the position/scale
_GEOMETRY_CACHE: Dict[str, pv.PolyData] = {}

STRING_BULGE = 0.05
STRING_CURVE_SEGMENTS = 8


@dataclass(frozen=True)
class MaterialSpec:
    """Keyword arguments for plotter.add_mesh(..., pbr=True)."""
    color: str
    metallic: float
    roughness: float

    def as_kwargs(self) -> dict:
        return {"color": self.color, "pbr": True, "metallic": self.metallic, "roughness": self.roughness}


def pony_bead_geometry() -> pv.PolyData:
    """Torus with a visible hole, centered at the origin."""
    cached = _GEOMETRY_CACHE.get("pony-bead")
    if cached is not None:
        return cached

    torus = pv.ParametricTorus(
        ringradius=BEAD_RADIUS * 0.65,
        crosssectionradius=BEAD_RADIUS * 0.35,
        u_res=24,
        v_res=12,
        w_res=12,
    )
    # Turn the hole so it runs along the strand
    torus = torus.rotate_y(90, inplace=False)

    _GEOMETRY_CACHE["pony-bead"] = torus
    return torus


def bead_material(color_code: str) -> MaterialSpec:
    """PBR settings from the color catalog; unknown codes render as plain gray."""
    if get_color_by_code(color_code) is None:
        logger.debug(f"Unknown color code '{color_code}', using fallback gray.")

    return MaterialSpec(
        color=get_hex_by_code(color_code),
        metallic=0.8 if is_metallic(color_code) else 0.1,
        roughness=get_roughness_by_code(color_code),
    )


def string_material(color: str) -> MaterialSpec:
    return MaterialSpec(color=color, metallic=0.1, roughness=0.8)


def string_curve_points(start: Position, end: Position) -> npt.NDArray[np.float64]:
    """
    Quadratic Bezier from start to end with a small sideways bulge.
    Returns (STRING_CURVE_SEGMENTS + 1, 3) points.
    """
    p0 = start.to_array()
    p2 = end.to_array()
    mid = (p0 + p2) / 2.0

    direction = p2 - p0
    perpendicular = np.array([-direction[2], 0.0, direction[0]])
    norm = np.linalg.norm(perpendicular)
    if norm > 0:
        mid = mid + perpendicular / norm * STRING_BULGE

    t = np.linspace(0.0, 1.0, STRING_CURVE_SEGMENTS + 1)[:, None]
    return (1 - t) ** 2 * p0 + 2 * (1 - t) * t * mid + t ** 2 * p2


def string_geometry(start: Position, end: Position) -> Optional[pv.PolyData]:
    """Tube between two bead centers, None when both ends coincide."""
    points = string_curve_points(start, end)
    if np.linalg.norm(points[-1] - points[0]) < 1e-9:
        return None
    line = pv.lines_from_points(points)
    return line.tube(radius=STRING_RADIUS, n_sides=8)


def keychain_loop_geometry(top_y: float = 0.0) -> pv.PolyData:
    """Metal ring plus connector above the first row."""
    ring = pv.ParametricTorus(ringradius=0.3, crosssectionradius=0.04)
    ring = ring.rotate_x(90, inplace=False)
    ring = ring.translate((0.0, top_y + 0.5, 0.0), inplace=False)

    connector = pv.Cylinder(
        center=(0.0, top_y + 0.25, 0.0),
        direction=(0.0, 1.0, 0.0),
        radius=0.04,
        height=0.3,
        resolution=8,
    )
    return ring.merge(connector).extract_surface()


KEYCHAIN_MATERIAL = MaterialSpec(color="#888888", metallic=0.9, roughness=0.3)


def clear_caches() -> None:
    _GEOMETRY_CACHE.clear()
