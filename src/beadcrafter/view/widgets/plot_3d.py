"""
3D Assembly Widget (PyVista Wrapper)
Renders an AssemblySnapshot and keeps it in sync with the playback step.
"""

from __future__ import annotations

from typing import Optional, List

import logging
import numpy as np

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtGui import QCloseEvent

from pyvistaqt import QtInteractor
import pyvista as pv

from beadcrafter.model.layout import compute_bounds
from beadcrafter.model.state import AssemblySnapshot
from beadcrafter.model.visibility import compute_visibility, show_all_frame, VisibilityFrame
from beadcrafter.view.widgets.bead_meshes import (
    pony_bead_geometry, bead_material, string_geometry, string_material,
    keychain_loop_geometry, KEYCHAIN_MATERIAL
)
from beadcrafter.view.widgets.reveal import RevealAnimator

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "#0f0f13"
DEFAULT_CAMERA_POSITION = (0.0, 0.0, 8.0)
DEFAULT_FOCAL_POINT = (0.0, -2.0, 0.0)
# VTK cannot invert a zero scale matrix
REVEAL_START_SCALE = 1e-3


class BeadSceneWidget(QWidget):
    """
    The rendering back-end. Implements VisibilitySynchronizer, so the
    playback controller can drive it directly.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()
        self._setup_lighting()

        # --- Actors state ---
        self._snapshot: AssemblySnapshot = AssemblySnapshot()
        self._bead_actors: List[pv.Actor] = []
        # None where a segment has no geometry (coincident ends)
        self._segment_actors: List[Optional[pv.Actor]] = []
        self._keychain_actor: Optional[pv.Actor] = None

        self._animator = RevealAnimator(on_frame=self.plotter.render)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_assembly(self, snapshot: AssemblySnapshot, reset_camera: bool = False) -> None:
        """
        Rebuilds all bead and string actors from a new snapshot.
        Visibility is applied afterwards by the playback controller.
        """
        logger.info(f"Building scene: {len(snapshot.beads)} beads, {len(snapshot.segments)} strings.")
        first_load = not self._bead_actors
        self._animator.cancel_all()
        self._clear_actors()
        self._snapshot = snapshot

        # 1. Beads (one shared template, per-actor position/scale)
        template = pony_bead_geometry()
        for bead in snapshot.beads:
            actor = self.plotter.add_mesh(
                template,
                smooth_shading=True,
                pickable=False,
                **bead_material(bead.color_code).as_kwargs()
            )
            actor.SetPosition(bead.position.x, bead.position.y, bead.position.z)
            self._bead_actors.append(actor)

        # 2. Strings
        str_mat = string_material(snapshot.settings.string_color)
        for segment in snapshot.segments:
            geometry = string_geometry(segment.start, segment.end)
            if geometry is None:
                self._segment_actors.append(None)
                continue
            actor = self.plotter.add_mesh(geometry, smooth_shading=True, pickable=False, **str_mat.as_kwargs())
            self._segment_actors.append(actor)

        # 3. Keychain loop above the top bead
        if snapshot.beads:
            top_y = max(b.position.y for b in snapshot.beads)
            self._keychain_actor = self.plotter.add_mesh(
                keychain_loop_geometry(top_y),
                smooth_shading=True,
                pickable=False,
                **KEYCHAIN_MATERIAL.as_kwargs()
            )

        if reset_camera or first_load:
            self.center_camera()

        self.plotter.render()

    def update_visibility(self, current_step: int) -> None:
        frame = compute_visibility(self._snapshot.beads, self._snapshot.segments, current_step)
        self._apply_frame(frame)

        for index in frame.revealed:
            actor = self._bead_actors[int(index)]
            self._animator.start(
                int(index),
                lambda s, a=actor: a.SetScale(s, s, s),
                start_scale=REVEAL_START_SCALE,
            )

        self.plotter.render()

    def show_all(self) -> None:
        self._animator.cancel_all()
        self._apply_frame(show_all_frame(self._snapshot.beads, self._snapshot.segments))
        for actor in self._bead_actors:
            actor.SetScale(1.0, 1.0, 1.0)
        self.plotter.render()

    def center_camera(self) -> None:
        """Fit the camera to the bead bounding box."""
        bounds = compute_bounds(self._snapshot.beads)
        if bounds is None:
            self.reset_camera()
            return

        lo, hi = bounds
        center = (lo + hi) / 2.0
        max_dim = float(np.max(hi - lo))
        # Single bead: keep some distance anyway
        distance = max(max_dim * 2.0, 3.0)

        self.plotter.camera.focal_point = tuple(center)
        self.plotter.camera.position = (center[0], center[1], center[2] + distance)
        self.plotter.camera.up = (0.0, 1.0, 0.0)
        self.plotter.render()

    def reset_camera(self) -> None:
        self.plotter.camera.position = DEFAULT_CAMERA_POSITION
        self.plotter.camera.focal_point = DEFAULT_FOCAL_POINT
        self.plotter.camera.up = (0.0, 1.0, 0.0)
        self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _apply_frame(self, frame: VisibilityFrame) -> None:
        for actor, visible in zip(self._bead_actors, frame.bead_visible):
            actor.SetVisibility(bool(visible))
        for actor, visible in zip(self._segment_actors, frame.segment_visible):
            if actor is not None:
                actor.SetVisibility(bool(visible))

    def _clear_actors(self) -> None:
        for actor in self._bead_actors:
            self.plotter.remove_actor(actor, render=False)
        for actor in self._segment_actors:
            if actor is not None:
                self.plotter.remove_actor(actor, render=False)
        if self._keychain_actor is not None:
            self.plotter.remove_actor(self._keychain_actor, render=False)
        self._bead_actors.clear()
        self._segment_actors.clear()
        self._keychain_actor = None

    def _init_plotter(self) -> None:
        self.plotter.set_background(BACKGROUND_COLOR)
        self.plotter.enable_anti_aliasing()
        self.plotter.add_axes()

    def _setup_lighting(self) -> None:
        """Ambient fill + key, fill, rim and a point light for highlights."""
        self.plotter.remove_all_lights()

        ambient = pv.Light(light_type="headlight", intensity=0.4)

        key = pv.Light(position=(5, 10, 5), focal_point=(0, 0, 0), color="white",
                       intensity=1.2, light_type="scene light")
        fill = pv.Light(position=(-5, 5, -5), focal_point=(0, 0, 0), color="#8888ff",
                        intensity=0.3, light_type="scene light")
        rim = pv.Light(position=(0, -5, -10), focal_point=(0, 0, 0), color="white",
                       intensity=0.5, light_type="scene light")

        point = pv.Light(position=(2, 2, 4), color="white", intensity=0.5, light_type="scene light")
        point.positional = True
        point.cone_angle = 90  # >= 90 turns a positional light into a point light

        for light in (ambient, key, fill, rim, point):
            self.plotter.add_light(light)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._animator.cancel_all()
        self.plotter.close()
        event.accept()
