"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the control panels and the
3D scene.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (like File -> Open) to the session and
   the pattern library.
3. Wiring: It owns the PlaybackController and connects it to the scene
   (VisibilitySynchronizer) and to the session's snapshots.
"""
import os
import logging
from typing import Optional, Callable

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction

from beadcrafter.controller.playback import PlaybackController
from beadcrafter.model.io import PatternIO, PatternLibrary
from beadcrafter.model.patterns import get_sample_pattern
from beadcrafter.model.state import ViewerSession, AssemblySnapshot
from beadcrafter.view.widgets.plot_3d import BeadSceneWidget

# Import Control Panels
from beadcrafter.view.tabs.tab_pattern import PatternControlPanel
from beadcrafter.view.tabs.tab_playback import PlaybackControlPanel


logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Korálkový přívěsek"

class MainWindow(QMainWindow):
    def __init__(self, session: ViewerSession, library: Optional[PatternLibrary] = None) -> None:
        super().__init__()
        self.session: ViewerSession = session
        self.library: Optional[PatternLibrary] = library

        self.resize(1400, 900)

        # --- MAIN CONTAINER ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- RIGHT SIDE: 3D scene (also the visibility synchronizer) ---
        self.scene = BeadSceneWidget()

        # --- Controller ---
        self.controller = PlaybackController(synchronizer=self.scene)

        # --- LEFT SIDE: Control Panels ---
        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(0, 0, 0, 0)

        self.pattern_panel = PatternControlPanel(self.session, self.library)
        self.playback_panel = PlaybackControlPanel(self.controller)
        left_layout.addWidget(self.pattern_panel)
        left_layout.addWidget(self.playback_panel)

        splitter.addWidget(left)
        splitter.addWidget(self.scene)

        # Set initial proportions (1 part sidebar : 4 parts 3D view)
        splitter.setSizes([350, 1050])

        # --- CONNECTIONS ---
        # Snapshot -> scene first (actors must exist), then the controller re-clamps
        self._unsubscribe_session: Callable[[], None] = self.session.subscribe(self.on_snapshot_changed)
        self.pattern_panel.pattern_changed.connect(self.on_pattern_changed)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Initial Render
        self.on_snapshot_changed(self.session.snapshot)
        self.update_window_title()
        self._update_library_actions()

    def _create_actions(self) -> None:
        # File Actions
        self.act_open = QAction("Otevřít vzor...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_export = QAction("Exportovat vzor...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_file_export)

        self.act_save_library = QAction("Uložit do knihovny", self)
        self.act_save_library.setShortcut("Ctrl+S")
        self.act_save_library.triggered.connect(self.on_save_to_library)
        self.act_save_library.setEnabled(self.library is not None)

        self.act_delete_library = QAction("Odstranit z knihovny", self)
        self.act_delete_library.triggered.connect(self.on_delete_from_library)
        self.act_delete_library.setEnabled(False)

        self.act_exit = QAction("Ukončit", self)
        self.act_exit.triggered.connect(self.close)

        # View Actions
        self.act_center_camera = QAction("Vycentrovat kameru", self)
        self.act_center_camera.setShortcut("Ctrl+R")
        self.act_center_camera.triggered.connect(self.scene.center_camera)

        self.act_reset_camera = QAction("Výchozí pohled", self)
        self.act_reset_camera.triggered.connect(self.scene.reset_camera)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&Soubor")
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_save_library)
        file_menu.addAction(self.act_delete_library)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&Zobrazení")
        view_menu.addAction(self.act_center_camera)
        view_menu.addAction(self.act_reset_camera)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        pattern = self.session.pattern
        name = pattern.name if pattern is not None else "Bez vzoru"
        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{name}]")

    def _update_library_actions(self) -> None:
        pattern = self.session.pattern
        in_library = (
            self.library is not None
            and pattern is not None
            and self.library.get(pattern.id) is not None
        )
        self.act_delete_library.setEnabled(in_library)

    # --- SESSION SLOTS ---

    def on_snapshot_changed(self, snapshot: AssemblySnapshot) -> None:
        """New layout: rebuild actors, then let the controller re-clamp and resync."""
        self.scene.set_assembly(snapshot)
        self.controller.set_total_steps(snapshot.total_steps)

    def on_pattern_changed(self, pattern_id: str) -> None:
        # A different pattern always starts from the first bead
        self.controller.stop()
        self.scene.center_camera()
        self.update_window_title()
        self._update_library_actions()

    # --- FILE SLOTS ---

    def on_file_open(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(
            self, "Otevřít Vzor", "", "JSON Files (*.json)"
        )
        if not fname:
            return
        try:
            pattern = PatternIO.import_pattern_json(fname)
        except Exception as e:
            logger.exception(f"Failed to open pattern: {fname}")
            QMessageBox.critical(self, "Chyba", f"Nepodařilo se otevřít soubor:\n{e}")
            return

        self.session.set_pattern(pattern)
        self.pattern_panel.reload_patterns(select_id=pattern.id)
        self.on_pattern_changed(pattern.id)

    def on_file_export(self) -> None:
        pattern = self.session.pattern
        if pattern is None:
            return

        fname, _ = QFileDialog.getSaveFileName(
            self, "Exportovat Vzor", f"{pattern.id}.json", "JSON Files (*.json)"
        )
        if not fname:
            return
        # Ensure extension
        if not fname.endswith(".json"):
            fname += ".json"

        try:
            PatternIO.export_pattern_json(pattern, fname)
            self.statusBar().showMessage(f"Vzor uložen: {os.path.basename(fname)}", 5000)
        except Exception as e:
            logger.exception(f"Failed to export pattern: {fname}")
            QMessageBox.critical(self, "Chyba", f"Nepodařilo se uložit soubor:\n{e}")

    def on_save_to_library(self) -> None:
        pattern = self.session.pattern
        if self.library is None or pattern is None:
            return
        try:
            self.library.save_pattern(pattern)
        except Exception as e:
            QMessageBox.critical(self, "Chyba", f"Nepodařilo se uložit knihovnu:\n{e}")
            return

        self.statusBar().showMessage(f"Vzor '{pattern.name}' uložen do knihovny.", 5000)
        self.pattern_panel.reload_patterns(select_id=pattern.id)
        self._update_library_actions()

    def on_delete_from_library(self) -> None:
        pattern = self.session.pattern
        if self.library is None or pattern is None:
            return

        reply = QMessageBox.question(
            self,
            "Odstranit vzor?",
            f"Opravdu chcete odstranit vzor '{pattern.name}' z knihovny?",
            QMessageBox.Yes | QMessageBox.No
        )
        if reply != QMessageBox.Yes:
            return

        try:
            self.library.delete_pattern(pattern.id)
        except Exception as e:
            QMessageBox.critical(self, "Chyba", f"Nepodařilo se uložit knihovnu:\n{e}")
            return

        # A sample falls back to its built-in version, anything else to the first entry
        self.session.set_pattern(get_sample_pattern(pattern.id))
        self.pattern_panel.reload_patterns()
        self.on_pattern_changed(self.session.pattern.id if self.session.pattern else "")

    def closeEvent(self, event, /) -> None:
        """Stop playback and release the renderer before the window goes away."""
        self.controller.dispose()
        self.playback_panel.detach()
        self._unsubscribe_session()

        # Close the PyVista plotter safely
        if self.scene:
            self.scene.close()

        event.accept()
