from typing import Optional, List

from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QFormLayout, QDoubleSpinBox, QComboBox, QLabel, QPushButton, QColorDialog
)
from PySide6.QtCore import Signal
import logging

from beadcrafter.model.colors import get_color_by_code
from beadcrafter.model.io import PatternLibrary
from beadcrafter.model.patterns import sample_patterns
from beadcrafter.model.schema import Pattern
from beadcrafter.model.state import ViewerSession


logger = logging.getLogger(__name__)

class PatternControlPanel(QWidget):
    """
    Pattern selection and presentational settings.
    Everything is written into the ViewerSession; the session notifies the
    scene and the playback controller.
    """
    pattern_changed = Signal(str)

    def __init__(self, session: ViewerSession, library: Optional[PatternLibrary] = None) -> None:
        super().__init__()
        self.session = session
        self.library = library
        self._patterns: List[Pattern] = []

        layout = QVBoxLayout(self)

        # --- Pattern ---
        grp_pattern = QGroupBox("Vzor")
        form_pattern = QFormLayout(grp_pattern)

        self.combo_pattern = QComboBox()
        self.combo_pattern.currentIndexChanged.connect(self.on_pattern_selected)
        form_pattern.addRow("Vzor:", self.combo_pattern)

        self.lbl_description = QLabel("-")
        self.lbl_description.setWordWrap(True)
        form_pattern.addRow("Popis:", self.lbl_description)

        self.lbl_beads = QLabel("-")
        form_pattern.addRow("Počet korálků:", self.lbl_beads)

        self.lbl_palette = QLabel("-")
        self.lbl_palette.setWordWrap(True)
        form_pattern.addRow("Barvy:", self.lbl_palette)

        layout.addWidget(grp_pattern)

        # --- View settings ---
        grp_view = QGroupBox("Zobrazení")
        form_view = QFormLayout(grp_view)

        settings = self.session.settings

        self.spin_bead_spacing = QDoubleSpinBox()
        self.spin_bead_spacing.setDecimals(2)
        self.spin_bead_spacing.setRange(0.3, 2.0)
        self.spin_bead_spacing.setSingleStep(0.05)
        self.spin_bead_spacing.setValue(settings.bead_spacing)
        self.spin_bead_spacing.valueChanged.connect(self.on_settings_changed)
        form_view.addRow("Rozestup korálků:", self.spin_bead_spacing)

        self.spin_row_spacing = QDoubleSpinBox()
        self.spin_row_spacing.setDecimals(2)
        self.spin_row_spacing.setRange(0.3, 2.0)
        self.spin_row_spacing.setSingleStep(0.05)
        self.spin_row_spacing.setValue(settings.row_spacing)
        self.spin_row_spacing.valueChanged.connect(self.on_settings_changed)
        form_view.addRow("Rozestup řad:", self.spin_row_spacing)

        self.btn_string_color = QPushButton()
        self.btn_string_color.clicked.connect(self.on_pick_string_color)
        form_view.addRow("Barva šňůrky:", self.btn_string_color)
        self._refresh_color_button()

        layout.addWidget(grp_view)
        layout.addStretch()

        self.reload_patterns()

    # --- Pattern list ---

    def reload_patterns(self, select_id: Optional[str] = None) -> None:
        """Samples first, then the user's library. Keeps the current pattern if possible."""
        current = self.session.pattern
        if select_id is None and current is not None:
            select_id = current.id

        self._patterns = sample_patterns()
        sample_ids = {p.id for p in self._patterns}
        if self.library is not None:
            # A library entry with a sample's id shadows the sample
            for pattern in self.library.list_patterns():
                if pattern.id in sample_ids:
                    self._patterns = [p for p in self._patterns if p.id != pattern.id]
                self._patterns.append(pattern)

        # The pattern on screen wins over a listed one with the same id;
        # one opened from a file is not listed at all
        if current is not None:
            for i, pattern in enumerate(self._patterns):
                if pattern.id == current.id:
                    self._patterns[i] = current
                    break
            else:
                self._patterns.append(current)

        self.combo_pattern.blockSignals(True)
        try:
            self.combo_pattern.clear()
            for pattern in self._patterns:
                self.combo_pattern.addItem(pattern.name, pattern.id)
            index = self._index_of(select_id)
            self.combo_pattern.setCurrentIndex(index)
        finally:
            self.combo_pattern.blockSignals(False)

        selected = self._patterns[index] if 0 <= index < len(self._patterns) else None
        if selected is not None and selected != current:
            self.session.set_pattern(selected)
        self._update_info()

    def _index_of(self, pattern_id: Optional[str]) -> int:
        for i, pattern in enumerate(self._patterns):
            if pattern.id == pattern_id:
                return i
        return 0 if self._patterns else -1

    def on_pattern_selected(self, index: int) -> None:
        if not 0 <= index < len(self._patterns):
            return
        pattern = self._patterns[index]
        logger.info(f"Pattern selected: {pattern.id}")
        self.session.set_pattern(pattern)
        self._update_info()
        self.pattern_changed.emit(pattern.id)

    def _update_info(self) -> None:
        pattern = self.session.pattern
        if pattern is None:
            self.lbl_description.setText("-")
            self.lbl_beads.setText("-")
            self.lbl_palette.setText("-")
            return

        self.lbl_description.setText(pattern.description or "-")
        self.lbl_beads.setText(str(pattern.total_beads()))
        names = []
        for code in pattern.color_palette:
            color_def = get_color_by_code(code)
            names.append(color_def.name if color_def else code)
        self.lbl_palette.setText(", ".join(names) if names else "-")

    # --- View settings ---

    def on_settings_changed(self) -> None:
        self.session.update_settings(
            bead_spacing=self.spin_bead_spacing.value(),
            row_spacing=self.spin_row_spacing.value(),
        )

    def on_pick_string_color(self) -> None:
        current = QColor(self.session.settings.string_color)
        color = QColorDialog.getColor(current, self, "Barva šňůrky")
        if color.isValid():
            self.session.update_settings(string_color=color.name())
            self._refresh_color_button()

    def _refresh_color_button(self) -> None:
        hex_color = self.session.settings.string_color
        self.btn_string_color.setText(hex_color)
        self.btn_string_color.setStyleSheet(f"QPushButton {{ background-color: {hex_color}; color: white; }}")
