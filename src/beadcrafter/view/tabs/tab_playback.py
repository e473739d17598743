from typing import Callable, List

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QSlider, QGroupBox, QStyle, QComboBox
)
from PySide6.QtCore import Qt
import logging

from beadcrafter.config import SPEED_PRESETS
from beadcrafter.controller.playback import PlaybackController


logger = logging.getLogger(__name__)

class PlaybackControlPanel(QWidget):
    """Transport buttons, step slider and speed selector."""

    def __init__(self, controller: PlaybackController) -> None:
        super().__init__()
        self.controller = controller
        self._unsubscribers: List[Callable[[], None]] = []

        layout = QVBoxLayout(self)

        grp_play = QGroupBox("Přehrávání")
        l_play = QVBoxLayout(grp_play)

        self.lbl_step = QLabel("Krok: -")
        self.lbl_step.setAlignment(Qt.AlignCenter)
        l_play.addWidget(self.lbl_step)

        # Transport buttons
        hbox_buttons = QHBoxLayout()

        self.btn_stop = self._make_button(QStyle.SP_MediaStop, "Zastavit a vrátit na začátek", self.controller.stop)
        self.btn_back = self._make_button(QStyle.SP_MediaSeekBackward, "O krok zpět", self.controller.step_backward)
        self.btn_play = self._make_button(QStyle.SP_MediaPlay, "Přehrát", self.toggle_play)
        self.btn_forward = self._make_button(QStyle.SP_MediaSeekForward, "O krok vpřed", self.controller.step_forward)
        self.btn_end = self._make_button(QStyle.SP_MediaSkipForward, "Zobrazit hotový výrobek", self.controller.go_to_end)

        for btn in (self.btn_stop, self.btn_back, self.btn_play, self.btn_forward, self.btn_end):
            hbox_buttons.addWidget(btn)
        l_play.addLayout(hbox_buttons)

        # Step slider
        self.slider = QSlider(Qt.Horizontal)
        self.slider.setMinimum(0)
        self.slider.valueChanged.connect(self.on_slider_changed)
        l_play.addWidget(self.slider)

        # Speed
        hbox_speed = QHBoxLayout()
        hbox_speed.addWidget(QLabel("Rychlost:"))
        self.combo_speed = QComboBox()
        for preset in SPEED_PRESETS:
            self.combo_speed.addItem(f"{preset:g}×", preset)
        self.combo_speed.setCurrentIndex(self._speed_index(self.controller.speed))
        self.combo_speed.currentIndexChanged.connect(self.on_speed_changed)
        hbox_speed.addWidget(self.combo_speed)
        hbox_speed.addStretch()
        l_play.addLayout(hbox_speed)

        layout.addWidget(grp_play)
        layout.addStretch()

        # Controller -> UI
        self._unsubscribers.append(self.controller.subscribe(self.on_step_changed))
        self._unsubscribers.append(self.controller.subscribe_playing(self.on_playing_changed))

        self.sync_from_controller()

    def _make_button(self, icon: QStyle.StandardPixmap, tooltip: str, slot: Callable[[], None]) -> QPushButton:
        btn = QPushButton()
        btn.setIcon(self.style().standardIcon(icon))
        btn.setToolTip(tooltip)
        btn.clicked.connect(slot)
        return btn

    @staticmethod
    def _speed_index(speed: float) -> int:
        for i, preset in enumerate(SPEED_PRESETS):
            if preset == speed:
                return i
        return SPEED_PRESETS.index(1.0)

    # --- UI -> Controller ---

    def toggle_play(self) -> None:
        if self.controller.is_playing:
            self.controller.pause()
        else:
            # Finished assembly: start over instead of doing nothing
            if self.controller.current_step >= self.controller.total_steps - 1:
                self.controller.go_to_step(0)
            self.controller.play()

    def on_slider_changed(self, value: int) -> None:
        self.controller.go_to_step(value)

    def on_speed_changed(self, index: int) -> None:
        speed = self.combo_speed.itemData(index)
        if speed is not None:
            self.controller.set_speed(float(speed))

    # --- Controller -> UI ---

    def on_step_changed(self, step: int) -> None:
        total = self.controller.total_steps
        self.slider.blockSignals(True)
        try:
            self.slider.setMaximum(max(0, total - 1))
            self.slider.setValue(step)
        finally:
            self.slider.blockSignals(False)
        self._update_label(step, total)
        self._update_enabled()

    def on_playing_changed(self, playing: bool) -> None:
        if playing:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.SP_MediaPause))
            self.btn_play.setToolTip("Pozastavit")
        else:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.SP_MediaPlay))
            self.btn_play.setToolTip("Přehrát")

    def sync_from_controller(self) -> None:
        self.on_step_changed(self.controller.current_step)
        self.on_playing_changed(self.controller.is_playing)

    def _update_label(self, step: int, total: int) -> None:
        if total == 0:
            self.lbl_step.setText("Krok: -")
        else:
            self.lbl_step.setText(f"Krok {step + 1} / {total}")

    def _update_enabled(self) -> None:
        has_steps = self.controller.total_steps > 0
        for widget in (self.btn_stop, self.btn_back, self.btn_play, self.btn_forward, self.btn_end, self.slider):
            widget.setEnabled(has_steps)

    def detach(self) -> None:
        """Drop the controller subscriptions (window teardown)."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
