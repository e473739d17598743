"""Pytest configuration and shared fixtures."""

import os
from typing import Callable, List, Optional, Tuple

import pytest

from beadcrafter.model.patterns import single_row, split_row
from beadcrafter.model.schema import Pattern, Row, RowType, GroupSide, ViewSettings

# Qt timers need an application object, never a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class ManualTimer:
    """
    PeriodicTimer that only fires when the test calls tick().
    Records every start() so tests can check the requested interval.
    """

    def __init__(self) -> None:
        self.callback: Optional[Callable[[], None]] = None
        self.interval_ms: Optional[int] = None
        self.starts: List[int] = []
        self.stops: int = 0

    @property
    def is_active(self) -> bool:
        return self.callback is not None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.interval_ms = interval_ms
        self.starts.append(interval_ms)

    def stop(self) -> None:
        self.callback = None
        self.stops += 1

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            if self.callback is None:
                return
            self.callback()


class RecordingSynchronizer:
    """VisibilitySynchronizer that records calls, optionally into a shared log."""

    def __init__(self, log: Optional[List[Tuple[str, Optional[int]]]] = None) -> None:
        self.calls: List[Tuple[str, Optional[int]]] = log if log is not None else []

    def update_visibility(self, current_step: int) -> None:
        self.calls.append(("update", current_step))

    def show_all(self) -> None:
        self.calls.append(("show_all", None))

    @property
    def steps(self) -> List[Optional[int]]:
        return [step for kind, step in self.calls if kind == "update"]


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def recording_sync() -> RecordingSynchronizer:
    return RecordingSynchronizer()


@pytest.fixture
def settings() -> ViewSettings:
    """Unit spacing keeps expected coordinates readable."""
    return ViewSettings(bead_spacing=1.0, row_spacing=1.0)


@pytest.fixture
def triangle_pattern() -> Pattern:
    """
    Rows of 1, 3 and 1 beads (5 steps).

    Returns:
        Pattern 'triangle' with bead ids r1-b0 .. r3-b0.
    """
    return Pattern(
        id="triangle",
        name="Triangle",
        rows=[single_row("r1", "P"), single_row("r2", "W W W"), single_row("r3", "B")],
        color_palette=["P", "W", "B"],
    )


@pytest.fixture
def split_pattern() -> Pattern:
    """One single bead, then a split row with two beads left and one right."""
    return Pattern(
        id="limbs",
        name="Limbs",
        rows=[
            single_row("r1", "G"),
            split_row("r2", [(GroupSide.LEFT, "G G"), (GroupSide.RIGHT, "Y")]),
        ],
        color_palette=["G", "Y"],
    )


@pytest.fixture
def empty_split_pattern() -> Pattern:
    """A split row declared without group data between two single rows."""
    return Pattern(
        id="gap",
        name="Gap",
        rows=[
            single_row("r1", "B B"),
            Row(id="r2", row_type=RowType.SPLIT),
            single_row("r3", "W"),
        ],
    )


@pytest.fixture
def empty_pattern() -> Pattern:
    return Pattern(id="empty", name="Empty")


@pytest.fixture(scope="session")
def qapp():
    """One QCoreApplication for every Qt timer test."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
