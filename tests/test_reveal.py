"""Tests for the reveal transition (manual frame timer + fake clock)."""

import pytest

from beadcrafter.view.widgets.reveal import RevealAnimator, elastic_ease


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def animator(manual_timer, clock) -> RevealAnimator:
    return RevealAnimator(timer=manual_timer, duration_ms=200, frame_interval_ms=16, clock=clock)


class TestElasticEase:

    def test_endpoints(self):
        assert elastic_ease(0.0) == pytest.approx(0.0)
        assert elastic_ease(1.0) == pytest.approx(1.0)

    def test_overshoots(self):
        """The curve goes past 1 before settling."""
        assert max(elastic_ease(i / 100) for i in range(101)) > 1.0

    def test_clamped_input(self):
        assert elastic_ease(-0.5) == pytest.approx(0.0)
        assert elastic_ease(1.5) == pytest.approx(1.0)


class TestRevealAnimator:

    def test_start_applies_initial_scale(self, animator, manual_timer):
        scales = []

        animator.start("a", scales.append)

        assert scales == [0.0]
        assert animator.is_animating("a")
        assert manual_timer.starts == [16]

    def test_runs_to_target(self, animator, manual_timer, clock):
        scales = []
        animator.start("a", scales.append)

        for _ in range(20):
            clock.advance_ms(16)
            manual_timer.tick()

        assert scales[-1] == pytest.approx(1.0)
        assert animator.active_count == 0
        assert not manual_timer.is_active

    def test_progress_uses_elapsed_time(self, animator, manual_timer, clock):
        """One late frame jumps straight to the end."""
        scales = []
        animator.start("a", scales.append)

        clock.advance_ms(500)
        manual_timer.tick()

        assert scales == [0.0, pytest.approx(1.0)]
        assert animator.active_count == 0

    def test_halfway(self, animator, manual_timer, clock):
        scales = []
        animator.start("a", scales.append)

        clock.advance_ms(100)
        manual_timer.tick()

        assert scales[-1] == pytest.approx(elastic_ease(0.5))
        assert animator.is_animating("a")

    def test_restart_replaces(self, animator, manual_timer, clock):
        """Starting the same key again does not stack transitions."""
        first, second = [], []
        animator.start("a", first.append)
        clock.advance_ms(100)
        manual_timer.tick()

        animator.start("a", second.append)
        clock.advance_ms(100)
        manual_timer.tick()

        assert animator.active_count == 1
        assert len(first) == 2
        assert second[-1] == pytest.approx(elastic_ease(0.5))

    def test_independent_keys(self, animator, manual_timer, clock):
        a, b = [], []
        animator.start("a", a.append)
        clock.advance_ms(150)
        animator.start("b", b.append)
        clock.advance_ms(100)
        manual_timer.tick()

        assert a[-1] == pytest.approx(1.0)
        assert not animator.is_animating("a")
        assert animator.is_animating("b")
        # The frame timer is shared, not restarted per key
        assert manual_timer.starts == [16]

    def test_cancel_all(self, animator, manual_timer):
        scales = []
        animator.start("a", scales.append)
        animator.start("b", scales.append)

        animator.cancel_all()

        assert animator.active_count == 0
        assert not manual_timer.is_active

    def test_cancel_one(self, animator, manual_timer):
        animator.start("a", lambda s: None)
        animator.start("b", lambda s: None)

        animator.cancel("a")
        assert manual_timer.is_active

        animator.cancel("b")
        assert not manual_timer.is_active

    def test_on_frame_called(self, manual_timer, clock):
        frames = []
        animator = RevealAnimator(timer=manual_timer, clock=clock, on_frame=lambda: frames.append(1))
        animator.start("a", lambda s: None)

        clock.advance_ms(16)
        manual_timer.tick()

        assert frames == [1]

    def test_custom_scale_range(self, animator, manual_timer, clock):
        scales = []
        animator.start("a", scales.append, start_scale=0.5, target_scale=2.0)

        clock.advance_ms(300)
        manual_timer.tick()

        assert scales == [0.5, pytest.approx(2.0)]
