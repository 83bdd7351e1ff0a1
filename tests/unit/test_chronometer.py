"""Unit tests for chronoface._chronometer — the stopwatch state machine.

Test Techniques Used:
    - State Transition Testing: Stopped/Running via started and visible
    - Specification-based Testing: Elapsed-time conversion and angles
    - Test Doubles: FakeClock, FakeScheduler, ChronometerHarness
    - Error Guessing: Reentrant listeners, failing listeners
"""

from __future__ import annotations

import pytest

from chronoface._chronometer import Chronometer, split_elapsed
from chronoface._face import ClockFace
from chronoface._render import FaceImages
from chronoface.testing import ChronometerHarness, FakeClock, FakeScheduler


class TestSplitElapsed:
    """Elapsed seconds to ``(minute, second)``.

    Technique: Boundary Value Analysis.
    """

    @pytest.mark.parametrize(
        ("elapsed", "expected"),
        [
            (0.0, (0, 0)),
            (0.999, (0, 0)),
            (1.0, (0, 1)),
            (59.9, (0, 59)),
            (60.0, (1, 0)),
            (754.2, (12, 34)),
            (3599.0, (59, 59)),
            (3600.0, (0, 0)),
            (3661.0, (1, 1)),
        ],
    )
    def test_truncates_and_wraps(self, elapsed: float, expected: tuple[int, int]) -> None:
        assert split_elapsed(elapsed) == expected


class TestConstruction:
    """Initial state.

    Technique: Specification-based Testing.
    """

    def test_base_is_now(self, clock_face: ClockFace) -> None:
        clock = FakeClock(42.0)
        chrono = Chronometer(
            clock_face, scheduler=FakeScheduler(clock=clock), clock=clock
        )
        assert chrono.base == 42.0

    def test_starts_stopped_and_invisible(self, chronometer: Chronometer) -> None:
        assert chronometer.started is False
        assert chronometer.visible is False
        assert chronometer.running is False

    def test_face_reset_to_zero(self, face_images: FaceImages) -> None:
        """The face shows 0:00 elapsed even if built at another time."""
        face = ClockFace(face_images, hour=5, minute=0, second=0)
        clock = FakeClock(10.0)
        Chronometer(face, scheduler=FakeScheduler(clock=clock), clock=clock)
        assert face.angles.big_hand == pytest.approx(0.0)
        assert face.angles.small_hand == pytest.approx(0.0)

    def test_nothing_scheduled(
        self, fake_scheduler: FakeScheduler, chronometer: Chronometer
    ) -> None:
        assert chronometer.running is False
        assert fake_scheduler.pending_count == 0


class TestStartAndTick:
    """Stopped → Running and the tick chain.

    Technique: State Transition Testing.
    """

    def test_start_ticks_immediately_at_zero(self) -> None:
        """start() at the base fires one tick with 0:00."""
        harness = ChronometerHarness.create(visible=True)

        harness.chronometer.start()

        assert harness.tick_count == 1
        assert harness.face.angles.big_hand == pytest.approx(0.0)
        assert harness.face.angles.small_hand == pytest.approx(0.0)
        assert harness.scheduler.pending_count == 1

    def test_tick_after_one_second(self) -> None:
        """After 1000 ms: small hand 6 degrees, big hand 0.1 degree."""
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()

        fired = harness.advance(1.0)

        assert fired == 1
        assert harness.tick_count == 2
        assert harness.face.angles.small_hand == pytest.approx(6.0)
        assert harness.face.angles.big_hand == pytest.approx(0.1)

    def test_tick_chain_rearms_one_handle(self) -> None:
        """Each tick arms exactly one follow-up."""
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()

        for _ in range(5):
            harness.advance(1.0)
            assert harness.scheduler.pending_count == 1

        assert harness.tick_count == 6
        assert harness.face.angles.small_hand == pytest.approx(30.0)

    def test_elapsed_measured_from_base(self) -> None:
        """Ticks show time since the base, not since start()."""
        harness = ChronometerHarness.create(visible=True)
        harness.clock.advance(75.0)
        harness.scheduler.time = harness.clock.now()

        harness.chronometer.start()

        # 1:15 elapsed
        assert harness.face.angles.small_hand == pytest.approx(90.0)
        assert harness.face.angles.big_hand == pytest.approx(7.5)

    def test_custom_tick_interval(self) -> None:
        harness = ChronometerHarness.create(visible=True, tick_interval=0.5)
        harness.chronometer.start()

        harness.advance(2.0)

        assert harness.tick_count == 5

    def test_start_twice_does_not_double_arm(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()
        harness.chronometer.start()

        assert harness.tick_count == 1
        assert harness.scheduler.pending_count == 1

    def test_start_while_invisible_does_nothing(self) -> None:
        harness = ChronometerHarness.create(visible=False)

        harness.chronometer.start()

        assert harness.chronometer.started is True
        assert harness.chronometer.running is False
        assert harness.tick_count == 0
        assert harness.scheduler.pending_count == 0


class TestStop:
    """Running → Stopped.

    Technique: State Transition Testing.
    """

    def test_stop_before_tick_cancels_it(self) -> None:
        """No further notifications after stop(); nothing pending."""
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()

        harness.chronometer.stop()
        fired = harness.advance(10.0)

        assert fired == 0
        assert harness.tick_count == 1
        assert harness.scheduler.pending_count == 0
        assert harness.chronometer.running is False

    def test_stop_cancels_only_its_own_handle(self) -> None:
        """Other callbacks on a shared scheduler survive stop()."""
        harness = ChronometerHarness.create(visible=True)
        other: list[str] = []
        harness.scheduler.call_later(2.0, lambda: other.append("fired"))
        harness.chronometer.start()

        harness.chronometer.stop()
        harness.advance(3.0)

        assert other == ["fired"]
        assert harness.tick_count == 1

    def test_restart_resumes_from_base(self) -> None:
        """stop/start does not reset the base."""
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()
        harness.advance(2.0)
        harness.chronometer.stop()
        harness.advance(3.0)

        harness.chronometer.start()

        assert harness.face.angles.small_hand == pytest.approx(30.0)

    def test_stop_when_stopped_is_noop(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.stop()
        assert harness.tick_count == 0
        assert harness.scheduler.pending_count == 0


class TestVisibility:
    """Visibility and detach signals gate the running state.

    Technique: State Transition Testing.
    """

    def test_becoming_visible_while_started_ticks(self) -> None:
        harness = ChronometerHarness.create(visible=False)
        harness.chronometer.start()

        harness.chronometer.on_visibility_changed(True)

        assert harness.chronometer.running is True
        assert harness.tick_count == 1
        assert harness.scheduler.pending_count == 1

    def test_hiding_cancels_pending_tick(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()

        harness.chronometer.on_visibility_changed(False)
        harness.advance(5.0)

        assert harness.chronometer.running is False
        assert harness.chronometer.started is True
        assert harness.tick_count == 1
        assert harness.scheduler.pending_count == 0

    def test_detach_cancels_pending_tick(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()

        harness.chronometer.on_detached()

        assert harness.chronometer.visible is False
        assert harness.scheduler.pending_count == 0

    def test_toggle_visibility_repeatedly_keeps_single_handle(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()

        for _ in range(3):
            harness.chronometer.on_visibility_changed(False)
            assert harness.scheduler.pending_count == 0
            harness.chronometer.on_visibility_changed(True)
            assert harness.scheduler.pending_count == 1

        assert harness.tick_count == 4

    def test_close_detaches_and_drops_listener(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()

        harness.chronometer.close()
        harness.chronometer.close()

        assert harness.scheduler.pending_count == 0
        assert harness.chronometer.tick_listener is None


class TestSetBase:
    """set_base notifies and redraws regardless of running state.

    Technique: Specification-based Testing.
    """

    def test_set_base_when_stopped(self) -> None:
        harness = ChronometerHarness.create(start_time=100.0)

        harness.chronometer.set_base(70.0)

        assert harness.chronometer.base == 70.0
        assert harness.tick_count == 1
        assert harness.face.angles.small_hand == pytest.approx(180.0)
        assert harness.scheduler.pending_count == 0

    def test_set_base_when_running_keeps_single_handle(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.start()

        harness.chronometer.set_base(-60.0)

        assert harness.tick_count == 2
        assert harness.face.angles.big_hand == pytest.approx(6.0)
        assert harness.scheduler.pending_count == 1

    def test_listener_sees_new_base(self) -> None:
        harness = ChronometerHarness.create()
        seen: list[float] = []
        harness.chronometer.set_tick_listener(lambda c: seen.append(c.base))

        harness.chronometer.set_base(5.0)

        assert seen == [5.0]

    def test_failing_listener_still_redraws(self) -> None:
        """The face follows the new base even when the listener raises."""
        harness = ChronometerHarness.create(start_time=100.0)

        def boom(_: Chronometer) -> None:
            raise RuntimeError("listener down")

        harness.chronometer.set_tick_listener(boom)

        with pytest.raises(RuntimeError, match="listener down"):
            harness.chronometer.set_base(70.0)

        assert harness.chronometer.base == 70.0
        assert harness.face.angles.small_hand == pytest.approx(180.0)


class TestListener:
    """Single-slot tick listener.

    Technique: Specification-based Testing and Error Guessing.
    """

    def test_replacing_listener_drops_previous(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        second: list[Chronometer] = []
        harness.chronometer.set_tick_listener(second.append)

        harness.chronometer.start()

        assert harness.tick_count == 0
        assert second == [harness.chronometer]

    def test_no_listener_still_ticks(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.set_tick_listener(None)

        harness.chronometer.start()
        harness.advance(1.0)

        assert harness.face.angles.small_hand == pytest.approx(6.0)
        assert harness.scheduler.pending_count == 1

    def test_listener_stopping_during_start_does_not_arm(self) -> None:
        """stop() from inside the first tick leaves nothing scheduled."""
        harness = ChronometerHarness.create(visible=True)
        harness.chronometer.set_tick_listener(lambda c: c.stop())

        harness.chronometer.start()

        assert harness.chronometer.running is False
        assert harness.scheduler.pending_count == 0

    def test_listener_stopping_during_tick_does_not_rearm(self) -> None:
        harness = ChronometerHarness.create(visible=True)
        calls: list[int] = []

        def stop_on_second(chrono: Chronometer) -> None:
            calls.append(1)
            if len(calls) == 2:
                chrono.stop()

        harness.chronometer.set_tick_listener(stop_on_second)
        harness.chronometer.start()
        harness.advance(5.0)

        assert len(calls) == 2
        assert harness.scheduler.pending_count == 0

    def test_listener_restarting_never_double_arms(self) -> None:
        """stop()+start() inside a tick leaves exactly one handle."""
        harness = ChronometerHarness.create(visible=True)
        restarted: list[bool] = []

        def restart_once(chrono: Chronometer) -> None:
            if not restarted:
                restarted.append(True)
                chrono.stop()
                chrono.start()

        harness.chronometer.set_tick_listener(restart_once)
        harness.chronometer.start()

        assert harness.chronometer.running is True
        assert harness.scheduler.pending_count == 1

    def test_failing_listener_propagates_and_keeps_ticking(self) -> None:
        harness = ChronometerHarness.create(visible=True)

        def boom(_chrono: Chronometer) -> None:
            raise RuntimeError("listener failed")

        harness.chronometer.set_tick_listener(boom)

        with pytest.raises(RuntimeError, match="listener failed"):
            harness.chronometer.start()

        assert harness.chronometer.running is True
        assert harness.scheduler.pending_count == 1

    def test_failing_listener_is_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        harness = ChronometerHarness.create()
        harness.chronometer.set_tick_listener(lambda _c: 1 / 0)  # type: ignore[func-returns-value]

        with pytest.raises(ZeroDivisionError):
            harness.chronometer.set_base(0.0)

        assert "tick listener failed" in caplog.text


class TestElapsed:
    """elapsed property.

    Technique: Specification-based Testing.
    """

    def test_elapsed_follows_clock(self) -> None:
        harness = ChronometerHarness.create(start_time=10.0)
        harness.clock.advance(2.5)
        assert harness.chronometer.elapsed == pytest.approx(2.5)
