"""Tests for the per-player card reveal controller."""

import pytest

from undercover.engine.phases import Player
from undercover.engine.reveal import LOCK_DELAY, REVEAL_DURATION, CardRevealController, RevealState


def make_controller(scheduler, timed=False, **kwargs):
    seen = []
    controller = CardRevealController(
        player=Player(id="p1", index=1, name="Alice"),
        card_text="Knight",
        scheduler=scheduler,
        on_seen=lambda: seen.append(True),
        timed=timed,
        **kwargs,
    )
    return controller, seen


class TestRevealUntimed:
    """Manual reveal and hide."""

    def test_initial_state(self, scheduler):
        """Test a new card is hidden and face down."""
        controller, seen = make_controller(scheduler)
        assert controller.state == RevealState.HIDDEN
        assert not controller.face_up
        assert controller.countdown == 1.0
        assert seen == []

    def test_first_tap_reveals(self, scheduler):
        """Test the first interaction shows the card and reports it seen."""
        controller, seen = make_controller(scheduler)
        controller.interact()

        assert controller.state == RevealState.REVEALED
        assert controller.face_up
        assert seen == [True]
        assert scheduler.pending() == []

    def test_second_tap_hides_then_locks(self, scheduler):
        """Test the flip back happens at once and the lock after the delay."""
        controller, _ = make_controller(scheduler)
        controller.interact()
        controller.interact()

        assert not controller.face_up
        assert controller.concealing
        assert controller.state == RevealState.REVEALED

        scheduler.advance(LOCK_DELAY - 0.1)
        assert controller.state == RevealState.REVEALED

        scheduler.advance(0.1)
        assert controller.state == RevealState.LOCKED
        assert controller.lock_count == 1
        assert not controller.concealing

    def test_taps_while_concealing_ignored(self, scheduler):
        """Test extra taps during the lock delay do not schedule a second lock."""
        controller, seen = make_controller(scheduler)
        controller.interact()
        controller.interact()
        controller.interact()
        controller.interact()

        scheduler.advance(1.0)
        assert controller.lock_count == 1
        assert seen == [True]

    def test_locked_ignores_interaction(self, scheduler):
        """Test a locked card never shows again."""
        controller, seen = make_controller(scheduler)
        controller.interact()
        controller.interact()
        scheduler.advance(LOCK_DELAY)

        controller.interact()
        assert controller.state == RevealState.LOCKED
        assert not controller.face_up
        assert seen == [True]
        assert scheduler.pending() == []

    def test_on_change_notifications(self, scheduler):
        """Test observers hear about reveal, flip back and lock."""
        changes = []
        controller, _ = make_controller(
            scheduler, on_change=lambda c: changes.append((c.state, c.face_up))
        )
        controller.interact()
        controller.interact()
        scheduler.advance(LOCK_DELAY)

        assert changes == [
            (RevealState.REVEALED, True),
            (RevealState.REVEALED, False),
            (RevealState.LOCKED, False),
        ]


class TestRevealTimed:
    """Automatic hide after the reveal duration."""

    def test_countdown_decays(self, scheduler):
        """Test the visual countdown follows the timer."""
        controller, _ = make_controller(scheduler, timed=True)
        controller.interact()

        assert controller.countdown == pytest.approx(1.0)
        scheduler.advance(REVEAL_DURATION / 2)
        assert controller.countdown == pytest.approx(0.5)

    def test_timeout_hides_then_locks(self, scheduler):
        """Test the card flips back on timeout and locks after the delay."""
        controller, _ = make_controller(scheduler, timed=True)
        controller.interact()

        scheduler.advance(REVEAL_DURATION)
        assert not controller.face_up
        assert controller.state == RevealState.REVEALED

        scheduler.advance(LOCK_DELAY)
        assert controller.state == RevealState.LOCKED
        assert controller.lock_count == 1
        assert controller.countdown == 1.0

    def test_manual_hide_cancels_timer(self, scheduler):
        """Test hiding by hand before the timeout locks exactly once."""
        controller, _ = make_controller(scheduler, timed=True)
        controller.interact()
        scheduler.advance(2.0)
        controller.interact()

        assert not controller.timer.active
        scheduler.advance(REVEAL_DURATION * 2)
        assert controller.state == RevealState.LOCKED
        assert controller.lock_count == 1

    def test_late_timeout_is_noop(self, scheduler):
        """Test a timeout arriving after a manual hide changes nothing."""
        controller, _ = make_controller(scheduler, timed=True)
        controller.interact()
        controller.interact()

        controller._on_timeout()
        scheduler.advance(LOCK_DELAY)
        controller._on_timeout()
        scheduler.advance(LOCK_DELAY)

        assert controller.state == RevealState.LOCKED
        assert controller.lock_count == 1
        assert scheduler.pending() == []

    def test_custom_durations(self, scheduler):
        """Test reveal and lock durations can be configured."""
        controller, _ = make_controller(scheduler, timed=True, reveal_duration=1.0, lock_delay=0.1)
        controller.interact()
        scheduler.advance(1.1)
        assert controller.state == RevealState.LOCKED


class TestRevealDispose:
    """Disposal cancels everything pending."""

    def test_dispose_while_revealed(self, scheduler):
        """Test disposing mid-reveal stops the timer and any later mutation."""
        changes = []
        controller, seen = make_controller(
            scheduler, timed=True, on_change=lambda c: changes.append(c.state)
        )
        controller.interact()
        controller.dispose()

        assert scheduler.pending() == []
        assert controller.countdown == 1.0

        scheduler.advance(REVEAL_DURATION * 2)
        controller.interact()
        assert controller.state == RevealState.REVEALED
        assert controller.lock_count == 0
        assert changes == [RevealState.REVEALED]
        assert seen == [True]

    def test_dispose_while_concealing(self, scheduler):
        """Test disposing during the lock delay drops the pending lock."""
        controller, _ = make_controller(scheduler)
        controller.interact()
        controller.interact()
        controller.dispose()

        scheduler.advance(1.0)
        assert controller.lock_count == 0
        assert scheduler.pending() == []

    def test_dispose_before_reveal(self, scheduler):
        """Test a disposed card cannot be revealed."""
        controller, seen = make_controller(scheduler, timed=True)
        controller.dispose()
        controller.interact()
        assert controller.state == RevealState.HIDDEN
        assert seen == []
