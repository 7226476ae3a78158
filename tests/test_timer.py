"""Tests for the reveal timer."""

import pytest

from undercover.engine.timer import RevealTimer


class TestRevealTimer:
    """Unit tests for RevealTimer."""

    def test_fires_once_after_duration(self, scheduler):
        """Test the callback runs exactly once when time is up."""
        fired = []
        timer = RevealTimer(scheduler)
        timer.start(5.0, lambda: fired.append(scheduler.time()))

        scheduler.advance(4.9)
        assert fired == []
        assert timer.active

        scheduler.advance(0.2)
        assert fired == [5.0]
        assert not timer.active

        scheduler.advance(10)
        assert len(fired) == 1

    def test_cancel_prevents_callback(self, scheduler):
        """Test a cancelled timer never fires."""
        fired = []
        timer = RevealTimer(scheduler)
        timer.start(5.0, lambda: fired.append(True))
        timer.cancel()

        scheduler.advance(10)
        assert fired == []
        assert not timer.active

    def test_cancel_is_idempotent(self, scheduler):
        """Test cancelling twice or before start is harmless."""
        timer = RevealTimer(scheduler)
        timer.cancel()
        timer.start(1.0, lambda: None)
        timer.cancel()
        timer.cancel()
        assert scheduler.pending() == []

    def test_double_start_rejected(self, scheduler):
        """Test only one callback can be pending."""
        timer = RevealTimer(scheduler)
        timer.start(1.0, lambda: None)
        with pytest.raises(RuntimeError):
            timer.start(1.0, lambda: None)

    def test_restart_after_fire(self, scheduler):
        """Test the timer can be started again once it has fired."""
        fired = []
        timer = RevealTimer(scheduler)
        timer.start(1.0, lambda: fired.append(1))
        scheduler.advance(1.0)
        timer.start(1.0, lambda: fired.append(2))
        scheduler.advance(1.0)
        assert fired == [1, 2]

    def test_fraction_remaining_decays_linearly(self, scheduler):
        """Test the countdown value runs from 1.0 to 0.0."""
        timer = RevealTimer(scheduler)
        assert timer.fraction_remaining() == 0.0

        timer.start(5.0, lambda: None)
        assert timer.fraction_remaining() == pytest.approx(1.0)
        scheduler.advance(1.0)
        assert timer.fraction_remaining() == pytest.approx(0.8)
        scheduler.advance(2.5)
        assert timer.fraction_remaining() == pytest.approx(0.3)
        scheduler.advance(1.5)
        assert timer.fraction_remaining() == 0.0
