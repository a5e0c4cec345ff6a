"""
Unit tests for GameTimer.
"""
from minesweeper import GameTimer


class TestGameTimer:
    """Test start, stop and reset behaviour."""

    def test_new_timer_is_stopped_at_zero(self, clock) -> None:
        timer = GameTimer(clock)
        clock.advance(5)
        assert timer.is_running is False
        assert timer.elapsed_seconds == 0

    def test_counts_whole_seconds(self, clock) -> None:
        timer = GameTimer(clock)
        timer.start()
        clock.advance(2.9)
        assert timer.elapsed_seconds == 2

    def test_stop_freezes_count(self, clock) -> None:
        timer = GameTimer(clock)
        timer.start()
        clock.advance(3)
        timer.stop()
        clock.advance(10)
        assert timer.elapsed_seconds == 3

    def test_start_twice_keeps_original_start(self, clock) -> None:
        timer = GameTimer(clock)
        timer.start()
        clock.advance(2)
        timer.start()
        clock.advance(2)
        assert timer.elapsed_seconds == 4

    def test_reset_zeroes_and_stops(self, clock) -> None:
        timer = GameTimer(clock)
        timer.start()
        clock.advance(7)
        timer.reset()
        clock.advance(3)
        assert timer.elapsed_seconds == 0
        assert timer.is_running is False
