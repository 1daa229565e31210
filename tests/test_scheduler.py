"""Tests for the playback scheduler state machine."""

import asyncio
import logging

import pytest

from speedread.exceptions import InvalidWpmError
from speedread.models.enums import PlaybackState
from speedread.services.clock import LoopClock, ManualClock
from speedread.services.scheduler import PlaybackScheduler


WORDS = [f"w{i}" for i in range(10)]


@pytest.fixture
def loaded(scheduler):
    scheduler.load(WORDS)
    return scheduler


# =============================================================================
# Loading
# =============================================================================


class TestLoad:
    def test_starts_idle(self, scheduler):
        assert scheduler.state is PlaybackState.IDLE
        assert scheduler.play() is False

    def test_load_pauses_at_first_word(self, loaded):
        assert loaded.state is PlaybackState.PAUSED
        assert loaded.current_index == 0
        assert loaded.total_words == 10

    def test_load_empty_is_idle(self, scheduler):
        scheduler.load([])
        assert scheduler.state is PlaybackState.IDLE
        assert scheduler.is_playing is False

    def test_load_while_playing_cancels_tick(self, loaded, clock):
        loaded.play()
        clock.advance(600)
        loaded.load(["a", "b", "c"])

        assert loaded.state is PlaybackState.PAUSED
        assert loaded.current_index == 0
        assert loaded.has_pending_tick is False
        clock.advance(10_000)
        assert loaded.current_index == 0


# =============================================================================
# Ticks
# =============================================================================


class TestTicks:
    def test_interval_from_wpm(self, loaded):
        assert loaded.interval_ms == 200.0

    def test_one_tick_advances_one_word(self, loaded, clock):
        loaded.seek(4)
        loaded.play()
        clock.advance(199)
        assert loaded.current_index == 4
        clock.advance(1)
        assert loaded.current_index == 5
        assert loaded.state is PlaybackState.PLAYING

    def test_single_pending_tick_while_playing(self, loaded, clock):
        loaded.play()
        for _ in range(5):
            clock.advance(200)
            assert len(clock.pending) == 1

    def test_stops_at_last_word(self, loaded, clock):
        loaded.seek(8)
        loaded.play()
        clock.advance(200)
        assert loaded.current_index == 9
        assert loaded.state is PlaybackState.PLAYING

        clock.advance(200)
        assert loaded.current_index == 9
        assert loaded.state is PlaybackState.FINISHED
        assert loaded.is_playing is False
        assert loaded.has_pending_tick is False

    def test_plays_through_whole_document(self, loaded, clock):
        loaded.play()
        clock.advance(200 * 20)
        assert loaded.current_index == 9
        assert loaded.state is PlaybackState.FINISHED

    def test_play_at_last_word_is_refused(self, loaded):
        loaded.seek(9)
        assert loaded.play() is False
        assert loaded.state is PlaybackState.PAUSED

    def test_play_refused_for_single_word(self, scheduler):
        scheduler.load(["only"])
        assert scheduler.play() is False

    def test_tick_records_carry_word_index(self, loaded, clock, caplog):
        caplog.set_level(logging.DEBUG, logger="speedread.services.scheduler")
        loaded.seek(8)
        loaded.play()
        clock.advance(400)

        indices = [r.extra_data["word_index"] for r in caplog.records if hasattr(r, "extra_data")]
        assert indices == [9, 9]
        assert caplog.records[-1].getMessage() == "Reached last word; stopping"


# =============================================================================
# Pause and Cancellation
# =============================================================================


class TestPause:
    def test_pause_right_after_play_never_advances(self, loaded, clock):
        loaded.play()
        loaded.pause()
        clock.advance(60_000)
        assert loaded.current_index == 0
        assert loaded.state is PlaybackState.PAUSED
        assert clock.pending == []

    def test_pause_mid_playback(self, loaded, clock):
        loaded.play()
        clock.advance(450)
        loaded.pause()
        clock.advance(5_000)
        assert loaded.current_index == 2

    def test_pause_when_not_playing_is_noop(self, loaded):
        loaded.pause()
        assert loaded.state is PlaybackState.PAUSED

    def test_repeated_play_keeps_one_tick(self, loaded, clock):
        loaded.play()
        loaded.play()
        loaded.play()
        assert len(clock.pending) == 1
        clock.advance(200)
        assert loaded.current_index == 1

    def test_toggle(self, loaded):
        assert loaded.toggle() is True
        assert loaded.is_playing
        assert loaded.toggle() is False
        assert loaded.state is PlaybackState.PAUSED

    def test_reset(self, loaded, clock):
        loaded.play()
        clock.advance(1_000)
        loaded.reset()
        assert loaded.current_index == 0
        assert loaded.state is PlaybackState.PAUSED
        assert loaded.has_pending_tick is False


# =============================================================================
# Rate Changes
# =============================================================================


class TestRateChange:
    def test_rate_change_reschedules_from_now(self, loaded, clock):
        loaded.play()  # tick due at 200 ms
        clock.advance(50)
        loaded.set_wpm(600)  # 100 ms per word, counted from t=50

        clock.advance(99)  # t=149
        assert loaded.current_index == 0
        clock.advance(1)  # t=150
        assert loaded.current_index == 1
        clock.advance(100)  # t=250
        assert loaded.current_index == 2

    def test_stale_tick_cancelled(self, clock):
        scheduler = PlaybackScheduler(clock, wpm=60)
        scheduler.load(["a", "b", "c", "d"])
        scheduler.play()
        stale = clock.pending[0]
        assert stale.due_ms == 1_000.0

        scheduler.set_wpm(1000)

        assert stale.cancelled
        assert [timer.due_ms for timer in clock.pending] == [60.0]
        clock.advance(60)
        assert scheduler.current_index == 1

    def test_slower_rate_applies_immediately(self, loaded, clock):
        loaded.play()
        loaded.set_wpm(100)  # 600 ms per word
        clock.advance(599)
        assert loaded.current_index == 0
        clock.advance(1)
        assert loaded.current_index == 1

    def test_rate_change_while_paused_schedules_nothing(self, loaded, clock):
        loaded.set_wpm(600)
        assert clock.pending == []
        assert not loaded.has_pending_tick

    def test_rate_change_does_not_add_ticks(self, loaded, clock):
        loaded.play()
        loaded.set_wpm(450)
        loaded.set_wpm(900)
        assert len(clock.pending) == 1

    @pytest.mark.parametrize("wpm", [0, -100])
    def test_invalid_wpm_is_programming_error(self, loaded, wpm):
        with pytest.raises(InvalidWpmError):
            loaded.set_wpm(wpm)
        assert loaded.wpm == 300

    def test_invalid_initial_wpm(self, clock):
        with pytest.raises(ValueError):
            PlaybackScheduler(clock, wpm=0)


# =============================================================================
# Seeking
# =============================================================================


class TestSeek:
    @pytest.mark.parametrize("target,expected", [(3, 3), (-4, 0), (100, 9), (9, 9)])
    def test_seek_clamps(self, loaded, target, expected):
        assert loaded.seek(target) == expected
        assert loaded.current_index == expected

    def test_seek_keeps_playing(self, loaded, clock):
        loaded.play()
        loaded.seek(6)
        assert loaded.is_playing
        clock.advance(200)
        assert loaded.current_index == 7

    def test_seek_while_paused_stays_paused(self, loaded, clock):
        loaded.seek(5)
        clock.advance(1_000)
        assert loaded.state is PlaybackState.PAUSED
        assert loaded.current_index == 5

    def test_seek_on_empty_session(self, scheduler):
        assert scheduler.seek(5) == 0
        assert scheduler.state is PlaybackState.IDLE

    def test_seek_leaves_finished(self, loaded, clock):
        loaded.seek(8)
        loaded.play()
        clock.advance(400)
        assert loaded.state is PlaybackState.FINISHED
        loaded.seek(2)
        assert loaded.state is PlaybackState.PAUSED
        assert loaded.play() is True

    def test_steps_are_clamped(self, loaded):
        assert loaded.step_back() == 0
        assert loaded.step_forward() == 1
        loaded.seek(9)
        assert loaded.step_forward() == 9


# =============================================================================
# Presentation Mode
# =============================================================================


class TestPresentationMode:
    def make(self, clock, presentation, fullscreen=True):
        scheduler = PlaybackScheduler(
            clock, wpm=300, presentation=presentation, fullscreen_on_play=fullscreen
        )
        scheduler.load(WORDS)
        return scheduler

    def test_enter_on_play_exit_on_pause(self, clock, presentation):
        scheduler = self.make(clock, presentation)
        scheduler.play()
        assert scheduler.presentation_engaged
        scheduler.pause()
        assert presentation.calls == ["enter", "exit"]
        assert not scheduler.presentation_engaged

    def test_not_requested_when_disabled(self, clock, presentation):
        scheduler = self.make(clock, presentation, fullscreen=False)
        scheduler.play()
        scheduler.pause()
        assert presentation.calls == []

    def test_failed_request_keeps_playing(self, clock, failing_presentation, caplog):
        presentation = failing_presentation
        scheduler = self.make(clock, presentation)

        assert scheduler.play() is True
        assert scheduler.is_playing
        assert not scheduler.presentation_engaged
        assert "Presentation mode request failed" in caplog.text

        clock.advance(200)
        assert scheduler.current_index == 1
        scheduler.pause()
        assert presentation.calls == ["enter"]

    def test_external_exit_pauses(self, clock, presentation):
        scheduler = self.make(clock, presentation)
        scheduler.play()
        scheduler.presentation_exited()

        assert scheduler.state is PlaybackState.PAUSED
        assert presentation.calls == ["enter"]
        clock.advance(1_000)
        assert scheduler.current_index == 0

    def test_external_exit_when_paused_is_harmless(self, clock, presentation):
        scheduler = self.make(clock, presentation)
        scheduler.presentation_exited()
        assert scheduler.state is PlaybackState.PAUSED

    def test_finishing_releases_presentation(self, clock, presentation):
        scheduler = self.make(clock, presentation)
        scheduler.seek(8)
        scheduler.play()
        clock.advance(400)
        assert presentation.calls == ["enter", "exit"]


# =============================================================================
# Subscriptions
# =============================================================================


class TestSubscriptions:
    def test_listener_receives_snapshots(self, loaded, clock):
        snapshots = []
        loaded.subscribe(snapshots.append)
        loaded.play()
        clock.advance(200)

        assert [s.state for s in snapshots] == [PlaybackState.PLAYING, PlaybackState.PLAYING]
        assert snapshots[-1].current_index == 1
        assert snapshots[-1].total_words == 10
        assert snapshots[-1].is_playing

    def test_unsubscribe(self, loaded):
        snapshots = []
        unsubscribe = loaded.subscribe(snapshots.append)
        unsubscribe()
        loaded.seek(3)
        assert snapshots == []


# =============================================================================
# Event Loop Clock
# =============================================================================


class TestLoopClock:
    @pytest.mark.asyncio
    async def test_plays_on_event_loop(self):
        scheduler = PlaybackScheduler(LoopClock(), wpm=6000)  # 10 ms per word
        scheduler.load(["a", "b", "c"])
        scheduler.play()

        await asyncio.sleep(0.2)

        assert scheduler.current_index == 2
        assert scheduler.state is PlaybackState.FINISHED

    @pytest.mark.asyncio
    async def test_cancelled_tick_never_fires(self):
        scheduler = PlaybackScheduler(LoopClock(), wpm=6000)
        scheduler.load(["a", "b", "c"])
        scheduler.play()
        scheduler.pause()

        await asyncio.sleep(0.05)

        assert scheduler.current_index == 0


def test_manual_clock_run_next():
    clock = ManualClock()
    fired = []
    timer = clock.call_later(500, lambda: fired.append("late"))
    clock.call_later(100, lambda: fired.append("early"))
    timer.cancel()

    assert clock.run_next() is True
    assert clock.now_ms == 100
    assert clock.run_next() is False
    assert fired == ["early"]


def test_loop_clock_without_running_loop():
    scheduler = PlaybackScheduler(LoopClock(), wpm=300)
    scheduler.load(["a", "b"])

    with pytest.raises(RuntimeError):
        scheduler.play()

    assert scheduler.state is PlaybackState.PAUSED
    assert not scheduler.has_pending_tick
