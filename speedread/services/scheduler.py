"""
Playback scheduler.

Timer-driven state machine that advances the current word index at the
rate implied by the WPM setting.

States:
    IDLE      no words loaded
    PAUSED    words loaded, not advancing
    PLAYING   advancing on a timer
    FINISHED  playback reached the last word; behaves like PAUSED

At most one tick is pending at any time. Every path that stops playback
cancels the pending tick through its handle before returning, so a stale
tick can never advance the index after pause(), load() or reset().
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence

from speedread.models.enums import PlaybackState
from speedread.services.clock import Clock, TimerHandle
from speedread.services.timing import calculate_base_duration_ms

logger = logging.getLogger(__name__)


class PresentationMode(Protocol):
    """Exclusive full-attention display mode owned by the presentation layer."""

    def enter(self) -> None: ...

    def exit(self) -> None: ...


@dataclass(frozen=True)
class PlaybackSnapshot:
    """State published to subscribers after every change."""

    state: PlaybackState
    current_index: int
    total_words: int
    wpm: int

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING


Listener = Callable[[PlaybackSnapshot], None]


class PlaybackScheduler:
    """Drive word-by-word advancement with pause/seek/rate-change semantics."""

    def __init__(
        self,
        clock: Clock,
        wpm: int = 300,
        presentation: Optional[PresentationMode] = None,
        fullscreen_on_play: bool = False,
    ) -> None:
        # Validates wpm up front
        calculate_base_duration_ms(wpm)

        self.clock = clock
        self.presentation = presentation
        self.fullscreen_on_play = fullscreen_on_play

        self._wpm = wpm
        self._words: Sequence[str] = ()
        self._current_index = 0
        self._state = PlaybackState.IDLE
        self._pending: Optional[TimerHandle] = None
        self._presentation_engaged = False
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def words(self) -> Sequence[str]:
        return self._words

    @property
    def total_words(self) -> int:
        return len(self._words)

    @property
    def wpm(self) -> int:
        return self._wpm

    @property
    def interval_ms(self) -> float:
        return calculate_base_duration_ms(self._wpm)

    @property
    def has_pending_tick(self) -> bool:
        return self._pending is not None

    @property
    def presentation_engaged(self) -> bool:
        return self._presentation_engaged

    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            state=self._state,
            current_index=self._current_index,
            total_words=len(self._words),
            wpm=self._wpm,
        )

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener for state changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def load(self, words: Sequence[str]) -> None:
        """Replace the word list and rewind to the first word, paused."""
        self._stop_playback()
        self._words = words
        self._current_index = 0
        self._state = PlaybackState.PAUSED if words else PlaybackState.IDLE
        logger.debug("Loaded %d words", len(words))
        self._notify()

    def play(self) -> bool:
        """
        Start advancing from the current word.

        Only starts when there is a word after the current one.

        Returns:
            True if playback is running after the call.
        """
        if self._state is PlaybackState.PLAYING:
            return True
        if self._state is PlaybackState.IDLE:
            return False
        if self._current_index >= len(self._words) - 1:
            logger.debug("Not starting playback at the last word")
            return False

        # Schedule first so a clock failure leaves the state untouched
        self._schedule_tick()
        self._state = PlaybackState.PLAYING
        if self.fullscreen_on_play:
            self._enter_presentation()
        self._notify()
        return True

    def pause(self) -> None:
        """Stop advancing and release the presentation mode."""
        if self._state is not PlaybackState.PLAYING:
            return
        self._stop_playback()
        self._state = PlaybackState.PAUSED
        self._notify()

    def toggle(self) -> bool:
        """Play if paused, pause if playing; returns whether playback is running."""
        if self.is_playing:
            self.pause()
            return False
        return self.play()

    def set_wpm(self, wpm: int) -> None:
        """
        Change the rate.

        While playing, the stale pending tick is cancelled and the next one
        is scheduled at the new interval from now.
        """
        calculate_base_duration_ms(wpm)
        if wpm == self._wpm:
            return
        self._wpm = wpm
        if self._state is PlaybackState.PLAYING:
            self._schedule_tick()
        self._notify()

    def seek(self, index: int) -> int:
        """
        Jump to index, clamped to the word range.

        Playing/paused state is left as it is, so a jump during playback
        keeps reading from the new position.

        Returns:
            The index actually set.
        """
        if not self._words:
            return 0

        clamped = max(0, min(index, len(self._words) - 1))
        self._current_index = clamped
        if self._state is PlaybackState.FINISHED:
            self._state = PlaybackState.PAUSED
        self._notify()
        return clamped

    def step_back(self) -> int:
        return self.seek(self._current_index - 1)

    def step_forward(self) -> int:
        return self.seek(self._current_index + 1)

    def reset(self) -> None:
        """Rewind to the first word and pause."""
        self._stop_playback()
        self._current_index = 0
        self._state = PlaybackState.PAUSED if self._words else PlaybackState.IDLE
        self._notify()

    def presentation_exited(self) -> None:
        """Handle the presentation layer leaving exclusive mode on its own."""
        self._presentation_engaged = False
        if self._state is PlaybackState.PLAYING:
            logger.info("Presentation mode exited externally; pausing playback")
            self.pause()

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._pending = self.clock.call_later(self.interval_ms, self._on_tick)

    def _cancel_tick(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _on_tick(self) -> None:
        self._pending = None
        if self._state is not PlaybackState.PLAYING:
            return

        if self._current_index >= len(self._words) - 1:
            logger.debug(
                "Reached last word; stopping",
                extra={"extra_data": {"word_index": self._current_index}},
            )
            self._stop_playback()
            self._state = PlaybackState.FINISHED
            self._notify()
            return

        self._current_index += 1
        logger.debug("Tick", extra={"extra_data": {"word_index": self._current_index}})
        self._schedule_tick()
        self._notify()

    def _stop_playback(self) -> None:
        self._cancel_tick()
        if self._presentation_engaged:
            self._exit_presentation()

    # ------------------------------------------------------------------
    # Presentation mode
    # ------------------------------------------------------------------

    def _enter_presentation(self) -> None:
        if self.presentation is None:
            return
        try:
            self.presentation.enter()
        except Exception:
            # Playback continues without exclusive mode; no retry
            logger.warning("Presentation mode request failed", exc_info=True)
            return
        self._presentation_engaged = True

    def _exit_presentation(self) -> None:
        self._presentation_engaged = False
        if self.presentation is None:
            return
        try:
            self.presentation.exit()
        except Exception:
            logger.warning("Presentation mode release failed", exc_info=True)
