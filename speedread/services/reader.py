"""
Reader controller.

Single owner of the reading session and the reader settings. The
presentation layer calls the methods here and subscribes to playback
snapshots; it never mutates session state directly.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from speedread.config import Settings, get_settings
from speedread.models.enums import LoadStatus, PlaybackState, Theme
from speedread.schemas.document import ExtractionResult, Page
from speedread.schemas.session import ReaderSettings
from speedread.services.clock import Clock, LoopClock
from speedread.services.extraction import PlainTextExtractor, TextExtractor
from speedread.services.minimap import MinimapEntry, context_window, sample
from speedread.services.pages import PageIndex, build_page_index
from speedread.services.progress_store import ProgressStore
from speedread.services.scheduler import (
    Listener,
    PlaybackScheduler,
    PlaybackSnapshot,
    PresentationMode,
)
from speedread.services.session import ReadingSession
from speedread.services.timing import estimate_reading_time_ms, format_duration
from speedread.services.tokenizer import HighlightParts, TokenizedText, highlight, tokenize

logger = logging.getLogger(__name__)

ConfirmLargeDocument = Callable[[int], bool]


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a load request."""

    status: LoadStatus
    word_count: int = 0
    page_count: int = 0
    error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.status is LoadStatus.LOADED


class ReaderController:
    """
    Owns the loaded document, playback scheduler, settings and persistence.

    Args:
        store: Where progress and settings are persisted; None disables it.
        clock: Timer source for playback ticks. Defaults to a LoopClock,
            which needs a running asyncio event loop by the first play();
            synchronous hosts must pass their own clock (e.g. ManualClock).
        presentation: Exclusive presentation mode entered on play when
            fullscreen_on_play is set.
        confirm_large_document: Called with the word count of documents
            above large_document_threshold; returning False declines the load.
        extractor: Default extractor for load_file().
        config: Settings; defaults to get_settings().
    """

    def __init__(
        self,
        store: Optional[ProgressStore] = None,
        clock: Optional[Clock] = None,
        presentation: Optional[PresentationMode] = None,
        confirm_large_document: Optional[ConfirmLargeDocument] = None,
        extractor: Optional[TextExtractor] = None,
        config: Optional[Settings] = None,
    ) -> None:
        self.config = config or get_settings()
        self.store = store
        self.extractor = extractor or PlainTextExtractor()
        self.confirm_large_document = confirm_large_document

        self._settings = ReaderSettings(
            highlight_color=self.config.default_highlight_color,
            theme=self.config.default_theme,
            fullscreen_on_play=self.config.fullscreen_on_play,
        )
        self.scheduler = PlaybackScheduler(
            clock or LoopClock(),
            wpm=self._clamp_wpm(self.config.default_wpm),
            presentation=presentation,
            fullscreen_on_play=self._settings.fullscreen_on_play,
        )

        self._document = TokenizedText()
        self._page_index = PageIndex()
        self._pending_pages: Optional[List[Page]] = None
        self._file_name = ""
        self._last_saved_index: Optional[int] = None
        self._autosave = True

        self.scheduler.subscribe(self._on_playback_change)

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def session(self) -> ReadingSession:
        return ReadingSession(
            words=self._document.words,
            current_index=self.scheduler.current_index,
            wpm=self.scheduler.wpm,
            is_playing=self.scheduler.is_playing,
            file_name=self._file_name,
        )

    @property
    def settings(self) -> ReaderSettings:
        return self._settings

    @property
    def document(self) -> TokenizedText:
        return self._document

    @property
    def words(self) -> List[str]:
        return self._document.words

    @property
    def file_name(self) -> str:
        return self._file_name

    @property
    def page_index(self) -> PageIndex:
        return self._page_index

    @property
    def state(self) -> PlaybackState:
        return self.scheduler.state

    @property
    def current_index(self) -> int:
        return self.scheduler.current_index

    @property
    def has_pending_pages(self) -> bool:
        return self._pending_pages is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.scheduler.subscribe(listener)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_file(
        self,
        data: bytes,
        file_name: str,
        extractor: Optional[TextExtractor] = None,
    ) -> LoadResult:
        """
        Extract data and load it as the new session.

        Extractor failures are reported in the result and leave the
        current session untouched.
        """
        extractor = extractor or self.extractor
        try:
            extraction = extractor.extract(data, file_name)
        except Exception as exc:
            logger.exception("Failed to extract %s", file_name)
            self._pending_pages = None
            return LoadResult(status=LoadStatus.FAILED, error=str(exc) or type(exc).__name__)

        return self.load_extraction(extraction, file_name)

    def load_extraction(self, extraction: ExtractionResult, file_name: str) -> LoadResult:
        return self.load_text(extraction.text, file_name, pages=extraction.pages)

    def load_text(
        self,
        text: str,
        file_name: str = "",
        pages: Optional[Sequence[Page]] = None,
    ) -> LoadResult:
        """
        Tokenize text and replace the current session with it.

        Documents above the configured word threshold go through the
        confirmation callback first; declining keeps the current session.
        """
        self._pending_pages = list(pages) if pages else []
        document = tokenize(text)
        word_count = document.total_words

        threshold = self.config.large_document_threshold
        if word_count > threshold and self.confirm_large_document is not None:
            if not self.confirm_large_document(word_count):
                logger.info(
                    "Load of %s declined at %d words (threshold %d)",
                    file_name,
                    word_count,
                    threshold,
                )
                self._pending_pages = None
                return LoadResult(status=LoadStatus.DECLINED, word_count=word_count)

        page_index = build_page_index(self._pending_pages)
        self._pending_pages = None
        self._install(document, page_index, file_name)

        logger.info(
            "Loaded %s: %d words, %d pages",
            file_name or "<text>",
            word_count,
            len(page_index),
            extra={"extra_data": {"word_count": word_count, "file_name": file_name}},
        )
        return LoadResult(
            status=LoadStatus.LOADED,
            word_count=word_count,
            page_count=len(page_index),
        )

    def _install(self, document: TokenizedText, page_index: PageIndex, file_name: str) -> None:
        # Everything is built before this point so the swap is all-or-nothing
        self._document = document
        self._page_index = page_index
        self._file_name = file_name
        self._last_saved_index = None
        self.scheduler.load(document.words)

    def restore(self) -> bool:
        """
        Restore settings and the last session from the store.

        The restored session has no page data and starts paused.

        Returns:
            True if a session was restored.
        """
        if self.store is None:
            return False

        progress, settings = self.store.load(defaults=self._settings)
        if settings is not None:
            self._apply_settings(settings)

        if progress is None:
            return False

        document = tokenize(" ".join(progress.words))
        # The stored record already holds this position; nothing to write back
        self._autosave = False
        try:
            self._install(document, PageIndex(), progress.file_name)
            self.scheduler.seek(progress.current_index)
        finally:
            self._autosave = True
        self._last_saved_index = self.scheduler.current_index
        logger.info(
            "Restored %s at word %d of %d",
            progress.file_name,
            self.scheduler.current_index,
            document.total_words,
        )
        return True

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def play(self) -> bool:
        return self.scheduler.play()

    def pause(self) -> None:
        self.scheduler.pause()

    def toggle(self) -> bool:
        return self.scheduler.toggle()

    def seek(self, index: int) -> int:
        return self.scheduler.seek(index)

    def step_back(self) -> int:
        return self.scheduler.step_back()

    def step_forward(self) -> int:
        return self.scheduler.step_forward()

    def reset(self) -> None:
        self.scheduler.reset()

    def presentation_exited(self) -> None:
        self.scheduler.presentation_exited()

    def set_wpm(self, wpm: int) -> int:
        """Set the rate, clamped to the configured range; returns the rate applied."""
        applied = self._clamp_wpm(wpm)
        self.scheduler.set_wpm(applied)
        return applied

    def faster(self) -> int:
        return self.set_wpm(self.scheduler.wpm + self.config.wpm_step)

    def slower(self) -> int:
        return self.set_wpm(self.scheduler.wpm - self.config.wpm_step)

    def _clamp_wpm(self, wpm: int) -> int:
        return max(self.config.min_wpm, min(wpm, self.config.max_wpm))

    # ------------------------------------------------------------------
    # Navigation and views
    # ------------------------------------------------------------------

    @property
    def current_word(self) -> str:
        if not self.words:
            return ""
        return self.words[self.scheduler.current_index]

    def highlight_current(self) -> HighlightParts:
        return highlight(self.current_word)

    @property
    def current_page(self) -> int:
        return self._page_index.lookup(self.scheduler.current_index)

    @property
    def page_count(self) -> int:
        return self._page_index.page_count

    def go_to_page(self, page_number: int) -> Optional[int]:
        """Seek to the first word of page_number; None if the page is unknown."""
        word_index = self._page_index.first_word_of_page(page_number)
        if word_index is None:
            return None
        return self.seek(word_index)

    def jump_to_token(self, token_index: int) -> Optional[int]:
        """Seek to the word at (or following) a token from the document view."""
        word_index = self._document.word_for_token(token_index)
        if word_index is None:
            return None
        return self.seek(word_index)

    def minimap(self, max_visible: Optional[int] = None) -> List[MinimapEntry]:
        if max_visible is None:
            max_visible = self.config.minimap_max_visible
        return sample(self.words, self.scheduler.current_index, max_visible)

    def context_words(self, size: Optional[int] = None) -> List[MinimapEntry]:
        if size is None:
            size = self.config.context_window_size
        return context_window(self.words, self.scheduler.current_index, size)

    @property
    def progress_percent(self) -> float:
        if not self.words:
            return 0.0
        return self.scheduler.current_index / len(self.words) * 100

    @property
    def words_remaining(self) -> int:
        if not self.words:
            return 0
        return len(self.words) - 1 - self.scheduler.current_index

    def time_remaining_ms(self) -> float:
        return estimate_reading_time_ms(self.words_remaining, self.scheduler.wpm)

    def time_remaining_formatted(self) -> str:
        return format_duration(self.time_remaining_ms())

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def highlight_colors(self) -> dict[str, str]:
        return dict(self.config.highlight_colors)

    def set_theme(self, theme: Theme | str) -> None:
        self._update_settings(theme=Theme(theme))

    def set_highlight_color(self, color: str) -> None:
        self._update_settings(highlight_color=color)

    def set_fullscreen_on_play(self, enabled: bool) -> None:
        self._update_settings(fullscreen_on_play=enabled)

    def _update_settings(self, **changes) -> None:
        self._apply_settings(self._settings.model_copy(update=changes))
        if self.store is not None:
            self.store.save_settings(self._settings)

    def _apply_settings(self, settings: ReaderSettings) -> None:
        self._settings = settings
        self.scheduler.fullscreen_on_play = settings.fullscreen_on_play

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Persist the session snapshot (if non-empty) and the settings."""
        if self.store is None:
            return
        self.store.save(self.session, self._settings)
        self._last_saved_index = self.scheduler.current_index

    def _on_playback_change(self, snapshot: PlaybackSnapshot) -> None:
        if self.store is None or not self._autosave or snapshot.total_words == 0:
            return
        if snapshot.current_index == self._last_saved_index:
            return
        self.store.save(self.session)
        self._last_saved_index = snapshot.current_index
