"""
Progress store adapter.

Serializes the reading-session snapshot and the reader settings to a
key-value store, and restores them. Persisted data is never trusted:
anything that fails to parse degrades to "no record" or to the default
value of the affected setting, and is only logged.

Record layout (keys carry the configured prefix, "speedreader-" by default):
    progress          {"words", "currentIndex", "fileName", "lastRead", "totalWords"}
    theme             "light" | "dark" | "system"
    fullscreenOnPlay  true | false
    highlightColor    opaque color string
"""

import json
import logging
from datetime import UTC, datetime
from typing import Optional, Tuple

from pydantic import ValidationError

from speedread.config import Settings, get_settings
from speedread.models.enums import Theme
from speedread.schemas.session import ProgressRecord, ReaderSettings
from speedread.services.session import ReadingSession
from speedread.services.storage import KeyValueStore, SqlKeyValueStore

logger = logging.getLogger(__name__)

PROGRESS_KEY = "progress"
THEME_KEY = "theme"
FULLSCREEN_KEY = "fullscreenOnPlay"
HIGHLIGHT_COLOR_KEY = "highlightColor"


class ProgressStore:
    """Read and write reader state through a KeyValueStore."""

    def __init__(self, store: KeyValueStore, key_prefix: str = "speedreader-") -> None:
        self.store = store
        self.key_prefix = key_prefix

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ProgressStore":
        """Open the SQL-backed store configured by database_url."""
        config = config or get_settings()
        return cls(
            SqlKeyValueStore.from_url(config.database_url),
            key_prefix=config.storage_key_prefix,
        )

    def _key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save(
        self,
        session: ReadingSession,
        settings: Optional[ReaderSettings] = None,
    ) -> Optional[ProgressRecord]:
        """
        Persist the session snapshot and, if given, the settings.

        The snapshot is written only for a non-empty word list.

        Returns:
            The record written, or None when the session was empty.
        """
        record = None
        if not session.is_empty:
            record = ProgressRecord(
                words=list(session.words),
                current_index=session.current_index,
                file_name=session.file_name,
                last_read=datetime.now(UTC),
            )
            self.store.set(self._key(PROGRESS_KEY), record.to_json())

        if settings is not None:
            self.save_settings(settings)

        return record

    def save_settings(self, settings: ReaderSettings) -> None:
        """Persist each setting as its own record."""
        self.store.set(self._key(THEME_KEY), settings.theme.value)
        self.store.set(self._key(FULLSCREEN_KEY), json.dumps(settings.fullscreen_on_play))
        self.store.set(self._key(HIGHLIGHT_COLOR_KEY), settings.highlight_color)

    def clear_progress(self) -> None:
        self.store.delete(self._key(PROGRESS_KEY))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(
        self, defaults: Optional[ReaderSettings] = None
    ) -> Tuple[Optional[ProgressRecord], Optional[ReaderSettings]]:
        """Return (progress, settings); either half is None if nothing usable is stored."""
        return self.load_progress(), self.load_settings(defaults)

    def load_progress(self) -> Optional[ProgressRecord]:
        raw = self.store.get(self._key(PROGRESS_KEY))
        if raw is None:
            return None

        try:
            record = ProgressRecord.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding unreadable progress record: %s",
                exc.errors(include_url=False)[:1],
            )
            return None

        if not record.words:
            return None
        return record

    def load_settings(
        self, defaults: Optional[ReaderSettings] = None
    ) -> Optional[ReaderSettings]:
        defaults = defaults or ReaderSettings()
        raw_theme = self.store.get(self._key(THEME_KEY))
        raw_fullscreen = self.store.get(self._key(FULLSCREEN_KEY))
        raw_color = self.store.get(self._key(HIGHLIGHT_COLOR_KEY))

        if raw_theme is None and raw_fullscreen is None and raw_color is None:
            return None

        return ReaderSettings(
            theme=self._parse_theme(raw_theme, defaults.theme),
            fullscreen_on_play=self._parse_bool(raw_fullscreen, defaults.fullscreen_on_play),
            highlight_color=raw_color if raw_color else defaults.highlight_color,
        )

    @staticmethod
    def _parse_theme(raw: Optional[str], default: Theme) -> Theme:
        if raw is None:
            return default
        # Accept both bare strings and JSON-encoded strings
        value = raw.strip().strip('"')
        try:
            return Theme(value)
        except ValueError:
            logger.warning("Ignoring unknown theme %r", raw)
            return default

    @staticmethod
    def _parse_bool(raw: Optional[str], default: bool) -> bool:
        if raw is None:
            return default
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable fullscreenOnPlay value %r", raw)
            return default
        if not isinstance(value, bool):
            logger.warning("Ignoring non-boolean fullscreenOnPlay value %r", raw)
            return default
        return value
