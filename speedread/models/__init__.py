"""Models for the reading engine."""

from speedread.models.enums import LoadStatus, PlaybackState, Theme
from speedread.models.store import StoreEntry

__all__ = [
    "StoreEntry",
    "LoadStatus",
    "PlaybackState",
    "Theme",
]
