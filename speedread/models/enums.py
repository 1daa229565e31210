"""Enums shared by the reading engine."""

from enum import Enum


class Theme(str, Enum):
    """Enum for the display theme preference."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class PlaybackState(str, Enum):
    """State of the playback scheduler.

    FINISHED behaves like PAUSED but marks that the last word was reached
    by playback rather than by the user stopping.
    """

    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"
    FINISHED = "finished"


class LoadStatus(str, Enum):
    """Outcome of a document load."""

    LOADED = "loaded"
    DECLINED = "declined"
    FAILED = "failed"
