"""Reading session snapshot."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ReadingSession:
    """Point-in-time view of the loaded document and playback position.

    Attributes:
        words: Word list of the loaded document.
        current_index: Index of the active word (0 for an empty session).
        wpm: Playback rate in words per minute.
        is_playing: Whether playback is advancing.
        file_name: Name of the source file.
    """

    words: List[str] = field(default_factory=list)
    current_index: int = 0
    wpm: int = 300
    is_playing: bool = False
    file_name: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.words

    @property
    def total_words(self) -> int:
        return len(self.words)
