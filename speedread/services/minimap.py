"""Minimap and context views over the word list."""

import math
from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class MinimapEntry:
    """A word shown in an overview, with its position in the document."""

    word: str
    index: int
    is_current: bool = False


def sample(words: Sequence[str], current_index: int, max_visible: int) -> List[MinimapEntry]:
    """
    Downsample words to roughly max_visible entries for an overview.

    Every word whose index is a multiple of ceil(len(words) / max_visible)
    is kept, and the word at current_index is always included. Output is
    in ascending index order without duplicates.

    Args:
        words: Full word list.
        current_index: Index of the active word.
        max_visible: Target number of entries (must be >= 1).

    Returns:
        List of MinimapEntry.
    """
    if max_visible < 1:
        raise ValueError(f"max_visible must be at least 1, got {max_visible}")

    total = len(words)
    if total <= max_visible:
        return [
            MinimapEntry(word=word, index=i, is_current=i == current_index)
            for i, word in enumerate(words)
        ]

    stride = math.ceil(total / max_visible)
    entries: List[MinimapEntry] = []
    current_pending = 0 <= current_index < total and current_index % stride != 0

    for i in range(0, total, stride):
        if current_pending and current_index < i:
            entries.append(MinimapEntry(word=words[current_index], index=current_index, is_current=True))
            current_pending = False
        entries.append(MinimapEntry(word=words[i], index=i, is_current=i == current_index))

    if current_pending:
        entries.append(MinimapEntry(word=words[current_index], index=current_index, is_current=True))

    return entries


def context_window(words: Sequence[str], current_index: int, size: int = 50) -> List[MinimapEntry]:
    """Return the words from current_index - size up to (not including) current_index + size."""
    start = max(0, current_index - size)
    end = min(len(words), current_index + size)
    return [
        MinimapEntry(word=words[i], index=i, is_current=i == current_index)
        for i in range(start, end)
    ]
