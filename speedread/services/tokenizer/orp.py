"""ORP (Optimal Recognition Point) highlight calculator for RSVP reading."""

import math
from typing import NamedTuple

from .constants import ORP_RATIO


class HighlightParts(NamedTuple):
    """A word split around its highlighted character."""

    before: str
    char: str
    after: str


class ORPCalculator:
    """
    Calculate the Optimal Recognition Point for words.

    The ORP is the character position in a word where the eye naturally
    focuses for fastest recognition. It sits a little left of the
    geometric centre, at 35% of the word length, which approximates the
    fixation point reported in RSVP research without needing any
    per-word linguistic analysis.
    """

    def __init__(self, ratio: float = ORP_RATIO) -> None:
        """
        Initialize the ORP calculator.

        Args:
            ratio: Fraction of the word length at which the ORP sits.
        """
        if not 0.0 <= ratio < 1.0:
            raise ValueError(f"ORP ratio must be in [0, 1), got {ratio}")
        self.ratio = ratio

    def calculate(self, word: str) -> int:
        """
        Calculate the ORP index for a word.

        Args:
            word: The word to calculate ORP for.

        Returns:
            The 0-indexed position of the ORP character (0 for empty or
            single-character words).
        """
        if len(word) <= 1:
            return 0

        return math.floor(len(word) * self.ratio)

    def split_for_display(self, word: str) -> HighlightParts:
        """
        Split a word into three parts for ORP display.

        The invariant ``before + char + after == word`` always holds.

        Args:
            word: The word to split.

        Returns:
            HighlightParts(before, char, after).

        Example:
            >>> calc = ORPCalculator()
            >>> calc.split_for_display("reading")
            HighlightParts(before='re', char='a', after='ding')
        """
        if not word:
            return HighlightParts("", "", "")

        if len(word) == 1:
            return HighlightParts("", word, "")

        orp_index = self.calculate(word)
        return HighlightParts(
            before=word[:orp_index],
            char=word[orp_index],
            after=word[orp_index + 1:],
        )


_default_calculator = ORPCalculator()


def highlight(word: str) -> HighlightParts:
    """Split word around its ORP character using the default ratio."""
    return _default_calculator.split_for_display(word)
