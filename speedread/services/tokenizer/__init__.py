"""
Tokenizer package for RSVP text processing.

This package contains:
- tokenizer: whitespace-preserving tokenize() and the TokenizedText result
- orp: Optimal Recognition Point highlight calculation
- constants: token pattern, sentinel and ORP ratio

Primary usage:
    >>> from speedread.services.tokenizer import tokenize, highlight
    >>> result = tokenize("Hello world.")
    >>> highlight(result.words[0])
    HighlightParts(before='H', char='e', after='llo')
"""

from .constants import NOT_A_WORD, ORP_RATIO, TOKEN_PATTERN
from .orp import HighlightParts, ORPCalculator, highlight
from .tokenizer import Token, TokenizedText, tokenize, words_from_text


__all__ = [
    # Tokenization
    "Token",
    "TokenizedText",
    "tokenize",
    "words_from_text",
    # Highlight
    "HighlightParts",
    "ORPCalculator",
    "highlight",
    # Constants
    "NOT_A_WORD",
    "ORP_RATIO",
    "TOKEN_PATTERN",
]
