"""
Tokenizer constants.

This module contains the constants shared by the tokenizer and the
ORP highlight calculator.
"""

import re

# Marks a token position that does not correspond to a word
NOT_A_WORD = -1

# -----------------------------------------------------------------------------
# Token Splitting
# -----------------------------------------------------------------------------

# Maximal runs of whitespace or of non-whitespace (unicode aware for str)
TOKEN_PATTERN = re.compile(r"\s+|\S+")

# -----------------------------------------------------------------------------
# Optimal Recognition Point
# -----------------------------------------------------------------------------

# Fraction of the word length at which the highlighted character sits
ORP_RATIO = 0.35
