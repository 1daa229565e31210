"""
Whitespace-preserving tokenizer for RSVP reading.

Raw extracted text is split into maximal runs of whitespace and
non-whitespace characters. Whitespace runs are kept as tokens so the
document view can be rebuilt byte-for-byte, and every non-whitespace
token is assigned a dense word index.

Example usage:
    >>> result = tokenize("Hello  world")
    >>> [t.text for t in result.tokens]
    ['Hello', '  ', 'world']
    >>> result.words
    ['Hello', 'world']
    >>> result.token_to_word
    [0, -1, 1]
"""

from dataclasses import dataclass, field
from typing import List, Optional

from speedread.services.tokenizer.constants import NOT_A_WORD, TOKEN_PATTERN


@dataclass(frozen=True)
class Token:
    """A maximal run of whitespace or non-whitespace characters.

    Attributes:
        text: The exact characters of the run.
        is_whitespace: True when the run contains only whitespace.
    """

    text: str
    is_whitespace: bool


@dataclass
class TokenizedText:
    """Result of tokenization.

    Attributes:
        tokens: Ordered tokens; their texts concatenate to the input.
        words: Text of every non-whitespace token, in order.
        token_to_word: Word index for each token position, or NOT_A_WORD.
        word_to_token: Token position for each word index.
    """

    tokens: List[Token] = field(default_factory=list)
    words: List[str] = field(default_factory=list)
    token_to_word: List[int] = field(default_factory=list)
    word_to_token: List[int] = field(default_factory=list)

    @property
    def total_words(self) -> int:
        return len(self.words)

    def reconstruct(self) -> str:
        """Return the original text by joining all token texts."""
        return "".join(token.text for token in self.tokens)

    def word_for_token(self, token_index: int) -> Optional[int]:
        """
        Resolve a token position to a word index.

        Whitespace tokens resolve to the next word after them; trailing
        whitespace resolves to the last word.

        Args:
            token_index: Position in the token sequence (clamped).

        Returns:
            A word index, or None if the text has no words.
        """
        if not self.words:
            return None

        token_index = max(0, min(token_index, len(self.tokens) - 1))
        for position in range(token_index, len(self.tokens)):
            word_index = self.token_to_word[position]
            if word_index != NOT_A_WORD:
                return word_index

        return len(self.words) - 1


def tokenize(text: str) -> TokenizedText:
    """
    Split text into whitespace and word tokens with index mappings.

    Never raises for str input; the empty string yields an empty result.

    Args:
        text: Raw extracted text.

    Returns:
        TokenizedText with tokens, words and both index mappings.
    """
    result = TokenizedText()

    for match in TOKEN_PATTERN.finditer(text):
        chunk = match.group()
        # A token is a word iff its stripped form is non-empty
        is_whitespace = not chunk.strip()
        result.tokens.append(Token(text=chunk, is_whitespace=is_whitespace))

        if is_whitespace:
            result.token_to_word.append(NOT_A_WORD)
        else:
            result.token_to_word.append(len(result.words))
            result.word_to_token.append(len(result.tokens) - 1)
            result.words.append(chunk)

    return result


def words_from_text(text: str) -> List[str]:
    """Return only the words of text, in order."""
    return tokenize(text).words
