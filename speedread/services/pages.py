"""
Page index for paginated documents.

Maps word indices to page numbers using the page boundaries reported by
the extractor. Pages are expected to partition the word range in order;
pages without any words are dropped rather than represented as empty
ranges, so lookups never land on them.
"""

import bisect
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from speedread.schemas.document import Page
from speedread.services.tokenizer import words_from_text

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = " "


class PageIndex:
    """
    Word-range-to-page lookup.

    Lookups remember the last matching page and probe it and its
    neighbours first, so stepping through the document one word at a time
    costs O(1) per call. Larger jumps fall back to a binary search.
    """

    def __init__(self, pages: Iterable[Page] = ()) -> None:
        ordered = sorted(pages, key=lambda page: page.page_number)
        self._pages: List[Page] = []
        for page in ordered:
            if page.is_empty:
                logger.debug("Skipping page %d with no words", page.page_number)
                continue
            if self._pages and page.word_start != self._pages[-1].word_end + 1:
                logger.warning(
                    "Page %d starts at word %d, expected %d",
                    page.page_number,
                    page.word_start,
                    self._pages[-1].word_end + 1,
                )
            self._pages.append(page)

        self._starts = [page.word_start for page in self._pages]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._pages)

    def __bool__(self) -> bool:
        return bool(self._pages)

    @property
    def pages(self) -> List[Page]:
        return list(self._pages)

    @property
    def page_count(self) -> int:
        """Number of pages; a document without page data counts as one page."""
        if not self._pages:
            return 1
        return self._pages[-1].page_number

    def lookup(self, word_index: int) -> int:
        """
        Return the page number containing word_index.

        Without page data every word is on page 1. When no page contains
        the index (inconsistent boundaries) the last known page number is
        returned instead of failing.
        """
        if not self._pages:
            return 1

        position = self._find(word_index)
        if position is None:
            return self._pages[self._cursor].page_number

        self._cursor = position
        return self._pages[position].page_number

    def _find(self, word_index: int) -> Optional[int]:
        # Steady-state playback moves by one word: try the cursor page and its neighbours
        for position in (self._cursor, self._cursor + 1, self._cursor - 1):
            if 0 <= position < len(self._pages) and self._pages[position].contains(word_index):
                return position

        position = bisect.bisect_right(self._starts, word_index) - 1
        if position >= 0 and self._pages[position].contains(word_index):
            return position
        return None

    def page_range(self, page_number: int) -> Optional[Tuple[int, int]]:
        """Return (word_start, word_end) for page_number, or None if unknown."""
        for page in self._pages:
            if page.page_number == page_number:
                return page.word_start, page.word_end
        return None

    def first_word_of_page(self, page_number: int) -> Optional[int]:
        """
        Return the first word index on page_number.

        A page that was dropped for having no words resolves to the next
        page that has words.
        """
        for page in self._pages:
            if page.page_number >= page_number:
                return page.word_start
        return None


def build_page_index(pages: Optional[Sequence[Page]]) -> PageIndex:
    """Build a PageIndex; None or an empty list gives single-page mode."""
    return PageIndex(pages or ())


def pages_from_page_texts(page_texts: Sequence[str]) -> Tuple[str, List[Page]]:
    """
    Join per-page text and compute each page's word range.

    Pages are numbered from 1 in input order. Pages with no words produce
    no Page entry and consume no word indices, so the resulting ranges
    partition the words with no gaps.

    Args:
        page_texts: Text of each page, in page order.

    Returns:
        Tuple of (joined text, pages).
    """
    pages: List[Page] = []
    word_count = 0

    for page_number, page_text in enumerate(page_texts, start=1):
        page_words = len(words_from_text(page_text))
        if page_words == 0:
            logger.debug("Page %d has no extractable words", page_number)
            continue

        pages.append(
            Page(
                page_number=page_number,
                word_start=word_count,
                word_end=word_count + page_words - 1,
            )
        )
        word_count += page_words

    return PAGE_SEPARATOR.join(page_texts), pages
