"""Reference text extractor for plain-text and markup e-book files."""

import logging
import re
from pathlib import PurePath
from typing import Protocol

from speedread.exceptions import ExtractionError
from speedread.schemas.document import ExtractionResult
from speedread.services.pages import pages_from_page_texts

logger = logging.getLogger(__name__)


class TextExtractor(Protocol):
    """Turns file bytes into text, with page boundaries where the format has them."""

    def extract(self, data: bytes, file_name: str) -> ExtractionResult: ...


class PlainTextExtractor:
    """
    Extract text from plain-text and markup files.

    - Markup e-book files (.mobi, .azw, .azw3, .html, .htm) have their tags
      replaced by spaces and whitespace runs collapsed.
    - Form feed characters are treated as page separators, as produced by
      tools such as pdftotext, and yield page boundaries.
    - Everything else is returned as decoded.
    """

    MARKUP_SUFFIXES = {".mobi", ".azw", ".azw3", ".html", ".htm"}

    PATTERNS = {
        'tags': re.compile(r'<[^>]*>'),
        'whitespace': re.compile(r'\s+'),
    }

    PAGE_BREAK = "\f"

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def extract(self, data: bytes, file_name: str) -> ExtractionResult:
        """
        Extract text from data.

        Args:
            data: Raw file contents.
            file_name: Original file name, used to pick the markup handling.

        Returns:
            ExtractionResult with text and optional pages.

        Raises:
            ExtractionError: If the file is empty or contains no text.
        """
        if not data:
            raise ExtractionError("File is empty", file_name=file_name)

        text = self.decode(data)
        if PurePath(file_name).suffix.lower() in self.MARKUP_SUFFIXES:
            text = self.strip_markup(text)

        if not text.strip():
            raise ExtractionError("No readable text found", file_name=file_name)

        if self.PAGE_BREAK in text:
            joined, pages = pages_from_page_texts(text.split(self.PAGE_BREAK))
            logger.debug("Extracted %d pages from %s", len(pages), file_name)
            return ExtractionResult(text=joined, pages=pages)

        return ExtractionResult(text=text)

    def decode(self, data: bytes) -> str:
        """Decode bytes, honouring a UTF-8 BOM and replacing invalid sequences."""
        encoding = self.encoding
        if encoding.lower().replace("-", "") == "utf8":
            encoding = "utf-8-sig"
        return data.decode(encoding, errors="replace")

    def strip_markup(self, text: str) -> str:
        """Replace tags with spaces and collapse whitespace."""
        text = self.PATTERNS['tags'].sub(' ', text)
        return self.PATTERNS['whitespace'].sub(' ', text)
