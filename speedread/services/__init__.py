"""Business logic services for the reading engine."""

from speedread.services.clock import Clock, LoopClock, ManualClock
from speedread.services.extraction import PlainTextExtractor, TextExtractor
from speedread.services.minimap import MinimapEntry, context_window, sample
from speedread.services.pages import PageIndex, build_page_index, pages_from_page_texts
from speedread.services.progress_store import ProgressStore
from speedread.services.reader import LoadResult, ReaderController
from speedread.services.scheduler import PlaybackScheduler, PlaybackSnapshot, PresentationMode
from speedread.services.session import ReadingSession
from speedread.services.storage import InMemoryStore, KeyValueStore, SqlKeyValueStore
from speedread.services.tokenizer import (
    HighlightParts,
    ORPCalculator,
    Token,
    TokenizedText,
    highlight,
    tokenize,
)

__all__ = [
    # Indexing
    "Token",
    "TokenizedText",
    "tokenize",
    "HighlightParts",
    "ORPCalculator",
    "highlight",
    "PageIndex",
    "build_page_index",
    "pages_from_page_texts",
    "MinimapEntry",
    "sample",
    "context_window",
    # Playback
    "Clock",
    "LoopClock",
    "ManualClock",
    "PlaybackScheduler",
    "PlaybackSnapshot",
    "PresentationMode",
    "ReadingSession",
    # Persistence
    "KeyValueStore",
    "InMemoryStore",
    "SqlKeyValueStore",
    "ProgressStore",
    # Extraction
    "TextExtractor",
    "PlainTextExtractor",
    # Controller
    "ReaderController",
    "LoadResult",
]
