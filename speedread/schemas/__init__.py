"""Pydantic schemas for the reading engine."""

from speedread.schemas.document import ExtractionResult, Page
from speedread.schemas.session import ProgressRecord, ReaderSettings

__all__ = [
    # Extractor output
    "ExtractionResult",
    "Page",
    # Persisted records
    "ProgressRecord",
    "ReaderSettings",
]
