"""Pydantic schemas for extractor output."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Page(BaseModel):
    """A contiguous word range belonging to one page of the source document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page_number: int = Field(..., ge=1, alias="pageNumber")
    word_start: int = Field(..., ge=0, alias="wordStart")
    word_end: int = Field(..., ge=-1, alias="wordEnd")

    @property
    def is_empty(self) -> bool:
        return self.word_end < self.word_start

    @property
    def word_count(self) -> int:
        return max(0, self.word_end - self.word_start + 1)

    def contains(self, word_index: int) -> bool:
        return self.word_start <= word_index <= self.word_end


class ExtractionResult(BaseModel):
    """Text extracted from a file, with page boundaries for paginated formats."""

    text: str
    pages: list[Page] | None = None

    @model_validator(mode="after")
    def _sort_pages(self) -> "ExtractionResult":
        if self.pages:
            self.pages = sorted(self.pages, key=lambda page: page.page_number)
        return self

    @property
    def is_paginated(self) -> bool:
        return bool(self.pages)
