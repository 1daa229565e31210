"""Pydantic schemas for the persisted reading session and reader settings."""

from datetime import UTC, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from speedread.models.enums import Theme


class RecordBase(BaseModel):
    """Base schema for persisted records (camelCase on disk)."""

    model_config = ConfigDict(populate_by_name=True)


class ProgressRecord(RecordBase):
    """Snapshot of a reading session as written to the persistent store."""

    words: list[str]
    current_index: int = Field(
        0,
        ge=0,
        serialization_alias="currentIndex",
        validation_alias=AliasChoices("currentIndex", "current_index", "index"),
    )
    file_name: str = Field(
        "",
        serialization_alias="fileName",
        validation_alias=AliasChoices("fileName", "file_name"),
    )
    last_read: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        serialization_alias="lastRead",
        validation_alias=AliasChoices("lastRead", "last_read"),
    )
    total_words: int | None = Field(
        None,
        serialization_alias="totalWords",
        validation_alias=AliasChoices("totalWords", "total_words"),
    )

    @model_validator(mode="after")
    def _fill_total_words(self) -> "ProgressRecord":
        # Older records carry no count; the word list is authoritative
        self.total_words = len(self.words)
        return self

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class ReaderSettings(RecordBase):
    """User-facing reader preferences, independent of any loaded document."""

    highlight_color: str = "#ef4444"
    theme: Theme = Theme.SYSTEM
    fullscreen_on_play: bool = False
