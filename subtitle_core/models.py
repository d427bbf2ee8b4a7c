"""Data models for subtitle entries."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

EntryT = TypeVar("EntryT")


class SubtitleEntry(BaseModel):
    """A single cue parsed from an SRT file."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., description="Sequence number as declared in the source")
    start_time: str = Field(..., description="Start timestamp (HH:MM:SS,mmm or HH:MM:SS.mmm)")
    end_time: str = Field(..., description="End timestamp (HH:MM:SS,mmm or HH:MM:SS.mmm)")
    text: str = Field(..., description="All body lines joined with a single space")
    original: Optional[str] = Field(None, description="First body line of a multi-line cue")
    translation: Optional[str] = Field(None, description="Second body line of a multi-line cue")

    @property
    def time_range(self) -> str:
        return f"{self.start_time} --> {self.end_time}"

    def __str__(self) -> str:
        """String representation of the entry."""
        return f"{self.index}: {self.start_time} -> {self.end_time} | {self.text}"


class TextEntry(BaseModel):
    """A single block parsed from annotated text."""

    model_config = ConfigDict(frozen=True)

    time: Optional[str] = Field(None, description="Time range as '<start> --> <end>'")
    content: Optional[str] = Field(None, description="Primary line")
    translation: Optional[str] = Field(None, description="Translated line")
    original: Optional[str] = Field(None, description="Original-language line")
    subtitle: Optional[str] = Field(None, description="Displayed line, preferred over content")

    @property
    def primary_text(self) -> Optional[str]:
        """Subtitle if set, otherwise content."""
        return self.subtitle or self.content or None


class Cue(BaseModel):
    """A timed text cue with times in seconds, as read from a media text track."""

    start: float = Field(..., description="Start time in seconds")
    end: float = Field(..., description="End time in seconds")
    text: str = Field("", description="Cue text, may contain markup")


class ParseResult(BaseModel, Generic[EntryT]):
    """Parsed entries together with diagnostics about skipped input."""

    entries: List[EntryT] = Field(default_factory=list, description="Retained entries in input order")
    total_blocks: int = Field(0, description="Number of non-empty blocks seen")
    skipped_blocks: int = Field(0, description="Number of blocks dropped as malformed")
    warnings: List[str] = Field(default_factory=list, description="Human-readable notes on skipped input")
