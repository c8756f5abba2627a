"""
Data models for generation results, history rows and copycat findings.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class GenerationResult:
    """Normalized output of a tweet-improvement call."""
    kind: str  # "single" or "thread"
    tweets: List[str]
    parse_succeeded: bool
    cleaned_text: str
    raw_data: Optional[dict] = None

    @property
    def total_count(self) -> int:
        return len(self.tweets)

    @property
    def is_thread(self) -> bool:
        return self.kind == "thread"

    @property
    def character_count(self) -> int:
        """Length of the first tweet."""
        return len(self.tweets[0]) if self.tweets else 0


@dataclass
class HistoryEntry:
    """Values written to the history table after a successful generation."""
    visitor_id: str
    original_text: str
    improved_text: str
    is_thread: bool
    mode: str = "auto"


class HistoryRecord(BaseModel):
    """A stored history row, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    visitor_id: str
    original_text: str
    improved_text: str
    is_thread: bool
    mode: str
    created_at: datetime


class _CamelModel(BaseModel):
    """Lenient model for JSON produced by the copy-search model."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        """Null fields fall back to their defaults."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class OriginalTweetInfo(_CamelModel):
    content: Optional[str] = None
    date: Optional[str] = None
    url: Optional[str] = None


class MatchedTweet(_CamelModel):
    content: Optional[str] = None
    url: Optional[str] = None
    date: Optional[str] = None
    similarity: Optional[Union[str, float]] = None


class CopycatMatch(_CamelModel):
    suspect: str = ""
    is_copycat: bool = False
    confidence: Literal["high", "medium", "low"] = "low"
    matched_tweet: Optional[MatchedTweet] = None
    explanation: str = ""

    @field_validator("confidence", mode="before")
    @classmethod
    def normalize_confidence(cls, value):
        value = str(value or "").strip().lower()
        return value if value in ("high", "medium", "low") else "low"


class CopycatResult(_CamelModel):
    original_tweet_info: OriginalTweetInfo = Field(default_factory=OriginalTweetInfo)
    results: List[CopycatMatch] = Field(default_factory=list)
    summary: str = ""
