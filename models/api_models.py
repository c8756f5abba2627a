"""
Pydantic data models for API requests.
"""
from datetime import date
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from config import Config
from utils.constants import GenerationMode, SearchMode


class ImproveTweetRequest(BaseModel):
    """Raw text to turn into a tweet or thread."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., min_length=1)
    add_emojis: bool = Field(False, alias="addEmojis")
    mode: Literal["auto", "single", "thread"] = GenerationMode.AUTO
    visitor_id: Optional[str] = Field(None, alias="visitorId")

    @field_validator("mode", mode="before")
    @classmethod
    def default_mode(cls, value):
        return value or GenerationMode.AUTO


class DeleteHistoryRequest(BaseModel):
    """Identifies one history entry owned by a visitor."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    visitor_id: str = Field(..., min_length=1, alias="visitorId")


class CopycatRequest(BaseModel):
    """
    Copy-search request.

    Targeted mode checks up to five named suspects; open mode searches everyone
    and ignores the suspects list.
    """
    model_config = ConfigDict(populate_by_name=True)

    original_tweet: Optional[str] = Field(None, alias="originalTweet")
    original_date: Optional[date] = Field(None, alias="originalDate")
    tweet_url: Optional[str] = Field(None, alias="tweetUrl")
    suspects: Optional[List[str]] = None
    search_mode: Literal["targeted", "open"] = Field(SearchMode.TARGETED, alias="searchMode")

    @field_validator("original_tweet", "original_date", "tweet_url", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("search_mode", mode="before")
    @classmethod
    def default_search_mode(cls, value):
        return value or SearchMode.TARGETED

    @model_validator(mode="after")
    def check_required_inputs(self) -> "CopycatRequest":
        if not self.original_tweet and not self.tweet_url:
            raise ValueError("Either original tweet text or tweet URL is required")

        if self.search_mode == SearchMode.TARGETED:
            handles = [s for s in (self.suspects or []) if s.strip().lstrip("@").strip()]
            if not handles:
                raise ValueError("At least one suspect handle is required for targeted search")
            if len(self.suspects) > Config.MAX_SUSPECTS:
                raise ValueError(f"Maximum {Config.MAX_SUSPECTS} suspects allowed")

        return self
