"""
Turns raw model text into structured results.
Strips markdown code fences, parses JSON and falls back to the raw text.
"""
import json
import re
from typing import Optional, Tuple
from pydantic import ValidationError

from models.result_models import GenerationResult, CopycatResult
from utils.constants import Patterns
from utils.logger import app_logger


class ResponseNormalizer:
    """Parses model output for both endpoints."""

    @staticmethod
    def strip_code_fence(text: str) -> str:
        """Remove a ```json / ``` wrapper around the text."""
        cleaned = re.sub(Patterns.FENCE_OPEN_JSON, '', text, flags=re.IGNORECASE)
        cleaned = re.sub(Patterns.FENCE_OPEN, '', cleaned, flags=re.IGNORECASE)
        cleaned = re.sub(Patterns.FENCE_CLOSE, '', cleaned, flags=re.IGNORECASE)
        return cleaned.strip()

    @staticmethod
    def parse_json_object(text: str) -> Optional[dict]:
        """Parse text as a JSON object. Returns None for invalid JSON or non-objects."""
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            app_logger.warning(f"JSON parse error: {e}")
            return None

        if not isinstance(parsed, dict):
            app_logger.warning(f"Expected a JSON object, got {type(parsed).__name__}")
            return None
        return parsed

    @staticmethod
    def _join_parts(tweet) -> Optional[str]:
        """hook, body and closing separated by blank lines."""
        if not isinstance(tweet, dict):
            return None
        parts = [str(tweet.get(key) or "").strip() for key in ("hook", "body", "closing")]
        joined = "\n\n".join(part for part in parts if part)
        return joined or None

    @staticmethod
    def _format_tweets(parsed: dict) -> Optional[list[str]]:
        kind = parsed.get("type")

        if kind == "single":
            tweet = ResponseNormalizer._join_parts(parsed.get("tweet"))
            return [tweet] if tweet else None

        if kind == "thread":
            entries = parsed.get("tweets")
            if not isinstance(entries, list) or not entries:
                return None
            tweets = [ResponseNormalizer._join_parts(entry) for entry in entries]
            if any(tweet is None for tweet in tweets):
                return None
            return tweets

        return None

    @staticmethod
    def normalize_tweets(raw_text: str) -> GenerationResult:
        """
        Normalize a tweet-improvement response.

        Invalid JSON or an unexpected shape is not an error: the cleaned text is
        returned as a single tweet with parse_succeeded=False.
        """
        cleaned = ResponseNormalizer.strip_code_fence(raw_text)
        parsed = ResponseNormalizer.parse_json_object(cleaned)

        tweets = ResponseNormalizer._format_tweets(parsed) if parsed is not None else None
        if tweets is None:
            if parsed is not None:
                app_logger.warning(f"Unexpected response shape (type={parsed.get('type')!r}), using raw text")
            return GenerationResult(
                kind="single",
                tweets=[cleaned],
                parse_succeeded=False,
                cleaned_text=cleaned
            )

        return GenerationResult(
            kind=parsed["type"],
            tweets=tweets,
            parse_succeeded=True,
            cleaned_text=cleaned,
            raw_data=parsed
        )

    @staticmethod
    def normalize_copycat(raw_text: str) -> Tuple[Optional[CopycatResult], Optional[dict], str]:
        """
        Normalize a copy-search response.

        Returns:
            (result, parsed, cleaned_text). result is None when the JSON doesn't
            fit the copycat shape; parsed is None when the text isn't a JSON object.
        """
        cleaned = ResponseNormalizer.strip_code_fence(raw_text)
        parsed = ResponseNormalizer.parse_json_object(cleaned)
        if parsed is None:
            return None, None, cleaned

        try:
            return CopycatResult.model_validate(parsed), parsed, cleaned
        except ValidationError as e:
            app_logger.warning(f"Copycat response did not match expected shape: {e.error_count()} errors")
            return None, parsed, cleaned
