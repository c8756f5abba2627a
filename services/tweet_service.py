"""
Tweet improvement service.
Runs prompt building, generation, normalization and history persistence.
"""
from typing import Optional

from models.api_models import ImproveTweetRequest
from models.result_models import GenerationResult, HistoryEntry
from services.history_store import HistoryStore
from services.model_gateway import ModelGateway
from services.prompt_builder import PromptBuilder
from services.response_normalizer import ResponseNormalizer
from utils.constants import HISTORY_TWEET_SEPARATOR, PARSE_WARNING, PromptKind
from utils.logger import app_logger, log_duration


class TweetService:
    """Service for the improve-tweet flow."""

    @staticmethod
    def build_response(result: GenerationResult) -> dict:
        """Shape a GenerationResult into the improve-tweet JSON body."""
        if not result.parse_succeeded:
            return {
                "success": True,
                "type": "single",
                "tweets": result.tweets,
                "isThread": False,
                "characterCount": len(result.cleaned_text),
                "totalTweets": result.total_count,
                "parseWarning": PARSE_WARNING,
            }

        return {
            "success": True,
            "type": result.kind,
            "tweets": result.tweets,
            "rawData": result.raw_data,
            "isThread": result.is_thread,
            "characterCount": result.character_count,
            "totalTweets": result.total_count,
        }

    @staticmethod
    def to_history_entry(request: ImproveTweetRequest, result: GenerationResult) -> Optional[HistoryEntry]:
        """Entry to persist, or None when nothing should be stored."""
        if not request.visitor_id or not result.parse_succeeded or not result.tweets:
            return None

        return HistoryEntry(
            visitor_id=request.visitor_id,
            original_text=request.text,
            improved_text=HISTORY_TWEET_SEPARATOR.join(result.tweets),
            is_thread=result.is_thread,
            mode=request.mode
        )

    @staticmethod
    async def improve(request: ImproveTweetRequest, gateway: ModelGateway, store: HistoryStore) -> dict:
        """
        Improve raw text into a tweet or thread.

        Raises:
            ConfigurationError: OpenRouter key missing
            UpstreamUnavailableError: every backend failed
        """
        gateway.ensure_configured()

        prompt = PromptBuilder.build(
            PromptKind.TWEET,
            text=request.text,
            add_emojis=request.add_emojis,
            mode=request.mode
        )

        app_logger.info("Starting generation...")
        with log_duration("Generation"):
            response_text = await gateway.generate(prompt)

        result = ResponseNormalizer.normalize_tweets(response_text)

        entry = TweetService.to_history_entry(request, result)
        if entry is not None:
            store.record(entry)

        return TweetService.build_response(result)
