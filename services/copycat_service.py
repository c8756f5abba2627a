"""
CopyCat detection service.
Delegates the search itself to a hosted model with live X search.
"""
import time

from models.api_models import CopycatRequest
from services.model_gateway import ModelGateway
from services.prompt_builder import PromptBuilder
from services.response_normalizer import ResponseNormalizer
from utils.constants import PARSE_WARNING, PromptKind, SearchMode
from utils.logger import app_logger


class CopycatService:
    """Service for the copycat flow."""

    @staticmethod
    async def detect(request: CopycatRequest, gateway: ModelGateway) -> dict:
        """
        Search for copies of the original tweet.

        Raises:
            ConfigurationError: OpenRouter key missing
            UpstreamUnavailableError: the model returned no text
        """
        start = time.perf_counter()
        gateway.ensure_configured()

        prompt = PromptBuilder.build(PromptKind.COPYCAT, request=request)
        if request.search_mode == SearchMode.OPEN:
            app_logger.info("Starting OPEN SEARCH across X...")
        else:
            suspects = PromptBuilder.clean_suspects(request.suspects)
            app_logger.info(f"Starting TARGETED detection with {len(suspects)} suspects...")

        response_text, annotations = await gateway.search(prompt)
        result, parsed, cleaned = ResponseNormalizer.normalize_copycat(response_text)

        processing_time = int((time.perf_counter() - start) * 1000)
        app_logger.info(f"Total copycat request took {processing_time}ms")

        if parsed is None:
            return {
                "success": True,
                "searchMode": request.search_mode,
                "rawResponse": cleaned,
                "parseWarning": PARSE_WARNING,
                "processingTime": processing_time,
            }

        return {
            "success": True,
            **(result.model_dump(by_alias=True) if result is not None else parsed),
            "searchMode": request.search_mode,
            "annotations": annotations,
            "processingTime": processing_time,
        }
