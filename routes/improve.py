"""
Route handlers for tweet improvement.
Handles the /api/improve-tweet endpoint.
"""
import time
from fastapi import APIRouter, Depends

from models.api_models import ImproveTweetRequest
from services.history_store import HistoryStore, get_history_store
from services.model_gateway import ModelGateway, get_model_gateway
from services.tweet_service import TweetService
from utils.exceptions import AppError, error_response
from utils.logger import app_logger

router = APIRouter()


@router.post("/api/improve-tweet")
async def improve_tweet(
    request: ImproveTweetRequest,
    gateway: ModelGateway = Depends(get_model_gateway),
    store: HistoryStore = Depends(get_history_store)
):
    """
    Rewrite raw text as a single tweet or a thread.
    """
    start = time.perf_counter()
    try:
        response_data = await TweetService.improve(request, gateway, store)
        app_logger.info(f"Total request took {(time.perf_counter() - start) * 1000:.0f}ms")
        return response_data

    except AppError as e:
        app_logger.error(f"Improve tweet failed: {e.message}")
        return error_response(e.status_code, e.message)
    except Exception as e:
        app_logger.error(f"Error improving tweet: {str(e)}")
        return error_response(500, f"Failed to improve tweet: {str(e) or 'Unknown error'}")
