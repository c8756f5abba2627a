"""
Route handlers for copycat detection.
Handles the /api/copycat endpoint.
"""
from fastapi import APIRouter, Depends

from models.api_models import CopycatRequest
from services.copycat_service import CopycatService
from services.model_gateway import ModelGateway, get_model_gateway
from utils.exceptions import AppError, error_response
from utils.logger import app_logger

router = APIRouter()


@router.post("/api/copycat")
async def detect_copycats(
    request: CopycatRequest,
    gateway: ModelGateway = Depends(get_model_gateway)
):
    """
    Find posts that copied the original tweet, either from named suspects or across all of X.
    """
    try:
        return await CopycatService.detect(request, gateway)

    except AppError as e:
        app_logger.error(f"Copycat detection failed: {e.message}")
        return error_response(e.status_code, e.message)
    except Exception as e:
        app_logger.error(f"Copycat error: {str(e)}")
        return error_response(500, f"Failed to detect copycats: {str(e) or 'Unknown error'}")
