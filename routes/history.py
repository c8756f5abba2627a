"""
Route handlers for visitor history.
"""
from fastapi import APIRouter, Depends, Query, Response, status

from models.api_models import DeleteHistoryRequest
from services.history_store import HistoryStore, get_history_store
from utils.exceptions import error_response
from utils.logger import app_logger

router = APIRouter()


@router.get("/api/history")
async def list_history(
    visitor_id: str = Query(..., alias="visitorId", min_length=1),
    store: HistoryStore = Depends(get_history_store)
):
    """List a visitor's saved generations, newest first."""
    try:
        records = store.list(visitor_id)
        return {"history": [record.model_dump(mode="json", by_alias=True) for record in records]}
    except Exception as e:
        app_logger.error(f"History fetch error: {str(e)}")
        return error_response(500, f"Failed to fetch history: {str(e)}")


@router.delete("/api/history", status_code=status.HTTP_204_NO_CONTENT)
async def delete_history(
    request: DeleteHistoryRequest,
    store: HistoryStore = Depends(get_history_store)
):
    """Delete one entry. Entries owned by another visitor are left untouched."""
    try:
        store.delete(request.id, request.visitor_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        app_logger.error(f"History delete error: {str(e)}")
        return error_response(500, f"Failed to delete history entry: {str(e)}")
