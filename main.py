"""
Tweet Improver API - FastAPI application that relays prompts to hosted LLMs.
Rewrites raw text into tweets/threads, keeps per-visitor history and runs copycat searches.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from config import Config
from routes import improve, history, copycat
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    yield
    await HTTPClientManager.close_all()

app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def format_validation_error(error: dict) -> str:
    """Turn the first pydantic error into a single readable sentence."""
    error_type = error.get('type', '')
    loc = error.get('loc') or []
    field = loc[-1] if len(loc) > 1 else 'body'

    if error_type == 'missing' or (error_type == 'string_too_short' and error.get('input') == ''):
        return f"{field} is required"
    if error_type == 'value_error' and 'error' in error.get('ctx', {}):
        return str(error['ctx']['error'])
    if error_type == 'json_invalid':
        return "Request body must be valid JSON"

    return f"{field}: {error.get('msg', 'Validation error')}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with a 400 and a user-friendly message."""
    errors = exc.errors()
    app_logger.error(f"Validation error for {request.url}")
    app_logger.error(f"Errors: {errors}")

    message = format_validation_error(errors[0]) if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


#root endpoint
@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"message": "Tweet Improver API is running"}

app.include_router(improve.router, tags=["tweets"])
app.include_router(history.router, tags=["history"])
app.include_router(copycat.router, tags=["copycat"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
