"""FastAPI application wiring the chat service."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .errors import ChatbotError
from .models import ChatRequest, ErrorResponse
from .service import ChatService, build_chat_service

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# Force a predictable logging setup even when run under uvicorn. ``force=True``
# replaces uvicorn's default handlers.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx", "openai"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

GENERIC_ERROR_MESSAGE = "Internal server error"

app = FastAPI(
    title="Product Chatbot API",
    description="Answers product and currency enquiries through an LLM with function calling.",
    version="1.0",
    docs_url="/api",
)


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    return build_chat_service(settings)


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(
        statusCode=status_code,
        message=message,
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(ChatbotError)
async def chatbot_error_handler(request: Request, exc: ChatbotError) -> JSONResponse:
    logger.error("%s while handling %s: %s", type(exc).__name__, request.url.path, exc)
    return _error_response(request, 500, GENERIC_ERROR_MESSAGE)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return _error_response(request, 400, problems or "Invalid request")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while handling %s", request.url.path)
    return _error_response(request, 500, GENERIC_ERROR_MESSAGE)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "model": settings.chat_model}


@app.post("/chatbot", response_class=PlainTextResponse, summary="Chat with the chatbot")
async def chat(request: ChatRequest, service: ChatService = Depends(get_chat_service)) -> str:
    return await asyncio.to_thread(service.handle, request.userEnquiry)
