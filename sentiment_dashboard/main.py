import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sentiment_dashboard.core.config import settings
from sentiment_dashboard.core.exceptions import (
    ExtractionError,
    FileTooLarge,
    UnsupportedFormat,
)
from sentiment_dashboard.api.v1.endpoints.sentiment import router as sentiment_router
from sentiment_dashboard.api.v1.endpoints.files import router as files_router
from sentiment_dashboard.api.v1.endpoints.history import router as history_router
from sentiment_dashboard.api.v1.endpoints.export import router as export_router
from sentiment_dashboard.api.v1.endpoints.chat import router as chat_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        f"{settings.app_name} starting (max upload {settings.max_file_size_bytes} bytes, "
        f"history limit {settings.history_limit})"
    )
    yield
    logger.info(f"{settings.app_name} stopped")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sentiment_router, prefix="/api/v1")
app.include_router(files_router, prefix="/api/v1")
app.include_router(history_router, prefix="/api/v1")
app.include_router(export_router, prefix="/api/v1")
app.include_router(chat_router, prefix="/api/v1")


@app.exception_handler(ExtractionError)
async def extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    if isinstance(exc, UnsupportedFormat):
        status_code = 415
    elif isinstance(exc, FileTooLarge):
        status_code = 413
    else:
        status_code = 422
    logger.warning(f"Extraction failed ({exc.kind}): {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "error": exc.kind})


@app.get("/health")
def health():
    return {"status": "ok"}
