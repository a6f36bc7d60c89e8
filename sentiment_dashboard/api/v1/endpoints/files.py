import logging

from fastapi import APIRouter, File, UploadFile

from sentiment_dashboard.core.config import settings
from sentiment_dashboard.schemas.data_ingestion import ExtractionResponse
from sentiment_dashboard.services.file_extractor import (
    SUPPORTED_EXTENSIONS,
    extension_from_filename,
    extract_fragments,
)
from sentiment_dashboard.services.nlp_service import limit_fragments

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


@router.get("/extract/formats")
def supported_formats() -> dict:
    return {
        "formats": SUPPORTED_EXTENSIONS,
        "max_file_size_bytes": settings.max_file_size_bytes,
        "max_fragments": settings.max_fragments_per_file,
    }


@router.post("/extract", response_model=ExtractionResponse)
def extract(file: UploadFile = File(...)) -> ExtractionResponse:
    """
    Extract text fragments from an uploaded file.

    Only the first `max_fragments_per_file` fragments are returned; a warning
    is attached when the file held more.
    """
    filename = file.filename or ""
    content = file.file.read()
    fragments = extract_fragments(
        content, extension_from_filename(filename), max_size=settings.max_file_size_bytes
    )

    limited, warning = limit_fragments(fragments, settings.max_fragments_per_file)
    if warning:
        logger.info(f"{filename}: {warning}")
    return ExtractionResponse(
        filename=filename,
        fragments=limited,
        total_fragments=len(fragments),
        truncated=warning is not None,
        warning=warning,
    )
