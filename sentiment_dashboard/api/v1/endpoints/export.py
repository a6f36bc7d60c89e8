from fastapi import APIRouter, HTTPException, Response

from sentiment_dashboard.schemas.analysis_result import SentimentAnalysis
from sentiment_dashboard.services.export_service import (
    EXPORT_MEDIA_TYPES,
    EXPORTERS,
    export_filename,
)

router = APIRouter(tags=["export"])


@router.post("/export/{fmt}")
def export_analysis(fmt: str, analysis: SentimentAnalysis) -> Response:
    """Render an analysis as a downloadable csv, json or text report."""
    fmt = fmt.lower()
    if fmt not in EXPORTERS:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown export format: {fmt}. Use one of: {', '.join(EXPORTERS)}",
        )
    content = EXPORTERS[fmt](analysis)
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{export_filename(fmt)}"'},
    )
