from typing import List

from fastapi import APIRouter, Depends, HTTPException

from sentiment_dashboard.api.deps import get_history
from sentiment_dashboard.schemas.analysis_result import HistoryEntry
from sentiment_dashboard.services.history_service import AnalysisHistory

router = APIRouter(tags=["history"])


@router.get("/history", response_model=List[HistoryEntry])
def list_history(history: AnalysisHistory = Depends(get_history)) -> List[HistoryEntry]:
    return history.list()


@router.get("/history/{entry_id}", response_model=HistoryEntry)
def get_history_entry(entry_id: str, history: AnalysisHistory = Depends(get_history)) -> HistoryEntry:
    entry = history.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"History entry {entry_id} not found")
    return entry


@router.delete("/history", status_code=204)
def clear_history(history: AnalysisHistory = Depends(get_history)) -> None:
    history.clear()
