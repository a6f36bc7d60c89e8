import logging

from fastapi import APIRouter, Depends, HTTPException

from sentiment_dashboard.api.deps import get_classifier, get_history
from sentiment_dashboard.schemas.analysis_result import SentimentAnalysis
from sentiment_dashboard.schemas.data_ingestion import AnalyzeRequest
from sentiment_dashboard.services.history_service import AnalysisHistory
from sentiment_dashboard.services.nlp_service import LexiconClassifier, analyze_texts

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


@router.post("/analyze", response_model=SentimentAnalysis)
def analyze(
    request: AnalyzeRequest,
    classifier: LexiconClassifier = Depends(get_classifier),
    history: AnalysisHistory = Depends(get_history),
) -> SentimentAnalysis:
    if not any(t.strip() for t in request.texts):
        raise HTTPException(status_code=400, detail="Please enter some text to analyze")

    result = analyze_texts(request.texts, classifier)
    if request.save_to_history:
        history.record(result)
    return result
