"""API dependencies."""
from functools import lru_cache

from sentiment_dashboard.core.config import settings
from sentiment_dashboard.services.history_service import AnalysisHistory
from sentiment_dashboard.services.nlp_service import LexiconClassifier


@lru_cache(maxsize=1)
def get_classifier() -> LexiconClassifier:
    """One classifier per process; its lexicon is immutable and shared."""
    return LexiconClassifier.from_settings(settings)


@lru_cache(maxsize=1)
def get_history() -> AnalysisHistory:
    return AnalysisHistory(limit=settings.history_limit)
