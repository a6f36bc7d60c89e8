from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List


class Sentiment(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


class SentimentScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    positive: float
    negative: float
    neutral: float

    def for_sentiment(self, sentiment: Sentiment) -> float:
        return getattr(self, sentiment.value.lower())


class SentimentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    sentiment: Sentiment
    confidence: float = Field(ge=0.0, le=1.0)
    scores: SentimentScores
    keywords: List[str] = Field(default_factory=list)
    timestamp: datetime
    explanation: str


class SentimentDistribution(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class AnalysisSummary(BaseModel):
    total_texts: int
    average_confidence: float
    sentiment_distribution: SentimentDistribution


class SentimentAnalysis(BaseModel):
    results: List[SentimentResult]
    summary: AnalysisSummary


class HistoryEntry(BaseModel):
    id: str
    name: str
    date: datetime
    analysis: SentimentAnalysis
