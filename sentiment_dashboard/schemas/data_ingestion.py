from pydantic import BaseModel, Field
from typing import List, Optional

from sentiment_dashboard.schemas.analysis_result import SentimentResult


class AnalyzeRequest(BaseModel):
    texts: List[str] = Field(default_factory=list)
    save_to_history: bool = True


class ExtractionResponse(BaseModel):
    filename: str
    fragments: List[str]
    total_fragments: int
    truncated: bool = False
    warning: Optional[str] = None


class ChatRequest(BaseModel):
    message: str
    results: List[SentimentResult] = Field(default_factory=list)


class ChatResponse(BaseModel):
    reply: str
