from fastapi import APIRouter

from sentiment_dashboard.schemas.data_ingestion import ChatRequest, ChatResponse
from sentiment_dashboard.services.chat_service import GREETING, SUGGESTED_QUESTIONS, reply

router = APIRouter(tags=["chat"])


@router.get("/chat/suggestions")
def chat_suggestions() -> dict:
    return {"greeting": GREETING, "questions": SUGGESTED_QUESTIONS}


@router.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest) -> ChatResponse:
    return ChatResponse(reply=reply(request.message, request.results))
