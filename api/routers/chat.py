from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_client_manager, get_generator, get_repository
from api.schemas import (
    ChatMessageRequest,
    ChatMessageResponse,
    InsightsResponse,
    SummaryResponse,
)
from business_faq_chat.exception.custom_exception import ProviderError
from business_faq_chat.logger import GLOBAL_LOGGER as log

router = APIRouter()


@router.post("/api/chat/message", response_model=ChatMessageResponse)
async def send_message(
    req: ChatMessageRequest,
    repo=Depends(get_repository),
    generator=Depends(get_generator),
):
    """
    Main chat endpoint.

    Pipeline:
      1. Validate session
      2. Persist the user message
      3. Generate the grounded reply (never fails)
      4. Persist the assistant message
    """
    session_id = req.session_id.strip()
    log.info("Chat request received | session_id=%s", session_id)

    session = await repo.get_chat_session(session_id)
    if not session:
        raise HTTPException(404, "Chat session not found")

    user_message = await repo.create_chat_message(session_id, "user", req.content)

    answer = await generator.generate(
        session_id, req.content, session.api_key.get_secret_value()
    )

    ai_message = await repo.create_chat_message(session_id, "assistant", answer)

    log.info("Chat completed | session_id=%s", session_id)
    return ChatMessageResponse(user_message=user_message, ai_message=ai_message)


async def _session_client(repo, client_manager, session_id: str):
    session = await repo.get_chat_session(session_id)
    if not session:
        raise HTTPException(404, "Chat session not found")

    try:
        client = client_manager.get_client(session.api_key.get_secret_value())
    except ProviderError:
        raise HTTPException(400, "Language model credential is not usable")
    return client


@router.get("/api/chat/insights/{session_id}", response_model=InsightsResponse)
async def get_insights(
    session_id: str,
    repo=Depends(get_repository),
    client_manager=Depends(get_client_manager),
):
    """Sentiment and key topics of what the user has asked so far."""
    client = await _session_client(repo, client_manager, session_id)

    messages = await repo.get_chat_messages_by_session_id(session_id)
    text = "\n".join(m.content for m in messages if m.role == "user")
    if not text:
        raise HTTPException(400, "No user messages to analyze")

    sentiment = await client.analyze_sentiment(text)
    topics = await client.extract_key_topics(text)
    return InsightsResponse(
        session_id=session_id,
        rating=sentiment.rating,
        confidence=sentiment.confidence,
        topics=topics,
    )


@router.get("/api/chat/summary/{session_id}", response_model=SummaryResponse)
async def get_summary(
    session_id: str,
    repo=Depends(get_repository),
    client_manager=Depends(get_client_manager),
):
    """Concise summary of the whole conversation."""
    client = await _session_client(repo, client_manager, session_id)

    messages = await repo.get_chat_messages_by_session_id(session_id)
    if not messages:
        raise HTTPException(400, "No messages to summarize")

    transcript = "\n".join(f"{m.role}: {m.content}" for m in messages)
    summary = await client.summarize_text(transcript)
    log.info("Conversation summarized | session_id=%s", session_id)
    return SummaryResponse(session_id=session_id, summary=summary)
