from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_ingestor, get_repository
from api.schemas import CreateSessionRequest, SessionOut
from business_faq_chat.exception.custom_exception import ScrapeFailedError
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.src.document_ingestion.data_ingestion import generate_session_id

router = APIRouter()


@router.post("/api/chat/session", response_model=SessionOut)
async def create_session(
    req: CreateSessionRequest,
    repo=Depends(get_repository),
    ingestor=Depends(get_ingestor),
):
    """
    Create a chat session. If a website URL is given it is scraped right
    away; a failed scrape is reported but the session is still created.
    """
    session_id = (req.session_id or "").strip() or generate_session_id()

    if await repo.get_chat_session(session_id) is not None:
        raise HTTPException(409, "Chat session already exists")

    session = await repo.create_chat_session(
        session_id=session_id,
        api_key=req.api_key,
        website_url=req.website_url,
        document_ids=req.document_ids,
    )

    website_error: Optional[str] = None
    if req.website_url:
        try:
            await ingestor.scrape_website(session_id, req.website_url)
        except ScrapeFailedError as e:
            # Continue without website content
            log.error("Failed to scrape website | session_id=%s | error=%s", session_id, str(e))
            website_error = e.error_message

    return SessionOut.from_record(session, website_error=website_error)


@router.get("/api/chat/session/{session_id}", response_model=SessionOut)
async def get_session(session_id: str, repo=Depends(get_repository)):
    session = await repo.get_chat_session(session_id)
    if not session:
        raise HTTPException(404, "Chat session not found")
    return SessionOut.from_record(session)
