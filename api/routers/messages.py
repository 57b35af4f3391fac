from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_repository
from business_faq_chat.storage.records import ChatMessageRecord

router = APIRouter()


@router.get("/api/chat/history/{session_id}", response_model=List[ChatMessageRecord])
async def get_history(session_id: str, repo=Depends(get_repository)):
    return await repo.get_chat_messages_by_session_id(session_id)
