from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from business_faq_chat.storage.records import (
    ChatMessageRecord,
    DocumentRecord,
    SessionRecord,
)


class CreateSessionRequest(BaseModel):
    session_id: Optional[str] = None
    # empty means "use the server's GOOGLE_API_KEY / GEMINI_API_KEY"
    api_key: str = ""
    website_url: Optional[str] = None
    document_ids: Optional[List[str]] = None


class SessionOut(BaseModel):
    session_id: str
    website_url: Optional[str] = None
    document_ids: Optional[List[str]] = None
    created_at: datetime
    website_error: Optional[str] = None

    @classmethod
    def from_record(cls, record: SessionRecord, website_error: Optional[str] = None):
        # api_key is deliberately not part of the response
        return cls(
            session_id=record.session_id,
            website_url=record.website_url,
            document_ids=record.document_ids,
            created_at=record.created_at,
            website_error=website_error,
        )


class UploadError(BaseModel):
    filename: str
    error: str


class UploadResponse(BaseModel):
    documents: List[DocumentRecord]
    errors: List[UploadError] = []
    message: str


class ChatMessageRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class ChatMessageResponse(BaseModel):
    user_message: ChatMessageRecord
    ai_message: ChatMessageRecord


class InsightsResponse(BaseModel):
    session_id: str
    rating: float
    confidence: float
    topics: List[str]


class SummaryResponse(BaseModel):
    session_id: str
    summary: str