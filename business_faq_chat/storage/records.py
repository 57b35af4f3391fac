from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    session_id: str
    # SecretStr keeps the key out of repr() and model_dump_json()
    api_key: SecretStr
    website_url: Optional[str] = None
    document_ids: Optional[List[str]] = None
    created_at: datetime = Field(default_factory=utc_now)


class DocumentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: str
    filename: str
    content: str
    embedding: Optional[List[float]] = None
    embedding_version: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class WebsiteContentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: str
    url: str
    title: Optional[str] = None
    content: str
    embedding: Optional[List[float]] = None
    embedding_version: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class ChatMessageRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: str
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime = Field(default_factory=utc_now)


class RelevantChunk(BaseModel):
    content: str
    source: str
    similarity: float
