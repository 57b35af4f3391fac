from .memory_repository import InMemoryChatRepository
from .records import (
    ChatMessageRecord,
    DocumentRecord,
    RelevantChunk,
    SessionRecord,
    WebsiteContentRecord,
)
from .repository import ChatRepository

__all__ = [
    "ChatMessageRecord",
    "ChatRepository",
    "DocumentRecord",
    "InMemoryChatRepository",
    "RelevantChunk",
    "SessionRecord",
    "WebsiteContentRecord",
]
