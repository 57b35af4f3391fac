from typing import List, Optional, Protocol, Sequence

from business_faq_chat.storage.records import (
    ChatMessageRecord,
    DocumentRecord,
    SessionRecord,
    WebsiteContentRecord,
)
from business_faq_chat.utils.embedding import EMBEDDING_VERSION


class ChatRepository(Protocol):
    """
    Persistence seam used by ingestion, retrieval and the API.
    Backends: InMemoryChatRepository (demo / tests) and db.SqlChatRepository.
    """

    async def create_chat_session(
        self,
        session_id: str,
        api_key: str,
        website_url: Optional[str] = None,
        document_ids: Optional[List[str]] = None,
    ) -> SessionRecord: ...

    async def get_chat_session(self, session_id: str) -> Optional[SessionRecord]: ...

    async def create_document(
        self, session_id: str, filename: str, content: str
    ) -> DocumentRecord: ...

    async def update_document_embedding(
        self, document_id: int, embedding: Sequence[float],
        embedding_version: str = EMBEDDING_VERSION,
    ) -> None: ...

    async def get_documents_by_session_id(self, session_id: str) -> List[DocumentRecord]: ...

    async def create_website_content(
        self, session_id: str, url: str, title: Optional[str], content: str
    ) -> WebsiteContentRecord: ...

    async def update_website_content_embedding(
        self, content_id: int, embedding: Sequence[float],
        embedding_version: str = EMBEDDING_VERSION,
    ) -> None: ...

    async def get_website_content_by_session_id(
        self, session_id: str
    ) -> List[WebsiteContentRecord]: ...

    async def create_chat_message(
        self, session_id: str, role: str, content: str
    ) -> ChatMessageRecord: ...

    async def get_chat_messages_by_session_id(
        self, session_id: str
    ) -> List[ChatMessageRecord]: ...
