import itertools
from typing import Dict, List, Optional, Sequence

from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.storage.records import (
    ChatMessageRecord,
    DocumentRecord,
    SessionRecord,
    WebsiteContentRecord,
)
from business_faq_chat.utils.embedding import EMBEDDING_VERSION


class InMemoryChatRepository:
    """
    Process-local storage for the demo and the test-suite.
    Records are copied on the way in and out so callers can only mutate
    state through the repository methods.
    """

    def __init__(self):
        self._sessions: Dict[str, SessionRecord] = {}
        self._documents: Dict[int, DocumentRecord] = {}
        self._website_content: Dict[int, WebsiteContentRecord] = {}
        self._messages: Dict[int, ChatMessageRecord] = {}

        self._document_ids = itertools.count(1)
        self._website_content_ids = itertools.count(1)
        self._message_ids = itertools.count(1)

    # ---------------- sessions ----------------
    async def create_chat_session(
        self,
        session_id: str,
        api_key: str,
        website_url: Optional[str] = None,
        document_ids: Optional[List[str]] = None,
    ) -> SessionRecord:
        session = SessionRecord(
            session_id=session_id,
            api_key=api_key,
            website_url=website_url or None,
            document_ids=document_ids or None,
        )
        self._sessions[session_id] = session
        log.info("New session created | session_id=%s", session_id)
        return session.model_copy()

    async def get_chat_session(self, session_id: str) -> Optional[SessionRecord]:
        session = self._sessions.get(session_id)
        return session.model_copy() if session else None

    # ---------------- documents ----------------
    async def create_document(
        self, session_id: str, filename: str, content: str
    ) -> DocumentRecord:
        document = DocumentRecord(
            id=next(self._document_ids),
            session_id=session_id,
            filename=filename,
            content=content,
        )
        self._documents[document.id] = document
        log.info(
            "Document stored | session_id=%s | document_id=%d", session_id, document.id
        )
        return document.model_copy()

    async def update_document_embedding(
        self, document_id: int, embedding: Sequence[float],
        embedding_version: str = EMBEDDING_VERSION,
    ) -> None:
        document = self._documents.get(document_id)
        if document:
            document.embedding = list(embedding)
            document.embedding_version = embedding_version

    async def get_documents_by_session_id(self, session_id: str) -> List[DocumentRecord]:
        return [
            d.model_copy(deep=True)
            for d in self._documents.values()
            if d.session_id == session_id
        ]

    # ---------------- website content ----------------
    async def create_website_content(
        self, session_id: str, url: str, title: Optional[str], content: str
    ) -> WebsiteContentRecord:
        page = WebsiteContentRecord(
            id=next(self._website_content_ids),
            session_id=session_id,
            url=url,
            title=title or None,
            content=content,
        )
        self._website_content[page.id] = page
        log.info("Website content stored | session_id=%s | url=%s", session_id, url)
        return page.model_copy()

    async def update_website_content_embedding(
        self, content_id: int, embedding: Sequence[float],
        embedding_version: str = EMBEDDING_VERSION,
    ) -> None:
        page = self._website_content.get(content_id)
        if page:
            page.embedding = list(embedding)
            page.embedding_version = embedding_version

    async def get_website_content_by_session_id(
        self, session_id: str
    ) -> List[WebsiteContentRecord]:
        return [
            p.model_copy(deep=True)
            for p in self._website_content.values()
            if p.session_id == session_id
        ]

    # ---------------- messages ----------------
    async def create_chat_message(
        self, session_id: str, role: str, content: str
    ) -> ChatMessageRecord:
        message = ChatMessageRecord(
            id=next(self._message_ids),
            session_id=session_id,
            role=role,
            content=content,
        )
        self._messages[message.id] = message
        return message.model_copy()

    async def get_chat_messages_by_session_id(
        self, session_id: str
    ) -> List[ChatMessageRecord]:
        rows = [m for m in self._messages.values() if m.session_id == session_id]
        # restore chronological order
        rows.sort(key=lambda m: (m.created_at, m.id))
        return [m.model_copy() for m in rows]
