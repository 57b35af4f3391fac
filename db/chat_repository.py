from typing import List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.storage.records import (
    ChatMessageRecord,
    DocumentRecord,
    SessionRecord,
    WebsiteContentRecord,
)
from business_faq_chat.utils.embedding import EMBEDDING_VERSION

from .models import ChatSession, Document, Message, WebsiteContent


class SqlChatRepository:
    """
    Repository providing the ChatRepository operations on top of async SQLAlchemy.
    Every call opens its own AsyncSession and commits before returning.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create_chat_session(
        self,
        session_id: str,
        api_key: str,
        website_url: Optional[str] = None,
        document_ids: Optional[List[str]] = None,
    ) -> SessionRecord:
        async with self._session_factory() as db:
            s = ChatSession(
                session_id=session_id,
                api_key=api_key,
                website_url=website_url or None,
                document_ids=document_ids or None,
            )
            db.add(s)
            await db.commit()
            await db.refresh(s)
            log.info("New session created | session_id=%s", s.session_id)
            return SessionRecord.model_validate(s)

    async def get_chat_session(self, session_id: str) -> Optional[SessionRecord]:
        async with self._session_factory() as db:
            s = await db.get(ChatSession, session_id)
            return SessionRecord.model_validate(s) if s else None

    async def create_document(
        self, session_id: str, filename: str, content: str
    ) -> DocumentRecord:
        async with self._session_factory() as db:
            d = Document(session_id=session_id, filename=filename, content=content)
            db.add(d)
            await db.commit()
            await db.refresh(d)
            log.info("Document stored | session_id=%s | document_id=%d", session_id, d.id)
            return DocumentRecord.model_validate(d)

    async def update_document_embedding(
        self, document_id: int, embedding: Sequence[float],
        embedding_version: str = EMBEDDING_VERSION,
    ) -> None:
        async with self._session_factory() as db:
            await db.execute(
                update(Document)
                .where(Document.id == document_id)
                .values(embedding=list(embedding), embedding_version=embedding_version)
            )
            await db.commit()

    async def get_documents_by_session_id(self, session_id: str) -> List[DocumentRecord]:
        async with self._session_factory() as db:
            out = await db.execute(
                select(Document)
                .where(Document.session_id == session_id)
                .order_by(Document.id)
            )
            return [DocumentRecord.model_validate(d) for d in out.scalars().all()]

    async def create_website_content(
        self, session_id: str, url: str, title: Optional[str], content: str
    ) -> WebsiteContentRecord:
        async with self._session_factory() as db:
            w = WebsiteContent(
                session_id=session_id, url=url, title=title or None, content=content
            )
            db.add(w)
            await db.commit()
            await db.refresh(w)
            log.info("Website content stored | session_id=%s | url=%s", session_id, url)
            return WebsiteContentRecord.model_validate(w)

    async def update_website_content_embedding(
        self, content_id: int, embedding: Sequence[float],
        embedding_version: str = EMBEDDING_VERSION,
    ) -> None:
        async with self._session_factory() as db:
            await db.execute(
                update(WebsiteContent)
                .where(WebsiteContent.id == content_id)
                .values(embedding=list(embedding), embedding_version=embedding_version)
            )
            await db.commit()

    async def get_website_content_by_session_id(
        self, session_id: str
    ) -> List[WebsiteContentRecord]:
        async with self._session_factory() as db:
            out = await db.execute(
                select(WebsiteContent)
                .where(WebsiteContent.session_id == session_id)
                .order_by(WebsiteContent.id)
            )
            return [WebsiteContentRecord.model_validate(w) for w in out.scalars().all()]

    async def create_chat_message(
        self, session_id: str, role: str, content: str
    ) -> ChatMessageRecord:
        async with self._session_factory() as db:
            m = Message(session_id=session_id, role=role, content=content)
            db.add(m)
            await db.commit()
            await db.refresh(m)
            return ChatMessageRecord.model_validate(m)

    async def get_chat_messages_by_session_id(
        self, session_id: str
    ) -> List[ChatMessageRecord]:
        """
        Get all messages of a session ordered by creation time.
        """
        async with self._session_factory() as db:
            out = await db.execute(
                select(Message)
                .where(Message.session_id == session_id)
                .order_by(Message.created_at.asc(), Message.id.asc())
            )
            rows = out.scalars().all()
            log.info(
                "Loaded history | session_id=%s | count=%d", session_id, len(rows)
            )
            return [ChatMessageRecord.model_validate(m) for m in rows]
