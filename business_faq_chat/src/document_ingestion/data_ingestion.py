from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence

from business_faq_chat.exception.custom_exception import (
    EmbeddingGenerationError,
    ExtractionFailedError,
    SessionNotFoundError,
    UnsupportedFormatError,
)
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.src.document_ingestion.chunking import (
    DEFAULT_MAX_CHUNK_CHARS,
    chunk_text,
)
from business_faq_chat.src.document_ingestion.scraper import WebScraper
from business_faq_chat.storage.records import DocumentRecord, WebsiteContentRecord
from business_faq_chat.storage.repository import ChatRepository
from business_faq_chat.utils.document_ops import extract_text
from business_faq_chat.utils.embedding import EMBEDDING_VERSION, embed_text


# Function to generate a unique session ID:
def generate_session_id() -> str:
    """Generate a unique session ID with timestamp."""
    now = datetime.now()

    day = now.strftime("%d")  # 18
    month = now.strftime("%b").lower()  # nov
    year = now.strftime("%Y")  # 2025
    time_part = now.strftime("%I:%M_%p")  # 03:13_PM

    # Clean time format (remove leading 0, lowercase am/pm)
    time_part = time_part.lstrip("0").lower()

    unique_id = uuid.uuid4().hex[:4]
    return f"session_{day}_{month}_{year}_{time_part}_{unique_id}"


@dataclass
class UploadedFile:
    filename: str
    content_type: Optional[str]
    data: bytes


@dataclass
class IngestionFailure:
    filename: str
    error: str


@dataclass
class IngestionReport:
    documents: List[DocumentRecord] = field(default_factory=list)
    failures: List[IngestionFailure] = field(default_factory=list)


class DataIngestor:
    """
    Brings uploaded files and scraped pages into a session.

    - extract text (uploads) or take scraped text (websites)
    - store the content with a null embedding
    - chunk, embed the first chunk, persist it as the representative embedding

    Extraction errors block the file they belong to. Embedding errors are
    logged and swallowed: the content stays stored but is not searchable.
    """

    def __init__(
        self,
        repository: ChatRepository,
        scraper: Optional[WebScraper] = None,
        max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS,
    ):
        self.repository = repository
        self.scraper = scraper or WebScraper()
        self.max_chunk_chars = max_chunk_chars

    async def _require_session(self, session_id: str) -> None:
        if await self.repository.get_chat_session(session_id) is None:
            raise SessionNotFoundError(session_id)

    def representative_embedding(self, text: str) -> Optional[List[float]]:
        """Embedding of the first chunk; None when the text has no chunks."""
        chunks = chunk_text(text, self.max_chunk_chars)
        first = chunks.first()
        if first is None:
            return None
        # TODO: store one vector per chunk once retrieval works at chunk granularity
        return embed_text(first)

    async def _attach_embedding(
        self,
        content_id: int,
        text: str,
        update: Callable[[int, Sequence[float]], Awaitable[None]],
        kind: str,
    ) -> Optional[List[float]]:
        try:
            embedding = self.representative_embedding(text)
            if embedding is None:
                log.warning("No chunks to embed | %s_id=%d", kind, content_id)
                return None
            await update(content_id, embedding)
            return embedding
        except Exception as e:
            err = EmbeddingGenerationError(f"Failed to generate embeddings for {kind} {content_id}", e)
            log.error("%s", err)
            return None

    async def ingest_document(
        self,
        session_id: str,
        file_bytes: bytes,
        mime_type: Optional[str],
        filename: str,
    ) -> DocumentRecord:
        await self._require_session(session_id)

        # raises UnsupportedFormatError / ExtractionFailedError
        content = await extract_text(file_bytes, mime_type, filename)

        document = await self.repository.create_document(session_id, filename, content)
        embedding = await self._attach_embedding(
            document.id, content, self.repository.update_document_embedding, "document"
        )
        if embedding is not None:
            document = document.model_copy(
                update={"embedding": embedding, "embedding_version": EMBEDDING_VERSION}
            )

        log.info(
            "Document ingested | session_id=%s | file=%s | embedded=%s",
            session_id,
            filename,
            embedding is not None,
        )
        return document

    async def ingest_documents(
        self, session_id: str, uploads: Iterable[UploadedFile]
    ) -> IngestionReport:
        """Ingest each upload independently; one bad file does not block the rest."""
        await self._require_session(session_id)

        report = IngestionReport()
        for upload in uploads:
            try:
                document = await self.ingest_document(
                    session_id, upload.data, upload.content_type, upload.filename
                )
                report.documents.append(document)
            except (UnsupportedFormatError, ExtractionFailedError) as e:
                log.warning("Upload rejected | file=%s | error=%s", upload.filename, str(e))
                report.failures.append(
                    IngestionFailure(filename=upload.filename, error=e.error_message)
                )

        log.info(
            "Upload batch processed | session_id=%s | ingested=%d | failed=%d",
            session_id,
            len(report.documents),
            len(report.failures),
        )
        return report

    async def scrape_website(self, session_id: str, url: str) -> WebsiteContentRecord:
        await self._require_session(session_id)

        # raises ScrapeFailedError
        page = await self.scraper.scrape(url)

        content = await self.repository.create_website_content(
            session_id, url, page.title or url, page.text
        )
        embedding = await self._attach_embedding(
            content.id,
            page.text,
            self.repository.update_website_content_embedding,
            "website_content",
        )
        if embedding is not None:
            content = content.model_copy(
                update={"embedding": embedding, "embedding_version": EMBEDDING_VERSION}
            )
        return content
