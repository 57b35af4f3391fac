from typing import List, Optional

from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.storage.records import RelevantChunk
from business_faq_chat.storage.repository import ChatRepository
from business_faq_chat.utils.embedding import EMBEDDING_VERSION, cosine_sim, embed_text

DEFAULT_SIMILARITY_THRESHOLD = 0.1
DEFAULT_TOP_K = 5


class RelevanceSelector:
    """
    Selects stored content relevant to a query by embedding similarity.

    - documents first, then website content, in repository order
    - content without an embedding (or embedded by another embedder
      version) is not searchable and is skipped
    - keeps entries strictly above the threshold and takes the first top_k
      (iteration order, no re-sort)
    """

    def __init__(self, repository: ChatRepository, retrieval_config: Optional[dict] = None):
        self.repository = repository
        self.retrieval_config = retrieval_config or {}
        self.similarity_threshold = self.retrieval_config.get(
            "similarity_threshold", DEFAULT_SIMILARITY_THRESHOLD
        )
        self.top_k = self.retrieval_config.get("top_k", DEFAULT_TOP_K)

    async def select(self, session_id: str, query: str) -> List[RelevantChunk]:
        query_embedding = embed_text(query)

        documents = await self.repository.get_documents_by_session_id(session_id)
        pages = await self.repository.get_website_content_by_session_id(session_id)

        candidates = [
            (d.content, f"Document: {d.filename}", d.embedding, d.embedding_version)
            for d in documents
        ] + [
            (p.content, f"Website: {p.url}", p.embedding, p.embedding_version)
            for p in pages
        ]

        selected: List[RelevantChunk] = []
        for content, source, embedding, version in candidates:
            # vectors from another embedder version are not comparable
            if not embedding or version != EMBEDDING_VERSION:
                continue
            similarity = cosine_sim(query_embedding, embedding)
            if similarity > self.similarity_threshold:
                selected.append(
                    RelevantChunk(content=content, source=source, similarity=similarity)
                )
            if len(selected) >= self.top_k:
                break

        log.info(
            "Relevant content selected | session_id=%s | candidates=%d | selected=%d",
            session_id,
            len(candidates),
            len(selected),
        )
        return selected
