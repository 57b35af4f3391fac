from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncEngine

from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.storage import ChatRepository, InMemoryChatRepository
from db.chat_repository import SqlChatRepository
from db.database import build_engine, build_session_factory, resolve_database_url


def build_repository(config: Optional[dict] = None) -> Tuple[ChatRepository, Optional[AsyncEngine]]:
    """
    Pick the storage backend from config["storage"]["backend"].
    Returns the repository and, for the SQL backend, the engine that
    still needs init_db() / dispose().
    """
    backend = (config or {}).get("storage", {}).get("backend", "memory")

    if backend == "memory":
        log.info("Using in-memory storage backend")
        return InMemoryChatRepository(), None

    if backend == "sql":
        database_url = resolve_database_url(config)
        engine = build_engine(database_url)
        log.info("Using SQL storage backend | dialect=%s", engine.dialect.name)
        return SqlChatRepository(build_session_factory(engine)), engine

    raise ValueError(f"Unsupported storage backend {backend}")
