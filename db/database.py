import os
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from business_faq_chat.logger import GLOBAL_LOGGER as log
from db.models import Base

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./faq_chatbot.db"


def resolve_database_url(config: Optional[dict] = None) -> str:
    storage_cfg = (config or {}).get("storage", {})
    return os.getenv("DATABASE_URL") or storage_cfg.get("database_url") or DEFAULT_DATABASE_URL


def build_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
        autocommit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database and create tables if they do not exist.
    Should be called once at startup.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("Database initialized and tables created")
