from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import (
    chat,
    data_upload,
    health,
    messages,
    session,
)
from business_faq_chat.graph.orchestrator import ChatClientProvider, ResponseGenerator
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.src.document_chat.retrieval import RelevanceSelector
from business_faq_chat.src.document_ingestion.chunking import DEFAULT_MAX_CHUNK_CHARS
from business_faq_chat.src.document_ingestion.data_ingestion import DataIngestor
from business_faq_chat.src.document_ingestion.scraper import WebScraper
from business_faq_chat.storage.repository import ChatRepository
from business_faq_chat.utils.config_loader import load_config
from business_faq_chat.utils.model_loader import ModelLoader
from db.database import init_db
from db.repository_factory import build_repository
from orchestrator.client_manager import ChatClientManager


def create_app(
    config: Optional[dict] = None,
    repository: Optional[ChatRepository] = None,
    client_manager: Optional[ChatClientProvider] = None,
    scraper: Optional[WebScraper] = None,
) -> FastAPI:
    """
    Build the FastAPI app. Collaborators can be injected (tests pass an
    in-memory repository, a fake client provider and a stub scraper).
    """
    config = config if config is not None else load_config()

    engine = None
    if repository is None:
        repository, engine = build_repository(config)

    if client_manager is None:
        client_manager = ChatClientManager(ModelLoader(config))

    chunking_cfg = config.get("chunking", {})
    ingestor = DataIngestor(
        repository,
        scraper=scraper or WebScraper(config.get("scraper", {})),
        max_chunk_chars=chunking_cfg.get("max_chunk_chars", DEFAULT_MAX_CHUNK_CHARS),
    )
    selector = RelevanceSelector(repository, config.get("retrieval", {}))
    generator = ResponseGenerator(selector, client_manager)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Application startup initiated")
        if engine is not None:
            await init_db(engine)
        yield
        if engine is not None:
            await engine.dispose()
        log.info("Application shutdown")

    app = FastAPI(title="Business FAQ Chatbot", version="1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.repository = repository
    app.state.client_manager = client_manager
    app.state.ingestor = ingestor
    app.state.generator = generator

    # Router Registration
    app.include_router(health.router, tags=["health"])
    app.include_router(session.router, tags=["session"])
    app.include_router(data_upload.router, tags=["upload"])
    app.include_router(chat.router, tags=["chat"])
    app.include_router(messages.router, tags=["messages"])

    @app.get("/")
    async def root():
        return {"message": "Backend is running"}

    return app
