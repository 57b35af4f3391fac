from fastapi import Request

from business_faq_chat.graph.orchestrator import ResponseGenerator
from business_faq_chat.src.document_ingestion.data_ingestion import DataIngestor
from business_faq_chat.storage.repository import ChatRepository
from orchestrator.client_manager import ChatClientManager


def get_repository(request: Request) -> ChatRepository:
    return request.app.state.repository


def get_ingestor(request: Request) -> DataIngestor:
    return request.app.state.ingestor


def get_generator(request: Request) -> ResponseGenerator:
    return request.app.state.generator


def get_client_manager(request: Request) -> ChatClientManager:
    return request.app.state.client_manager


def get_config(request: Request) -> dict:
    return request.app.state.config
