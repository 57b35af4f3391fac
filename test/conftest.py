from typing import Callable, List, Optional

import pytest
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from business_faq_chat.src.document_chat.llm_client import GeminiChatClient
from business_faq_chat.src.document_ingestion.scraper import ScrapedPage
from business_faq_chat.storage import InMemoryChatRepository
from business_faq_chat.utils.config_loader import load_config


class RecordingLLM:
    """
    Stand-in chat model. Records every prompt it receives and answers with
    ``reply`` (a string, a callable of the system text, or an exception).
    """

    def __init__(self, reply="Thanks for asking!"):
        self.reply = reply
        self.calls: List[dict] = []

    def _respond(self, prompt_value):
        messages = prompt_value.to_messages()
        system = messages[0].content
        user = messages[-1].content
        self.calls.append({"system": system, "user": user})

        if isinstance(self.reply, BaseException):
            raise self.reply
        if callable(self.reply):
            return AIMessage(content=self.reply(system))
        return AIMessage(content=self.reply)

    def as_runnable(self) -> RunnableLambda:
        return RunnableLambda(self._respond)

    @property
    def last_system(self) -> str:
        return self.calls[-1]["system"]


class FakeClientProvider:
    """ChatClientProvider returning a GeminiChatClient over a RecordingLLM."""

    def __init__(self, llm: RecordingLLM, error: Optional[Exception] = None):
        self.llm = llm
        self.error = error
        self.credentials: List[Optional[str]] = []

    def get_client(self, credential):
        self.credentials.append(credential)
        if self.error:
            raise self.error
        return GeminiChatClient(self.llm.as_runnable())


class StubScraper:
    def __init__(self, page: Optional[ScrapedPage] = None, error: Optional[Exception] = None):
        self.page = page
        self.error = error
        self.urls: List[str] = []

    async def scrape(self, url: str) -> ScrapedPage:
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.page or ScrapedPage(url=url, title="Acme", text="Acme sells widgets. Open daily.")


@pytest.fixture
def repository() -> InMemoryChatRepository:
    return InMemoryChatRepository()


@pytest.fixture
def recording_llm() -> RecordingLLM:
    return RecordingLLM()


@pytest.fixture
def client_provider(recording_llm) -> FakeClientProvider:
    return FakeClientProvider(recording_llm)


@pytest.fixture
def config() -> dict:
    cfg = load_config()
    cfg["storage"] = {"backend": "memory"}
    return cfg


@pytest.fixture
def unit_vector() -> Callable[[float], list]:
    """100-dim unit vector whose cosine with e_a (the embedding of "a") is ``cos``."""

    def _make(cos: float) -> list:
        vector = [0.0] * 100
        vector[0] = cos
        vector[1] = (1 - cos * cos) ** 0.5
        return vector

    return _make
