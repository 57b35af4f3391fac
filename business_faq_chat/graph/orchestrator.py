from typing import Optional, Protocol

from business_faq_chat.graph.builder import build_graph
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.prompts.prompt_library import (
    EMPTY_RESPONSE_MESSAGE,
    build_system_instruction,
)
from business_faq_chat.src.document_chat.llm_client import GeminiChatClient
from business_faq_chat.src.document_chat.retrieval import RelevanceSelector


class ChatClientProvider(Protocol):
    def get_client(self, credential: Optional[str]) -> GeminiChatClient: ...


class ResponseGenerator:
    """
    Orchestrates one chat turn:
      - relevant content selection
      - grounded prompt (fixed instruction + optional context)
      - language model call
      - confidence / escalation policy

    generate() always returns a user-facing string.
    """

    def __init__(self, selector: RelevanceSelector, client_provider: ChatClientProvider):
        self.selector = selector
        self.client_provider = client_provider

        # compile the graph once at initialization
        self.graph = build_graph()
        log.info("ResponseGenerator initialized")

    async def call_model(self, credential: Optional[str], context: str, user_query: str) -> str:
        # get_client raises ProviderError for missing / unusable credentials
        client = self.client_provider.get_client(credential)
        return await client.generate_text(build_system_instruction(context), user_query)

    async def generate(self, session_id: str, user_query: str, credential: Optional[str]) -> str:
        state = {
            "session_id": session_id,
            "input": user_query,
            "credential": credential,
            "generator": self,
            "steps": [],
        }

        try:
            result = await self.graph.ainvoke(state)
            output = result.get("output") or EMPTY_RESPONSE_MESSAGE
            log.info(
                "Response generated | session_id=%s | steps=%s",
                session_id,
                result.get("steps"),
            )
            return output
        except Exception as e:
            log.error("Failed to generate response | session_id=%s | error=%s", session_id, str(e))
            return EMPTY_RESPONSE_MESSAGE
