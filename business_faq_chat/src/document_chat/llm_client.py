from __future__ import annotations

from enum import Enum
from typing import List, Type, TypeVar

from langchain_core.output_parsers import JsonOutputParser, StrOutputParser
from pydantic import BaseModel, Field

from business_faq_chat.exception.custom_exception import ProviderError, ProviderErrorKind
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.prompts.prompt_library import (
    CREDENTIAL_CHECK_PROMPT,
    KEY_TOPICS_INSTRUCTION,
    PROMPT_REGISTRY,
    SENTIMENT_INSTRUCTION,
    SUMMARY_EMPTY_MESSAGE,
    SUMMARY_FAILED_MESSAGE,
    SUMMARY_INSTRUCTION,
    UNCERTAINTY_MARKERS,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

MAX_KEY_TOPICS = 10


class ReplyTag(str, Enum):
    EMPTY = "empty"
    UNCERTAIN = "uncertain"
    CONFIDENT = "confident"


class SentimentResult(BaseModel):
    rating: float = Field(..., description="1 (very negative) to 5 (very positive)")
    confidence: float = Field(..., description="0 to 1")


class KeyTopics(BaseModel):
    topics: List[str] = Field(default_factory=list, description="Main topics, at most 10")


NEUTRAL_SENTIMENT = SentimentResult(rating=3, confidence=0.5)


def classify_provider_error(exc: BaseException) -> ProviderErrorKind:
    """Translate vendor error text into a ProviderErrorKind."""
    if "API_KEY" in str(exc):
        return ProviderErrorKind.CREDENTIAL
    return ProviderErrorKind.GENERIC


def tag_reply(text: str | None) -> ReplyTag:
    """Classify raw model output for the escalation policy."""
    if not text or not text.strip():
        return ReplyTag.EMPTY
    lowered = text.lower()
    if any(marker.lower() in lowered for marker in UNCERTAINTY_MARKERS):
        return ReplyTag.UNCERTAIN
    return ReplyTag.CONFIDENT


class GeminiChatClient:
    """
    Thin adapter around a LangChain chat model.

    Every vendor exception leaves this class as a ProviderError carrying a
    ProviderErrorKind, so callers never inspect vendor error text.
    """

    def __init__(self, llm, analysis_llm=None):
        self.llm = llm
        self.analysis_llm = analysis_llm or llm
        self.prompt = PROMPT_REGISTRY["chat"]

    async def generate_text(self, system_instruction: str, user_prompt: str) -> str:
        chain = self.prompt | self.llm | StrOutputParser()
        try:
            return await chain.ainvoke(
                {"system_instruction": system_instruction, "input": user_prompt}
            )
        except Exception as e:
            kind = classify_provider_error(e)
            log.error("Gemini call failed | kind=%s | error=%s", kind.value, str(e))
            raise ProviderError(f"Language model call failed: {e}", kind, e) from e

    async def generate_structured(
        self, system_instruction: str, user_prompt: str, schema: Type[SchemaT]
    ) -> SchemaT:
        parser = JsonOutputParser(pydantic_object=schema)
        instruction = f"{system_instruction}\n\n{parser.get_format_instructions()}"
        chain = self.prompt | self.analysis_llm | parser
        try:
            data = await chain.ainvoke({"system_instruction": instruction, "input": user_prompt})
            return schema.model_validate(data)
        except Exception as e:
            kind = classify_provider_error(e)
            log.error("Structured Gemini call failed | kind=%s | error=%s", kind.value, str(e))
            raise ProviderError(f"Structured model call failed: {e}", kind, e) from e

    async def verify_credential(self) -> bool:
        try:
            reply = await self.generate_text("You are a helpful assistant.", CREDENTIAL_CHECK_PROMPT)
            return bool(reply)
        except ProviderError as e:
            log.warning("API key test failed | kind=%s", e.kind.value)
            return False

    async def analyze_sentiment(self, text: str) -> SentimentResult:
        try:
            result = await self.generate_structured(SENTIMENT_INSTRUCTION, text, SentimentResult)
        except ProviderError:
            return NEUTRAL_SENTIMENT
        return SentimentResult(
            rating=max(1, min(5, result.rating)),
            confidence=max(0, min(1, result.confidence)),
        )

    async def extract_key_topics(self, text: str) -> List[str]:
        try:
            result = await self.generate_structured(KEY_TOPICS_INSTRUCTION, text, KeyTopics)
        except ProviderError:
            return []
        return result.topics[:MAX_KEY_TOPICS]

    async def summarize_text(self, text: str) -> str:
        """Concise summary; fixed fallback texts on empty output or failure."""
        try:
            summary = await self.generate_text(SUMMARY_INSTRUCTION, text)
        except ProviderError:
            return SUMMARY_FAILED_MESSAGE
        return summary or SUMMARY_EMPTY_MESSAGE
