from __future__ import annotations

from typing import Optional

from cachetools import TTLCache

from business_faq_chat.exception.custom_exception import ProviderError, ProviderErrorKind
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.src.document_chat.llm_client import (
    GeminiChatClient,
    classify_provider_error,
)
from business_faq_chat.utils.hashing import hash_str
from business_faq_chat.utils.model_loader import ModelLoader


class ChatClientManager:
    """
    Keeps a cache of GeminiChatClient instances, one per credential.

    The cache key is a SHA-256 of the credential so the raw key never
    appears as a key or in logs.
    """

    def __init__(self, model_loader: Optional[ModelLoader] = None):
        self.model_loader = model_loader or ModelLoader()
        cache_cfg = self.model_loader.config.get("client_cache", {})
        self.cache = TTLCache(
            maxsize=cache_cfg.get("maxsize", 500), ttl=cache_cfg.get("ttl", 3600)
        )

    def get_client(self, credential: Optional[str]) -> GeminiChatClient:
        """
        Get or lazily create a client for the given credential.
        """
        resolved = self.model_loader.api_key_mgr.resolve(credential)
        if not resolved:
            raise ProviderError("Missing API_KEY for language model", ProviderErrorKind.CREDENTIAL)

        key = hash_str(resolved)
        if key not in self.cache:
            log.info("Creating new chat client | credential_hash=%s", key[:12])
            try:
                self.cache[key] = GeminiChatClient(
                    llm=self.model_loader.load_llm("chat", resolved),
                    analysis_llm=self.model_loader.load_llm("analysis", resolved),
                )
            except Exception as e:
                raise ProviderError(
                    f"Failed to build language model client: {e}",
                    classify_provider_error(e),
                    e,
                ) from e
        else:
            log.debug("Reusing cached chat client | credential_hash=%s", key[:12])

        return self.cache[key]
