from .custom_exception import (
    ChatbotException,
    EmbeddingGenerationError,
    ExtractionFailedError,
    ProviderError,
    ProviderErrorKind,
    ScrapeFailedError,
    SessionNotFoundError,
    UnsupportedFormatError,
)

__all__ = [
    "ChatbotException",
    "EmbeddingGenerationError",
    "ExtractionFailedError",
    "ProviderError",
    "ProviderErrorKind",
    "ScrapeFailedError",
    "SessionNotFoundError",
    "UnsupportedFormatError",
]
