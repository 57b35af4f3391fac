import sys
import traceback
from enum import Enum
from typing import Optional


class ChatbotException(Exception):
    """
    Base exception for the chatbot.

    Records where the failure happened (file + line) from either the
    wrapped exception or the exception currently being handled, so a
    single log line is enough to find the origin.
    """

    def __init__(self, error_message: str, error_details: Optional[object] = None):
        super().__init__(error_message)
        self.error_message = str(error_message)
        self.file_name = "<unknown>"
        self.lineno = -1
        self.traceback_str = ""

        exc_tb = None
        if isinstance(error_details, BaseException):
            exc_tb = error_details.__traceback__
            self.cause = error_details
        else:
            # Accept the `sys` module like the rest of the codebase does
            _, exc_value, exc_tb = sys.exc_info()
            self.cause = exc_value

        if exc_tb is not None:
            last = exc_tb
            while last.tb_next:
                last = last.tb_next
            self.file_name = last.tb_frame.f_code.co_filename
            self.lineno = last.tb_lineno
            self.traceback_str = "".join(
                traceback.format_exception(type(self.cause), self.cause, exc_tb)
            )

    def __str__(self) -> str:
        base = self.error_message
        if self.lineno > 0:
            base = f"{base} [file={self.file_name} line={self.lineno}]"
        return base


class SessionNotFoundError(ChatbotException):
    def __init__(self, session_id: str):
        super().__init__(f"Chat session not found: {session_id}")
        self.session_id = session_id


class UnsupportedFormatError(ChatbotException):
    def __init__(self, mime_type: Optional[str]):
        super().__init__(f"Unsupported file type: {mime_type}")
        self.mime_type = mime_type


class ExtractionFailedError(ChatbotException):
    def __init__(self, filename: str, cause: Optional[BaseException] = None):
        reason = str(cause) if cause else "no text could be recovered"
        super().__init__(f"Failed to extract text from {filename}: {reason}", cause)
        self.filename = filename


class EmbeddingGenerationError(ChatbotException):
    pass


class ScrapeFailedError(ChatbotException):
    def __init__(self, url: str, reason: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to fetch website {url}: {reason}", cause)
        self.url = url
        self.reason = reason


class ProviderErrorKind(str, Enum):
    CREDENTIAL = "credential"
    GENERIC = "generic"


class ProviderError(ChatbotException):
    """Language-model call failure, already classified at the client boundary."""

    def __init__(
        self,
        message: str,
        kind: ProviderErrorKind = ProviderErrorKind.GENERIC,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause)
        self.kind = kind
