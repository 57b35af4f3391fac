import logging
import os
import re

from rich.console import Console
from rich.logging import RichHandler

# -------------------------------------------------
# Console with proper color handling
# -------------------------------------------------
console = Console(force_terminal=True, color_system="truecolor")

# Google API keys and "api_key=..." style pairs
_SECRET_PATTERNS = [
    re.compile(r"AIza[0-9A-Za-z_\-]{20,}"),
    re.compile(r"(api[_-]?key\s*[=:]\s*)([^\s,|]+)", re.IGNORECASE),
]


class RedactSecretsFilter(logging.Filter):
    """
    Masks credentials in a record before any handler formats it.
    Session API keys must never reach log output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def redact_secrets(text: str) -> str:
    text = _SECRET_PATTERNS[0].sub("***", text)
    return _SECRET_PATTERNS[1].sub(r"\1***", text)


class CustomLogger:
    """
    Configures the root logger once with a RichHandler and hands out
    named loggers.
    """

    _configured = False

    def __init__(self, level: str | None = None):
        if not CustomLogger._configured:
            self._configure(level or os.getenv("LOG_LEVEL", "INFO"))
            CustomLogger._configured = True

    @staticmethod
    def _configure(level: str) -> None:
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            show_time=True,
            show_level=True,
            show_path=True,
            log_time_format="%H:%M:%S.%f",
        )
        handler.addFilter(RedactSecretsFilter())

        logging.basicConfig(
            level=level.upper(),
            format="%(message)s",  # Rich handles formatting
            datefmt="[%H:%M:%S.%f]",
            handlers=[handler],
        )

        # -------------------------------------------------
        # Silence noisy libraries
        # -------------------------------------------------
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.dialects").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.orm").setLevel(logging.WARNING)

        logging.getLogger("uvicorn").setLevel(logging.INFO)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)

        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)

    def get_logger(self, name: str = __name__) -> logging.Logger:
        return logging.getLogger(name)
