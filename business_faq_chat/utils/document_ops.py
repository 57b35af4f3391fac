from __future__ import annotations

import io
import mimetypes
import re
from typing import Optional

import docx2txt
import fitz

from business_faq_chat.exception.custom_exception import (
    ExtractionFailedError,
    UnsupportedFormatError,
)
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.utils.thread_pool import run_sync

TEXT_MIME = "text/plain"
PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SUPPORTED_MIME_TYPES = {TEXT_MIME, PDF_MIME, DOCX_MIME}

# not registered by default on every platform
mimetypes.add_type(DOCX_MIME, ".docx")

# Printable runs recovered from a PDF byte stream that the parser rejected
_PDF_PRINTABLE_RUN = re.compile(r"[a-zA-Z0-9\s.,!?;:'\"()-]+")
# Inline text runs in raw WordprocessingML
_DOCX_TEXT_RUN = re.compile(r"<w:t[^>]*>([^<]+)</w:t>")
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


def resolve_mime_type(mime_type: Optional[str], filename: str) -> Optional[str]:
    """Fall back to the filename extension when the upload carries no useful type."""
    if mime_type and mime_type != "application/octet-stream":
        return mime_type.split(";")[0].strip().lower()
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or mime_type


def _extract_pdf(file_bytes: bytes) -> str:
    with fitz.open(stream=file_bytes, filetype="pdf") as pdf:
        return "\n".join(page.get_text() for page in pdf)


def _pdf_fallback(file_bytes: bytes) -> str:
    raw = file_bytes.decode("utf-8", errors="replace")
    matches = _PDF_PRINTABLE_RUN.findall(raw)
    return _WHITESPACE.sub(" ", " ".join(matches)).strip()


def _extract_docx(file_bytes: bytes) -> str:
    return docx2txt.process(io.BytesIO(file_bytes)) or ""


def _docx_fallback(file_bytes: bytes) -> str:
    raw = file_bytes.decode("utf-8", errors="replace")
    runs = [_TAG.sub("", m) for m in _DOCX_TEXT_RUN.findall(raw)]
    return " ".join(runs)


async def _with_fallback(primary, fallback, file_bytes: bytes, filename: str, kind: str) -> str:
    try:
        return await run_sync(primary, file_bytes)
    except Exception as e:
        log.warning(
            "%s parsing failed, using fallback | file=%s | error=%s", kind, filename, str(e)
        )
        text = fallback(file_bytes)
        if not text.strip():
            raise ExtractionFailedError(filename, e) from e
        return text


async def extract_text(file_bytes: bytes, mime_type: Optional[str], filename: str) -> str:
    """
    Convert an uploaded file into plain text.

    Raises:
        UnsupportedFormatError: mime type is not text, PDF or DOCX.
        ExtractionFailedError: primary parsing and the fallback both failed.
    """
    resolved = resolve_mime_type(mime_type, filename)

    if resolved == TEXT_MIME:
        text = file_bytes.decode("utf-8", errors="replace")
    elif resolved == PDF_MIME:
        text = await _with_fallback(_extract_pdf, _pdf_fallback, file_bytes, filename, "PDF")
    elif resolved == DOCX_MIME:
        text = await _with_fallback(_extract_docx, _docx_fallback, file_bytes, filename, "DOCX")
    else:
        log.warning("Unsupported file type | file=%s | mime=%s", filename, resolved)
        raise UnsupportedFormatError(resolved)

    log.info("Text extracted | file=%s | mime=%s | chars=%d", filename, resolved, len(text))
    return text
