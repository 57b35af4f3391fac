from __future__ import annotations

from typing import Iterable, List

from fastapi import HTTPException, UploadFile

from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.src.document_ingestion.data_ingestion import UploadedFile

MB = 1024 * 1024


async def read_uploaded_files(
    uploaded_files: Iterable[UploadFile], max_files: int, max_file_size_mb: int
) -> List[UploadedFile]:
    """
    Read FastAPI UploadFile objects into memory.
    Enforces the per-request file count and per-file size limits.
    """
    uploaded_files = list(uploaded_files)
    if len(uploaded_files) > max_files:
        raise HTTPException(400, f"At most {max_files} files can be uploaded at once")

    max_bytes = max_file_size_mb * MB
    out: List[UploadedFile] = []
    for uf in uploaded_files:
        name = uf.filename or "file"
        data = await uf.read()
        if len(data) > max_bytes:
            log.warning("Upload too large | file=%s | bytes=%d", name, len(data))
            raise HTTPException(413, f"{name} exceeds the {max_file_size_mb} MB limit")
        out.append(UploadedFile(filename=name, content_type=uf.content_type, data=data))
    return out
