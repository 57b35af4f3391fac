from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from api.dependencies import get_config, get_ingestor
from api.schemas import UploadError, UploadResponse
from business_faq_chat.exception.custom_exception import SessionNotFoundError
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.utils.file_io import read_uploaded_files

router = APIRouter()


@router.post("/api/chat/documents", response_model=UploadResponse)
async def upload_documents(
    documents: list[UploadFile] = File(...),
    session_id: str = Form(...),
    ingestor=Depends(get_ingestor),
    config=Depends(get_config),
):
    """
    Upload endpoint:
      - reads the files into memory (count / size limits)
      - extracts, stores and embeds each file independently
    """
    if not session_id.strip():
        raise HTTPException(400, "Session ID is required")
    if not documents:
        raise HTTPException(400, "No files uploaded")

    upload_cfg = config.get("upload", {})
    uploads = await read_uploaded_files(
        documents,
        max_files=upload_cfg.get("max_files", 5),
        max_file_size_mb=upload_cfg.get("max_file_size_mb", 10),
    )

    try:
        report = await ingestor.ingest_documents(session_id, uploads)
    except SessionNotFoundError:
        raise HTTPException(404, "Chat session not found")

    errors = [UploadError(filename=f.filename, error=f.error) for f in report.failures]

    if not report.documents:
        log.error("Upload failed for every file | session_id=%s", session_id)
        raise HTTPException(
            400,
            {
                "message": "No documents could be processed",
                "errors": [e.model_dump() for e in errors],
            },
        )

    return UploadResponse(
        documents=report.documents,
        errors=errors,
        message="Documents uploaded and processed successfully",
    )
