"""
Transcript preparation router.

POST /transcripts/prepare builds the plain-text transcript that the analysis
endpoints consume. Uploaded .vtt files and selected pre-loaded files are
normalized and joined; pasted text is used only when no files were given
and is normalized when it looks like VTT.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from models.transcript_models import PreparedTranscript
from services.transcript_library import (
    TranscriptLibrary,
    TranscriptLibraryError,
    TranscriptNotFound,
    get_transcript_library,
)
from services.transcript_service import EmptyTranscriptError, build_transcript

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transcripts", tags=["transcripts"])

# File validation constants
ALLOWED_EXTENSIONS = {"vtt"}
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB in bytes


async def _read_upload(file: UploadFile) -> str:
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    file_extension = file.filename.rsplit(".", 1)[-1].lower()
    if file_extension not in ALLOWED_EXTENSIONS:
        logger.warning(
            f"Invalid file format: filename={file.filename}, extension={file_extension}"
        )
        raise HTTPException(status_code=400, detail="Please upload only .vtt files")

    try:
        content = await file.read()
    except Exception as e:
        logger.error(f"Failed to read file: filename={file.filename}, error={e}")
        raise HTTPException(status_code=400, detail="Failed to read files")

    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE // (1024 * 1024)}MB"
        )

    logger.info(f"Upload read: filename={file.filename}, size={len(content)} bytes")
    return content.decode("utf-8-sig", errors="replace")


@router.post("/prepare", response_model=PreparedTranscript)
async def prepare_transcript(
    files: Optional[List[UploadFile]] = File(default=None),
    preloaded: Optional[List[str]] = Form(default=None),
    text: Optional[str] = Form(default=None),
    library: TranscriptLibrary = Depends(get_transcript_library),
):
    """
    Assemble a transcript from uploads, pre-loaded files or pasted text.

    Args:
        files: Uploaded .vtt files
        preloaded: Names of pre-loaded library files to include
        text: Pasted transcript text (VTT or plain)

    Returns:
        PreparedTranscript with the normalized transcript

    Raises:
        HTTPException: 400 for bad uploads or no input, 404 for unknown files
    """
    documents = [await _read_upload(file) for file in files or []]

    try:
        documents.extend(content for _, content in library.read_many(preloaded or []))
    except TranscriptNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TranscriptLibraryError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return build_transcript(documents=documents, text=text)
    except EmptyTranscriptError as e:
        logger.warning("Transcript preparation rejected: no input provided")
        raise HTTPException(status_code=400, detail=str(e))
