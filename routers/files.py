"""
Files router for the pre-loaded transcript library.

Endpoints:
- GET /files: list pre-loaded .vtt files
- GET /files/{filename}: raw VTT content (file-viewer mode)
- GET /files/{filename}/transcript: normalized transcript of one file
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from models.transcript_models import TranscriptFileList
from services.transcript_library import (
    InvalidTranscriptName,
    TranscriptLibrary,
    TranscriptNotFound,
    get_transcript_library,
)
from utils.vtt_parser import normalize_vtt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


def _read(library: TranscriptLibrary, filename: str) -> str:
    try:
        return library.read_file(filename)
    except InvalidTranscriptName as e:
        logger.warning(f"Invalid transcript name rejected: filename={filename!r}")
        raise HTTPException(status_code=400, detail=str(e))
    except TranscriptNotFound as e:
        logger.warning(f"Transcript not found: filename={filename}")
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=TranscriptFileList)
async def list_files(library: TranscriptLibrary = Depends(get_transcript_library)):
    """List the pre-loaded transcripts."""
    return TranscriptFileList(files=library.list_files())


@router.get("/{filename}", response_class=PlainTextResponse)
async def view_file(
    filename: str,
    library: TranscriptLibrary = Depends(get_transcript_library)
):
    """Return a pre-loaded transcript unchanged, for viewing."""
    return PlainTextResponse(_read(library, filename))


@router.get("/{filename}/transcript", response_class=PlainTextResponse)
async def file_transcript(
    filename: str,
    library: TranscriptLibrary = Depends(get_transcript_library)
):
    """Return the normalized transcript of a pre-loaded file."""
    return PlainTextResponse(normalize_vtt(_read(library, filename)))
