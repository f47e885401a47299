"""
Analysis router for the three transcript modes.

Endpoints:
- POST /api/extract-requirements: structured requirements/user stories
- POST /api/custom-query: free-form question answered with supporting quotes
- POST /api/cleanup-transcript: transcript rewritten in cleaner prose

Each handler forwards the prepared transcript to TranscriptAnalysisService
and normalizes the reply. Provider failures are reported as HTTP 500.
"""

import logging
from fastapi import APIRouter, HTTPException

from models.analysis_models import (
    CleanupTranscriptRequest,
    CleanupTranscriptResponse,
    CustomQueryRequest,
    CustomQueryResponse,
    ExtractRequirementsRequest,
    ExtractRequirementsResponse,
)
from models.result_table import collect_headers
from services.analysis_service import TranscriptAnalysisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post("/extract-requirements", response_model=ExtractRequirementsResponse)
async def extract_requirements(body: ExtractRequirementsRequest):
    """
    Extract requirements and user stories from a transcript.

    Args:
        body: ExtractRequirementsRequest with transcript and optional model

    Returns:
        ExtractRequirementsResponse with records, their header union and usage

    Raises:
        HTTPException: 500 if the model call or response decoding fails
    """
    logger.info(
        f"Extract requirements request: transcript_length={len(body.transcript)}, "
        f"model={body.model}"
    )
    try:
        service = TranscriptAnalysisService()
        records, usage = await service.extract_requirements(body.transcript, body.model)
    except Exception as e:
        logger.error(
            f"Error extracting requirements: error={type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Failed to extract requirements")

    logger.info(f"Sending response: user_stories={len(records)}")
    return ExtractRequirementsResponse(
        user_stories=records,
        headers=collect_headers(records),
        usage=usage
    )


@router.post("/custom-query", response_model=CustomQueryResponse)
async def custom_query(body: CustomQueryRequest):
    """Answer a question about the transcript with supporting quotes."""
    logger.info(
        f"Custom query request: transcript_length={len(body.transcript)}, "
        f"query_length={len(body.query)}, model={body.model}"
    )
    try:
        service = TranscriptAnalysisService()
        answer, usage = await service.custom_query(body.transcript, body.query, body.model)
    except Exception as e:
        logger.error(
            f"Error processing custom query: error={type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Failed to process custom query")

    return CustomQueryResponse(response=answer, usage=usage)


@router.post("/cleanup-transcript", response_model=CleanupTranscriptResponse)
async def cleanup_transcript(body: CleanupTranscriptRequest):
    """Rewrite the transcript in cleaner prose."""
    logger.info(
        f"Cleanup request: transcript_length={len(body.transcript)}, model={body.model}"
    )
    try:
        service = TranscriptAnalysisService()
        cleaned, usage = await service.cleanup_transcript(body.transcript, body.model)
    except Exception as e:
        logger.error(
            f"Error cleaning transcript: error={type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Failed to clean transcript")

    logger.info(f"Cleanup complete: cleaned_length={len(cleaned)}")
    return CleanupTranscriptResponse(cleaned_transcript=cleaned, usage=usage)
