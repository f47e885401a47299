"""
Transcript Analysis Request/Response Models

This module defines the Pydantic models for the three analysis endpoints
(requirements extraction, custom query, transcript cleanup) and for the
result export endpoint.
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from models.usage import Usage


class AnalysisMode(str, Enum):
    """Modes offered by the transcript form."""
    query = "query"
    user_stories = "user-stories"
    cleanup = "cleanup"
    file_viewer = "file-viewer"


def _require_text(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field_name} field cannot be empty or contain only whitespace")
    return value


class TranscriptRequest(BaseModel):
    """
    Base request body carrying a prepared transcript.

    Attributes:
        transcript: Plain-text transcript (already normalized from VTT)
        model: Optional model override (defaults to OPENAI_MODEL)
    """
    transcript: str = Field(
        ...,
        description="Plain-text transcript to analyze"
    )
    model: Optional[str] = Field(
        default=None,
        description="Model name override, e.g. gpt-5-mini"
    )

    @field_validator('transcript')
    @classmethod
    def transcript_must_not_be_empty(cls, v: str) -> str:
        """Validate that transcript is not empty or whitespace-only."""
        return _require_text(v, "transcript")


class ExtractRequirementsRequest(TranscriptRequest):
    """Request body for POST /api/extract-requirements."""
    pass


class CleanupTranscriptRequest(TranscriptRequest):
    """Request body for POST /api/cleanup-transcript."""
    pass


class CustomQueryRequest(TranscriptRequest):
    """Request body for POST /api/custom-query."""
    query: str = Field(
        ...,
        description="Free-form question about the transcript"
    )

    @field_validator('query')
    @classmethod
    def query_must_not_be_empty(cls, v: str) -> str:
        """Validate that query is not empty or whitespace-only."""
        return _require_text(v, "query")


class ExtractRequirementsResponse(BaseModel):
    """
    Response from the requirements extraction endpoint.

    Attributes:
        user_stories: Extracted records; field sets may differ per record
        headers: Union of record keys in first-seen order
        usage: Token usage and estimated cost
    """
    user_stories: List[Dict[str, str]] = Field(default_factory=list)
    headers: List[str] = Field(default_factory=list)
    usage: Usage


class CustomQueryResponse(BaseModel):
    """Response from the custom query endpoint."""
    response: str
    usage: Usage


class CleanupTranscriptResponse(BaseModel):
    """Response from the transcript cleanup endpoint."""
    cleaned_transcript: str
    usage: Usage


class ExportRequest(BaseModel):
    """
    Request body for POST /api/results/export.

    Attributes:
        records: Records previously returned by requirements extraction
        selection: Indices of the rows to export; empty exports every row
    """
    records: List[Dict[str, Any]] = Field(default_factory=list)
    selection: List[int] = Field(default_factory=list)
