"""Response models for transcript preparation and the pre-loaded file library."""
from typing import List
from pydantic import BaseModel, Field


class TranscriptFileList(BaseModel):
    """Pre-loaded .vtt files available on the server."""
    files: List[str] = Field(default_factory=list)


class PreparedTranscript(BaseModel):
    """
    A transcript assembled from uploaded files, pre-loaded files or pasted text.

    Attributes:
        transcript: Normalized plain-text transcript
        source_count: Number of documents the transcript was built from
        length: Length of the transcript in characters
    """
    transcript: str
    source_count: int = Field(ge=0)
    length: int = Field(ge=0)
