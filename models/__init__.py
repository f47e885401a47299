"""Data models for the transcript requirements service."""
from .usage import Usage, MODEL_PRICING, DEFAULT_MODEL
from .result_table import (
    ResultRecord,
    ResultTable,
    SelectionSet,
    build_result_table,
    collect_headers,
    display_header,
    project,
)
from .analysis_models import (
    AnalysisMode,
    ExtractRequirementsRequest,
    ExtractRequirementsResponse,
    CustomQueryRequest,
    CustomQueryResponse,
    CleanupTranscriptRequest,
    CleanupTranscriptResponse,
    ExportRequest,
)
from .transcript_models import PreparedTranscript, TranscriptFileList

__all__ = [
    # Usage
    "Usage",
    "MODEL_PRICING",
    "DEFAULT_MODEL",
    # Result table
    "ResultRecord",
    "ResultTable",
    "SelectionSet",
    "build_result_table",
    "collect_headers",
    "display_header",
    "project",
    # Analysis requests/responses
    "AnalysisMode",
    "ExtractRequirementsRequest",
    "ExtractRequirementsResponse",
    "CustomQueryRequest",
    "CustomQueryResponse",
    "CleanupTranscriptRequest",
    "CleanupTranscriptResponse",
    "ExportRequest",
    # Transcripts
    "PreparedTranscript",
    "TranscriptFileList",
]
