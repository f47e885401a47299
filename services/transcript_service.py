"""Transcript assembly from uploaded files, pre-loaded files or pasted text."""
import logging
from typing import Iterable, List, Optional

from models.transcript_models import PreparedTranscript
from utils.vtt_parser import is_vtt, normalize_vtt

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "\n\n"


class EmptyTranscriptError(ValueError):
    """Raised when no transcript input was provided."""
    pass


def assemble_transcript(documents: Iterable[str]) -> str:
    """Normalize each WebVTT document and join them with a blank line."""
    parts: List[str] = []
    for index, document in enumerate(documents):
        parsed = normalize_vtt(document)
        logger.info(
            f"VTT document parsed: index={index}, raw_length={len(document)}, "
            f"cleaned_length={len(parsed)}"
        )
        if parsed:
            parts.append(parsed)
    return DOCUMENT_SEPARATOR.join(parts)


def prepare_text_input(text: str) -> str:
    """Pasted text is normalized when it looks like VTT, otherwise just trimmed."""
    trimmed = (text or "").strip()
    if is_vtt(trimmed):
        logger.info("Pasted text detected as VTT, normalizing")
        return normalize_vtt(trimmed)
    return trimmed


def build_transcript(
    documents: Optional[List[str]] = None,
    text: Optional[str] = None,
) -> PreparedTranscript:
    """
    Build the transcript sent to the model.

    Files take priority over pasted text, matching the form's behavior.

    Args:
        documents: Raw VTT documents (uploaded and/or pre-loaded)
        text: Pasted text, VTT or plain

    Returns:
        PreparedTranscript with the transcript and its source count

    Raises:
        EmptyTranscriptError: If neither files nor non-blank text were given
    """
    if documents:
        transcript = assemble_transcript(documents)
        source_count = len(documents)
    elif text and text.strip():
        transcript = prepare_text_input(text)
        source_count = 1
    else:
        raise EmptyTranscriptError("Please provide a transcript file or text")

    logger.info(
        f"Transcript prepared: sources={source_count}, length={len(transcript)} chars"
    )
    return PreparedTranscript(
        transcript=transcript,
        source_count=source_count,
        length=len(transcript),
    )
