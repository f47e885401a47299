"""
WebVTT Transcript Parsing Utilities

This module turns WebVTT subtitle exports (Teams, Zoom, Stream) into a single
readable transcript string. Timing lines, cue identifiers, the WEBVTT header
and voice/markup tags are removed, and the remaining dialogue is passed
through a fixed cleanup pipeline that fixes common speech-to-text artifacts.

Line classification is a single forward pass with one piece of lookahead
state (``skip_next``):

1. Blank lines and the WEBVTT header are dropped
2. UUID-like cue identifiers (a single token with digits and 4+
   hyphen-separated segments) are dropped and suppress the following plain
   text line
3. Timing lines (``start --> end``) are dropped and open the cue text
4. Voice-tag lines (``<v Speaker>text</v>``) contribute their inner text
5. Any other line is dialogue, unless suppressed or it is a bare cue
   identifier (one token with a digit) sitting directly above a timing line

None of these functions raise for malformed input; the worst case is an
empty or near-empty transcript.
"""

import re
import logging
from typing import List

logger = logging.getLogger(__name__)

TIMING_ARROW = "-->"
VOICE_TAG_OPENER = "<v "

_HEADER_PATTERN = re.compile(r"^WEBVTT(\s|$)")
_VOICE_TAG_PATTERN = re.compile(r"<v[^>]*>(.*?)</v>")
_VOICE_OPEN_PATTERN = re.compile(r"<v[^>]*>", re.IGNORECASE)
_VOICE_CLOSE_PATTERN = re.compile(r"</v>", re.IGNORECASE)
_MARKUP_PATTERN = re.compile(r"<[^>]+>|-->|WEBVTT", re.IGNORECASE)
_DIGIT_PATTERN = re.compile(r"\d")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT_PATTERN = re.compile(r"\s+([.,!?;:])")
_MISSING_SPACE_AFTER_PUNCT_PATTERN = re.compile(r"([.,!?;:])(\S)")
_REPEATED_WORD_PATTERN = re.compile(r"\b(\w+)(?:\s+\1\b)+", re.IGNORECASE | re.ASCII)
_SENTENCE_START_PATTERN = re.compile(r"^\w|\.\s+\w", re.ASCII)


def is_vtt(text: str) -> bool:
    """Return True when text looks like WebVTT content rather than plain prose."""
    if not text:
        return False
    stripped = text.strip()
    return stripped.startswith("WEBVTT") or TIMING_ARROW in stripped


def _is_header(line: str) -> bool:
    return bool(_HEADER_PATTERN.match(line))


def _is_single_token(line: str) -> bool:
    return not _WHITESPACE_PATTERN.search(line)


def _is_cue_identifier(line: str) -> bool:
    """UUID-like identifiers, e.g. ``6b5a3c1e-4a2f-4d0e-9c1b-7f2e8d9a0b1c/12-0``.

    Dialogue such as "a state-of-the-art check-in" has spaces and no digits.
    """
    return (
        _is_single_token(line)
        and bool(_DIGIT_PATTERN.search(line))
        and len(line.split("-")) >= 4
    )


def _is_timing_line(line: str) -> bool:
    return TIMING_ARROW in line


def _is_bare_identifier(lines: List[str], index: int) -> bool:
    """A single token with a digit (``1``, ``cue-12``) directly above a timing line."""
    line = lines[index]
    if not _is_single_token(line) or not _DIGIT_PATTERN.search(line):
        return False
    next_index = index + 1
    return next_index < len(lines) and _is_timing_line(lines[next_index])


def _extract_voice_text(line: str) -> str:
    """Return the dialogue inside the voice tag(s) of a line.

    A cue whose closing ``</v>`` lands on a later line contributes the text
    after its opening tag; the continuation line is picked up as plain text.
    """
    matches = [m for m in _VOICE_TAG_PATTERN.findall(line) if m]
    if matches:
        return " ".join(matches)
    opener = _VOICE_OPEN_PATTERN.match(line)
    if opener and not _VOICE_CLOSE_PATTERN.search(line):
        return line[opener.end():]
    return ""


def extract_dialogue_lines(vtt_content: str) -> List[str]:
    """Classify the lines of a WebVTT document and return the dialogue lines."""
    lines = [line.strip() for line in (vtt_content or "").splitlines()]
    dialogue: List[str] = []
    skip_next = False

    for index, line in enumerate(lines):
        if not line or _is_header(line):
            continue

        if _is_cue_identifier(line):
            skip_next = True
            continue

        if _is_timing_line(line):
            skip_next = False
            continue

        if line.startswith(VOICE_TAG_OPENER) and _VOICE_OPEN_PATTERN.match(line):
            text = _extract_voice_text(line)
            if text:
                dialogue.append(text)
            skip_next = False
            continue

        if not skip_next and not _is_bare_identifier(lines, index):
            dialogue.append(line)

        skip_next = False

    return dialogue


def _strip_markup(text: str) -> str:
    text = _VOICE_OPEN_PATTERN.sub("", text)
    text = _VOICE_CLOSE_PATTERN.sub("", text)
    # Removing one match can expose another, e.g. "<<b>i>" or "-<b>->"
    while _MARKUP_PATTERN.search(text):
        text = _MARKUP_PATTERN.sub("", text)
    return text


def enhance_transcript(text: str) -> str:
    """
    Clean up common speech-to-text artifacts in an assembled transcript.

    Steps, applied in order:
    1. Strip remaining voice tags, any other ``<...>`` markup, stray ``-->``
       arrows and the WEBVTT token (in any case)
    2. Collapse whitespace runs and trim
    3. Remove whitespace before sentence punctuation
    4. Ensure one space after sentence punctuation
    5. Collapse immediately repeated words ("the the" -> "the")
    6. Capitalize the first letter of each sentence
    7. Collapse whitespace again and trim

    Args:
        text: Dialogue lines already joined into one string

    Returns:
        The enhanced transcript
    """
    enhanced = _strip_markup(text)
    enhanced = _WHITESPACE_PATTERN.sub(" ", enhanced).strip()
    enhanced = _SPACE_BEFORE_PUNCT_PATTERN.sub(r"\1", enhanced)
    enhanced = _MISSING_SPACE_AFTER_PUNCT_PATTERN.sub(r"\1 \2", enhanced)
    enhanced = _REPEATED_WORD_PATTERN.sub(r"\1", enhanced)
    enhanced = _SENTENCE_START_PATTERN.sub(lambda m: m.group(0).upper(), enhanced)
    enhanced = _WHITESPACE_PATTERN.sub(" ", enhanced).strip()
    return enhanced


def normalize_vtt(vtt_content: str) -> str:
    """
    Parse WebVTT content into a clean, readable transcript.

    Args:
        vtt_content: Raw WebVTT document (the WEBVTT header is optional)

    Returns:
        Space-joined dialogue with timing, identifiers and markup removed
    """
    logger.debug(f"Parsing VTT content: length={len(vtt_content or '')} chars")

    dialogue = extract_dialogue_lines(vtt_content)
    transcript = enhance_transcript(" ".join(dialogue).strip())

    logger.debug(
        f"VTT parsed: dialogue_lines={len(dialogue)}, "
        f"transcript_length={len(transcript)} chars"
    )
    return transcript
