"""Transcript library for pre-loaded WebVTT files.

Meeting transcripts shipped with the deployment live in a single directory
(``TRANSCRIPTS_DIR``) and can be listed, viewed raw, or loaded into the
analysis form without uploading them.

Configuration:
- TRANSCRIPTS_DIR: Directory holding the .vtt files (default: transcripts)
"""
import os
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

VTT_EXTENSION = ".vtt"
DEFAULT_TRANSCRIPTS_DIR = "transcripts"


class TranscriptLibraryError(Exception):
    """Base error for transcript library lookups."""
    pass


class InvalidTranscriptName(TranscriptLibraryError):
    """Raised when a requested name is not a plain .vtt file name."""
    pass


class TranscriptNotFound(TranscriptLibraryError):
    """Raised when a requested transcript does not exist."""
    pass


class TranscriptLibrary:
    """Read-only access to the pre-loaded transcript directory."""

    def __init__(self, directory: Optional[str] = None):
        """Initialize with a directory, defaulting to TRANSCRIPTS_DIR."""
        self.directory = Path(
            directory or os.getenv("TRANSCRIPTS_DIR", DEFAULT_TRANSCRIPTS_DIR)
        )
        logger.debug(f"TranscriptLibrary initialized: directory={self.directory}")

    def list_files(self) -> List[str]:
        """Return the sorted names of the .vtt files in the library."""
        if not self.directory.is_dir():
            logger.warning(f"Transcript directory missing: directory={self.directory}")
            return []
        return sorted(
            entry.name for entry in self.directory.iterdir()
            if entry.is_file() and entry.suffix.lower() == VTT_EXTENSION
        )

    def _resolve(self, filename: str) -> Path:
        if (
            not filename
            or Path(filename).name != filename
            or filename in (".", "..")
            or not filename.lower().endswith(VTT_EXTENSION)
        ):
            raise InvalidTranscriptName(f"Invalid transcript name: {filename!r}")
        return self.directory / filename

    def read_file(self, filename: str) -> str:
        """
        Read one pre-loaded transcript.

        Args:
            filename: Bare file name, e.g. "Billing transcript 1.vtt"

        Returns:
            Raw WebVTT text

        Raises:
            InvalidTranscriptName: If the name has a path component or is not .vtt
            TranscriptNotFound: If the file does not exist
        """
        path = self._resolve(filename)
        if not path.is_file():
            raise TranscriptNotFound(f"Transcript not found: {filename}")

        content = path.read_text(encoding="utf-8-sig", errors="replace")
        logger.info(f"Loaded transcript: filename={filename}, length={len(content)} chars")
        return content

    def read_many(self, filenames: Iterable[str]) -> List[Tuple[str, str]]:
        """Read several transcripts, returning (filename, content) pairs in order."""
        return [(filename, self.read_file(filename)) for filename in filenames]


def get_transcript_library() -> TranscriptLibrary:
    """FastAPI dependency returning the configured library."""
    return TranscriptLibrary()
