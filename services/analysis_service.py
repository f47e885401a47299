"""TranscriptAnalysisService for running the three LLM analysis modes.

The service sends a prepared transcript to OpenAI and normalizes the reply:
1. Requirements extraction: JSON records, one per requirement/user story
2. Custom query: a free-text answer backed by supporting quotes
3. Cleanup: the transcript rewritten as readable prose

Configuration:
- OPENAI_API_KEY: OpenAI authentication (required)
- OPENAI_MODEL: Default model when a request does not name one
- OPENAI_TIMEOUT: Request timeout in seconds
"""
import os
import time
import logging
from typing import Dict, List, Optional, Tuple

from openai import AsyncOpenAI

from models.usage import DEFAULT_MODEL, Usage
from utils.record_utils import parse_records

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120.0


class AnalysisServiceError(Exception):
    """Raised when the model returns no usable output."""
    pass


class TranscriptAnalysisService:
    """Service for extracting requirements, answering questions and cleaning transcripts."""

    def __init__(self):
        """Initialize with OpenAI API key and model from environment."""
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")

        self.model = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self.timeout = float(os.getenv("OPENAI_TIMEOUT", DEFAULT_TIMEOUT_SECONDS))
        self.client = AsyncOpenAI(api_key=api_key, timeout=self.timeout)
        logger.info(f"TranscriptAnalysisService initialized with model={self.model}")

    async def extract_requirements(
        self,
        transcript: str,
        model: Optional[str] = None
    ) -> Tuple[List[Dict[str, str]], Usage]:
        """
        Extract requirements and user stories from a transcript.

        Args:
            transcript: Normalized plain-text transcript
            model: Optional model override

        Returns:
            Tuple of (records, usage); records may be empty

        Raises:
            AnalysisServiceError: If the model returns no content
            RecordDecodeError: If the content is not valid JSON
        """
        model = model or self.model
        content, usage = await self._complete(
            model=model,
            system_prompt=self._get_requirements_system_prompt(),
            user_prompt=f"Transcript:\n{transcript}",
            json_output=True,
        )

        records = parse_records(content)
        logger.info(f"Extracted user stories: count={len(records)}, model={model}")
        return records, usage

    async def custom_query(
        self,
        transcript: str,
        query: str,
        model: Optional[str] = None
    ) -> Tuple[str, Usage]:
        """Answer a free-form question about the transcript with supporting quotes."""
        model = model or self.model
        logger.info(f"Custom query: query_length={len(query)}, model={model}")
        return await self._complete(
            model=model,
            system_prompt=self._get_query_system_prompt(),
            user_prompt=f"Question: {query}\n\nTranscript:\n{transcript}",
        )

    async def cleanup_transcript(
        self,
        transcript: str,
        model: Optional[str] = None
    ) -> Tuple[str, Usage]:
        """Rewrite the transcript as clean, readable prose."""
        model = model or self.model
        return await self._complete(
            model=model,
            system_prompt=self._get_cleanup_system_prompt(),
            user_prompt=f"Original Transcript:\n{transcript}\n\nCleaned Transcript:",
        )

    async def _complete(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        json_output: bool = False
    ) -> Tuple[str, Usage]:
        """
        Send one chat completion and return its text with usage.

        Raises:
            AnalysisServiceError: If the completion has no text content
        """
        logger.info(
            f"Sending request to OpenAI: model={model}, "
            f"prompt_length={len(user_prompt)} chars, json_output={json_output}"
        )
        request = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if json_output:
            request["response_format"] = {"type": "json_object"}

        start_time = time.monotonic()
        completion = await self.client.chat.completions.create(**request)
        elapsed = time.monotonic() - start_time

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            logger.error(f"No response content from OpenAI: model={model}")
            raise AnalysisServiceError("No response from OpenAI")

        usage_data = completion.usage
        usage = Usage.from_tokens(
            model,
            getattr(usage_data, "prompt_tokens", 0),
            getattr(usage_data, "completion_tokens", 0),
        )
        logger.info(
            f"OpenAI response received: model={model}, elapsed={elapsed:.2f}s, "
            f"content_length={len(content)}, prompt_tokens={usage.prompt_tokens}, "
            f"completion_tokens={usage.completion_tokens}, "
            f"estimated_cost=${usage.total_cost:.4f}"
        )
        return content, usage

    def _get_requirements_system_prompt(self) -> str:
        """System prompt for requirements and user story extraction."""
        return """You are a business analyst expert who extracts requirements from meeting transcripts and converts them into user stories. Always respond with valid JSON only.

For each requirement found, provide:
1. epicName: A high-level category or feature area
2. requirementNumber: A unique identifier (REQ-001, REQ-002, ...)
3. requirement: A brief description of what is needed
4. userStory: "As a [user type], I want to [action] so that [benefit]"
5. supportingQuote: The words from the transcript that support the requirement
6. acceptanceCriteria1 .. acceptanceCriteria4: Specific, testable conditions

If a requirement needs more than 4 acceptance criteria, add acceptanceCriteria5, acceptanceCriteria6, and so on.

You MUST return a JSON object with a "requirements" array, even if there is only ONE requirement:
{"requirements": [{"epicName": "...", "requirementNumber": "REQ-001", "requirement": "...", "userStory": "...", "supportingQuote": "...", "acceptanceCriteria1": "...", "acceptanceCriteria2": "...", "acceptanceCriteria3": "...", "acceptanceCriteria4": "..."}]}

Only extract requirements explicitly discussed in the transcript."""

    def _get_query_system_prompt(self) -> str:
        """System prompt for free-form questions about a transcript."""
        return """You are an AI assistant analyzing a meeting transcript. Answer the user's question about the transcript clearly and in detail.

Support every point with direct quotes from the transcript as evidence. If the transcript does not contain the answer, say so instead of guessing."""

    def _get_cleanup_system_prompt(self) -> str:
        """System prompt for rewriting a transcript in cleaner prose."""
        return """You are an expert editor specializing in improving transcript readability. Clean up the transcript while preserving all important information.

**Cleaning Tasks:**
1. Fix grammar and sentence structure
2. Break up run-on sentences and add proper punctuation
3. Remove excessive filler words (um, uh, like, you know) while keeping natural speech patterns
4. Ensure proper capitalization and spacing
5. Keep all names, numbers and key details intact
6. Organize the content into logical paragraphs
7. Maintain the meaning and intent of the speakers

Return ONLY the cleaned transcript. Do not add any commentary, explanations, or notes."""
