"""
Record Collection Utilities

This module locates the collection of extracted records inside a decoded
LLM response. The provider's JSON shape is not guaranteed, so detection
follows an ordered fallback chain:

1. A bare JSON array
2. An object with a ``userStories`` array
3. An object with a ``requirements`` array
4. The object's first array-valued field
5. A single record-shaped object, wrapped as a one-element collection
6. Otherwise an empty collection

Every record is coerced to a flat ``Dict[str, str]`` so the result table can
treat all cells alike.
"""

import re
import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

RECORD_ARRAY_FIELDS = ("userStories", "requirements")
SINGLE_RECORD_FIELDS = ("epicName", "requirement", "userStory")

_CODE_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


class RecordDecodeError(ValueError):
    """Raised when provider output is not valid JSON."""
    pass


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def coerce_record(item: Dict[str, Any]) -> Dict[str, str]:
    """Flatten one decoded object into a string-to-string record."""
    return {str(key): _stringify(value) for key, value in item.items()}


def _records_from_list(items: List[Any]) -> List[Dict[str, str]]:
    records = [coerce_record(item) for item in items if isinstance(item, dict)]
    skipped = len(items) - len(records)
    if skipped:
        logger.warning(f"Skipped non-object entries in record array: count={skipped}")
    return records


def _find_record_array(payload: Dict[str, Any]) -> Optional[List[Any]]:
    for field in RECORD_ARRAY_FIELDS:
        value = payload.get(field)
        if isinstance(value, list):
            logger.debug(f"Found record array under known field: field={field}")
            return value

    for key, value in payload.items():
        if isinstance(value, list):
            logger.debug(f"Found record array under first array field: field={key}")
            return value

    return None


def extract_records(payload: Any) -> List[Dict[str, str]]:
    """
    Resolve the record collection in a decoded provider response.

    Args:
        payload: Decoded JSON value (array, object, or anything else)

    Returns:
        List of records; empty when no collection can be found

    Raises:
        None - ambiguous or unexpected shapes resolve to an empty list
    """
    if isinstance(payload, list):
        return _records_from_list(payload)

    if not isinstance(payload, dict):
        logger.warning(
            f"Unexpected payload type for records: type={type(payload).__name__}"
        )
        return []

    items = _find_record_array(payload)
    if items is not None:
        return _records_from_list(items)

    if any(payload.get(field) for field in SINGLE_RECORD_FIELDS):
        logger.info("Single record object detected, wrapping in collection")
        return [coerce_record(payload)]

    logger.warning(
        f"No record collection found in payload: keys={list(payload.keys())}"
    )
    return []


def strip_code_fence(content: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```), if any."""
    stripped = content.strip()
    match = _CODE_FENCE_PATTERN.match(stripped)
    return match.group(1).strip() if match else stripped


def parse_records(content: str) -> List[Dict[str, str]]:
    """
    Decode provider text as JSON and extract its record collection.

    Args:
        content: Raw text returned by the model

    Returns:
        List of records (possibly empty)

    Raises:
        RecordDecodeError: If the content is not valid JSON
    """
    try:
        parsed = json.loads(strip_code_fence(content))
    except (TypeError, json.JSONDecodeError) as e:
        raise RecordDecodeError(f"Invalid JSON response from model: {e}") from e

    return extract_records(parsed)
