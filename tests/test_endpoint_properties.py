"""
Property-Based Tests for Endpoint Behavior

This module contains property tests for the analysis and export endpoints:
- Whitespace transcripts and queries are rejected
- Valid transcripts are accepted unchanged by the request models
- Export output matches the result table projection
"""

from unittest.mock import AsyncMock, MagicMock, patch
import pytest
from hypothesis import given, strategies as st, settings, assume, HealthCheck
from fastapi.testclient import TestClient
from pydantic import ValidationError

from main import app
from models.analysis_models import (
    CleanupTranscriptRequest,
    CustomQueryRequest,
    ExtractRequirementsRequest,
)
from models.result_table import project
from models.usage import Usage


# =============================================================================
# Strategy Definitions
# =============================================================================

@st.composite
def whitespace_only_string(draw):
    """Generate strings containing only whitespace characters."""
    return draw(st.one_of(
        st.just(""),
        st.just(" "),
        st.just("\t"),
        st.just("\n"),
        st.just("\r\n"),
        st.just(" \t \n \r "),
        st.text(
            alphabet=st.sampled_from([' ', '\t', '\n', '\r']),
            min_size=1,
            max_size=20
        ),
    ))


@st.composite
def non_empty_text(draw):
    """Generate non-empty strings with at least one non-whitespace character."""
    base = draw(st.text(
        min_size=1,
        max_size=100,
        alphabet=st.characters(whitelist_categories=('L', 'N', 'P', 'S'))
    ))
    assume(base.strip() != "")
    return base


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


# =============================================================================
# Whitespace Rejection
# =============================================================================

@given(whitespace_only_string())
@settings(max_examples=100)
def test_whitespace_transcript_rejected_by_models(whitespace_text):
    """Every transcript request model rejects whitespace-only transcripts."""
    for model in (ExtractRequirementsRequest, CleanupTranscriptRequest):
        with pytest.raises(ValidationError):
            model(transcript=whitespace_text)

    with pytest.raises(ValidationError):
        CustomQueryRequest(transcript=whitespace_text, query="What was decided?")


@given(non_empty_text(), whitespace_only_string())
@settings(max_examples=100)
def test_whitespace_query_rejected(transcript, whitespace_query):
    with pytest.raises(ValidationError):
        CustomQueryRequest(transcript=transcript, query=whitespace_query)


@given(non_empty_text())
@settings(max_examples=100)
def test_valid_transcript_preserved(transcript):
    """Valid transcripts pass validation unchanged."""
    request = ExtractRequirementsRequest(transcript=transcript)

    assert request.transcript == transcript
    assert request.model is None


@given(whitespace_only_string())
@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_whitespace_transcript_returns_400(client, whitespace_text):
    """The HTTP layer reports whitespace transcripts as 400, not 422."""
    for path in ("/api/extract-requirements", "/api/cleanup-transcript"):
        response = client.post(path, json={"transcript": whitespace_text})
        assert response.status_code == 400


# =============================================================================
# Response Schema Completeness
# =============================================================================

@given(non_empty_text())
@settings(max_examples=25, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_cleanup_response_schema(client, transcript):
    """Successful cleanup responses always carry the text and full usage."""
    usage = Usage.from_tokens("gpt-5-mini", len(transcript), 10)
    with patch('routers.analysis.TranscriptAnalysisService') as mock_cls:
        mock_instance = MagicMock()
        mock_instance.cleanup_transcript = AsyncMock(return_value=(transcript, usage))
        mock_cls.return_value = mock_instance

        response = client.post("/api/cleanup-transcript", json={"transcript": transcript})

    assert response.status_code == 200
    data = response.json()
    assert data["cleaned_transcript"] == transcript
    assert set(data["usage"]) == {
        "prompt_tokens", "completion_tokens", "total_tokens",
        "input_cost", "output_cost", "total_cost",
    }


# =============================================================================
# Export Matches Projection
# =============================================================================

record_strategy = st.dictionaries(
    st.text(alphabet="abcdefXYZ", min_size=1, max_size=6),
    st.text(alphabet="abc 123.,", max_size=10),
    min_size=1,
    max_size=5,
)


@given(
    records=st.lists(record_strategy, min_size=1, max_size=6),
    selection=st.lists(st.integers(min_value=0, max_value=7), max_size=4),
)
@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_export_matches_projection(client, records, selection):
    response = client.post(
        "/api/results/export",
        json={"records": records, "selection": selection}
    )

    assert response.status_code == 200
    assert response.text == project(records, set(selection))
