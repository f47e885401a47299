"""
Unit and Property Tests for the Result Table Model

Tests header union ordering, TSV projection with missing fields, row
selection, and the "no results" behavior for empty collections.
"""

import pytest
from hypothesis import given, strategies as st, settings

from models.result_table import (
    ResultTable,
    SelectionSet,
    build_result_table,
    collect_headers,
    display_header,
    project,
)


@pytest.fixture
def records():
    return [{"a": "1", "b": "2"}, {"a": "3", "c": "4"}]


@pytest.fixture
def user_stories():
    return [
        {
            "epicName": "Billing",
            "requirementNumber": "REQ-001",
            "requirement": "Export invoices",
            "userStory": "As finance, I want CSV exports so that I can reconcile",
            "acceptanceCriteria1": "CSV download",
        },
        {
            "epicName": "Billing",
            "requirementNumber": "REQ-002",
            "requirement": "Overdue reminders",
            "supportingQuote": "thirty days overdue",
            "acceptanceCriteria1": "Email sent",
            "acceptanceCriteria5": "Configurable delay",
        },
    ]


class TestHeaders:
    """Tests for the header union."""

    def test_union_in_first_seen_order(self, records):
        assert ResultTable(records).headers() == ["a", "b", "c"]

    def test_order_is_not_alphabetical(self):
        table = ResultTable([{"zeta": "1"}, {"alpha": "2", "zeta": "3"}])
        assert table.headers() == ["zeta", "alpha"]

    def test_optional_fields_appended_where_first_seen(self, user_stories):
        assert collect_headers(user_stories) == [
            "epicName",
            "requirementNumber",
            "requirement",
            "userStory",
            "acceptanceCriteria1",
            "supportingQuote",
            "acceptanceCriteria5",
        ]

    def test_headers_stable_across_calls(self, records):
        table = ResultTable(records)
        assert table.headers() == table.headers()

    def test_headers_copy_is_not_shared(self, records):
        table = ResultTable(records)
        table.headers().append("mutated")
        assert table.headers() == ["a", "b", "c"]


class TestDisplayHeader:
    """Tests for column titles."""

    @pytest.mark.parametrize("key,title", [
        ("supportingQuote", "Supporting Quote"),
        ("epicName", "Epic Name"),
        ("requirementNumber", "Requirement Number"),
        ("acceptanceCriteria1", "Acceptance Criteria1"),
        ("a", "A"),
        ("", ""),
    ])
    def test_camel_case_to_title(self, key, title):
        assert display_header(key) == title

    def test_display_does_not_change_lookup_keys(self, user_stories):
        table = ResultTable(user_stories)
        assert "supportingQuote" in table.headers()
        assert "Supporting Quote" in table.display_headers()


class TestProject:
    """Tests for TSV projection."""

    def test_empty_selection_exports_all_rows(self, records):
        tsv = ResultTable(records).project(set())
        lines = tsv.split("\n")

        assert len(lines) == 3
        assert lines[0].split("\t") == ["A", "B", "C"]
        assert lines[1].split("\t") == ["1", "2", ""]
        assert lines[2].split("\t") == ["3", "", "4"]

    def test_selection_limits_rows(self, records):
        tsv = ResultTable(records).project({1})
        assert tsv == "A\tB\tC\n3\t\t4"

    def test_selection_keeps_table_order(self):
        table = ResultTable([{"n": "0"}, {"n": "1"}, {"n": "2"}])
        assert table.project(SelectionSet([2, 0])) == "N\n0\n2"

    def test_out_of_range_selection_ignored(self, records):
        assert ResultTable(records).project({1, 7}) == "A\tB\tC\n3\t\t4"

    def test_none_value_renders_empty(self):
        table = ResultTable([{"a": None, "b": "x"}])
        assert table.project() == "A\tB\n\tx"

    def test_tabs_and_newlines_inside_cells_are_flattened(self):
        table = ResultTable([{"quote": "line one\nline\ttwo"}])
        assert table.project() == "Quote\nline one line two"

    def test_module_level_project(self, records):
        assert project(records, set()) == ResultTable(records).project()

    def test_rows_one_cell_per_header(self, user_stories):
        table = ResultTable(user_stories)
        for row in table.rows():
            assert len(row) == len(table.headers())


class TestEmptyCollection:
    """An empty collection produces no table at all."""

    def test_build_returns_none_for_empty(self):
        assert build_result_table([]) is None

    def test_build_returns_none_for_none(self):
        assert build_result_table(None) is None

    def test_project_empty_yields_no_output(self):
        assert project([]) == ""
        assert project(None, {0}) == ""

    def test_table_with_no_records_projects_nothing(self):
        assert ResultTable([]).project() == ""


class TestSelectionSet:
    """Tests for row selection."""

    def test_toggle_adds_then_removes(self):
        selection = SelectionSet()
        assert selection.toggle(3) is True
        assert 3 in selection
        assert selection.toggle(3) is False
        assert 3 not in selection

    def test_iterates_in_ascending_order(self):
        assert list(SelectionSet([5, 1, 3])) == [1, 3, 5]

    def test_clear(self):
        selection = SelectionSet([1, 2])
        selection.clear()
        assert len(selection) == 0

    def test_equality_with_set(self):
        assert SelectionSet([1, 2]) == {1, 2}


@given(
    initial=st.sets(st.integers(min_value=0, max_value=50), max_size=20),
    index=st.integers(min_value=0, max_value=50),
)
@settings(max_examples=100)
def test_toggle_twice_is_noop_property(initial, index):
    """Toggling the same index twice restores the original membership."""
    selection = SelectionSet(initial)

    selection.toggle(index)
    selection.toggle(index)

    assert selection == initial


record_keys = st.text(alphabet="abcdefgh", min_size=1, max_size=3)
record_strategy = st.dictionaries(record_keys, st.text(alphabet="xyz ", max_size=5), max_size=5)


@given(st.lists(record_strategy, min_size=1, max_size=8))
@settings(max_examples=100)
def test_headers_are_ordered_union_property(records):
    """Headers are exactly the union of keys, each appearing once."""
    headers = ResultTable(records).headers()

    assert len(headers) == len(set(headers))
    assert set(headers) == {key for record in records for key in record}


@given(st.lists(record_strategy, min_size=1, max_size=8))
@settings(max_examples=100)
def test_projection_shape_property(records):
    """One header row plus one row per record, each with one cell per header."""
    table = ResultTable(records)
    lines = table.project().split("\n")

    assert len(lines) == len(records) + 1
    for line in lines:
        assert line.count("\t") == max(len(table.headers()) - 1, 0)
