"""Result table model for heterogeneous LLM extraction output.

Extracted records (one per requirement/user story) do not share a fixed
schema: the provider may add a supporting quote or extra numbered
acceptance criteria to some records only. This module builds a uniform
table over such records and projects selected rows to tab-separated text
for pasting into a spreadsheet.
"""
import re
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set

ResultRecord = Dict[str, str]

_CAMEL_BOUNDARY_PATTERN = re.compile(r"([A-Z])")
_CELL_BREAK_PATTERN = re.compile(r"[\t\r\n]+")


def collect_headers(records: Iterable[Mapping[str, str]]) -> List[str]:
    """Union of all record keys, in first-seen order across the records."""
    headers: Dict[str, None] = {}
    for record in records:
        for key in record:
            headers.setdefault(key, None)
    return list(headers)


def display_header(key: str) -> str:
    """Turn a camel-case field name into a column title.

    ``supportingQuote`` becomes ``Supporting Quote``. Lookups always use the
    original key, never this title.
    """
    title = _CAMEL_BOUNDARY_PATTERN.sub(r" \1", key).strip()
    return title[:1].upper() + title[1:]


def _cell(record: Mapping[str, str], header: str) -> str:
    value = record.get(header) or ""
    return _CELL_BREAK_PATTERN.sub(" ", str(value))


class SelectionSet:
    """Indices of the records chosen for export.

    An empty selection means "all records" to :meth:`ResultTable.project`.
    """

    def __init__(self, indices: Optional[Iterable[int]] = None):
        self._indices: Set[int] = set(indices or ())

    def toggle(self, index: int) -> bool:
        """Flip membership of ``index`` and return whether it is now selected."""
        if index in self._indices:
            self._indices.discard(index)
            return False
        self._indices.add(index)
        return True

    def select(self, index: int) -> None:
        self._indices.add(index)

    def clear(self) -> None:
        self._indices.clear()

    def __contains__(self, index: object) -> bool:
        return index in self._indices

    def __len__(self) -> int:
        return len(self._indices)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._indices))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SelectionSet):
            return self._indices == other._indices
        if isinstance(other, (set, frozenset)):
            return self._indices == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"SelectionSet({sorted(self._indices)!r})"


class ResultTable:
    """Uniform table view over a sequence of heterogeneously keyed records."""

    def __init__(self, records: Iterable[Mapping[str, str]]):
        self._records: List[ResultRecord] = [dict(record) for record in records]
        self._headers = collect_headers(self._records)

    @property
    def records(self) -> List[ResultRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def headers(self) -> List[str]:
        """Column keys in first-seen order."""
        return list(self._headers)

    def display_headers(self) -> List[str]:
        return [display_header(header) for header in self._headers]

    def selected_records(
        self, selection: Optional[Iterable[int]] = None
    ) -> List[ResultRecord]:
        """Records in the selection, in table order; all records when empty."""
        chosen = set(selection or ())
        if not chosen:
            return list(self._records)
        return [
            record for index, record in enumerate(self._records)
            if index in chosen
        ]

    def rows(self, selection: Optional[Iterable[int]] = None) -> List[List[str]]:
        """One list of cells per selected record, one cell per header."""
        return [
            [_cell(record, header) for header in self._headers]
            for record in self.selected_records(selection)
        ]

    def project(self, selection: Optional[Iterable[int]] = None) -> str:
        """
        Serialize the selected rows as tab-separated values.

        Args:
            selection: Record indices to include; empty or None for all

        Returns:
            Header row followed by one row per selected record, or an empty
            string when the table has no records
        """
        if not self._records:
            return ""
        header_row = "\t".join(self.display_headers())
        data_rows = ["\t".join(row) for row in self.rows(selection)]
        return "\n".join([header_row] + data_rows)


def build_result_table(
    records: Optional[Iterable[Mapping[str, str]]],
) -> Optional[ResultTable]:
    """Return a table for the records, or None when there are no results."""
    if not records:
        return None
    table = ResultTable(records)
    return table if len(table) else None


def project(
    records: Optional[Iterable[Mapping[str, str]]],
    selection: Optional[Iterable[int]] = None,
) -> str:
    """TSV projection of ``records``; an empty collection yields no output."""
    table = build_result_table(records)
    if table is None:
        return ""
    return table.project(selection)
