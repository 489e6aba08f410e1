"""Combine a Grid and its SpanMap into a TableStructure.

Data rows are built top to bottom while an active-span tracker (column ->
rows still to suppress) records which column slots are covered by a spanning
cell from an earlier row.  The tracker is created fresh for each table and
threaded through every row step explicitly.
"""

import logging
from collections.abc import Iterable, Sequence

from table_image.models import (
    Cell,
    DataRow,
    Grid,
    HeaderRow,
    SectionRow,
    Span,
    SpanMap,
    TableStructure,
    TitleRow,
)

logger = logging.getLogger(__name__)


def is_first_field_only(row: Sequence[str]) -> bool:
    """Return True if only the first field is non-empty in a multi-column row."""
    return len(row) > 1 and bool(row[0]) and not any(row[1:])


def build_header(header: Sequence[str]) -> HeaderRow | TitleRow:
    """Return a TitleRow when the header carries only a title, otherwise a HeaderRow."""
    if is_first_field_only(header):
        return TitleRow(text=header[0])
    return HeaderRow(labels=list(header))


def _index_span_starts(span_map: SpanMap, merge_columns: Iterable[int]) -> dict[tuple[int, int], Span]:
    """Map (column, start row) -> Span for every span in a merge column."""
    starts: dict[tuple[int, int], Span] = {}
    for column in merge_columns:
        for span in span_map.get(column, []):
            starts[(column, span.start_index)] = span
    return starts


def build_row(
    row: Sequence[str],
    row_index: int,
    span_starts: dict[tuple[int, int], Span],
    active: dict[int, int],
) -> tuple[DataRow | SectionRow, dict[int, int]]:
    """Build one body row and return it with the updated active-span tracker."""
    remaining = {column: count for column, count in active.items() if count > 0}

    # A first-field-only row is a section marker unless a span covers or starts on it
    starts_here = any((column, row_index) in span_starts for column in range(len(row)))
    if is_first_field_only(row) and not remaining and not starts_here:
        return SectionRow(text=row[0]), remaining

    cells: list[Cell] = []
    for column, value in enumerate(row):
        if remaining.get(column, 0) > 0:
            cells.append(Cell(value=value, suppressed=True))
            remaining[column] -= 1
        elif (column, row_index) in span_starts:
            span = span_starts[(column, row_index)]
            cells.append(Cell(value=span.value, row_span=span.length))
            remaining[column] = span.length - 1
        else:
            cells.append(Cell(value=value))

    remaining = {column: count for column, count in remaining.items() if count > 0}
    return DataRow(cells=cells), remaining


def build(grid: Grid, span_map: SpanMap, merge_columns: Iterable[int]) -> TableStructure:
    """Build the TableStructure for ``grid`` using the spans of ``merge_columns``."""
    merge_columns = set(merge_columns)
    span_starts = _index_span_starts(span_map, merge_columns)

    active: dict[int, int] = {}
    rows: list[DataRow | SectionRow] = []
    for row_index, row in enumerate(grid.rows):
        built, active = build_row(row, row_index, span_starts, active)
        rows.append(built)

    n_sections = sum(1 for row in rows if isinstance(row, SectionRow))
    logger.debug(
        "Built table: %d columns, %d rows (%d section markers), %d spans",
        grid.column_count,
        len(rows),
        n_sections,
        len(span_starts),
    )
    return TableStructure(column_count=grid.column_count, header=build_header(grid.header), rows=rows)
