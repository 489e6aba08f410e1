"""Row-span calculation for merge columns.

For each merge column the rows are scanned top to bottom and grouped into
runs: a non-empty value opens a run, the same value repeated or an empty cell
extends it, and a different non-empty value closes it and opens the next.
Runs covering two or more rows are emitted as Span objects; single-row runs
need no merging and are never emitted.

Columns are processed independently, so a boundary in one merge column never
affects another.
"""

import logging
from collections.abc import Iterable, Sequence

from table_image.models import Span, SpanMap

logger = logging.getLogger(__name__)


def calculate_column(rows: Sequence[Sequence[str]], column: int) -> list[Span]:
    """Return the ordered, non-overlapping spans for one column."""
    spans: list[Span] = []
    current_value = ""
    span_start = -1  # -1 until the first non-empty value opens a run
    run_length = 0

    def close_run() -> None:
        if run_length >= 2:
            spans.append(Span(start_index=span_start, length=run_length, value=current_value))

    for row_index, row in enumerate(rows):
        value = row[column] if column < len(row) else ""

        if value:
            if value == current_value:
                run_length += 1
                continue
            close_run()
            current_value = value
            span_start = row_index
            run_length = 1
        elif span_start >= 0:
            # Blank continuation inherits the anchor value
            run_length += 1

    close_run()
    return spans


def calculate(rows: Sequence[Sequence[str]], merge_columns: Iterable[int]) -> SpanMap:
    """Compute the SpanMap for every merge column.

    Only columns with at least one span appear as keys.  Negative indices are
    skipped, and so are indices beyond the widest row.
    """
    width = max((len(row) for row in rows), default=0)
    span_map: SpanMap = {}

    for column in sorted(set(merge_columns)):
        if column < 0 or column >= width:
            logger.warning("Merge column %d is outside the table (%d columns); ignoring", column, width)
            continue
        spans = calculate_column(rows, column)
        if spans:
            span_map[column] = spans
        logger.debug("Column %d: %d spans covering %d rows", column, len(spans), sum(s.length for s in spans))

    return span_map
