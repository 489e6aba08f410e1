"""Column-count validation of a realized TableStructure.

The check is re-derived from what would actually be rendered: only visible
cells and their row/column extents are consulted, never the builder's
suppressed flags or the SpanMap it was built from.  For each row the validator

  1. credits every column still owned by a span opened in an earlier row,
  2. places the row's visible cells left to right into the remaining free
     columns, opening a new span for each cell with row_span > 1,
  3. compares the accumulated count with the table's column count.

Row indices in errors count the header as row 0.
"""

import logging

from table_image.errors import ColumnCountMismatchError
from table_image.models import DataRow, HeaderRow, SectionRow, TableStructure, TitleRow

logger = logging.getLogger(__name__)

# (column width, row span) of one visible cell
VisibleCell = tuple[int, int]


def visible_extents(row: HeaderRow | TitleRow | DataRow | SectionRow, column_count: int) -> list[VisibleCell]:
    """Return the (column width, row span) of each visible cell in ``row``."""
    if isinstance(row, HeaderRow):
        return [(1, 1)] * len(row.labels)
    if isinstance(row, (TitleRow, SectionRow)):
        return [(column_count, 1)]
    return [(cell.col_span, cell.row_span) for cell in row.visible_cells]


def count_row(visible: list[VisibleCell], active: dict[int, int]) -> tuple[int, dict[int, int]]:
    """Return the effective column count of one row and the updated active-span tracker."""
    remaining = {column: count for column, count in active.items() if count > 0}

    # Columns owned by spans from earlier rows count once and tick down
    owned = set(remaining)
    count = len(owned)
    for column in owned:
        remaining[column] -= 1

    column = 0
    for width, row_span in visible:
        while column in owned:
            column += 1
        count += width
        if row_span > 1:
            for spanned in range(column, column + width):
                remaining[spanned] = row_span - 1
        column += width

    return count, {column: left for column, left in remaining.items() if left > 0}


def effective_column_counts(structure: TableStructure) -> list[int]:
    """Return the effective column count of every row, header first."""
    counts: list[int] = []
    active: dict[int, int] = {}
    for row in [structure.header, *structure.rows]:
        count, active = count_row(visible_extents(row, structure.column_count), active)
        counts.append(count)
    return counts


def validate(structure: TableStructure) -> None:
    """Raise ColumnCountMismatchError on the first row that does not resolve to column_count."""
    expected = structure.column_count
    for row_index, actual in enumerate(effective_column_counts(structure)):
        if actual != expected:
            logger.error("Row %d resolves to %d columns, expected %d", row_index, actual, expected)
            raise ColumnCountMismatchError(row_index, expected, actual)
    logger.debug("Validated %d rows against %d columns", len(structure.rows) + 1, expected)
