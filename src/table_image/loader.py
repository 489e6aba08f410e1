"""Parse tab-separated text into a rectangular Grid.

The first non-empty record is the header.  Every later record is conformed to
the header's width (extra cells dropped, short rows right-padded with empty
strings) and records that end up entirely empty are dropped.  Cells are
compared as plain strings downstream, so no number coercion happens here.

Quoted fields follow csv rules: a field opened with ``"`` runs until its
closing quote, so an unterminated quote absorbs the records after it.  Such
fields are logged as warnings.
"""

import csv
import io
import logging

from table_image.errors import EmptyInputError, MalformedInputError
from table_image.models import Grid

logger = logging.getLogger(__name__)

# Largest value accepted on every platform (C long on Windows); the csv default of 128 KiB
# rejects long free-text cells.  Raised once at import, never lowered.
FIELD_SIZE_LIMIT = 2**31 - 1
if csv.field_size_limit() < FIELD_SIZE_LIMIT:
    csv.field_size_limit(FIELD_SIZE_LIMIT)


def _is_blank(row: list[str]) -> bool:
    """Return True if every cell in the row is empty."""
    return not any(row)


def _parse_records(text: str) -> list[list[str]]:
    """Split raw TSV text into records of whitespace-stripped fields."""
    reader = csv.reader(io.StringIO(text, newline=""), delimiter="\t")
    try:
        records = [[field.strip() for field in record] for record in reader]
    except csv.Error as exc:
        raise MalformedInputError(f"Cannot parse TSV at line {reader.line_num}: {exc}") from exc

    # Embedded separators only survive inside quoted fields
    for record_index, record in enumerate(records):
        for field in record:
            if "\n" in field or "\t" in field:
                logger.warning(
                    "Record %d has a quoted field containing a tab or line break; "
                    "an unterminated quote may have merged later rows into it: %.40r",
                    record_index,
                    field,
                )
    return records


def conform_row(row: list[str], width: int) -> list[str]:
    """Truncate or right-pad ``row`` with empty strings to exactly ``width`` cells."""
    if len(row) >= width:
        return row[:width]
    return row + [""] * (width - len(row))


def load(text: str) -> Grid:
    """Parse TSV ``text`` into a Grid whose rows all match the header width.

    Raises EmptyInputError if no non-empty record remains (including empty
    or whitespace-only input).
    """
    records = [record for record in _parse_records(text) if not _is_blank(record)]
    if not records:
        raise EmptyInputError("No data found in the input")

    header = records[0]
    width = len(header)

    rows: list[list[str]] = []
    n_truncated = n_padded = 0
    for record in records[1:]:
        if len(record) > width:
            n_truncated += 1
        elif len(record) < width:
            n_padded += 1
        row = conform_row(record, width)
        # Truncation can leave a row with nothing but empty cells
        if _is_blank(row):
            continue
        rows.append(row)

    if n_truncated or n_padded:
        logger.info("Conformed rows to %d columns: %d truncated, %d padded", width, n_truncated, n_padded)
    logger.debug("Loaded header with %d columns and %d data rows", width, len(rows))
    return Grid(header=header, rows=rows)
