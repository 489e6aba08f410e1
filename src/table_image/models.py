"""Pydantic models for loaded grids, computed spans, and built table structures.

Grid is the loader's output, Span/SpanMap the row-span calculator's, and
TableStructure the builder's.  Rows of a TableStructure are a tagged variant
discriminated on ``kind`` so consumers never have to sniff cell contents to
tell a header from a section marker.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Grid(BaseModel):
    """Rectangular tabular data: one header row plus conformed data rows."""

    model_config = ConfigDict(frozen=True)

    header: list[str]
    rows: list[list[str]]

    @model_validator(mode="after")
    def validate_row_widths(self) -> "Grid":
        """Ensure every data row has exactly len(header) cells."""
        n_cols = len(self.header)
        for i, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {n_cols} (matching header)")
        return self

    @property
    def column_count(self) -> int:
        return len(self.header)


class Span(BaseModel):
    """A merged run of rows in one column, anchored at ``start_index``."""

    model_config = ConfigDict(frozen=True)

    start_index: int = Field(ge=0)
    length: int = Field(ge=2)
    value: str

    @property
    def end_index(self) -> int:
        """Index one past the last row covered by this span."""
        return self.start_index + self.length


# Column index -> spans ordered by start_index
SpanMap = dict[int, list[Span]]


class Cell(BaseModel):
    """One column slot of a data row; suppressed when covered by a span from above."""

    model_config = ConfigDict(frozen=True)

    value: str
    row_span: int = Field(default=1, ge=1)
    col_span: int = Field(default=1, ge=1)  # only >1 for cells re-parsed from markup
    suppressed: bool = False


# ─── Row Variants ────────────────────────────────────────────────────────────


class HeaderRow(BaseModel):
    """Column labels, one visible cell per label."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["header"] = "header"
    labels: list[str]


class TitleRow(BaseModel):
    """Header collapsed to a single full-width title cell."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["title"] = "title"
    text: str


class DataRow(BaseModel):
    """A normal row with exactly one Cell per column."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["data"] = "data"
    cells: list[Cell]

    @property
    def visible_cells(self) -> list[Cell]:
        return [cell for cell in self.cells if not cell.suppressed]


class SectionRow(BaseModel):
    """Full-width section marker row; never subject to merging."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["section"] = "section"
    text: str


HeaderKindRow = Annotated[HeaderRow | TitleRow, Field(discriminator="kind")]
BodyRow = Annotated[DataRow | SectionRow, Field(discriminator="kind")]


class TableStructure(BaseModel):
    """Abstract table ready for validation and markup generation."""

    model_config = ConfigDict(frozen=True)

    column_count: int = Field(ge=1)
    header: HeaderKindRow
    rows: list[BodyRow]
