"""HTML rendering of a TableStructure, and parsing rendered HTML back into one.

render_html() produces the self-contained document handed to the external
renderer.  parse_html() rebuilds a TableStructure (visible cells only) from
that document with BeautifulSoup so the exact markup can be re-validated
before it leaves the process.
"""

import html
import logging

from bs4 import BeautifulSoup, Tag

from table_image.models import Cell, DataRow, HeaderRow, SectionRow, TableStructure, TitleRow

logger = logging.getLogger(__name__)


# ─── Styling ─────────────────────────────────────────────────────────────────


def _styles(landscape: bool) -> str:
    """Return the stylesheet; landscape pages use a smaller font."""
    font_size = "11px" if landscape else "12px"
    return f"""
        body {{
            font-family: Arial, sans-serif;
            margin: 20px;
            color: #333;
        }}
        .header-row {{
            background-color: #f5f5f5;
            font-weight: bold;
        }}
        table {{
            width: 100%;
            border-collapse: collapse;
            margin-bottom: 20px;
            font-size: {font_size};
            break-inside: avoid;
            page-break-inside: avoid;
        }}
        th {{
            background-color: #f5f5f5;
            border: 1px solid #ddd;
            padding: 8px;
            text-align: left;
            font-weight: bold;
        }}
        td {{
            border: 1px solid #ddd;
            padding: 8px;
            text-align: left;
            vertical-align: top;
        }}
        tr {{
            break-inside: avoid;
            page-break-inside: avoid;
        }}
        tr:nth-child(even):not(.section-header) {{
            background-color: #fafafa;
        }}
        .section-header {{
            background-color: #e0e0e0 !important;
            font-weight: bold;
            font-size: 1.1em;
        }}
        .section-header td {{
            padding: 12px 8px;
        }}
"""


# ─── Rendering ───────────────────────────────────────────────────────────────


def _cell_html(tag: str, value: str, row_span: int = 1, col_span: int = 1) -> str:
    attrs = ""
    if col_span > 1:
        attrs += f' colspan="{col_span}"'
    if row_span > 1:
        attrs += f' rowspan="{row_span}"'
    return f"<{tag}{attrs}>{html.escape(value)}</{tag}>"


def _header_html(row: HeaderRow | TitleRow, column_count: int) -> str:
    if isinstance(row, TitleRow):
        return f'<tr class="header-row title-row">{_cell_html("th", row.text, col_span=column_count)}</tr>'
    return '<tr class="header-row">' + "".join(_cell_html("th", label) for label in row.labels) + "</tr>"


def _body_row_html(row: DataRow | SectionRow, column_count: int) -> str:
    if isinstance(row, SectionRow):
        return f'<tr class="section-header">{_cell_html("td", row.text, col_span=column_count)}</tr>'
    cells = "".join(_cell_html("td", cell.value, cell.row_span, cell.col_span) for cell in row.visible_cells)
    return f"<tr>{cells}</tr>"


def render_html(structure: TableStructure, landscape: bool = False) -> str:
    """Render ``structure`` as a complete HTML document."""
    lines = [_header_html(structure.header, structure.column_count)]
    lines.extend(_body_row_html(row, structure.column_count) for row in structure.rows)
    table = "\n".join(lines)
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>{_styles(landscape)}</style>
</head>
<body>
<table>
{table}
</table>
</body>
</html>
"""


# ─── Parsing ─────────────────────────────────────────────────────────────────


def _int_attr(tag: Tag, name: str) -> int:
    """Read a positive integer attribute such as rowspan, defaulting to 1."""
    try:
        return max(int(tag.get(name, 1)), 1)
    except (TypeError, ValueError):
        return 1


def _parse_header(tr: Tag) -> tuple[HeaderRow | TitleRow, int]:
    """Return the header row and the column count it defines."""
    cells = tr.find_all(["th", "td"])
    column_count = sum(_int_attr(cell, "colspan") for cell in cells)
    if len(cells) == 1 and column_count > 1:
        return TitleRow(text=cells[0].get_text()), column_count
    return HeaderRow(labels=[cell.get_text() for cell in cells]), column_count


def _parse_body_row(tr: Tag, column_count: int) -> DataRow | SectionRow:
    cells = tr.find_all("td")
    is_section = "section-header" in (tr.get("class") or [])
    # A section row must still span the full width to be read as one
    if is_section and len(cells) == 1 and _int_attr(cells[0], "colspan") == column_count:
        return SectionRow(text=cells[0].get_text())
    return DataRow(
        cells=[
            Cell(value=cell.get_text(), row_span=_int_attr(cell, "rowspan"), col_span=_int_attr(cell, "colspan"))
            for cell in cells
        ]
    )


def parse_html(markup: str) -> TableStructure:
    """Parse the first table in ``markup`` into a TableStructure of visible cells."""
    soup = BeautifulSoup(markup, "html.parser")
    table = soup.find("table")
    if table is None:
        raise ValueError("No <table> element found in markup")

    trs = table.find_all("tr")
    if not trs:
        raise ValueError("Table markup has no rows")

    header, column_count = _parse_header(trs[0])
    rows = [_parse_body_row(tr, column_count) for tr in trs[1:]]
    logger.debug("Parsed markup: %d columns, %d body rows", column_count, len(rows))
    return TableStructure(column_count=column_count, header=header, rows=rows)
