"""Unit tests for the render pipeline.

The external renderer is patched out; everything up to the hand-off runs for
real.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

from pathlib import Path
from unittest.mock import patch

import pytest

from table_image.errors import EmptyInputError
from table_image.models import DataRow, HeaderRow
from table_image.pipeline import build_table, default_output_path, generate_html, run

_PATCH_RENDER = "table_image.pipeline.render_image"


class TestBuildTable:

    def test_plain_table(self):
        structure = build_table("GENE\tLOCATION\tINTERPRETATION\ngene1\tloc1\tbenign\n")
        assert structure.header == HeaderRow(labels=["GENE", "LOCATION", "INTERPRETATION"])
        assert len(structure.rows) == 1
        assert len(structure.rows[0].visible_cells) == 3

    def test_short_row_padded_before_spans(self):
        structure = build_table("A\tB\tC\nx\ty\tz\nw\n", {1, 2})
        first, second = structure.rows
        assert isinstance(second, DataRow)
        assert first.cells[1].row_span == 2
        assert first.cells[2].row_span == 2
        assert [cell.suppressed for cell in second.cells] == [False, True, True]

    def test_empty_input(self):
        with pytest.raises(EmptyInputError):
            build_table("")

    def test_table19(self, table19_text):
        structure = build_table(table19_text, {4, 5})
        assert structure.rows[0].cells[4].row_span == 3
        assert structure.rows[3].cells[5].row_span == 4


class TestGenerateHtml:

    def test_contains_rowspans(self, table19_text):
        markup = generate_html(table19_text, {4, 5})
        assert markup.count('rowspan="3"') == 4
        assert markup.count('rowspan="4"') == 2

    def test_without_merge_columns(self, table19_text):
        assert "rowspan" not in generate_html(table19_text)


class TestRun:

    def test_default_output_path(self):
        assert default_output_path(Path("data/table19.txt")) == Path("data/table19.png")
        assert default_output_path(Path("table")) == Path("table.png")

    def test_hands_markup_to_renderer(self, tmp_path, table19_text):
        source = tmp_path / "table19.tsv"
        source.write_text(table19_text, encoding="utf-8")

        with patch(_PATCH_RENDER, side_effect=lambda markup, output, **kwargs: [output]) as mock_render:
            result = run(source, merge_columns={4, 5}, landscape=True)

        assert result == [tmp_path / "table19.png"]
        mock_render.assert_called_once()
        markup = mock_render.call_args.args[0]
        assert 'rowspan="3"' in markup
        assert mock_render.call_args.kwargs["landscape"] is True

    def test_no_render_on_empty_input(self, tmp_path):
        source = tmp_path / "empty.tsv"
        source.write_text("\n\n", encoding="utf-8")
        with patch(_PATCH_RENDER) as mock_render:
            with pytest.raises(EmptyInputError):
                run(source)
        mock_render.assert_not_called()
