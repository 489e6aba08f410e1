"""One-shot render pass: TSV text -> validated structure -> HTML -> PNG.

build_table() and generate_html() are pure; run() adds the file read and the
hand-off to the external renderer.  Every pass is independent: spans and
active-span trackers are created fresh and discarded at the end.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from table_image.builder import build
from table_image.config import RenderSettings
from table_image.loader import load
from table_image.markup import parse_html, render_html
from table_image.models import TableStructure
from table_image.renderer import render_image
from table_image.spans import calculate
from table_image.validation import validate

logger = logging.getLogger(__name__)


def build_table(text: str, merge_columns: Iterable[int] = ()) -> TableStructure:
    """Load, compute spans, build, and validate the table described by ``text``."""
    merge_columns = set(merge_columns)
    grid = load(text)
    span_map = calculate(grid.rows, merge_columns)
    structure = build(grid, span_map, merge_columns)
    validate(structure)
    return structure


def generate_html(text: str, merge_columns: Iterable[int] = (), landscape: bool = False) -> str:
    """Return validated HTML markup for ``text``.

    The markup itself is parsed back and validated again so the artifact
    handed to the renderer is known to be column-consistent.
    """
    structure = build_table(text, merge_columns)
    markup = render_html(structure, landscape=landscape)
    validate(parse_html(markup))
    return markup


def default_output_path(input_path: Path) -> Path:
    """Return ``input_path`` with its extension replaced by ``.png``."""
    return Path(input_path).with_suffix(".png")


def run(
    input_path: Path,
    output_path: Path | None = None,
    merge_columns: Iterable[int] = (),
    landscape: bool = False,
    keep_intermediate: bool = False,
    settings: RenderSettings | None = None,
) -> list[Path]:
    """Render the TSV file at ``input_path`` and return the PNG files written."""
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path is not None else default_output_path(input_path)

    text = input_path.read_text(encoding="utf-8")
    logger.info("Read %d characters from %s", len(text), input_path)

    markup = generate_html(text, merge_columns, landscape=landscape)
    return render_image(
        markup, output_path, landscape=landscape, settings=settings, keep_intermediate=keep_intermediate
    )
