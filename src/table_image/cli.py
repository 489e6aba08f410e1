"""Command-line entry point.

Usage:
    table-image -i table.tsv [-o table.png] [--landscape] [--merge-cols 4,5]
    python -m table_image.cli -i table.tsv --merge-cols 4,5 --keep-intermediate
"""

import argparse
import logging
import re
import sys
from pathlib import Path

from table_image.errors import TableImageError
from table_image.pipeline import default_output_path, run

logger = logging.getLogger(__name__)

MERGE_COLS_SPLIT_RE = re.compile(r"[,\s]+")


def parse_merge_columns(value: str) -> set[int]:
    """Parse a comma-separated list such as ``"4,5"`` into column indices.

    Non-numeric and negative tokens are dropped with a warning.
    """
    # "4, 5" is fine; only a bare space separator gets the hint
    if re.search(r"\s", value.strip()) and "," not in value:
        logger.warning("Please use comma-separated format (e.g. 4,5) instead of spaces")

    columns: set[int] = set()
    for token in MERGE_COLS_SPLIT_RE.split(value.strip()):
        if not token:
            continue
        try:
            column = int(token)
        except ValueError:
            logger.warning("Ignoring non-numeric merge column %r", token)
            continue
        if column < 0:
            logger.warning("Ignoring negative merge column %d", column)
            continue
        columns.add(column)
    return columns


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a tab-separated table as a PNG image")
    parser.add_argument("-i", "--input", required=True, type=Path, help="Input TSV file")
    parser.add_argument("-o", "--output", type=Path, help="Output PNG file (default: input file name with .png)")
    parser.add_argument("--landscape", action="store_true", help="Generate landscape output (default: portrait)")
    parser.add_argument(
        "--merge-cols",
        type=parse_merge_columns,
        default=set(),
        help="Comma-separated column indexes (e.g. 4,5) whose blank or repeated cells merge with the cell above",
    )
    parser.add_argument(
        "--keep-intermediate", action="store_true", help="Keep the intermediate HTML and PDF beside the output"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    output = args.output
    if output is None:
        output = default_output_path(args.input)
        logger.info("No output file specified, using: %s", output)

    try:
        result = run(
            args.input,
            output,
            merge_columns=args.merge_cols,
            landscape=args.landscape,
            keep_intermediate=args.keep_intermediate,
        )
    except FileNotFoundError:
        logger.error("Input file not found: %s", args.input)
        return 1
    except (OSError, UnicodeDecodeError, TableImageError) as exc:
        logger.error("Error: %s", exc)
        return 1

    for path in result:
        logger.info("Done! Output saved to %s", path)
    logger.info("Output format: %s", "Landscape" if args.landscape else "Portrait")
    return 0


if __name__ == "__main__":
    sys.exit(main())
