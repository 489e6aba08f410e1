"""External rendering: HTML -> PDF with wkhtmltopdf, then PDF -> PNG with ImageMagick.

The markup is written to disk once and converted in two subprocess calls.
Intermediate files live in a temporary directory unless the caller asks to
keep them next to the output image for debugging.  Multi-page PDFs make
ImageMagick write ``<base>-0.png``, ``<base>-1.png``, ... so stale outputs
of both shapes are removed before every render.
"""

import logging
import re
import subprocess
import tempfile
from pathlib import Path

from table_image.config import RenderSettings
from table_image.errors import RenderError

logger = logging.getLogger(__name__)


# ─── Output Cleanup ──────────────────────────────────────────────────────────


def _output_pattern(output_file: Path) -> re.Pattern[str]:
    """Match ``<base>.png`` and the numbered pages ``<base>-N.png`` of a multi-page render."""
    base = re.sub(r"\.png$", "", output_file.name)
    return re.compile(rf"^{re.escape(base)}(?:-(\d+))?\.png$")


def find_outputs(output_file: Path) -> list[Path]:
    """Return the existing PNGs for ``output_file``, numbered pages in page order."""
    output_file = Path(output_file)
    if not output_file.parent.is_dir():
        return []

    pattern = _output_pattern(output_file)
    found: list[tuple[int, Path]] = []
    for path in output_file.parent.iterdir():
        match = pattern.match(path.name)
        if path.is_file() and match:
            page = int(match.group(1)) if match.group(1) is not None else -1
            found.append((page, path))
    return [path for _, path in sorted(found)]


def cleanup_old_outputs(output_file: Path) -> list[Path]:
    """Delete ``<base>.png`` and ``<base>-N.png`` files left over from earlier renders."""
    output_file = Path(output_file)
    deleted = find_outputs(output_file)
    for path in deleted:
        path.unlink()
    if deleted:
        logger.info("Removed %d old output file(s) for %s", len(deleted), output_file.name)
    return deleted


# ─── Commands ────────────────────────────────────────────────────────────────


def wkhtmltopdf_command(html_path: Path, pdf_path: Path, settings: RenderSettings, landscape: bool = False) -> list[str]:
    """Build the wkhtmltopdf argument list (zero margins, no smart shrinking)."""
    cmd = [settings.wkhtmltopdf_bin, "--enable-local-file-access"]
    if landscape:
        cmd += ["--orientation", "Landscape"]
    cmd += ["--page-size", settings.page_size]
    for side in ("top", "right", "bottom", "left"):
        cmd += [f"--margin-{side}", "0"]
    cmd += ["--disable-smart-shrinking", "--zoom", "1.0", str(html_path), str(pdf_path)]
    return cmd


def convert_command(pdf_path: Path, output_file: Path, settings: RenderSettings) -> list[str]:
    """Build the ImageMagick argument list that rasterises and trims the PDF."""
    return [
        settings.convert_bin,
        "-density",
        str(settings.density),
        str(pdf_path),
        "-trim",
        "-quality",
        "100",
        str(output_file),
    ]


def _run(cmd: list[str], timeout: float) -> None:
    """Run an external tool, mapping every failure mode to RenderError."""
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, check=False)
    except FileNotFoundError as exc:
        raise RenderError(f"{cmd[0]} not found; is it installed and on PATH?") from exc
    except subprocess.TimeoutExpired as exc:
        raise RenderError(f"{cmd[0]} timed out after {timeout:.0f}s") from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise RenderError(f"{cmd[0]} exited with status {result.returncode}: {stderr}")


# ─── Rendering ───────────────────────────────────────────────────────────────


def _render_in(
    work_dir: Path, markup: str, output_file: Path, landscape: bool, settings: RenderSettings
) -> None:
    html_path = work_dir / f"{output_file.stem}.html"
    pdf_path = work_dir / f"{output_file.stem}.pdf"
    html_path.write_text(markup, encoding="utf-8")

    _run(wkhtmltopdf_command(html_path, pdf_path, settings, landscape), settings.timeout)
    _run(convert_command(pdf_path, output_file, settings), settings.timeout)


def render_image(
    markup: str,
    output_file: Path,
    landscape: bool = False,
    settings: RenderSettings | None = None,
    keep_intermediate: bool = False,
) -> list[Path]:
    """Convert a complete HTML document into PNG output and return the files written.

    A single-page document yields ``[output_file]``.  A multi-page document
    yields ImageMagick's numbered pages ``<base>-0.png``, ``<base>-1.png``, ...
    instead, because ``output_file`` itself is never created in that case.
    """
    settings = settings or RenderSettings.from_env()
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    cleanup_old_outputs(output_file)

    if keep_intermediate:
        _render_in(output_file.parent, markup, output_file, landscape, settings)
        logger.info("Intermediate HTML and PDF kept in %s", output_file.parent)
    else:
        with tempfile.TemporaryDirectory(prefix="table_image_") as tmp:
            _render_in(Path(tmp), markup, output_file, landscape, settings)

    written = find_outputs(output_file)
    if not written:
        raise RenderError(f"{settings.convert_bin} reported success but wrote no PNG for {output_file.name}")

    orientation = "landscape" if landscape else "portrait"
    for path in written:
        logger.info("Rendered %s (%s)", path, orientation)
    return written
