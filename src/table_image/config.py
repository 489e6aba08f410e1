"""Shared configuration for rendering table images.

Renderer binaries and conversion options can be overridden in the project's
.env file or the process environment:

    WKHTMLTOPDF_BIN          HTML -> PDF converter (default: wkhtmltopdf)
    CONVERT_BIN              ImageMagick PDF -> PNG converter (default: convert)
    RENDER_DENSITY           rasterisation DPI (default: 300)
    RENDER_PAGE_SIZE         wkhtmltopdf page size (default: A4)
    RENDER_TIMEOUT_SECONDS   per-process timeout (default: 120)
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from table_image.errors import ConfigError

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# RenderSettings field -> environment variable
ENV_VARS = {
    "wkhtmltopdf_bin": "WKHTMLTOPDF_BIN",
    "convert_bin": "CONVERT_BIN",
    "density": "RENDER_DENSITY",
    "page_size": "RENDER_PAGE_SIZE",
    "timeout": "RENDER_TIMEOUT_SECONDS",
}


class RenderSettings(BaseModel):
    """Options passed to the external HTML -> PDF -> PNG conversion."""

    wkhtmltopdf_bin: str = "wkhtmltopdf"
    convert_bin: str = "convert"
    density: int = Field(default=300, gt=0)
    page_size: str = "A4"
    timeout: float = Field(default=120.0, gt=0)

    @classmethod
    def from_env(cls) -> "RenderSettings":
        """Build settings from environment variables, falling back to defaults.

        Raises ConfigError when a variable does not parse as its setting's type.
        """
        overrides = {field: os.environ[name] for field, name in ENV_VARS.items() if os.getenv(name)}
        try:
            return cls(**overrides)
        except ValidationError as exc:
            names = ", ".join(ENV_VARS[str(error["loc"][0])] for error in exc.errors())
            raise ConfigError(f"Invalid render setting in {names}: {exc}") from exc
