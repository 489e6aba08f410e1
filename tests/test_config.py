"""Unit tests for the render configuration module."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest
from pydantic import ValidationError

from table_image.config import ROOT, RenderSettings
from table_image.errors import ConfigError

_ENV_VARS = ("WKHTMLTOPDF_BIN", "CONVERT_BIN", "RENDER_DENSITY", "RENDER_PAGE_SIZE", "RENDER_TIMEOUT_SECONDS")


class TestRoot:

    def test_root_is_project_root(self):
        """ROOT should point to the project root (contains pyproject.toml)."""
        assert (ROOT / "pyproject.toml").exists()


class TestRenderSettings:

    def test_defaults(self):
        settings = RenderSettings()
        assert settings.wkhtmltopdf_bin == "wkhtmltopdf"
        assert settings.convert_bin == "convert"
        assert settings.density == 300
        assert settings.page_size == "A4"
        assert settings.timeout == 120.0

    def test_from_env_defaults(self, monkeypatch):
        for name in _ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        assert RenderSettings.from_env() == RenderSettings()

    def test_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv("WKHTMLTOPDF_BIN", "/usr/local/bin/wkhtmltopdf")
        monkeypatch.setenv("CONVERT_BIN", "magick")
        monkeypatch.setenv("RENDER_DENSITY", "150")
        monkeypatch.setenv("RENDER_PAGE_SIZE", "Letter")
        monkeypatch.setenv("RENDER_TIMEOUT_SECONDS", "30")
        settings = RenderSettings.from_env()
        assert settings.wkhtmltopdf_bin == "/usr/local/bin/wkhtmltopdf"
        assert settings.convert_bin == "magick"
        assert settings.density == 150
        assert settings.page_size == "Letter"
        assert settings.timeout == 30.0

    def test_rejects_non_positive_density(self):
        with pytest.raises(ValidationError):
            RenderSettings(density=0)

    def test_from_env_rejects_unparseable_density(self, monkeypatch):
        monkeypatch.setenv("RENDER_DENSITY", "abc")
        with pytest.raises(ConfigError, match="RENDER_DENSITY"):
            RenderSettings.from_env()

    def test_from_env_rejects_non_positive_timeout(self, monkeypatch):
        monkeypatch.setenv("RENDER_TIMEOUT_SECONDS", "0")
        with pytest.raises(ConfigError, match="RENDER_TIMEOUT_SECONDS"):
            RenderSettings.from_env()
