"""Server configuration — pydantic settings loaded from an optional YAML file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ocrtool import __version__

DEFAULT_LANGUAGES: list[str] = ["en-US"]


class ConfigError(Exception):
    """Raised when a settings file fails parsing or validation."""


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Runtime settings for the OCR server."""

    server_name: str = "ocrtool-mcp"
    server_version: str = __version__
    default_languages: list[str] = Field(default_factory=lambda: list(DEFAULT_LANGUAGES))
    url_timeout: float = Field(default=30.0, gt=0, description="Seconds allowed for URL downloads.")
    max_image_bytes: int = Field(
        default=25 * 1024 * 1024,
        gt=0,
        description="Upper bound on downloaded or decoded image size.",
    )
    tesseract_cmd: str | None = Field(
        default=None,
        description="Path to the tesseract binary; PATH lookup when unset.",
    )
    log_level: str = "INFO"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("default_languages")
    @classmethod
    def _non_empty_languages(cls, value: list[str]) -> list[str]:
        languages = [lang.strip() for lang in value if lang.strip()]
        if not languages:
            msg = "default_languages must name at least one language"
            raise ValueError(msg)
        return languages

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


class SettingsLoader:
    """Load and validate a YAML settings file into :class:`ServerSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing. An empty file
        yields the defaults.

        Raises:
            ConfigError: On read errors, YAML parse errors, or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            return ServerSettings()
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")

        try:
            return ServerSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
