"""Application settings models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scoutdash.constants.defaults import (
    INITIAL_VIEW_DEFAULT,
    LOG_LEVEL_DEFAULT,
    OUTPUT_FORMAT_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from scoutdash.constants.enums import OutputFormat, View

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class AppSettings(BaseModel):
    """Runtime settings with validation, built from command-line options."""

    model_config = ConfigDict(populate_by_name=True)

    # Dashboard start-up
    app: str | None = None
    tab: View = View.parse(INITIAL_VIEW_DEFAULT)

    # Live view
    refresh_interval: int = Field(default=REFRESH_INTERVAL_DEFAULT, ge=0)  # seconds, 0 = off
    use_utc: bool = False

    # Batch output and diagnostics
    output_format: OutputFormat = OutputFormat.parse(OUTPUT_FORMAT_DEFAULT)
    log_level: str = LOG_LEVEL_DEFAULT

    @field_validator("app", mode="before")
    @classmethod
    def _blank_app_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("tab", mode="before")
    @classmethod
    def _parse_tab(cls, value: object) -> object:
        if isinstance(value, str):
            return View.parse(value)
        return value

    @field_validator("output_format", mode="before")
    @classmethod
    def _parse_output_format(cls, value: object) -> object:
        if isinstance(value, str):
            return OutputFormat.parse(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"must be one of: {', '.join(_LOG_LEVELS)}")
        return normalized

    @classmethod
    def from_options(cls, **options: object) -> AppSettings:
        """Validate options, converting pydantic errors into :class:`ConfigError`."""
        try:
            return cls(**options)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(f"Invalid settings: {problems}") from e


class ConfigError(Exception):
    """Raised when settings fail validation."""


__all__ = [
    "AppSettings",
    "ConfigError",
]
