"""Configuration models used by the label pipeline.

LabelgoodSettings

`markup_renderers` (`list[str]`)
: Renderer names tried, in order, for markup labels.

`raster_renderers` (`list[str]`)
: Renderer names tried, in order, for raster labels. The first entry is the
  default engine; the others are fallbacks.

`temp_dir` (`Path | None`)
: Directory receiving input files and generated PDFs. Defaults to the system
  temporary directory.

`output_prefix` (`str`)
: File name prefix of generated PDFs, followed by a millisecond timestamp.

`raster_dpi` (`int`)
: Reference resolution assumed for raster labels.

`lpr_program` / `lpstat_program` (`str`)
: Executables used to spool jobs and enumerate print queues.

`print_options` (`dict[str, str]`)
: Extra `-o key=value` spool options appended after the fixed scaling options.

`keep_input` (`bool`)
: Keep the materialised input file after rendering, to aid troubleshooting.

Settings are resolved from defaults, then a YAML file (`$LABELGOOD_CONFIG` or
`~/.config/labelgood/config.yml`), then `LABELGOOD_*` environment variables,
then explicit overrides.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import ConfigError
from .units import REFERENCE_DPI


DEFAULT_MARKUP_RENDERERS: tuple[str, ...] = ("wkhtmltopdf", "weasyprint")
DEFAULT_RASTER_RENDERERS: tuple[str, ...] = (
    "imagemagick-resize",
    "imagemagick-page",
    "convert-resize",
)

_ENV_PREFIX = "LABELGOOD_"
_ENV_FIELDS: dict[str, str] = {
    "TEMP_DIR": "temp_dir",
    "OUTPUT_PREFIX": "output_prefix",
    "MARKUP_RENDERERS": "markup_renderers",
    "RASTER_RENDERERS": "raster_renderers",
    "LPR": "lpr_program",
    "LPSTAT": "lpstat_program",
    "KEEP_INPUT": "keep_input",
}


class LabelgoodSettings(BaseModel):
    """Runtime settings for rendering and dispatch."""

    model_config = ConfigDict(extra="forbid")

    markup_renderers: list[str] = Field(default_factory=lambda: list(DEFAULT_MARKUP_RENDERERS))
    raster_renderers: list[str] = Field(default_factory=lambda: list(DEFAULT_RASTER_RENDERERS))
    temp_dir: Path | None = None
    output_prefix: str = "label_"
    raster_dpi: int = Field(default=REFERENCE_DPI, gt=0)
    lpr_program: str = "lpr"
    lpstat_program: str = "lpstat"
    print_options: dict[str, str] = Field(default_factory=dict)
    keep_input: bool = False

    @field_validator("markup_renderers", "raster_renderers", mode="before")
    @classmethod
    def split_names(cls, value: Any) -> Any:
        """Accept comma separated strings as renderer lists."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("markup_renderers", "raster_renderers")
    @classmethod
    def require_renderers(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one renderer is required")
        return value

    @field_validator("output_prefix")
    @classmethod
    def reject_separators(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("output prefix must not contain path separators")
        return value


def default_config_path() -> Path:
    """Return the configuration file location, honouring ``LABELGOOD_CONFIG``."""
    explicit = os.environ.get(f"{_ENV_PREFIX}CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config).expanduser() if xdg_config else Path.home() / ".config"
    return base / "labelgood" / "config.yml"


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file '{path}': {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Configuration file '{path}' must contain a mapping.")
    return payload


def _environment_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        value = environ.get(f"{_ENV_PREFIX}{suffix}")
        if value is not None and value.strip():
            overrides[field_name] = value.strip()
    return overrides


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> LabelgoodSettings:
    """Resolve settings from file, environment, and keyword overrides."""
    environ = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    config_path = Path(path).expanduser() if path is not None else default_config_path()
    if config_path.exists():
        data.update(_read_config_file(config_path))
    elif path is not None:
        raise ConfigError(f"Configuration file '{config_path}' does not exist.")

    data.update(_environment_overrides(environ))
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return LabelgoodSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid labelgood settings: {exc}") from exc


__all__ = [
    "DEFAULT_MARKUP_RENDERERS",
    "DEFAULT_RASTER_RENDERERS",
    "LabelgoodSettings",
    "default_config_path",
    "load_settings",
]
