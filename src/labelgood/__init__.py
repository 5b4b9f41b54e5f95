"""Primary public API for labelgood."""

from __future__ import annotations

from labelgood.api import LabelRequest, LabelResult, LabelService, generate_label, list_printers
from labelgood.core.config import LabelgoodSettings, load_settings
from labelgood.core.exceptions import (
    ArtifactMissingError,
    ChainExhaustedError,
    ConfigError,
    DispatchFailedError,
    EngineRejectedError,
    LabelPrintError,
    LabelValidationError,
    ProgramNotFoundError,
)
from labelgood.core.models import LabelSpec, Markup, Printer, Raster, ViewDefault
from labelgood.core.units import MediaUnit

from .version import get_version


__version__ = get_version()

__all__ = [
    "ArtifactMissingError",
    "ChainExhaustedError",
    "ConfigError",
    "DispatchFailedError",
    "EngineRejectedError",
    "LabelPrintError",
    "LabelRequest",
    "LabelResult",
    "LabelService",
    "LabelSpec",
    "LabelValidationError",
    "LabelgoodSettings",
    "Markup",
    "MediaUnit",
    "Printer",
    "ProgramNotFoundError",
    "Raster",
    "ViewDefault",
    "__version__",
    "generate_label",
    "get_version",
    "list_printers",
    "load_settings",
]
