"""Data model for label requests and transient render jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal, TypeAlias

from .exceptions import LabelValidationError
from .units import MediaUnit, ensure_dimension


class ContentKind(str, Enum):
    """Content family; markup and raster jobs use disjoint renderer sets."""

    MARKUP = "markup"
    RASTER = "raster"


@dataclass(frozen=True, slots=True)
class Markup:
    """HTML label content written verbatim to the renderer input."""

    text: str

    @property
    def kind(self) -> ContentKind:
        return ContentKind.MARKUP


@dataclass(frozen=True, slots=True)
class Raster:
    """Encoded raster image, optionally carrying a ``data:`` URI prefix."""

    data: str
    source_encoding: str = "base64"

    @property
    def kind(self) -> ContentKind:
        return ContentKind.RASTER


@dataclass(frozen=True, slots=True)
class ViewDefault:
    """Open the generated PDF with the system default application."""


@dataclass(frozen=True, slots=True)
class Printer:
    """Send the generated PDF to the named print queue."""

    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise LabelValidationError("Printer name must not be empty.")


LabelContent: TypeAlias = Markup | Raster
Destination: TypeAlias = ViewDefault | Printer


@dataclass(frozen=True, slots=True)
class LabelSpec:
    """Validated label request: content, physical size, and destination."""

    content: LabelContent
    width_mm: float
    height_mm: float
    destination: Destination = field(default_factory=ViewDefault)

    def __post_init__(self) -> None:
        object.__setattr__(self, "width_mm", ensure_dimension(self.width_mm, "width_mm"))
        object.__setattr__(self, "height_mm", ensure_dimension(self.height_mm, "height_mm"))


AttemptStatus = Literal["unavailable", "rejected"]


@dataclass(frozen=True, slots=True)
class AttemptRecord:
    """Failed renderer attempt recorded in the job's attempt log."""

    renderer: str
    status: AttemptStatus
    reason: str

    @property
    def unavailable(self) -> bool:
        return self.status == "unavailable"


@dataclass(slots=True)
class RenderJob:
    """State shared by every renderer attempt of one invocation."""

    input_path: Path
    output_path: Path
    width_mm: float
    height_mm: float
    kind: ContentKind
    attempts: list[AttemptRecord] = field(default_factory=list)

    def record(self, renderer: str, status: AttemptStatus, reason: str) -> AttemptRecord:
        entry = AttemptRecord(renderer=renderer, status=status, reason=reason)
        self.attempts.append(entry)
        return entry


@dataclass(frozen=True, slots=True)
class RenderOutcome:
    """Successful chain result."""

    output_path: Path
    renderer: str
    media_unit: MediaUnit
    attempts: tuple[AttemptRecord, ...] = ()


__all__ = [
    "AttemptRecord",
    "AttemptStatus",
    "ContentKind",
    "Destination",
    "LabelContent",
    "LabelSpec",
    "Markup",
    "Printer",
    "Raster",
    "RenderJob",
    "RenderOutcome",
    "ViewDefault",
]
