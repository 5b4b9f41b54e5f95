"""Physical unit conversions shared by renderers and the print dispatcher.

Each downstream tool expects page dimensions in its own unit:

`millimetres`
: wkhtmltopdf and WeasyPrint, passed through unrounded.

`points`
: ImageMagick page geometry and point-based CUPS media descriptors.

`pixels`
: Forced raster resizing, derived from the reference resolution.

`tenths of millimetre`
: Millimetre-based CUPS media descriptors (``Custom.620x1000``).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
import math
import tokenize

from pint import PintError, UnitRegistry

from .exceptions import LabelValidationError


POINTS_PER_MM = 2.83465
MM_PER_INCH = 25.4
REFERENCE_DPI = 300

_UNIT_REGISTRY = UnitRegistry()
_LENGTH_DIMENSION = _UNIT_REGISTRY.mm.dimensionality


class MediaUnit(str, Enum):
    """Unit a renderer used for the page size, and therefore the spool descriptor."""

    TENTHS_MM = "tenths-mm"
    POINTS = "points"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, moving halves away from zero."""
    quantised = Decimal(repr(float(value))).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(quantised)


def mm_to_points(mm: float) -> float:
    return mm * POINTS_PER_MM


def points_to_mm(points: float) -> float:
    return points / POINTS_PER_MM


def mm_to_tenths(mm: float) -> int:
    return round_half_away(mm * 10)


def mm_to_pixels(mm: float, dpi: int = REFERENCE_DPI) -> int:
    """Return the pixel count covering ``mm`` at ``dpi`` dots per inch."""
    return round_half_away(mm * dpi / MM_PER_INCH)


def format_decimal(value: float) -> str:
    """Render a decimal for command-line arguments without exponent or trailing zeros."""
    text = f"{round(float(value), 4):.4f}".rstrip("0").rstrip(".")
    return text or "0"


def format_millimetres(value: float) -> str:
    """Render a length exactly as given, without exponent or trailing zeros."""
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def media_descriptor(width_mm: float, height_mm: float, unit: MediaUnit) -> str:
    """Return the CUPS custom page size for the given dimensions."""
    if unit is MediaUnit.POINTS:
        width = format_decimal(mm_to_points(width_mm))
        height = format_decimal(mm_to_points(height_mm))
    else:
        width = str(mm_to_tenths(width_mm))
        height = str(mm_to_tenths(height_mm))
    return f"Custom.{width}x{height}"


def ensure_dimension(value: float, name: str) -> float:
    """Return ``value`` as a float, rejecting non-positive or non-finite lengths."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise LabelValidationError(f"{name} must be a number, got {value!r}.") from None
    if not math.isfinite(number) or number <= 0:
        raise LabelValidationError(f"{name} must be a positive finite number, got {value!r}.")
    return number


def parse_length_mm(value: str | float) -> float:
    """Parse a length such as ``62``, ``62mm``, ``6.2cm`` or ``2.44in`` into millimetres."""
    if isinstance(value, (int, float)):
        return float(value)
    stripped = value.strip()
    if not stripped:
        raise LabelValidationError("Empty length value.")
    try:
        return float(stripped)
    except ValueError:
        pass
    try:
        quantity = _UNIT_REGISTRY(stripped)
    except (
        PintError,
        tokenize.TokenError,
        AssertionError,
        ZeroDivisionError,
        SyntaxError,
        TypeError,
        ValueError,
    ):
        raise LabelValidationError(f"Unsupported length value '{value}'.") from None
    if not hasattr(quantity, "check") or not quantity.check(_LENGTH_DIMENSION):
        raise LabelValidationError(f"'{value}' is not a length.")
    return float(quantity.to(_UNIT_REGISTRY.mm).magnitude)


__all__ = [
    "MM_PER_INCH",
    "POINTS_PER_MM",
    "REFERENCE_DPI",
    "MediaUnit",
    "ensure_dimension",
    "format_decimal",
    "format_millimetres",
    "media_descriptor",
    "mm_to_pixels",
    "mm_to_points",
    "mm_to_tenths",
    "parse_length_mm",
    "points_to_mm",
    "round_half_away",
]
