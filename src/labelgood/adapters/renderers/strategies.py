"""Concrete renderer adapters for the supported PDF engines."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from labelgood.core.models import ContentKind, RenderJob
from labelgood.core.units import (
    REFERENCE_DPI,
    MediaUnit,
    format_decimal,
    format_millimetres,
    mm_to_pixels,
    mm_to_points,
)

from .base import RendererAdapter


_IMAGEMAGICK_PACKAGES: dict[str, str] = {
    "Fedora": "sudo dnf install ImageMagick",
    "Ubuntu/Debian": "sudo apt install imagemagick",
    "Arch": "sudo pacman -S imagemagick",
}


class WkhtmltopdfRenderer(RendererAdapter):
    """Render HTML with wkhtmltopdf, page size in millimetres and zero margins."""

    kind = ContentKind.MARKUP
    media_unit = MediaUnit.TENTHS_MM
    engine = "wkhtmltopdf"
    packages: ClassVar[dict[str, str]] = {
        "Fedora": "sudo dnf install wkhtmltopdf",
        "Ubuntu/Debian": "sudo apt install wkhtmltopdf",
        "Arch": "sudo pacman -S wkhtmltopdf",
    }

    def __init__(
        self, *, name: str = "wkhtmltopdf", program: str = "wkhtmltopdf", dpi: int = REFERENCE_DPI
    ) -> None:
        super().__init__(name=name, program=program, dpi=dpi)

    def build_command(self, job: RenderJob) -> list[str]:
        return [
            "--page-width",
            f"{format_millimetres(job.width_mm)}mm",
            "--page-height",
            f"{format_millimetres(job.height_mm)}mm",
            "--margin-top",
            "0",
            "--margin-bottom",
            "0",
            "--margin-left",
            "0",
            "--margin-right",
            "0",
            "--disable-smart-shrinking",
            str(job.input_path),
            str(job.output_path),
        ]


class WeasyPrintRenderer(RendererAdapter):
    """Render HTML with WeasyPrint, sizing the page through a user stylesheet.

    The WeasyPrint CLI has no page size flag, so an ``@page`` rule is written
    beside the input file for the duration of the attempt.
    """

    kind = ContentKind.MARKUP
    media_unit = MediaUnit.TENTHS_MM
    engine = "weasyprint"
    packages: ClassVar[dict[str, str]] = {
        "Fedora": "sudo dnf install weasyprint",
        "Ubuntu/Debian": "sudo apt install weasyprint",
        "Arch": "sudo pacman -S python-weasyprint",
    }

    def __init__(
        self, *, name: str = "weasyprint", program: str = "weasyprint", dpi: int = REFERENCE_DPI
    ) -> None:
        super().__init__(name=name, program=program, dpi=dpi)

    def stylesheet_path(self, job: RenderJob) -> Path:
        return job.input_path.with_name(f"{job.input_path.stem}.page.css")

    def page_stylesheet(self, job: RenderJob) -> str:
        width = format_millimetres(job.width_mm)
        height = format_millimetres(job.height_mm)
        return f"@page {{ size: {width}mm {height}mm; margin: 0; }}\n"

    def support_files(self, job: RenderJob) -> dict[Path, str]:
        return {self.stylesheet_path(job): self.page_stylesheet(job)}

    def build_command(self, job: RenderJob) -> list[str]:
        return [
            "--stylesheet",
            str(self.stylesheet_path(job)),
            str(job.input_path),
            str(job.output_path),
        ]


class ImageMagickResizeRenderer(RendererAdapter):
    """Force the raster to the pixel count of the page at the reference DPI.

    The PDF page size follows from pixels divided by density, so the page is
    described to CUPS in tenths of millimetre.
    """

    kind = ContentKind.RASTER
    media_unit = MediaUnit.TENTHS_MM
    engine = "ImageMagick"
    packages = _IMAGEMAGICK_PACKAGES

    def __init__(
        self,
        *,
        name: str = "imagemagick-resize",
        program: str = "magick",
        dpi: int = REFERENCE_DPI,
    ) -> None:
        super().__init__(name=name, program=program, dpi=dpi)

    def build_command(self, job: RenderJob) -> list[str]:
        width_px = mm_to_pixels(job.width_mm, self.dpi)
        height_px = mm_to_pixels(job.height_mm, self.dpi)
        return [
            str(job.input_path),
            "-resize",
            f"{width_px}x{height_px}!",
            "-units",
            "PixelsPerInch",
            "-density",
            str(self.dpi),
            str(job.output_path),
        ]


class ImageMagickPageRenderer(RendererAdapter):
    """Read the raster at the reference DPI and set the PDF page in points."""

    kind = ContentKind.RASTER
    media_unit = MediaUnit.POINTS
    engine = "ImageMagick"
    packages = _IMAGEMAGICK_PACKAGES

    def __init__(
        self,
        *,
        name: str = "imagemagick-page",
        program: str = "magick",
        dpi: int = REFERENCE_DPI,
    ) -> None:
        super().__init__(name=name, program=program, dpi=dpi)

    def build_command(self, job: RenderJob) -> list[str]:
        width_pt = format_decimal(mm_to_points(job.width_mm))
        height_pt = format_decimal(mm_to_points(job.height_mm))
        return [
            "-units",
            "PixelsPerInch",
            "-density",
            str(self.dpi),
            str(job.input_path),
            "-page",
            f"{width_pt}x{height_pt}",
            str(job.output_path),
        ]


__all__ = [
    "ImageMagickPageRenderer",
    "ImageMagickResizeRenderer",
    "WeasyPrintRenderer",
    "WkhtmltopdfRenderer",
]
