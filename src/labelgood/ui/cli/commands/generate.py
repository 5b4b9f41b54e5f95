"""Implementation of the `labelgood generate` command."""

from __future__ import annotations

import base64
from pathlib import Path
import sys
from typing import Any

import typer

from labelgood.api.service import LabelRequest, LabelService
from labelgood.core.exceptions import LabelPrintError, LabelValidationError
from labelgood.core.units import parse_length_mm

from .._options import (
    HeightOption,
    ImageOption,
    MarkupFileOption,
    MarkupOption,
    PrinterOption,
    RequestOption,
    WidthOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, get_cli_state


def _read_request(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source).expanduser()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"Unable to read request '{source}': {exc}") from exc


def _encode_image(path: Path) -> str:
    return base64.b64encode(path.read_bytes()).decode("ascii")


def build_request(
    *,
    markup: str | None,
    markup_file: Path | None,
    image: Path | None,
    request: str | None,
    width: str | None,
    height: str | None,
    printer: str | None,
) -> LabelRequest:
    """Assemble a :class:`LabelRequest` from CLI arguments."""
    sources = [value for value in (markup, markup_file, image, request) if value is not None]
    if len(sources) != 1:
        raise typer.BadParameter(
            "Provide exactly one of --markup, --markup-file, --image or --request."
        )

    if request is not None:
        payload = LabelRequest.parse_payload(_read_request(request))
        if printer:
            payload = payload.model_copy(update={"printer_name": printer})
        return payload

    if width is None or height is None:
        raise typer.BadParameter("--width and --height are required.")

    data: dict[str, Any] = {
        "width_mm": parse_length_mm(width),
        "height_mm": parse_length_mm(height),
        "printer_name": printer,
    }
    if image is not None:
        data.update(content=_encode_image(image), content_type="raster")
    elif markup_file is not None:
        data.update(content=markup_file.read_text(encoding="utf-8"), content_type="markup")
    else:
        data.update(content=markup, content_type="markup")
    return LabelRequest.parse_payload(data)


def generate(
    markup: MarkupOption = None,
    markup_file: MarkupFileOption = None,
    image: ImageOption = None,
    request: RequestOption = None,
    width: WidthOption = None,
    height: HeightOption = None,
    printer: PrinterOption = None,
) -> None:
    """Render a label to PDF, then print it or open it in the default viewer."""
    state = get_cli_state()
    emitter = CliEmitter(state)

    try:
        label_request = build_request(
            markup=markup,
            markup_file=markup_file,
            image=image,
            request=request,
            width=width,
            height=height,
            printer=printer,
        )
    except LabelValidationError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=2) from exc

    try:
        service = LabelService.from_config(state.config_path, emitter=emitter)
        message = service.generate(label_request)
    except LabelPrintError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    typer.echo(message)


__all__ = ["build_request", "generate"]
