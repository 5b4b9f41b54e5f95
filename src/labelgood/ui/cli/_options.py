"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


CONTENT_PANEL = "Content"
PAGE_PANEL = "Page"
DESTINATION_PANEL = "Destination"

MarkupOption = Annotated[
    str | None,
    typer.Option(
        "--markup",
        help="HTML label content passed inline.",
        rich_help_panel=CONTENT_PANEL,
    ),
]

MarkupFileOption = Annotated[
    Path | None,
    typer.Option(
        "--markup-file",
        help="Read the HTML label content from a file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=CONTENT_PANEL,
    ),
]

ImageOption = Annotated[
    Path | None,
    typer.Option(
        "--image",
        help="Raster image (PNG, JPEG, ...) pre-rendered at the reference DPI.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=CONTENT_PANEL,
    ),
]

RequestOption = Annotated[
    str | None,
    typer.Option(
        "--request",
        help="JSON request as sent by the host application; use '-' for stdin.",
        rich_help_panel=CONTENT_PANEL,
    ),
]

WidthOption = Annotated[
    str | None,
    typer.Option(
        "--width",
        "-w",
        help="Label width, in millimetres unless a unit is given (e.g. 62, 62mm, 2.44in).",
        rich_help_panel=PAGE_PANEL,
    ),
]

HeightOption = Annotated[
    str | None,
    typer.Option(
        "--height",
        "-h",
        help="Label height, in millimetres unless a unit is given.",
        rich_help_panel=PAGE_PANEL,
    ),
]

PrinterOption = Annotated[
    str | None,
    typer.Option(
        "--printer",
        "-p",
        help="CUPS destination; when omitted the PDF opens in the default viewer.",
        rich_help_panel=DESTINATION_PANEL,
    ),
]
