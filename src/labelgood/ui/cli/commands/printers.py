"""Implementation of the `labelgood printers` command."""

from __future__ import annotations

import typer

from labelgood.api.service import LabelService
from labelgood.core.exceptions import LabelPrintError

from ..state import emit_error, emit_warning, get_cli_state


def printers() -> None:
    """List the CUPS destinations labels can be sent to."""
    state = get_cli_state()
    try:
        service = LabelService.from_config(state.config_path)
        names = service.list_printers()
    except LabelPrintError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if not names:
        emit_warning("No printers are configured.")
        return
    for name in names:
        typer.echo(name)


__all__ = ["printers"]
