"""Typer application wiring for the labelgood CLI."""

from __future__ import annotations

from pathlib import Path

from rich.traceback import Traceback
import typer

from labelgood.version import get_version

from .commands import generate, printers
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Render labels to true-scale PDFs and send them to a printer or viewer.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


@app.callback()
def _app_root(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        help="YAML settings file (defaults to $LABELGOOD_CONFIG or ~/.config/labelgood/config.yml).",
        dir_okay=False,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the labelgood version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    ctx.obj = get_cli_state()
    set_cli_state(
        verbosity=verbose,
        debug=debug,
        config_path=str(config) if config is not None else None,
    )


app.command(name="generate")(generate)
app.command(name="printers")(printers)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
