"""CUPS print submission and queue enumeration through ``lpr`` and ``lpstat``."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path

from labelgood.core.diagnostics import DiagnosticEmitter, ensure_emitter
from labelgood.core.exceptions import (
    ArtifactMissingError,
    DispatchFailedError,
    LabelValidationError,
    ProgramNotFoundError,
)
from labelgood.core.units import MediaUnit, media_descriptor

from .runner import CommandRunner, default_runner


logger = logging.getLogger(__name__)

# The PDF's own page size is authoritative; CUPS must not rescale it.
SCALING_OPTIONS: tuple[str, ...] = (
    "fit-to-page=false",
    "scaling=100",
    "print-scaling=none",
)


class PrintDispatcher:
    """Submit a generated PDF to a CUPS queue at true scale."""

    def __init__(
        self,
        *,
        runner: CommandRunner | None = None,
        program: str = "lpr",
        extra_options: Mapping[str, str] | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.runner = runner or default_runner()
        self.program = program
        self.extra_options = dict(extra_options or {})
        self.emitter = ensure_emitter(emitter)

    def build_command(
        self,
        output_path: Path,
        printer_name: str,
        width_mm: float,
        height_mm: float,
        media_unit: MediaUnit,
    ) -> list[str]:
        """Return the ``lpr`` arguments for the given page description."""
        page_size = media_descriptor(width_mm, height_mm, media_unit)
        args = ["-P", printer_name, "-o", f"PageSize={page_size}"]
        for option in SCALING_OPTIONS:
            args.extend(["-o", option])
        for key, value in self.extra_options.items():
            args.extend(["-o", f"{key}={value}"])
        args.append(str(output_path))
        return args

    def print_pdf(
        self,
        output_path: Path,
        printer_name: str,
        width_mm: float,
        height_mm: float,
        media_unit: MediaUnit = MediaUnit.TENTHS_MM,
    ) -> str:
        """Spool ``output_path`` on ``printer_name`` and return a confirmation."""
        if not printer_name or not printer_name.strip():
            raise LabelValidationError("Printer name must not be empty.")
        output_path = Path(output_path)
        if not output_path.exists():
            raise ArtifactMissingError(output_path)

        args = self.build_command(output_path, printer_name, width_mm, height_mm, media_unit)
        self.emitter.event(
            "print_dispatch",
            {
                "printer": printer_name,
                "path": str(output_path),
                "page_size": media_descriptor(width_mm, height_mm, media_unit),
            },
        )
        try:
            result = self.runner.run(self.program, args)
        except ProgramNotFoundError as exc:
            raise DispatchFailedError(f"Failed to execute {self.program} command: {exc}") from exc

        if not result.ok:
            logger.error("%s stdout: %s", self.program, result.stdout)
            logger.error("%s stderr: %s", self.program, result.stderr)
            raise DispatchFailedError(f"Failed to print: {result.stderr or result.stdout}")

        logger.info("Sent to printer: %s", printer_name)
        return f"Printed to {printer_name}"


class PrinterEnumerator:
    """List CUPS destinations, networked and wireless ones included."""

    def __init__(self, *, runner: CommandRunner | None = None, program: str = "lpstat") -> None:
        self.runner = runner or default_runner()
        self.program = program

    def list_printers(self) -> list[str]:
        """Return destination names in the order reported by ``lpstat -e``."""
        try:
            result = self.runner.run(self.program, ["-e"])
        except ProgramNotFoundError as exc:
            raise DispatchFailedError(f"Failed to execute {self.program}: {exc}") from exc
        if not result.ok:
            detail = result.detail
            message = "Failed to get printer list"
            raise DispatchFailedError(f"{message}: {detail}" if detail else message)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]


__all__ = ["SCALING_OPTIONS", "PrintDispatcher", "PrinterEnumerator"]
