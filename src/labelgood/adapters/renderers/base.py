"""Primitives used by renderer adapters and the fallback chain."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
from pathlib import Path
from typing import ClassVar

from labelgood.core.diagnostics import DiagnosticEmitter, ensure_emitter
from labelgood.core.exceptions import (
    ChainExhaustedError,
    ConfigError,
    EngineRejectedError,
    LabelValidationError,
    ProgramNotFoundError,
)
from labelgood.core.models import AttemptStatus, ContentKind, RenderJob, RenderOutcome
from labelgood.core.units import REFERENCE_DPI, MediaUnit

from ..runner import CommandResult, CommandRunner, default_runner


logger = logging.getLogger(__name__)


class RendererAdapter:
    """One external PDF engine and its command-line conventions.

    Subclasses implement :meth:`build_command`, a pure function of the job's
    paths and dimensions, and declare the unit their page size is expressed
    in so the print step can describe the same page to CUPS.
    """

    kind: ClassVar[ContentKind]
    media_unit: ClassVar[MediaUnit] = MediaUnit.TENTHS_MM
    engine: ClassVar[str] = ""
    # Package names keyed by distribution family, used for install hints.
    packages: ClassVar[Mapping[str, str]] = {}

    def __init__(self, *, name: str, program: str, dpi: int = REFERENCE_DPI) -> None:
        self.name = name
        self.program = program
        self.dpi = dpi

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, program={self.program!r})"

    def build_command(self, job: RenderJob) -> list[str]:
        """Return the arguments passed to :attr:`program`."""
        raise NotImplementedError

    def support_files(self, job: RenderJob) -> dict[Path, str]:
        """Return auxiliary files the command expects, keyed by path."""
        return {}

    def verify(self, result: CommandResult, job: RenderJob) -> None:
        """Raise :class:`EngineRejectedError` unless the run produced a PDF."""
        if not result.ok:
            detail = result.detail or "no error output"
            raise EngineRejectedError(
                self.name, f"exited with status {result.returncode}: {detail}"
            )
        if not _has_content(job.output_path):
            raise EngineRejectedError(
                self.name, f"exited successfully but produced no PDF at {job.output_path}"
            )


def _has_content(path: Path) -> bool:
    try:
        return path.is_file() and path.stat().st_size > 0
    except OSError:
        return False


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Unable to remove %s: %s", path, exc)


def install_hint(adapters: Sequence[RendererAdapter]) -> str | None:
    """Return platform install instructions for the engines of a chain."""
    engines: list[str] = []
    for adapter in adapters:
        if adapter.engine and adapter.engine not in engines:
            engines.append(adapter.engine)
    preferred = next((adapter for adapter in adapters if adapter.packages), None)
    if not engines or preferred is None:
        return None
    lines = [f"Please install {' or '.join(engines)}:"]
    lines.extend(f" - {family}: {command}" for family, command in preferred.packages.items())
    return "\n".join(lines)


class RendererChain:
    """Try renderer adapters in priority order until one produces the PDF."""

    def __init__(
        self,
        adapters: Sequence[RendererAdapter],
        *,
        kind: ContentKind,
        runner: CommandRunner | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        mismatched = [adapter.name for adapter in adapters if adapter.kind is not kind]
        if mismatched:
            names = ", ".join(mismatched)
            raise ConfigError(f"Renderers {names} cannot render {kind.value} labels.")
        self.adapters = list(adapters)
        self.kind = kind
        self.runner = runner or default_runner()
        self.emitter = ensure_emitter(emitter)

    def render(self, job: RenderJob) -> RenderOutcome:
        """Render ``job`` or raise :class:`ChainExhaustedError` with every attempt."""
        if job.kind is not self.kind:
            raise LabelValidationError(
                f"A {job.kind.value} label cannot use the {self.kind.value} renderer chain."
            )
        for adapter in self.adapters:
            if self._attempt(adapter, job):
                self.emitter.event(
                    "render_success",
                    {"renderer": adapter.name, "path": str(job.output_path)},
                )
                return RenderOutcome(
                    output_path=job.output_path,
                    renderer=adapter.name,
                    media_unit=adapter.media_unit,
                    attempts=tuple(job.attempts),
                )
        raise ChainExhaustedError(job.attempts, kind=self.kind, hint=install_hint(self.adapters))

    def _attempt(self, adapter: RendererAdapter, job: RenderJob) -> bool:
        _remove(job.output_path)
        args = adapter.build_command(job)
        self.emitter.event(
            "render_attempt", {"renderer": adapter.name, "command": [adapter.program, *args]}
        )

        support = adapter.support_files(job)
        try:
            for path, text in support.items():
                path.write_text(text, encoding="utf-8")
            result = self.runner.run(adapter.program, args)
            adapter.verify(result, job)
        except ProgramNotFoundError as exc:
            logger.debug("%s unavailable: %s", adapter.name, exc)
            self._record_failure(job, adapter, "unavailable", str(exc))
            return False
        except EngineRejectedError as exc:
            _remove(job.output_path)
            self._record_failure(job, adapter, "rejected", exc.reason)
            return False
        finally:
            for path in support:
                _remove(path)
        return True

    def _record_failure(
        self, job: RenderJob, adapter: RendererAdapter, status: AttemptStatus, reason: str
    ) -> None:
        entry = job.record(adapter.name, status, reason)
        self.emitter.event(
            "render_failed",
            {"renderer": entry.renderer, "status": entry.status, "reason": entry.reason},
        )


__all__ = ["RendererAdapter", "RendererChain", "install_hint"]
