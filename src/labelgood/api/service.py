"""Label generation orchestration for the CLI and embedding hosts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from labelgood.adapters.cups import PrintDispatcher, PrinterEnumerator
from labelgood.adapters.materializer import discard, is_encoded_image, materialize
from labelgood.adapters.output import allocate_output_path
from labelgood.adapters.renderers import build_chain
from labelgood.adapters.runner import CommandRunner, default_runner
from labelgood.adapters.viewer import Opener, ViewerDispatcher
from labelgood.core.config import LabelgoodSettings, load_settings
from labelgood.core.diagnostics import DiagnosticEmitter, ensure_emitter
from labelgood.core.exceptions import LabelPrintError, LabelValidationError
from labelgood.core.models import (
    ContentKind,
    LabelSpec,
    Markup,
    Printer,
    Raster,
    RenderJob,
    RenderOutcome,
    ViewDefault,
)


logger = logging.getLogger(__name__)

__all__ = [
    "LabelRequest",
    "LabelResult",
    "LabelService",
    "generate_label",
    "list_printers",
]


class LabelRequest(BaseModel):
    """Wire payload sent by the host application."""

    model_config = ConfigDict(extra="forbid")

    content: str
    width_mm: float = Field(gt=0, allow_inf_nan=False)
    height_mm: float = Field(gt=0, allow_inf_nan=False)
    printer_name: str | None = None
    content_type: Literal["markup", "raster"] | None = None

    @field_validator("printer_name")
    @classmethod
    def blank_printer_means_viewer(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    def resolved_kind(self) -> ContentKind:
        """Return the content kind, sniffing image payloads when unspecified.

        Without ``content_type``, a ``data:image/`` URI or bare base64 that decodes
        to a recognisable image is raster; anything else is markup.
        """
        if self.content_type is not None:
            return ContentKind(self.content_type)
        if self.content.lstrip()[:11].lower() == "data:image/":
            return ContentKind.RASTER
        if is_encoded_image(self.content):
            return ContentKind.RASTER
        return ContentKind.MARKUP

    def to_spec(self) -> LabelSpec:
        content = (
            Raster(self.content)
            if self.resolved_kind() is ContentKind.RASTER
            else Markup(self.content)
        )
        destination = Printer(self.printer_name) if self.printer_name else ViewDefault()
        return LabelSpec(
            content=content,
            width_mm=self.width_mm,
            height_mm=self.height_mm,
            destination=destination,
        )

    @classmethod
    def parse_payload(cls, payload: Mapping[str, Any] | str | bytes) -> LabelRequest:
        """Validate a mapping or JSON document, raising :class:`LabelValidationError`."""
        try:
            if isinstance(payload, (str, bytes)):
                return cls.model_validate_json(payload)
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            raise LabelValidationError(f"Invalid label request: {exc}") from exc


@dataclass(slots=True)
class LabelResult:
    """Captured outcome of a successful generation."""

    spec: LabelSpec
    outcome: RenderOutcome
    message: str

    @property
    def output_path(self) -> Path:
        return self.outcome.output_path

    @property
    def printed(self) -> bool:
        return isinstance(self.spec.destination, Printer)


@dataclass(slots=True)
class LabelService:
    """Materialise, render, and dispatch labels.

    Each call is self-contained: the only state shared between calls is the
    temporary directory, where unique file names keep invocations apart.
    """

    settings: LabelgoodSettings = field(default_factory=LabelgoodSettings)
    runner: CommandRunner = field(default_factory=default_runner)
    emitter: DiagnosticEmitter | None = None
    opener: Opener | None = None

    @classmethod
    def from_config(
        cls,
        path: str | Path | None = None,
        *,
        runner: CommandRunner | None = None,
        emitter: DiagnosticEmitter | None = None,
        **overrides: Any,
    ) -> LabelService:
        """Build a service from the resolved configuration sources."""
        settings = load_settings(path, **overrides)
        return cls(settings=settings, runner=runner or default_runner(), emitter=emitter)

    def renderer_names(self, kind: ContentKind) -> list[str]:
        if kind is ContentKind.RASTER:
            return list(self.settings.raster_renderers)
        return list(self.settings.markup_renderers)

    def render(self, spec: LabelSpec) -> RenderOutcome:
        """Materialise ``spec`` and run the renderer chain; no dispatch."""
        kind = spec.content.kind
        chain = build_chain(
            kind,
            self.renderer_names(kind),
            runner=self.runner,
            emitter=self.emitter,
            dpi=self.settings.raster_dpi,
        )
        input_path = materialize(spec.content, directory=self.settings.temp_dir)
        try:
            output_path = allocate_output_path(
                self.settings.temp_dir, prefix=self.settings.output_prefix
            )
            logger.info("Generated PDF path: %s", output_path)
            job = RenderJob(
                input_path=input_path,
                output_path=output_path,
                width_mm=spec.width_mm,
                height_mm=spec.height_mm,
                kind=kind,
            )
            return chain.render(job)
        finally:
            if not self.settings.keep_input:
                discard(input_path)

    def dispatch(self, spec: LabelSpec, outcome: RenderOutcome) -> str:
        """Route a rendered PDF to its printer or to the default viewer."""
        match spec.destination:
            case Printer(name=name):
                dispatcher = PrintDispatcher(
                    runner=self.runner,
                    program=self.settings.lpr_program,
                    extra_options=self.settings.print_options,
                    emitter=self.emitter,
                )
                return dispatcher.print_pdf(
                    outcome.output_path,
                    name,
                    spec.width_mm,
                    spec.height_mm,
                    outcome.media_unit,
                )
            case ViewDefault():
                viewer = ViewerDispatcher(opener=self.opener, emitter=self.emitter)
                return viewer.view(outcome.output_path)
        raise LabelValidationError(f"Unsupported destination: {spec.destination!r}")

    def execute(self, spec: LabelSpec) -> LabelResult:
        """Run the full pipeline for a validated spec."""
        outcome = self.render(spec)
        message = self.dispatch(spec, outcome)
        return LabelResult(spec=spec, outcome=outcome, message=message)

    def generate(self, request: LabelRequest | Mapping[str, Any] | str | bytes) -> str:
        """Run the pipeline for a host request and return the success string.

        Failures propagate as :class:`LabelPrintError` subclasses whose message
        is the error string handed back to the host.
        """
        if not isinstance(request, LabelRequest):
            request = LabelRequest.parse_payload(request)
        return self.execute(request.to_spec()).message

    def list_printers(self) -> list[str]:
        enumerator = PrinterEnumerator(runner=self.runner, program=self.settings.lpstat_program)
        return enumerator.list_printers()


def generate_label(
    payload: LabelRequest | Mapping[str, Any] | str | bytes,
    *,
    service: LabelService | None = None,
) -> str:
    """Host-facing helper: return the result string or raise with the error string."""
    active = service or LabelService.from_config()
    try:
        return active.generate(payload)
    except LabelPrintError as exc:
        ensure_emitter(active.emitter).error(str(exc))
        raise


def list_printers(*, service: LabelService | None = None) -> list[str]:
    """Host-facing helper returning the available print queues."""
    active = service or LabelService.from_config()
    return active.list_printers()
