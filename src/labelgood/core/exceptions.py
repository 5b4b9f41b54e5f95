"""Custom exception hierarchy for the label rendering pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from .models import AttemptRecord, ContentKind


class LabelPrintError(RuntimeError):
    """Base exception for label rendering and dispatch failures."""


class LabelValidationError(LabelPrintError, ValueError):
    """Raised when a label request is malformed before any engine runs."""


class ConfigError(LabelPrintError):
    """Raised when settings cannot be loaded or contain invalid values."""


class ProgramNotFoundError(LabelPrintError):
    """Raised by command runners when the requested executable is not installed."""

    def __init__(self, program: str, detail: str | None = None) -> None:
        self.program = program
        message = f"'{program}' is not installed or not on PATH"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class EngineRejectedError(LabelPrintError):
    """Raised when a renderer ran but did not produce a usable PDF."""

    def __init__(self, renderer: str, reason: str) -> None:
        self.renderer = renderer
        self.reason = reason
        super().__init__(f"{renderer} failed: {reason}")


class ChainExhaustedError(LabelPrintError):
    """Raised when every renderer of a chain failed or was unavailable."""

    def __init__(
        self,
        attempts: Sequence[AttemptRecord],
        *,
        kind: ContentKind | None = None,
        hint: str | None = None,
    ) -> None:
        self.attempts = list(attempts)
        self.kind = kind
        self.hint = hint
        super().__init__(self._compose_message())

    @property
    def all_unavailable(self) -> bool:
        """Return True when no renderer of the chain was installed."""
        return bool(self.attempts) and all(attempt.unavailable for attempt in self.attempts)

    def _compose_message(self) -> str:
        if not self.attempts:
            return "No PDF renderer is configured for this label."
        if self.all_unavailable:
            lines = ["No PDF generator found."]
        else:
            lines = ["All PDF renderers failed:"]
        lines.extend(f"- {attempt.renderer}: {attempt.reason}" for attempt in self.attempts)
        if self.all_unavailable and self.hint:
            lines.append(self.hint)
        return "\n".join(lines)


class ArtifactMissingError(LabelPrintError):
    """Raised when the generated PDF is absent at dispatch time."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"PDF file does not exist at: {path}")


class DispatchFailedError(LabelPrintError):
    """Raised when spooling, viewing, or printer enumeration fails."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ArtifactMissingError",
    "ChainExhaustedError",
    "ConfigError",
    "DispatchFailedError",
    "EngineRejectedError",
    "LabelPrintError",
    "LabelValidationError",
    "ProgramNotFoundError",
    "exception_hint",
    "exception_messages",
]
