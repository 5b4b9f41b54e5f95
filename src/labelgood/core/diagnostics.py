"""Diagnostic abstractions shared across the label pipeline."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    """Return ``emitter`` or a logging-backed default."""
    return emitter if emitter is not None else LoggingEmitter()


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for pipeline events."""
    data = dict(payload)

    if name == "render_attempt":
        renderer = data.get("renderer") or "<unknown>"
        command = data.get("command")
        suffix = f": {' '.join(str(part) for part in command)}" if command else ""
        return f"Trying {renderer}{suffix}"

    if name == "render_failed":
        renderer = data.get("renderer") or "<unknown>"
        status = data.get("status") or "rejected"
        if status == "unavailable":
            return f"{renderer} is not installed, trying next renderer"
        reason = data.get("reason") or "no detail"
        return f"{renderer} rejected the label: {reason}"

    if name == "render_success":
        renderer = data.get("renderer") or "<unknown>"
        path = data.get("path") or "<unknown>"
        return f"PDF generated with {renderer} at: {path}"

    if name == "print_dispatch":
        printer = data.get("printer") or "<unknown>"
        page_size = data.get("page_size")
        suffix = f" ({page_size})" if page_size else ""
        return f"Printing to {printer}{suffix}"

    if name == "view_dispatch":
        path = data.get("path") or "<unknown>"
        return f"Opening {path}"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "ensure_emitter",
    "format_event_message",
]
