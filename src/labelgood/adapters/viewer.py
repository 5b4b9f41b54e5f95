"""Hand generated PDFs to the operating system's default application."""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path

import click

from labelgood.core.diagnostics import DiagnosticEmitter, ensure_emitter
from labelgood.core.exceptions import ArtifactMissingError, DispatchFailedError


logger = logging.getLogger(__name__)

Opener = Callable[[str], int]


def _launch(target: str) -> int:
    return click.launch(target)


class ViewerDispatcher:
    """Open a PDF through the platform file association (``xdg-open``, ``open``, ...)."""

    def __init__(
        self,
        *,
        opener: Opener | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.opener = opener or _launch
        self.emitter = ensure_emitter(emitter)

    def view(self, output_path: Path) -> str:
        """Open ``output_path`` and return it as text."""
        output_path = Path(output_path)
        if not output_path.exists():
            raise ArtifactMissingError(output_path)

        target = str(output_path)
        self.emitter.event("view_dispatch", {"path": target})
        try:
            status = self.opener(target)
        except OSError as exc:
            raise DispatchFailedError(f"Failed to open PDF: {exc}") from exc
        if status:
            raise DispatchFailedError(f"Failed to open PDF: opener exited with status {status}")
        logger.debug("Opened %s", target)
        return target


__all__ = ["Opener", "ViewerDispatcher"]
