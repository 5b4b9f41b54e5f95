"""Allocation of generated PDF paths in the shared temporary directory."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import tempfile
import time


DEFAULT_PREFIX = "label_"
PDF_SUFFIX = ".pdf"


def allocate_output_path(
    directory: Path | str | None = None,
    *,
    prefix: str = DEFAULT_PREFIX,
    clock: Callable[[], float] = time.time,
) -> Path:
    """Return ``<directory>/<prefix><epoch milliseconds>.pdf``.

    Nothing is created on disk and the path is never cleaned up here: the
    spooler or viewer consumes the PDF after this process has returned.
    Two calls within the same millisecond collide.
    """
    root = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    root.mkdir(parents=True, exist_ok=True)
    millis = int(clock() * 1000)
    return root / f"{prefix}{millis}{PDF_SUFFIX}"


__all__ = ["DEFAULT_PREFIX", "PDF_SUFFIX", "allocate_output_path"]
