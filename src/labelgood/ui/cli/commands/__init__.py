"""CLI command implementations exposed via `labelgood.ui.cli`."""

from __future__ import annotations

from .generate import generate
from .printers import printers


__all__ = ["generate", "printers"]
