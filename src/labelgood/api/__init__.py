"""Facade aggregating the label generation entry points.

Architecture
: `LabelRequest` models the payload a host application sends; `LabelSpec`
  is its validated, tagged-variant form.
: `LabelService` materialises the content, runs the renderer chain, and
  routes the PDF to a CUPS queue or to the default viewer.

Usage Example
:
    >>> from labelgood.api import LabelService
    >>> service = LabelService.from_config()  # doctest: +SKIP
    >>> service.generate({"content": "<p>Hi</p>", "width_mm": 62, "height_mm": 29})  # doctest: +SKIP
    '/tmp/label_1760000000000.pdf'
"""

from __future__ import annotations

from .service import LabelRequest, LabelResult, LabelService, generate_label, list_printers


__all__ = [
    "LabelRequest",
    "LabelResult",
    "LabelService",
    "generate_label",
    "list_printers",
]
