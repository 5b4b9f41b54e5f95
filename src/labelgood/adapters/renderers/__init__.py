"""Renderer registry and chain construction helpers."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial

from labelgood.core.diagnostics import DiagnosticEmitter
from labelgood.core.exceptions import ConfigError
from labelgood.core.models import ContentKind
from labelgood.core.units import REFERENCE_DPI

from ..runner import CommandRunner
from .base import RendererAdapter, RendererChain, install_hint
from .strategies import (
    ImageMagickPageRenderer,
    ImageMagickResizeRenderer,
    WeasyPrintRenderer,
    WkhtmltopdfRenderer,
)


RendererFactory = Callable[..., RendererAdapter]


class RendererRegistry:
    """Registry storing renderer factories by name."""

    def __init__(self) -> None:
        self._factories: dict[str, RendererFactory] = {}

    def register(self, name: str, factory: RendererFactory) -> None:
        """Register a renderer factory under a unique name."""
        self._factories[name] = factory

    def create(self, name: str, *, dpi: int = REFERENCE_DPI) -> RendererAdapter:
        """Instantiate a registered renderer or raise a configuration error."""
        try:
            factory = self._factories[name]
        except KeyError as exc:
            known = ", ".join(sorted(self._factories))
            raise ConfigError(f"Unknown renderer '{name}' (known: {known})") from exc
        return factory(name=name, dpi=dpi)


registry = RendererRegistry()

# Built-in renderers
registry.register("wkhtmltopdf", WkhtmltopdfRenderer)
registry.register("weasyprint", WeasyPrintRenderer)
registry.register("imagemagick-resize", ImageMagickResizeRenderer)
registry.register("imagemagick-page", ImageMagickPageRenderer)
registry.register("convert-resize", partial(ImageMagickResizeRenderer, program="convert"))


def register_renderer(name: str, factory: RendererFactory) -> None:
    """Expose a helper to register external renderers."""
    registry.register(name, factory)


def build_chain(
    kind: ContentKind,
    names: Sequence[str],
    *,
    runner: CommandRunner | None = None,
    emitter: DiagnosticEmitter | None = None,
    dpi: int = REFERENCE_DPI,
) -> RendererChain:
    """Instantiate the named renderers, in order, as a chain for ``kind`` labels."""
    adapters = [registry.create(name, dpi=dpi) for name in names]
    return RendererChain(adapters, kind=kind, runner=runner, emitter=emitter)


__all__ = [
    "ImageMagickPageRenderer",
    "ImageMagickResizeRenderer",
    "RendererAdapter",
    "RendererChain",
    "RendererRegistry",
    "WeasyPrintRenderer",
    "WkhtmltopdfRenderer",
    "build_chain",
    "install_hint",
    "register_renderer",
    "registry",
]
