from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from adapters.svg.renderer import SvgSceneRenderer
from domain.models import ShapeDescriptor, Viewport
from domain.ports.canvas import CanvasSurface

logger = logging.getLogger(__name__)


class SvgCanvas(CanvasSurface):
    """Canvas that writes every painted frame to an SVG file."""

    def __init__(self, path: Path, viewport: Viewport, renderer: SvgSceneRenderer | None = None) -> None:
        self.path = path
        self.size = viewport
        self.renderer = renderer or SvgSceneRenderer()

    def viewport(self) -> Viewport:
        return self.size

    def resize(self, viewport: Viewport) -> None:
        self.size = viewport

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def paint(self, shapes: Sequence[ShapeDescriptor]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.renderer.to_string(shapes, self.size), encoding="utf-8")
        logger.debug("Painted %d shapes to %s", len(shapes), self.path)
