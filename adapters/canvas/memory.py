from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from typing import Deque, Tuple

from domain.models import ShapeDescriptor, Viewport
from domain.ports.canvas import CanvasSurface

DEFAULT_MAX_FRAMES = 8


class InMemoryCanvas(CanvasSurface):
    """Keeps the painted shapes; used by the web host and tests.

    Only the last ``max_frames`` painted frames are kept in ``frames``.
    """

    def __init__(self, viewport: Viewport, max_frames: int = DEFAULT_MAX_FRAMES) -> None:
        self.size = viewport
        self.shapes: Tuple[ShapeDescriptor, ...] = ()
        self.frames: Deque[Tuple[ShapeDescriptor, ...]] = deque(maxlen=max_frames)
        self.clear_count = 0

    def viewport(self) -> Viewport:
        return self.size

    def resize(self, viewport: Viewport) -> None:
        self.size = viewport

    def clear(self) -> None:
        self.shapes = ()
        self.clear_count += 1

    def paint(self, shapes: Sequence[ShapeDescriptor]) -> None:
        self.shapes = tuple(shapes)
        self.frames.append(self.shapes)
