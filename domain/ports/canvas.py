from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from domain.models import ShapeDescriptor, Viewport


class CanvasSurface(Protocol):
    def viewport(self) -> Viewport: ...

    def clear(self) -> None: ...

    def paint(self, shapes: Sequence[ShapeDescriptor]) -> None: ...
