from __future__ import annotations

from typing import Protocol

from domain.models import ScaleState, SceneLayout, SceneParameters, Viewport


class LayoutEngine(Protocol):
    def layout(
        self, params: SceneParameters, viewport: Viewport, scale: ScaleState
    ) -> SceneLayout:
        ...
