from __future__ import annotations

import logging

from domain.models import Margins, ScaleState, SceneDocument, SceneLayout, SceneParameters, Viewport
from domain.ports.canvas import CanvasSurface
from domain.ports.layout import LayoutEngine
from domain.services.layout_scene import SceneLayoutEngine
from domain.services.parse_scene_input import SceneInputError, parse_scene_parameters

logger = logging.getLogger(__name__)


class DiagramSession:
    """Host side of the diagram: owns the parameters, the scale memory and the canvas.

    Every redraw clears the canvas and paints a freshly computed frame. Invalid
    input leaves the parameters and the painted frame untouched.
    """

    def __init__(
        self,
        canvas: CanvasSurface,
        params: SceneParameters,
        scale: ScaleState | None = None,
        layout_engine: LayoutEngine | None = None,
        title: str = "Monkey and Hunter",
        max_parameter_value: float | None = None,
    ) -> None:
        self.canvas = canvas
        self.params = params
        self.scale = scale or ScaleState()
        self.layout_engine = layout_engine or SceneLayoutEngine(Margins())
        self.title = title
        self.max_parameter_value = max_parameter_value
        self.last_layout: SceneLayout | None = None
        self.error_message = ""

    def redraw(self) -> SceneLayout:
        self.canvas.clear()
        viewport = self.canvas.viewport()
        layout = self.layout_engine.layout(self.params, viewport, self.scale)
        self.last_layout = layout
        if not layout.is_empty:
            self.canvas.paint(layout.shapes)
        return layout

    def resize(self, viewport: Viewport) -> SceneLayout:
        resize = getattr(self.canvas, "resize", None)
        if callable(resize):
            resize(viewport)
        return self.redraw()

    def submit(self, height_text: object, distance_text: object) -> str:
        """Apply text-field values; returns the error message, empty on success."""
        try:
            params = parse_scene_parameters(
                height_text, distance_text, max_value=self.max_parameter_value
            )
        except SceneInputError as exc:
            logger.info("Rejected scene input height=%r distance=%r: %s", height_text, distance_text, exc)
            self.error_message = str(exc)
            return self.error_message
        self.params = params
        self.redraw()
        self.error_message = ""
        return self.error_message

    def settle(self, max_passes: int = 8) -> SceneLayout:
        """Redraw until the scale stops changing, like a burst of resize events."""
        layout = self.redraw()
        for _ in range(max(0, max_passes - 1)):
            before = (layout.scale.x_scale, layout.scale.y_scale)
            layout = self.redraw()
            if (layout.scale.x_scale, layout.scale.y_scale) == before:
                break
        return layout

    def document(self) -> SceneDocument:
        layout = self.last_layout if self.last_layout is not None else self.redraw()
        return SceneDocument(
            parameters=self.params,
            viewport=self.canvas.viewport(),
            layout=layout,
            title=self.title,
        )
