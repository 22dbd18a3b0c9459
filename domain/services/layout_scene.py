from __future__ import annotations

import logging
from typing import List

from domain.models import (
    BROWN,
    Margins,
    Point,
    ScaleState,
    SceneLayout,
    SceneParameters,
    ShapeDescriptor,
    Viewport,
)
from domain.ports.layout import LayoutEngine
from domain.services.build_axes import build_axes
from domain.services.build_monkey import build_monkey, monkey_anchor_y
from domain.services.build_shooter import build_shooter
from domain.services.build_tree import build_tree, tree_geometry
from domain.services.scale_controller import (
    adjust_scale,
    available_area,
    derive_bounds,
    is_degenerate,
)
from domain.services.shape_factory import line_shape

logger = logging.getLogger(__name__)

GROUND_STROKE_WIDTH = 2.0


class SceneLayoutEngine(LayoutEngine):
    def __init__(self, margins: Margins | None = None) -> None:
        self.margins = margins or Margins()

    def layout(
        self, params: SceneParameters, viewport: Viewport, scale: ScaleState
    ) -> SceneLayout:
        """Lay out one full frame, adjusting ``scale`` in place.

        A degenerate viewport yields an empty layout and leaves the scale alone.
        """
        if is_degenerate(viewport, self.margins):
            logger.debug(
                "Skipping layout for degenerate viewport %sx%s", viewport.width, viewport.height
            )
            return SceneLayout(shapes=(), scale=scale.copy())

        adjust_scale(scale, params, viewport, self.margins)
        available = available_area(viewport, self.margins)
        bounds = derive_bounds(params, scale, available)

        origin = Point(self.margins.x, viewport.height - self.margins.y)
        ground_y = origin.y
        target_x = self.margins.x + params.shooter_distance * scale.x_scale

        shapes: List[ShapeDescriptor] = []
        shapes.extend(build_axes(bounds, viewport, self.margins, scale))
        shapes.append(
            line_shape(
                "ground",
                origin,
                Point(self.margins.x + bounds.max_x * scale.x_scale, ground_y),
                stroke=BROWN,
                stroke_width=GROUND_STROKE_WIDTH,
            )
        )
        shapes.extend(build_shooter(origin.x, ground_y, scale))

        # The tree goes first so the monkey is painted over its branch.
        tree = tree_geometry(target_x, params.target_height, ground_y)
        shapes.extend(build_tree(target_x, params.target_height, ground_y))
        shapes.extend(build_monkey(target_x, params.target_height, ground_y, scale, tree.branch))

        logger.debug(
            "Laid out %d shapes at scale X=%s, Y=%s", len(shapes), scale.x_scale, scale.y_scale
        )
        return SceneLayout(
            shapes=tuple(shapes),
            scale=scale.copy(),
            bounds=bounds,
            origin=origin,
            target_anchor=Point(target_x, monkey_anchor_y(params.target_height, ground_y, scale)),
        )
