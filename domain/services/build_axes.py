from __future__ import annotations

from typing import List

from domain.models import BLACK, CoordinateBounds, Margins, Point, ScaleState, ShapeDescriptor, Viewport
from domain.services.geometry_utils import determine_interval
from domain.services.shape_factory import line_shape, text_shape

AXIS_STROKE_WIDTH = 2.0
AXIS_END_INSET = 10.0
TICK_LENGTH = 5.0
TICK_LABEL_FONT_SIZE = 10.0
AXIS_TITLE_FONT_SIZE = 12.0
X_AXIS_TITLE = "Distance (m)"
Y_AXIS_TITLE = "Height (m)"


def axis_values(max_value: float) -> List[int]:
    """Tick values for an axis; the origin is never labelled."""
    interval = determine_interval(max_value)
    return list(range(interval, int(max_value) + 1, interval))


def build_axes(
    bounds: CoordinateBounds,
    viewport: Viewport,
    margins: Margins,
    scale: ScaleState,
) -> List[ShapeDescriptor]:
    origin = Point(margins.x, viewport.height - margins.y)
    shapes: List[ShapeDescriptor] = [
        line_shape(
            "axis.y",
            origin,
            Point(margins.x, AXIS_END_INSET),
            stroke_width=AXIS_STROKE_WIDTH,
        ),
        line_shape(
            "axis.x",
            origin,
            Point(viewport.width - AXIS_END_INSET, origin.y),
            stroke_width=AXIS_STROKE_WIDTH,
        ),
    ]

    for value in axis_values(bounds.max_x):
        x_pos = margins.x + value * scale.x_scale
        shapes.append(
            line_shape(
                "axis.x.tick",
                Point(x_pos, origin.y),
                Point(x_pos, origin.y + TICK_LENGTH),
            )
        )
        shapes.append(
            text_shape(
                "axis.x.label",
                str(value),
                x_pos - 5,
                origin.y + 7,
                TICK_LABEL_FONT_SIZE,
            )
        )

    for value in axis_values(bounds.max_y):
        y_pos = origin.y - value * scale.y_scale
        shapes.append(
            line_shape(
                "axis.y.tick",
                Point(margins.x, y_pos),
                Point(margins.x - TICK_LENGTH, y_pos),
            )
        )
        shapes.append(
            text_shape(
                "axis.y.label",
                str(value),
                margins.x - 25,
                y_pos - 7,
                TICK_LABEL_FONT_SIZE,
            )
        )

    shapes.append(
        text_shape(
            "axis.x.title",
            X_AXIS_TITLE,
            viewport.width / 2,
            viewport.height - 20,
            AXIS_TITLE_FONT_SIZE,
            bold=True,
            color=BLACK,
        )
    )
    shapes.append(
        text_shape(
            "axis.y.title",
            Y_AXIS_TITLE,
            10,
            viewport.height / 2,
            AXIS_TITLE_FONT_SIZE,
            bold=True,
            rotation=-90,
        )
    )
    return shapes
