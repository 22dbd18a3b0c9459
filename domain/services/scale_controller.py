from __future__ import annotations

import logging
import math

from domain.models import CoordinateBounds, Margins, ScaleState, SceneParameters, Size, Viewport

logger = logging.getLogger(__name__)

MARGIN_FACTOR = 1.5
GROW_THRESHOLD = 0.4
BOUNDS_CLEARANCE = 1.2
MIN_SCALE = 1.0


def available_area(viewport: Viewport, margins: Margins) -> Size:
    return Size(
        viewport.width - margins.x * MARGIN_FACTOR,
        viewport.height - margins.y * MARGIN_FACTOR,
    )


def is_degenerate(viewport: Viewport, margins: Margins) -> bool:
    if not (math.isfinite(viewport.width) and math.isfinite(viewport.height)):
        return True
    if viewport.width <= 0 or viewport.height <= 0:
        return True
    available = available_area(viewport, margins)
    return available.width <= 0 or available.height <= 0


def adjust_scale(
    current: ScaleState,
    params: SceneParameters,
    viewport: Viewport,
    margins: Margins,
) -> ScaleState:
    """Fit the scene into the viewport, mutating ``current`` in place.

    A scene that overflows shrinks only the axis with the larger overflow
    ratio, halving until it fits or reaches the floor. A scene that fills less
    than 40% of both axes doubles both scales once. Repeated calls converge
    over successive redraws rather than in a single step.
    """
    if is_degenerate(viewport, margins):
        return current

    available = available_area(viewport, margins)
    distance = params.shooter_distance
    height = params.target_height
    adjusted = False

    if distance * current.x_scale > available.width or height * current.y_scale > available.height:
        x_ratio = distance * current.x_scale / available.width
        y_ratio = height * current.y_scale / available.height

        if x_ratio > y_ratio and x_ratio > 1.0:
            while distance * current.x_scale > available.width and current.x_scale > MIN_SCALE:
                current.x_scale /= 2
                adjusted = True

        if y_ratio > x_ratio and y_ratio > 1.0:
            while height * current.y_scale > available.height and current.y_scale > MIN_SCALE:
                current.y_scale /= 2
                adjusted = True
    elif (
        distance * current.x_scale < available.width * GROW_THRESHOLD
        and height * current.y_scale < available.height * GROW_THRESHOLD
    ):
        current.x_scale *= 2
        current.y_scale *= 2
        adjusted = True

    if current.x_scale < MIN_SCALE:
        current.x_scale = MIN_SCALE
    if current.y_scale < MIN_SCALE:
        current.y_scale = MIN_SCALE

    if adjusted:
        logger.info("Adjusted scale to: X=%s, Y=%s", current.x_scale, current.y_scale)
    return current


def derive_bounds(params: SceneParameters, scale: ScaleState, available: Size) -> CoordinateBounds:
    return CoordinateBounds(
        max_x=max(params.shooter_distance * BOUNDS_CLEARANCE, available.width / scale.x_scale),
        max_y=max(params.target_height * BOUNDS_CLEARANCE, available.height / scale.y_scale),
    )
