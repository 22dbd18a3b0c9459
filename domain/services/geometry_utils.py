from __future__ import annotations

import math
from typing import List, Tuple

from domain.models import Point, Size

AXIS_INTERVALS: Tuple[Tuple[float, int], ...] = (
    (10, 1),
    (20, 2),
    (50, 5),
    (100, 10),
)
DEFAULT_AXIS_INTERVAL = 20


def determine_interval(max_value: float) -> int:
    for limit, interval in AXIS_INTERVALS:
        if max_value <= limit:
            return interval
    return DEFAULT_AXIS_INTERVAL


def clamp(value: float, lower: float, upper: float) -> float:
    return min(upper, max(lower, value))


def direction_vector(angle_degrees: float, length: float) -> Tuple[float, float]:
    radians = math.radians(angle_degrees)
    return length * math.cos(radians), length * math.sin(radians)


def perpendicular_offset(angle_degrees: float, thickness: float) -> Tuple[float, float]:
    radians = math.radians(angle_degrees)
    return math.sin(radians) * thickness / 2, -math.cos(radians) * thickness / 2


def offset(point: Point, dx: float, dy: float) -> Point:
    return Point(point.x + dx, point.y + dy)


def rotate_about(point: Point, pivot: Point, angle_degrees: float) -> Point:
    """Rotate clockwise on a y-down canvas."""
    if not angle_degrees:
        return point
    radians = math.radians(angle_degrees)
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    dx = point.x - pivot.x
    dy = point.y - pivot.y
    return Point(pivot.x + dx * cos_a - dy * sin_a, pivot.y + dx * sin_a + dy * cos_a)


def cubic_bezier_point(start: Point, control1: Point, control2: Point, end: Point, t: float) -> Point:
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3 * mt * mt * t
    c = 3 * mt * t * t
    d = t * t * t
    return Point(
        a * start.x + b * control1.x + c * control2.x + d * end.x,
        a * start.y + b * control1.y + c * control2.y + d * end.y,
    )


def flatten_cubic_bezier(
    start: Point, control1: Point, control2: Point, end: Point, steps: int = 12
) -> List[Point]:
    """Sample points after ``start`` up to and including ``end``."""
    return [
        cubic_bezier_point(start, control1, control2, end, idx / steps)
        for idx in range(1, steps + 1)
    ]


def _vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    dot = ux * vx + uy * vy
    norm = math.hypot(ux, uy) * math.hypot(vx, vy)
    if norm == 0:
        return 0.0
    angle = math.acos(clamp(dot / norm, -1.0, 1.0))
    if ux * vy - uy * vx < 0:
        angle = -angle
    return angle


def flatten_arc(
    start: Point,
    end: Point,
    radii: Size,
    clockwise: bool = True,
    large_arc: bool = False,
    steps: int = 12,
) -> List[Point]:
    """Sample an axis-aligned elliptical arc using the SVG endpoint conversion.

    ``clockwise`` matches the SVG sweep flag on a y-down canvas.
    """
    rx = abs(radii.width)
    ry = abs(radii.height)
    if rx == 0 or ry == 0 or (start.x == end.x and start.y == end.y):
        return [end]

    x1p = (start.x - end.x) / 2
    y1p = (start.y - end.y) / 2
    radii_check = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if radii_check > 1:
        factor = math.sqrt(radii_check)
        rx *= factor
        ry *= factor

    numerator = rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p
    denominator = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    coefficient = math.sqrt(max(0.0, numerator / denominator)) if denominator else 0.0
    if large_arc == clockwise:
        coefficient = -coefficient
    cxp = coefficient * rx * y1p / ry
    cyp = -coefficient * ry * x1p / rx
    cx = cxp + (start.x + end.x) / 2
    cy = cyp + (start.y + end.y) / 2

    ux = (x1p - cxp) / rx
    uy = (y1p - cyp) / ry
    vx = (-x1p - cxp) / rx
    vy = (-y1p - cyp) / ry
    theta = _vector_angle(1.0, 0.0, ux, uy)
    delta = _vector_angle(ux, uy, vx, vy)
    if not clockwise and delta > 0:
        delta -= 2 * math.pi
    elif clockwise and delta < 0:
        delta += 2 * math.pi

    points = [
        Point(
            cx + rx * math.cos(theta + delta * idx / steps),
            cy + ry * math.sin(theta + delta * idx / steps),
        )
        for idx in range(1, steps)
    ]
    points.append(end)
    return points
