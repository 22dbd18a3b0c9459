from __future__ import annotations

from collections.abc import Sequence

from domain.models import (
    BLACK,
    LineCap,
    LineTo,
    Paint,
    PathSegment,
    Point,
    ShapeDescriptor,
    ShapeStyle,
    Size,
)


def line_shape(
    role: str,
    start: Point,
    end: Point,
    stroke: str = BLACK,
    stroke_width: float = 1.0,
    opacity: float = 1.0,
) -> ShapeDescriptor:
    return ShapeDescriptor(
        kind="line",
        role=role,
        position=start,
        points=(start, end),
        style=ShapeStyle(stroke=stroke, stroke_width=stroke_width, opacity=opacity),
    )


def ellipse_shape(
    role: str,
    left: float,
    top: float,
    width: float,
    height: float,
    fill: Paint | None = None,
    stroke: str | None = None,
    stroke_width: float = 0.0,
    opacity: float = 1.0,
) -> ShapeDescriptor:
    return ShapeDescriptor(
        kind="ellipse",
        role=role,
        position=Point(left, top),
        size=Size(width, height),
        style=ShapeStyle(
            fill=fill,
            stroke=stroke,
            stroke_width=stroke_width if stroke else 0.0,
            opacity=opacity,
        ),
    )


def rectangle_shape(
    role: str,
    left: float,
    top: float,
    width: float,
    height: float,
    fill: Paint | None = None,
    stroke: str | None = None,
    stroke_width: float = 0.0,
    opacity: float = 1.0,
    rotation: float = 0.0,
    corner_radius: float = 0.0,
) -> ShapeDescriptor:
    return ShapeDescriptor(
        kind="rectangle",
        role=role,
        position=Point(left, top),
        size=Size(width, height),
        style=ShapeStyle(
            fill=fill,
            stroke=stroke,
            stroke_width=stroke_width if stroke else 0.0,
            opacity=opacity,
            rotation=rotation,
            corner_radius=corner_radius,
        ),
    )


def path_shape(
    role: str,
    start: Point,
    segments: Sequence[PathSegment],
    closed: bool = False,
    fill: Paint | None = None,
    stroke: str | None = None,
    stroke_width: float = 0.0,
    line_cap: LineCap = "flat",
) -> ShapeDescriptor:
    return ShapeDescriptor(
        kind="path",
        role=role,
        position=start,
        segments=tuple(segments),
        closed=closed,
        style=ShapeStyle(
            fill=fill,
            stroke=stroke,
            stroke_width=stroke_width if stroke else 0.0,
            line_cap=line_cap,
        ),
    )


def polygon_shape(
    role: str,
    points: Sequence[Point],
    fill: Paint | None = None,
    stroke: str | None = BLACK,
    stroke_width: float = 1.0,
) -> ShapeDescriptor:
    if len(points) < 3:
        msg = f"Polygon {role!r} needs at least 3 points, got {len(points)}"
        raise ValueError(msg)
    return path_shape(
        role,
        points[0],
        [LineTo(point) for point in points[1:]],
        closed=True,
        fill=fill,
        stroke=stroke,
        stroke_width=stroke_width,
    )


def text_shape(
    role: str,
    text: str,
    left: float,
    top: float,
    font_size: float,
    bold: bool = False,
    rotation: float = 0.0,
    color: str = BLACK,
) -> ShapeDescriptor:
    return ShapeDescriptor(
        kind="text",
        role=role,
        position=Point(left, top),
        text=text,
        font_size=font_size,
        font_weight="bold" if bold else "normal",
        style=ShapeStyle(fill=color, rotation=rotation),
    )
