from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import svgwrite
from svgwrite.base import BaseElement

from domain.models import (
    ArcTo,
    CubicTo,
    LinearGradient,
    Point,
    ShapeDescriptor,
    Viewport,
)

FONT_FAMILY = "Segoe UI, Arial, sans-serif"
SVG_LINE_CAPS = {"flat": "butt", "round": "round", "square": "square"}


def _fmt(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _pair(point: Point) -> str:
    return f"{_fmt(point.x)},{_fmt(point.y)}"


def path_data(shape: ShapeDescriptor) -> str:
    commands = [f"M {_pair(shape.position)}"]
    for segment in shape.segments:
        if isinstance(segment, CubicTo):
            commands.append(
                f"C {_pair(segment.control1)} {_pair(segment.control2)} {_pair(segment.point)}"
            )
        elif isinstance(segment, ArcTo):
            commands.append(
                f"A {_fmt(segment.radii.width)},{_fmt(segment.radii.height)} 0 "
                f"{int(segment.large_arc)},{int(segment.clockwise)} {_pair(segment.point)}"
            )
        else:
            commands.append(f"L {_pair(segment.point)}")
    if shape.closed:
        commands.append("Z")
    return " ".join(commands)


class SvgSceneRenderer:
    def __init__(self, background: str | None = "#ffffff") -> None:
        self.background = background

    def render(self, shapes: Sequence[ShapeDescriptor], viewport: Viewport) -> svgwrite.Drawing:
        width = max(0.0, viewport.width)
        height = max(0.0, viewport.height)
        drawing = svgwrite.Drawing(
            size=(_fmt(width), _fmt(height)), profile="full", debug=False
        )
        drawing.viewbox(0, 0, width, height)
        if self.background:
            drawing.add(drawing.rect(insert=(0, 0), size=(width, height), fill=self.background))
        gradients: dict[LinearGradient, str] = {}
        for shape in shapes:
            element = self._element(drawing, shape, gradients)
            if shape.style.rotation:
                element.rotate(shape.style.rotation, center=(shape.position.x, shape.position.y))
            drawing.add(element)
        return drawing

    def to_string(self, shapes: Sequence[ShapeDescriptor], viewport: Viewport) -> str:
        return self.render(shapes, viewport).tostring()

    def _paint(
        self,
        drawing: svgwrite.Drawing,
        paint: Any,
        gradients: dict[LinearGradient, str],
    ) -> str:
        if paint is None:
            return "none"
        if not isinstance(paint, LinearGradient):
            return str(paint)
        if paint not in gradients:
            gradient_id = f"gradient-{len(gradients)}"
            gradient = drawing.linearGradient(
                start=(paint.start.x, paint.start.y),
                end=(paint.end.x, paint.end.y),
                id=gradient_id,
            )
            for stop in paint.stops:
                gradient.add_stop_color(offset=stop.offset, color=stop.color)
            drawing.defs.add(gradient)
            gradients[paint] = gradient_id
        return f"url(#{gradients[paint]})"

    def _element(
        self,
        drawing: svgwrite.Drawing,
        shape: ShapeDescriptor,
        gradients: dict[LinearGradient, str],
    ) -> BaseElement:
        style = shape.style
        common: dict[str, Any] = {"class_": shape.role.replace(".", "-")}
        if style.opacity != 1.0:
            common["opacity"] = _fmt(style.opacity)

        if shape.kind == "text":
            return drawing.text(
                shape.text or "",
                insert=(shape.position.x, shape.position.y),
                fill=self._paint(drawing, style.fill, gradients),
                font_size=_fmt(shape.font_size or 12.0),
                font_weight=shape.font_weight,
                font_family=FONT_FAMILY,
                dominant_baseline="hanging",
                **common,
            )

        stroke: dict[str, Any] = {}
        if style.stroke and style.stroke_width > 0:
            stroke = {
                "stroke": style.stroke,
                "stroke_width": _fmt(style.stroke_width),
                "stroke_linecap": SVG_LINE_CAPS[style.line_cap],
            }

        if shape.kind == "line":
            start, end = shape.points
            return drawing.line(start=(start.x, start.y), end=(end.x, end.y), **stroke, **common)

        fill = self._paint(drawing, style.fill, gradients)
        if shape.kind == "ellipse" and shape.size is not None:
            radius_x = shape.size.width / 2
            radius_y = shape.size.height / 2
            return drawing.ellipse(
                center=(shape.position.x + radius_x, shape.position.y + radius_y),
                r=(radius_x, radius_y),
                fill=fill,
                **stroke,
                **common,
            )
        if shape.kind == "rectangle" and shape.size is not None:
            extra: dict[str, Any] = {}
            if style.corner_radius > 0:
                extra = {"rx": style.corner_radius, "ry": style.corner_radius}
            return drawing.rect(
                insert=(shape.position.x, shape.position.y),
                size=(shape.size.width, shape.size.height),
                fill=fill,
                **extra,
                **stroke,
                **common,
            )
        return drawing.path(d=path_data(shape), fill=fill, **stroke, **common)
