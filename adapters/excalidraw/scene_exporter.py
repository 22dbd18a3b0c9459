from __future__ import annotations

import math
import uuid
from typing import Any, Dict, List

from domain.models import (
    CUSTOM_DATA_KEY,
    SCHEMA_VERSION,
    ArcTo,
    CubicTo,
    ExcalidrawDocument,
    LinearGradient,
    Paint,
    Point,
    SceneDocument,
    ShapeDescriptor,
    Size,
)
from domain.services.geometry_utils import flatten_arc, flatten_cubic_bezier, rotate_about

Element = Dict[str, Any]
TEXT_WIDTH_FACTOR = 0.6
TEXT_LINE_HEIGHT = 1.25


def flatten_path(shape: ShapeDescriptor) -> List[Point]:
    points = [shape.position]
    current = shape.position
    for segment in shape.segments:
        if isinstance(segment, CubicTo):
            points.extend(
                flatten_cubic_bezier(current, segment.control1, segment.control2, segment.point)
            )
        elif isinstance(segment, ArcTo):
            points.extend(
                flatten_arc(
                    current,
                    segment.point,
                    segment.radii,
                    clockwise=segment.clockwise,
                    large_arc=segment.large_arc,
                )
            )
        else:
            points.append(segment.point)
        current = segment.end_point()
    if shape.closed and points[-1] != points[0]:
        points.append(points[0])
    return points


def solid_color(paint: Paint | None) -> str:
    """Excalidraw has no gradients, so use the stop closest to the middle."""
    if paint is None:
        return "transparent"
    if isinstance(paint, LinearGradient):
        middle = min(paint.stops, key=lambda stop: abs(stop.offset - 0.5))
        return middle.color
    return paint


class SceneToExcalidrawConverter:
    def __init__(self) -> None:
        self.namespace = uuid.uuid5(uuid.NAMESPACE_DNS, "monkey-hunter-diagram")

    def convert(self, document: SceneDocument) -> ExcalidrawDocument:
        elements: List[Element] = []
        base_metadata = {
            "schema_version": SCHEMA_VERSION,
            "target_height": document.parameters.target_height,
            "shooter_distance": document.parameters.shooter_distance,
        }
        for index, shape in enumerate(document.layout.shapes):
            element_id = self._stable_id(shape.role, str(index))
            metadata = {**base_metadata, "role": shape.role, "index": index}
            elements.append(self._element(element_id, shape, metadata))

        app_state = {
            "viewBackgroundColor": "#ffffff",
            "gridSize": None,
            "currentItemFontFamily": 1,
            "currentItemStrokeColor": "#000000",
            "name": document.title,
        }
        return ExcalidrawDocument(elements=elements, app_state=app_state, files={})

    def _element(self, element_id: str, shape: ShapeDescriptor, metadata: dict) -> Element:
        if shape.kind == "text":
            return self._text_element(element_id, shape, metadata)
        if shape.kind in ("ellipse", "rectangle"):
            return self._box_element(element_id, shape, metadata)
        if shape.kind == "line":
            points = list(shape.points)
        else:
            points = flatten_path(shape)
        return self._line_element(element_id, shape, points, metadata)

    def _box_element(self, element_id: str, shape: ShapeDescriptor, metadata: dict) -> Element:
        size = shape.size or Size(0.0, 0.0)
        position, angle = self._rotated_box(shape.position, size, shape.style.rotation)
        extra: Element = {"backgroundColor": solid_color(shape.style.fill)}
        if shape.kind == "rectangle" and shape.style.corner_radius > 0:
            extra["roundness"] = {"type": 3, "value": shape.style.corner_radius}
        return self._base_shape(
            element_id, shape.kind, position, size.width, size.height, angle, shape, metadata, extra
        )

    def _line_element(
        self,
        element_id: str,
        shape: ShapeDescriptor,
        points: List[Point],
        metadata: dict,
    ) -> Element:
        min_x = min(point.x for point in points)
        min_y = min(point.y for point in points)
        width = max(point.x for point in points) - min_x
        height = max(point.y for point in points) - min_y
        start = points[0]
        relative = [[point.x - start.x, point.y - start.y] for point in points]
        extra: Element = {
            "points": relative,
            "backgroundColor": solid_color(shape.style.fill),
            "lastCommittedPoint": None,
            "startBinding": None,
            "endBinding": None,
            "startArrowhead": None,
            "endArrowhead": None,
        }
        return self._base_shape(
            element_id, "line", start, width, height, 0.0, shape, metadata, extra
        )

    def _text_element(self, element_id: str, shape: ShapeDescriptor, metadata: dict) -> Element:
        text = shape.text or ""
        font_size = shape.font_size or 12.0
        size = Size(
            max(1.0, len(text) * font_size * TEXT_WIDTH_FACTOR), font_size * TEXT_LINE_HEIGHT
        )
        position, angle = self._rotated_box(shape.position, size, shape.style.rotation)
        extra: Element = {
            "strokeColor": solid_color(shape.style.fill),
            "backgroundColor": "transparent",
            "text": text,
            "originalText": text,
            "fontSize": font_size,
            "fontFamily": 2 if shape.font_weight == "bold" else 1,
            "textAlign": "left",
            "verticalAlign": "top",
            "baseline": font_size,
            "containerId": None,
            "lineHeight": TEXT_LINE_HEIGHT,
        }
        return self._base_shape(
            element_id, "text", position, size.width, size.height, angle, shape, metadata, extra
        )

    def _rotated_box(self, position: Point, size: Size, rotation: float) -> tuple[Point, float]:
        """Excalidraw rotates about the box centre; descriptors rotate about the corner."""
        if not rotation:
            return position, 0.0
        center = Point(position.x + size.width / 2, position.y + size.height / 2)
        moved = rotate_about(center, position, rotation)
        corner = Point(moved.x - size.width / 2, moved.y - size.height / 2)
        return corner, math.radians(rotation) % (2 * math.pi)

    def _base_shape(
        self,
        element_id: str,
        type_name: str,
        position: Point,
        width: float,
        height: float,
        angle: float,
        shape: ShapeDescriptor,
        metadata: dict,
        extra: Element | None = None,
    ) -> Element:
        style = shape.style
        return {
            "id": element_id,
            "type": type_name,
            "x": position.x,
            "y": position.y,
            "width": width,
            "height": height,
            "angle": angle,
            "strokeColor": style.stroke or "transparent",
            "fillStyle": "solid",
            "strokeWidth": style.stroke_width,
            "strokeStyle": "solid",
            "roughness": 0,
            "opacity": int(round(style.opacity * 100)),
            "groupIds": [],
            "frameId": None,
            "roundness": None,
            "seed": self._seed(element_id),
            "version": 1,
            "versionNonce": self._seed(element_id, "nonce"),
            "isDeleted": False,
            "boundElements": [],
            "locked": False,
            "customData": {CUSTOM_DATA_KEY: metadata},
            **(extra or {}),
        }

    def _stable_id(self, *parts: str) -> str:
        return str(uuid.uuid5(self.namespace, "|".join(parts)))

    def _seed(self, *parts: str) -> int:
        return uuid.uuid5(self.namespace, "|".join(parts)).int % (2**31 - 1) + 1
