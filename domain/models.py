from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_VERSION = "1.0"
CUSTOM_DATA_KEY = "mhd"

ShapeKind = Literal["line", "ellipse", "rectangle", "path", "text"]
LineCap = Literal["flat", "round", "square"]

# Named colours of the diagram palette.
BLACK = "#000000"
WHITE = "#ffffff"
BROWN = "#a52a2a"
BISQUE = "#ffe4c4"
DARK_GREEN = "#006400"
DARK_OLIVE_GREEN = "#556b2f"
DARK_GRAY = "#a9a9a9"
DIM_GRAY = "#696969"
SADDLE_BROWN = "#8b4513"
SIENNA = "#a0522d"
SMALL_BRANCH_BROWN = "#654321"
BRANCH_LINE_BROWN = "#50371e"
CANOPY_DARK_GREEN = "#22780f"
CANOPY_MEDIUM_GREEN = "#32821e"
CANOPY_LIGHT_GREEN = "#419128"


def rgb_hex(red: int, green: int, blue: int) -> str:
    return f"#{red:02x}{green:02x}{blue:02x}"


class SceneParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_height: float = Field(..., ge=1, allow_inf_nan=False)
    shooter_distance: float = Field(..., ge=1, allow_inf_nan=False)


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def to_dict(self) -> dict[str, float]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class Margins:
    x: float = 60.0
    y: float = 40.0


@dataclass
class ScaleState:
    """Pixels per metre on each axis.

    The only state that survives between redraws; the scale controller halves
    or doubles it in place so the zoom level remembers where it settled.
    """

    x_scale: float = 20.0
    y_scale: float = 20.0

    def copy(self) -> ScaleState:
        return ScaleState(x_scale=self.x_scale, y_scale=self.y_scale)


@dataclass(frozen=True)
class CoordinateBounds:
    max_x: float
    max_y: float


@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: str


@dataclass(frozen=True)
class LinearGradient:
    """Gradient in the shape's relative bounding box (0..1 on both axes)."""

    start: Point
    end: Point
    stops: Tuple[GradientStop, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "linear-gradient",
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "stops": [{"offset": stop.offset, "color": stop.color} for stop in self.stops],
        }


Paint = Union[str, LinearGradient]


@dataclass(frozen=True)
class ShapeStyle:
    fill: Optional[Paint] = None
    stroke: Optional[str] = None
    stroke_width: float = 0.0
    opacity: float = 1.0
    rotation: float = 0.0  # degrees, clockwise about the shape position
    corner_radius: float = 0.0
    line_cap: LineCap = "flat"

    def to_dict(self) -> dict[str, Any]:
        fill = self.fill.to_dict() if isinstance(self.fill, LinearGradient) else self.fill
        return {
            "fill": fill,
            "stroke": self.stroke,
            "strokeWidth": self.stroke_width,
            "opacity": self.opacity,
            "rotation": self.rotation,
            "cornerRadius": self.corner_radius,
            "lineCap": self.line_cap,
        }


@dataclass(frozen=True)
class LineTo:
    point: Point

    def end_point(self) -> Point:
        return self.point

    def to_dict(self) -> dict[str, Any]:
        return {"type": "line", "point": self.point.to_dict()}


@dataclass(frozen=True)
class CubicTo:
    control1: Point
    control2: Point
    point: Point

    def end_point(self) -> Point:
        return self.point

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "cubic",
            "control1": self.control1.to_dict(),
            "control2": self.control2.to_dict(),
            "point": self.point.to_dict(),
        }


@dataclass(frozen=True)
class ArcTo:
    point: Point
    radii: Size
    clockwise: bool = True
    large_arc: bool = False

    def end_point(self) -> Point:
        return self.point

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "arc",
            "point": self.point.to_dict(),
            "radii": self.radii.to_dict(),
            "clockwise": self.clockwise,
            "largeArc": self.large_arc,
        }


PathSegment = Union[LineTo, CubicTo, ArcTo]


@dataclass(frozen=True)
class ShapeDescriptor:
    """One primitive to paint, fully resolved in canvas pixels.

    ``position`` is the top-left corner for ellipses, rectangles and text,
    the first point of a line and the start point of a path.
    """

    kind: ShapeKind
    role: str
    position: Point
    style: ShapeStyle = ShapeStyle()
    size: Optional[Size] = None
    points: Tuple[Point, ...] = ()
    segments: Tuple[PathSegment, ...] = ()
    closed: bool = False
    text: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Literal["normal", "bold"] = "normal"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind,
            "role": self.role,
            "position": self.position.to_dict(),
            "style": self.style.to_dict(),
        }
        if self.size is not None:
            payload["size"] = self.size.to_dict()
        if self.points:
            payload["points"] = [point.to_dict() for point in self.points]
        if self.segments:
            payload["segments"] = [segment.to_dict() for segment in self.segments]
            payload["closed"] = self.closed
        if self.text is not None:
            payload["text"] = self.text
            payload["fontSize"] = self.font_size
            payload["fontWeight"] = self.font_weight
        return payload


@dataclass(frozen=True)
class BranchAnchor:
    """Point on the trunk where the main branch starts, shared by tree and monkey."""

    point: Point
    thickness: float
    length: float


@dataclass(frozen=True)
class SceneLayout:
    shapes: Tuple[ShapeDescriptor, ...]
    scale: ScaleState
    bounds: Optional[CoordinateBounds] = None
    origin: Optional[Point] = None
    target_anchor: Optional[Point] = None

    @property
    def is_empty(self) -> bool:
        return not self.shapes

    @property
    def ground_y(self) -> Optional[float]:
        return self.origin.y if self.origin is not None else None


@dataclass(frozen=True)
class SceneDocument:
    parameters: SceneParameters
    viewport: Viewport
    layout: SceneLayout
    title: str = "Monkey and Hunter"
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        bounds = self.layout.bounds
        return {
            "type": "monkey-hunter-scene",
            "version": SCHEMA_VERSION,
            "title": self.title,
            "parameters": self.parameters.model_dump(),
            "viewport": {"width": self.viewport.width, "height": self.viewport.height},
            "scale": {"x": self.layout.scale.x_scale, "y": self.layout.scale.y_scale},
            "bounds": (
                {"maxX": bounds.max_x, "maxY": bounds.max_y} if bounds is not None else None
            ),
            "shapes": [shape.to_dict() for shape in self.layout.shapes],
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class ExcalidrawDocument:
    elements: List[dict]
    app_state: dict
    files: dict

    def to_dict(self) -> dict:
        return {
            "type": "excalidraw",
            "version": 2,
            "source": "monkey-hunter-diagram",
            "elements": self.elements,
            "appState": self.app_state,
            "files": self.files,
        }
