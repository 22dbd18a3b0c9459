from __future__ import annotations

from typing import List

from domain.models import (
    BLACK,
    BRANCH_LINE_BROWN,
    SMALL_BRANCH_BROWN,
    BranchAnchor,
    Paint,
    Point,
    ShapeDescriptor,
)
from domain.services.geometry_utils import direction_vector, perpendicular_offset
from domain.services.shape_factory import line_shape, polygon_shape

MAIN_BRANCH_DROP = 0.15
BRANCH_TEXTURE_LINES = 5


def build_small_branch(
    start: Point,
    angle_degrees: float,
    length: float,
    thickness: float,
    role: str = "tree.branch.small",
) -> ShapeDescriptor:
    """Thin wedge from ``start`` along ``angle_degrees`` (clockwise, y-down)."""
    dx, dy = direction_vector(angle_degrees, length)
    perp_x, perp_y = perpendicular_offset(angle_degrees, thickness)
    end = Point(start.x + dx, start.y + dy)
    return polygon_shape(
        role,
        [
            start,
            Point(end.x + perp_x, end.y + perp_y),
            Point(end.x - perp_x, end.y - perp_y),
        ],
        fill=SMALL_BRANCH_BROWN,
    )


def build_main_branch(anchor: BranchAnchor, fill: Paint) -> List[ShapeDescriptor]:
    """Branch reaching from the trunk toward the shooter, slightly drooping."""
    start = anchor.point
    length = anchor.length
    thickness = anchor.thickness
    drop = length * MAIN_BRANCH_DROP

    shapes: List[ShapeDescriptor] = [
        polygon_shape(
            "tree.branch.main",
            [
                start,
                Point(start.x - length, start.y + drop),
                Point(start.x - length, start.y + thickness + drop),
                Point(start.x, start.y + thickness),
            ],
            fill=fill,
            stroke=BLACK,
        )
    ]
    for idx in range(BRANCH_TEXTURE_LINES):
        t = (idx + 1) / (BRANCH_TEXTURE_LINES + 1)
        top = Point(start.x - t * length, start.y + t * drop)
        shapes.append(
            line_shape(
                "tree.branch.texture",
                top,
                Point(top.x, top.y + thickness),
                stroke=BRANCH_LINE_BROWN,
                stroke_width=0.8,
                opacity=0.6,
            )
        )
    return shapes
