from __future__ import annotations

from typing import List

from domain.models import (
    BISQUE,
    BLACK,
    SADDLE_BROWN,
    SIENNA,
    WHITE,
    ArcTo,
    BranchAnchor,
    CubicTo,
    Point,
    ScaleState,
    ShapeDescriptor,
    Size,
)
from domain.services.geometry_utils import clamp
from domain.services.shape_factory import ellipse_shape, path_shape, rectangle_shape

MIN_MONKEY_SCALE = 15.0
MAX_MONKEY_SCALE = 30.0
LEG_ROTATION = 15.0


def monkey_scale(scale: ScaleState) -> float:
    return clamp(min(scale.x_scale, scale.y_scale) * 0.75, MIN_MONKEY_SCALE, MAX_MONKEY_SCALE)


def monkey_anchor_y(target_height: float, ground_y: float, scale: ScaleState) -> float:
    return ground_y - target_height * scale.y_scale


def _arm(
    role: str,
    x: float,
    monkey_y: float,
    body_width: float,
    body_height: float,
    branch: BranchAnchor,
    side: float,
) -> ShapeDescriptor:
    """Closed arm outline from the shoulder up to the branch and back.

    ``side`` is -1 for the left arm and 1 for the right one.
    """
    branch_y = branch.point.y
    thickness = branch.thickness

    def px(fraction: float) -> float:
        return x + side * body_width * fraction

    return path_shape(
        role,
        Point(px(0.3), monkey_y + body_height * 0.2),
        [
            CubicTo(
                Point(px(0.5), monkey_y),
                Point(px(0.4), branch_y + thickness),
                Point(px(0.3), branch_y + thickness / 2),
            ),
            CubicTo(
                Point(px(0.2), branch_y + thickness * 0.8),
                Point(px(0.1), monkey_y + body_height * 0.1),
                Point(px(0.1), monkey_y + body_height * 0.2),
            ),
        ],
        closed=True,
        fill=SADDLE_BROWN,
        stroke=BLACK,
        stroke_width=1,
    )


def build_monkey(
    anchor_x: float,
    target_height: float,
    ground_y: float,
    scale: ScaleState,
    branch: BranchAnchor,
) -> List[ShapeDescriptor]:
    """Monkey whose body top sits exactly at the requested height, hanging from ``branch``."""
    x = anchor_x
    size = monkey_scale(scale)
    monkey_y = monkey_anchor_y(target_height, ground_y, scale)

    body_width = size * 0.8
    body_height = size * 1.2
    head_size = size * 0.9
    eye_size = head_size * 0.15
    eye_top = monkey_y - head_size * 0.65
    ear_size = head_size * 0.25
    arm_width = body_width * 0.25
    leg_width = body_width * 0.25
    leg_length = body_height * 0.7

    shapes: List[ShapeDescriptor] = [
        ellipse_shape(
            "monkey.body", x - body_width / 2, monkey_y, body_width, body_height,
            fill=SADDLE_BROWN, stroke=BLACK, stroke_width=1,
        ),
        ellipse_shape(
            "monkey.head", x - head_size / 2, monkey_y - head_size * 0.8, head_size, head_size,
            fill=SIENNA, stroke=BLACK, stroke_width=1,
        ),
        ellipse_shape(
            "monkey.face", x - head_size * 0.35, monkey_y - head_size * 0.7,
            head_size * 0.7, head_size * 0.6,
            fill=BISQUE, stroke=BLACK, stroke_width=0.5,
        ),
    ]

    for side, eye_x in (("left", x - head_size * 0.25), ("right", x + head_size * 0.1)):
        shapes.append(
            ellipse_shape(
                f"monkey.eye.{side}", eye_x, eye_top, eye_size, eye_size,
                fill=WHITE, stroke=BLACK, stroke_width=0.5,
            )
        )
        shapes.append(
            ellipse_shape(
                f"monkey.pupil.{side}", eye_x + eye_size * 0.2, eye_top + eye_size * 0.2,
                eye_size * 0.6, eye_size * 0.6, fill=BLACK,
            )
        )

    mouth_y = monkey_y - head_size * 0.45
    shapes.append(
        path_shape(
            "monkey.mouth",
            Point(x - head_size * 0.15, mouth_y),
            [
                ArcTo(
                    Point(x + head_size * 0.15, mouth_y),
                    Size(head_size * 0.2, head_size * 0.1),
                    clockwise=True,
                )
            ],
            stroke=BLACK,
            stroke_width=1,
        )
    )

    ear_top = monkey_y - head_size * 0.7
    shapes.append(
        ellipse_shape(
            "monkey.ear.left", x - head_size * 0.5 - ear_size * 0.3, ear_top, ear_size, ear_size,
            fill=SADDLE_BROWN, stroke=BLACK, stroke_width=0.5,
        )
    )
    shapes.append(
        ellipse_shape(
            "monkey.ear.right", x + head_size * 0.5 - ear_size * 0.7, ear_top, ear_size, ear_size,
            fill=SADDLE_BROWN, stroke=BLACK, stroke_width=0.5,
        )
    )

    shapes.append(_arm("monkey.arm.left", x, monkey_y, body_width, body_height, branch, -1.0))
    shapes.append(_arm("monkey.arm.right", x, monkey_y, body_width, body_height, branch, 1.0))

    leg_top = monkey_y + body_height * 0.8
    shapes.append(
        rectangle_shape(
            "monkey.leg.left", x - body_width * 0.4, leg_top, leg_width, leg_length,
            fill=SADDLE_BROWN, stroke=BLACK, stroke_width=1,
            rotation=LEG_ROTATION, corner_radius=leg_width / 2,
        )
    )
    shapes.append(
        rectangle_shape(
            "monkey.leg.right", x + body_width * 0.15, leg_top, leg_width, leg_length,
            fill=SADDLE_BROWN, stroke=BLACK, stroke_width=1,
            rotation=-LEG_ROTATION, corner_radius=leg_width / 2,
        )
    )

    shapes.append(
        path_shape(
            "monkey.tail",
            Point(x, monkey_y + body_height * 0.8),
            [
                CubicTo(
                    Point(x + body_width * 0.5, monkey_y + body_height * 1.1),
                    Point(x + body_width * 0.8, monkey_y + body_height * 0.9),
                    Point(x + body_width * 0.9, monkey_y + body_height * 0.5),
                )
            ],
            stroke=SADDLE_BROWN,
            stroke_width=arm_width * 0.8,
            line_cap="round",
        )
    )
    return shapes
