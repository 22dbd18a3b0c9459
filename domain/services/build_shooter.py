from __future__ import annotations

from typing import List

from domain.models import (
    BISQUE,
    BLACK,
    DARK_GRAY,
    DARK_GREEN,
    DARK_OLIVE_GREEN,
    DIM_GRAY,
    WHITE,
    Point,
    ScaleState,
    ShapeDescriptor,
)
from domain.services.geometry_utils import clamp
from domain.services.shape_factory import ellipse_shape, polygon_shape, rectangle_shape

MIN_SHOOTER_HEIGHT = 30.0
MAX_SHOOTER_HEIGHT = 80.0
ARM_ROTATION = 15.0


def shooter_height(scale: ScaleState) -> float:
    return clamp(scale.y_scale * 2, MIN_SHOOTER_HEIGHT, MAX_SHOOTER_HEIGHT)


def build_shooter(anchor_x: float, ground_y: float, scale: ScaleState) -> List[ShapeDescriptor]:
    """Hunter standing on the ground at ``anchor_x``, gun pointing right.

    Every dimension is a fraction of the clamped figure height, so the hunter
    only grows with the vertical scale and never with the scene parameters.
    """
    x = anchor_x
    height = shooter_height(scale)
    head_size = height * 0.25
    body_width = height * 0.4
    body_height = height * 0.5
    top = ground_y - height

    eye_size = head_size * 0.2
    eye_top = top + head_size * 0.3
    left_eye_x = x - head_size * 0.25
    right_eye_x = x + head_size * 0.05
    pupil_size = eye_size * 0.6
    pupil_inset = (eye_size - pupil_size) / 2

    leg_width = body_width * 0.3
    leg_height = height * 0.25

    arm_width = body_width * 0.7
    arm_height = body_width * 0.25
    arm_top = top + head_size + body_height * 0.2

    shapes: List[ShapeDescriptor] = [
        ellipse_shape(
            "shooter.head", x - head_size / 2, top, head_size, head_size,
            fill=BISQUE, stroke=BLACK, stroke_width=1,
        ),
        ellipse_shape(
            "shooter.eye.left", left_eye_x, eye_top, eye_size, eye_size,
            fill=WHITE, stroke=BLACK, stroke_width=0.5,
        ),
        ellipse_shape(
            "shooter.eye.right", right_eye_x, eye_top, eye_size, eye_size,
            fill=WHITE, stroke=BLACK, stroke_width=0.5,
        ),
        ellipse_shape(
            "shooter.pupil.left", left_eye_x + pupil_inset, eye_top + pupil_inset,
            pupil_size, pupil_size, fill=BLACK,
        ),
        ellipse_shape(
            "shooter.pupil.right", right_eye_x + pupil_inset, eye_top + pupil_inset,
            pupil_size, pupil_size, fill=BLACK,
        ),
        rectangle_shape(
            "shooter.body", x - body_width / 2, top + head_size, body_width, body_height,
            fill=DARK_GREEN, stroke=BLACK, stroke_width=1,
        ),
        rectangle_shape(
            "shooter.leg.left", x - body_width * 0.4, ground_y - leg_height, leg_width, leg_height,
            fill=DARK_OLIVE_GREEN, stroke=BLACK, stroke_width=1,
        ),
        rectangle_shape(
            "shooter.leg.right", x + body_width * 0.1, ground_y - leg_height, leg_width, leg_height,
            fill=DARK_OLIVE_GREEN, stroke=BLACK, stroke_width=1,
        ),
        rectangle_shape(
            "shooter.arm.left", x - body_width * 0.5 - arm_width * 0.3, arm_top,
            arm_width * 0.6, arm_height,
            fill=DARK_GREEN, stroke=BLACK, stroke_width=1,
        ),
        rectangle_shape(
            "shooter.arm.right", x + body_width * 0.3, arm_top, arm_width * 0.6, arm_height,
            fill=DARK_GREEN, stroke=BLACK, stroke_width=1, rotation=ARM_ROTATION,
        ),
        rectangle_shape(
            "shooter.gun.base", x + body_width * 0.6, arm_top, arm_width * 0.9, arm_height * 0.6,
            fill=BLACK, stroke=DARK_GRAY, stroke_width=1, rotation=ARM_ROTATION,
        ),
        rectangle_shape(
            "shooter.gun.barrel", x + body_width * 0.95, top + head_size + body_height * 0.25,
            arm_width * 1.2, arm_height * 0.3,
            fill=DIM_GRAY, stroke=BLACK, stroke_width=0.5, rotation=ARM_ROTATION,
        ),
    ]

    brim_y = top + head_size * 0.1
    crown_y = top - head_size * 0.3
    shapes.append(
        polygon_shape(
            "shooter.hat",
            [
                Point(x - head_size * 0.7, brim_y),
                Point(x + head_size * 0.7, brim_y),
                Point(x + head_size * 0.4, crown_y),
                Point(x - head_size * 0.4, crown_y),
            ],
            fill=DARK_OLIVE_GREEN,
        )
    )
    return shapes
