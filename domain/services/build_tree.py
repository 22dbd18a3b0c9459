from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

from domain.models import (
    BLACK,
    CANOPY_DARK_GREEN,
    CANOPY_LIGHT_GREEN,
    CANOPY_MEDIUM_GREEN,
    BranchAnchor,
    GradientStop,
    LinearGradient,
    Point,
    ShapeDescriptor,
    rgb_hex,
)
from domain.services.build_branch import build_main_branch, build_small_branch
from domain.services.geometry_utils import clamp
from domain.services.shape_factory import ellipse_shape, polygon_shape, rectangle_shape

TREE_HEIGHT_RATIO = 1.5
MIN_TREE_WIDTH = 20.0
MAX_TREE_WIDTH = 40.0
TRUNK_TOP_RATIO = 0.85
TRUNK_TAPER = 0.4
BRANCH_HEIGHT_RATIO = 0.85
BRANCH_LENGTH_RATIO = 3.5
BRANCH_THICKNESS_RATIO = 0.35
BARK_SEED = 42
BARK_PIECES = 15
SMALL_BRANCH_ANGLES = ((30.0, 1.5), (150.0, 1.8))

TRUNK_GRADIENT = LinearGradient(
    start=Point(0.0, 0.5),
    end=Point(1.0, 0.5),
    stops=(
        GradientStop(0.0, rgb_hex(90, 59, 28)),
        GradientStop(0.3, rgb_hex(110, 70, 33)),
        GradientStop(0.7, rgb_hex(121, 85, 38)),
        GradientStop(1.0, rgb_hex(90, 59, 28)),
    ),
)


@dataclass(frozen=True)
class TreeGeometry:
    anchor_x: float
    ground_y: float
    height: float
    width: float
    branch: BranchAnchor


def tree_geometry(anchor_x: float, target_height: float, ground_y: float) -> TreeGeometry:
    height = target_height * TREE_HEIGHT_RATIO
    width = clamp(height / 8, MIN_TREE_WIDTH, MAX_TREE_WIDTH)
    branch = BranchAnchor(
        point=Point(anchor_x, ground_y - height * BRANCH_HEIGHT_RATIO),
        thickness=width * BRANCH_THICKNESS_RATIO,
        length=width * BRANCH_LENGTH_RATIO,
    )
    return TreeGeometry(anchor_x=anchor_x, ground_y=ground_y, height=height, width=width, branch=branch)


def build_bark(
    anchor_x: float, ground_y: float, tree_height: float, tree_width: float
) -> List[ShapeDescriptor]:
    rng = random.Random(BARK_SEED)
    pieces: List[ShapeDescriptor] = []
    for _ in range(BARK_PIECES):
        top = ground_y - tree_height * 0.05 - tree_height * TRUNK_TOP_RATIO * rng.random()
        width = tree_width * (0.3 + 0.5 * rng.random())
        x_offset = (tree_width - width) * (rng.random() - 0.5)
        height = tree_height * (0.02 + 0.03 * rng.random())
        color = rgb_hex(70 + rng.randrange(30), 45 + rng.randrange(20), 20 + rng.randrange(15))
        opacity = 0.7 + rng.random() * 0.3
        pieces.append(
            rectangle_shape(
                "tree.bark",
                anchor_x - width / 2 + x_offset,
                top,
                width,
                height,
                fill=color,
                opacity=opacity,
            )
        )
    return pieces


def build_canopy(geometry: TreeGeometry) -> List[ShapeDescriptor]:
    x = geometry.anchor_x
    ground_y = geometry.ground_y
    height = geometry.height
    cluster = geometry.width * 3
    return [
        ellipse_shape(
            "tree.canopy", x - cluster / 2, ground_y - height * 1.1,
            cluster, cluster * 0.8, fill=CANOPY_DARK_GREEN, opacity=0.9,
        ),
        ellipse_shape(
            "tree.canopy", x - cluster * 0.6, ground_y - height * 1.05,
            cluster * 0.9, cluster * 0.85, fill=CANOPY_MEDIUM_GREEN, opacity=0.85,
        ),
        ellipse_shape(
            "tree.canopy", x + cluster * 0.1, ground_y - height * 1.08,
            cluster * 0.95, cluster * 0.9, fill=CANOPY_LIGHT_GREEN, opacity=0.82,
        ),
        ellipse_shape(
            "tree.canopy", x - cluster * 0.1, ground_y - height * 1.2,
            cluster * 0.8, cluster * 0.75, fill=CANOPY_DARK_GREEN, opacity=0.88,
        ),
    ]


def build_tree(anchor_x: float, target_height: float, ground_y: float) -> List[ShapeDescriptor]:
    geometry = tree_geometry(anchor_x, target_height, ground_y)
    x = anchor_x
    width = geometry.width
    trunk_top = ground_y - geometry.height * TRUNK_TOP_RATIO

    shapes: List[ShapeDescriptor] = [
        polygon_shape(
            "tree.trunk",
            [
                Point(x - width / 2, ground_y),
                Point(x + width / 2, ground_y),
                Point(x + width * TRUNK_TAPER, trunk_top),
                Point(x - width * TRUNK_TAPER, trunk_top),
            ],
            fill=TRUNK_GRADIENT,
            stroke=BLACK,
        )
    ]
    shapes.extend(build_bark(x, ground_y, geometry.height, width))
    shapes.extend(build_main_branch(geometry.branch, TRUNK_GRADIENT))
    for angle, length_ratio in SMALL_BRANCH_ANGLES:
        shapes.append(
            build_small_branch(
                geometry.branch.point,
                angle,
                width * length_ratio,
                geometry.branch.thickness * 0.7,
            )
        )
    shapes.extend(build_canopy(geometry))
    return shapes
