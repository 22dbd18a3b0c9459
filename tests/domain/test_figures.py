from __future__ import annotations

import pytest

from domain.models import (
    CubicTo,
    LinearGradient,
    LineTo,
    Point,
    ScaleState,
)
from domain.services.build_branch import build_main_branch, build_small_branch
from domain.services.build_monkey import build_monkey, monkey_anchor_y, monkey_scale
from domain.services.build_shooter import build_shooter, shooter_height
from domain.services.build_tree import TRUNK_GRADIENT, build_bark, build_tree, tree_geometry
from domain.services.shape_factory import polygon_shape
from tests.helpers.scene_fixtures import roles, shapes_with_role, single_shape

GROUND_Y = 560.0
TARGET_X = 460.0


@pytest.mark.parametrize(
    ("y_scale", "expected"),
    [(10.0, 30.0), (20.0, 40.0), (40.0, 80.0), (320.0, 80.0)],
)
def test_shooter_height_is_clamped(y_scale: float, expected: float) -> None:
    assert shooter_height(ScaleState(x_scale=1.0, y_scale=y_scale)) == expected


def test_shooter_stands_on_ground() -> None:
    shapes = build_shooter(60.0, GROUND_Y, ScaleState(40.0, 40.0))

    head = single_shape(shapes, "shooter.head")
    body = single_shape(shapes, "shooter.body")
    assert head.position == Point(50, 480)
    assert head.size is not None and head.size.width == 20
    assert body.position == Point(44, 500)
    for role in ("shooter.leg.left", "shooter.leg.right"):
        leg = single_shape(shapes, role)
        assert leg.size is not None
        assert leg.position.y + leg.size.height == pytest.approx(GROUND_Y)


def test_shooter_parts_and_rotation() -> None:
    shapes = build_shooter(60.0, GROUND_Y, ScaleState(20.0, 20.0))

    assert len(shapes) == 13
    assert roles(shapes)[0] == "shooter.head"
    assert single_shape(shapes, "shooter.hat").kind == "path"
    assert single_shape(shapes, "shooter.arm.left").style.rotation == 0
    for role in ("shooter.arm.right", "shooter.gun.base", "shooter.gun.barrel"):
        assert single_shape(shapes, role).style.rotation == 15


def test_shooter_ignores_horizontal_scale() -> None:
    narrow = build_shooter(60.0, GROUND_Y, ScaleState(1.0, 40.0))
    wide = build_shooter(60.0, GROUND_Y, ScaleState(500.0, 40.0))
    assert narrow == wide


def test_tree_geometry_for_short_target() -> None:
    geometry = tree_geometry(TARGET_X, 5.0, GROUND_Y)

    assert geometry.height == 7.5
    assert geometry.width == 20.0
    assert geometry.branch.point == Point(460.0, 553.625)
    assert geometry.branch.thickness == pytest.approx(7.0)
    assert geometry.branch.length == pytest.approx(70.0)


def test_tree_width_is_clamped() -> None:
    assert tree_geometry(TARGET_X, 100.0, GROUND_Y).width == 20.0
    assert tree_geometry(TARGET_X, 200.0, GROUND_Y).width == 37.5
    assert tree_geometry(TARGET_X, 1000.0, GROUND_Y).width == 40.0


def test_tree_parts_in_paint_order() -> None:
    shapes = build_tree(TARGET_X, 5.0, GROUND_Y)

    assert len(shapes) == 28
    shape_roles = roles(shapes)
    assert shape_roles[0] == "tree.trunk"
    assert shape_roles[1:16] == ["tree.bark"] * 15
    assert shape_roles[16] == "tree.branch.main"
    assert shape_roles[17:22] == ["tree.branch.texture"] * 5
    assert shape_roles[22:24] == ["tree.branch.small"] * 2
    assert shape_roles[24:] == ["tree.canopy"] * 4


def test_trunk_outline_tapers() -> None:
    trunk = single_shape(build_tree(TARGET_X, 5.0, GROUND_Y), "tree.trunk")

    assert trunk.closed
    assert trunk.position == Point(450, 560)
    assert [segment.point for segment in trunk.segments] == [
        Point(470, 560),
        Point(468, 553.625),
        Point(452, 553.625),
    ]
    assert isinstance(trunk.style.fill, LinearGradient)
    assert trunk.style.fill == TRUNK_GRADIENT


def test_canopy_sits_above_trunk() -> None:
    canopy = shapes_with_role(build_tree(TARGET_X, 5.0, GROUND_Y), "tree.canopy")

    first = canopy[0]
    assert first.position == Point(430, 551.75)
    assert first.size is not None
    assert (first.size.width, first.size.height) == (60, 48)
    assert all(0.8 <= shape.style.opacity <= 0.9 for shape in canopy)


def test_bark_is_deterministic_and_on_trunk() -> None:
    first = build_bark(TARGET_X, GROUND_Y, 150.0, 20.0)
    second = build_bark(TARGET_X, GROUND_Y, 150.0, 20.0)

    assert first == second
    assert len(first) == 15
    for piece in first:
        assert GROUND_Y - 150.0 * 0.9 <= piece.position.y <= GROUND_Y - 150.0 * 0.05
        assert piece.size is not None
        assert 6.0 <= piece.size.width <= 16.0
        assert 0.7 <= piece.style.opacity <= 1.0


def test_main_branch_droops_toward_shooter() -> None:
    anchor = tree_geometry(TARGET_X, 5.0, GROUND_Y).branch
    shapes = build_main_branch(anchor, TRUNK_GRADIENT)

    branch = shapes[0]
    assert branch.role == "tree.branch.main"
    assert branch.position == anchor.point
    points = [segment.point for segment in branch.segments]
    assert points[0] == Point(390, 564.125)
    assert points[1] == Point(390, pytest.approx(571.125))
    assert points[2] == Point(460, pytest.approx(560.625))

    textures = shapes[1:]
    assert len(textures) == 5
    for line in textures:
        start, end = line.points
        assert start.x == end.x
        assert end.y - start.y == pytest.approx(7.0)


def test_small_branch_is_wedge_along_angle() -> None:
    branch = build_small_branch(Point(0, 0), 0.0, 30.0, 4.0)

    assert branch.role == "tree.branch.small"
    assert branch.closed
    assert all(isinstance(segment, LineTo) for segment in branch.segments)
    tip_a, tip_b = (segment.point for segment in branch.segments)
    assert tip_a.x == pytest.approx(30.0)
    assert tip_b.x == pytest.approx(30.0)
    assert abs(tip_a.y - tip_b.y) == pytest.approx(4.0)


def test_polygon_needs_three_points() -> None:
    with pytest.raises(ValueError, match="at least 3 points"):
        polygon_shape("broken", [Point(0, 0), Point(1, 1)])


@pytest.mark.parametrize(
    ("scale", "expected"),
    [
        (ScaleState(10.0, 10.0), 15.0),
        (ScaleState(20.0, 20.0), 15.0),
        (ScaleState(32.0, 200.0), 24.0),
        (ScaleState(40.0, 40.0), 30.0),
        (ScaleState(320.0, 320.0), 30.0),
    ],
)
def test_monkey_scale_is_clamped(scale: ScaleState, expected: float) -> None:
    assert monkey_scale(scale) == expected


def test_monkey_body_top_marks_target_height() -> None:
    scale = ScaleState(40.0, 40.0)
    branch = tree_geometry(TARGET_X, 5.0, GROUND_Y).branch
    shapes = build_monkey(TARGET_X, 5.0, GROUND_Y, scale, branch)

    assert monkey_anchor_y(5.0, GROUND_Y, scale) == 360.0
    body = single_shape(shapes, "monkey.body")
    assert body.position == Point(448, 360)
    assert body.size is not None
    assert (body.size.width, body.size.height) == (24, 36)
    assert roles(shapes)[0] == "monkey.body"
    assert roles(shapes)[-1] == "monkey.tail"
    assert len(shapes) == 15


def test_monkey_arms_reach_the_branch() -> None:
    scale = ScaleState(40.0, 40.0)
    branch = tree_geometry(TARGET_X, 5.0, GROUND_Y).branch
    shapes = build_monkey(TARGET_X, 5.0, GROUND_Y, scale, branch)

    left = single_shape(shapes, "monkey.arm.left")
    right = single_shape(shapes, "monkey.arm.right")
    assert left.position == Point(pytest.approx(452.8), pytest.approx(367.2))
    assert right.position.x == pytest.approx(467.2)
    for arm in (left, right):
        assert arm.closed
        first = arm.segments[0]
        assert isinstance(first, CubicTo)
        assert first.point.y == pytest.approx(557.125)


def test_monkey_details() -> None:
    shapes = build_monkey(
        TARGET_X, 5.0, GROUND_Y, ScaleState(40.0, 40.0), tree_geometry(TARGET_X, 5.0, GROUND_Y).branch
    )

    mouth = single_shape(shapes, "monkey.mouth")
    assert mouth.kind == "path"
    assert not mouth.closed
    tail = single_shape(shapes, "monkey.tail")
    assert tail.style.line_cap == "round"
    assert tail.style.fill is None
    assert single_shape(shapes, "monkey.leg.left").style.rotation == 15
    assert single_shape(shapes, "monkey.leg.right").style.rotation == -15
    assert single_shape(shapes, "monkey.leg.left").style.corner_radius == pytest.approx(3.0)
