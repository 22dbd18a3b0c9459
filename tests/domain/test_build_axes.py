from __future__ import annotations

import pytest

from domain.models import CoordinateBounds, Margins, Point, ScaleState, Viewport
from domain.services.build_axes import axis_values, build_axes
from tests.helpers.scene_fixtures import roles, shapes_with_role, single_shape


@pytest.mark.parametrize(
    ("max_value", "expected"),
    [
        (0.5, []),
        (7.9, [1, 2, 3, 4, 5, 6, 7]),
        (13.5, [2, 4, 6, 8, 10, 12]),
        (17.75, [2, 4, 6, 8, 10, 12, 14, 16]),
        (35.0, [5, 10, 15, 20, 25, 30, 35]),
        (120.0, [20, 40, 60, 80, 100, 120]),
    ],
)
def test_axis_values_skip_origin(max_value: float, expected: list[int]) -> None:
    assert axis_values(max_value) == expected


def _axes(viewport: Viewport, margins: Margins) -> list:
    bounds = CoordinateBounds(max_x=17.75, max_y=13.5)
    return build_axes(bounds, viewport, margins, ScaleState(40.0, 40.0))


def test_axis_lines_run_from_origin(viewport: Viewport, margins: Margins) -> None:
    shapes = _axes(viewport, margins)

    y_axis = single_shape(shapes, "axis.y")
    x_axis = single_shape(shapes, "axis.x")
    assert y_axis.points == (Point(60, 560), Point(60, 10))
    assert x_axis.points == (Point(60, 560), Point(790, 560))
    assert y_axis.style.stroke_width == 2.0


def test_ticks_and_labels_match_values(viewport: Viewport, margins: Margins) -> None:
    shapes = _axes(viewport, margins)

    x_ticks = shapes_with_role(shapes, "axis.x.tick")
    x_labels = shapes_with_role(shapes, "axis.x.label")
    assert len(x_ticks) == len(x_labels) == 8
    assert x_ticks[0].points == (Point(140, 560), Point(140, 565))
    assert [label.text for label in x_labels] == ["2", "4", "6", "8", "10", "12", "14", "16"]
    assert x_labels[0].position == Point(135, 567)

    y_ticks = shapes_with_role(shapes, "axis.y.tick")
    y_labels = shapes_with_role(shapes, "axis.y.label")
    assert len(y_ticks) == len(y_labels) == 6
    assert y_ticks[-1].points == (Point(60, 80), Point(55, 80))
    assert y_labels[-1].text == "12"
    assert y_labels[-1].position == Point(35, 73)


def test_axis_titles(viewport: Viewport, margins: Margins) -> None:
    shapes = _axes(viewport, margins)

    x_title = single_shape(shapes, "axis.x.title")
    y_title = single_shape(shapes, "axis.y.title")
    assert x_title.text == "Distance (m)"
    assert x_title.position == Point(400, 580)
    assert x_title.font_weight == "bold"
    assert y_title.text == "Height (m)"
    assert y_title.position == Point(10, 300)
    assert y_title.style.rotation == -90
    assert roles(shapes)[-2:] == ["axis.x.title", "axis.y.title"]


def test_ticks_alternate_with_labels(viewport: Viewport, margins: Margins) -> None:
    shape_roles = roles(_axes(viewport, margins))
    x_part = shape_roles[2:18]
    assert x_part == ["axis.x.tick", "axis.x.label"] * 8
