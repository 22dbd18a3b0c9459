from __future__ import annotations

import pytest

from adapters.canvas.memory import InMemoryCanvas
from app.session import DiagramSession
from domain.models import Margins, ScaleState, SceneParameters, Viewport
from domain.services.layout_scene import SceneLayoutEngine
from domain.services.parse_scene_input import INVALID_NUMBER_MESSAGE, OUT_OF_RANGE_MESSAGE


@pytest.fixture
def canvas(viewport: Viewport) -> InMemoryCanvas:
    return InMemoryCanvas(viewport)


@pytest.fixture
def session(canvas: InMemoryCanvas, params: SceneParameters, scale: ScaleState) -> DiagramSession:
    return DiagramSession(canvas, params, scale, SceneLayoutEngine(Margins()))


def test_redraw_clears_then_paints(session: DiagramSession, canvas: InMemoryCanvas) -> None:
    layout = session.redraw()

    assert canvas.clear_count == 1
    assert canvas.shapes == layout.shapes
    assert len(canvas.frames) == 1
    assert (session.scale.x_scale, session.scale.y_scale) == (40.0, 40.0)


def test_settle_stops_once_scale_is_stable(session: DiagramSession, canvas: InMemoryCanvas) -> None:
    layout = session.settle(max_passes=8)

    assert (layout.scale.x_scale, layout.scale.y_scale) == (40.0, 40.0)
    assert canvas.clear_count == 2


def test_settle_respects_pass_limit(canvas: InMemoryCanvas, scale: ScaleState) -> None:
    session = DiagramSession(canvas, SceneParameters(target_height=1, shooter_distance=1), scale)

    layout = session.settle(max_passes=2)
    assert layout.scale.x_scale == 80.0

    layout = session.settle(max_passes=8)
    assert layout.scale.x_scale == 320.0


def test_submit_valid_input_redraws(session: DiagramSession, canvas: InMemoryCanvas) -> None:
    error = session.submit(" 7 ", "12")

    assert error == ""
    assert session.params == SceneParameters(target_height=7, shooter_distance=12)
    assert canvas.clear_count == 1
    assert session.error_message == ""


@pytest.mark.parametrize(
    ("height", "distance", "message"),
    [
        ("abc", "10", INVALID_NUMBER_MESSAGE),
        ("", "", INVALID_NUMBER_MESSAGE),
        ("0", "10", OUT_OF_RANGE_MESSAGE),
    ],
)
def test_submit_invalid_input_keeps_frame(
    session: DiagramSession,
    canvas: InMemoryCanvas,
    params: SceneParameters,
    height: str,
    distance: str,
    message: str,
) -> None:
    session.redraw()
    painted = canvas.shapes

    error = session.submit(height, distance)

    assert error == message
    assert session.error_message == message
    assert session.params == params
    assert canvas.shapes == painted
    assert canvas.clear_count == 1


def test_resize_to_degenerate_viewport_leaves_canvas_empty(
    session: DiagramSession, canvas: InMemoryCanvas
) -> None:
    session.redraw()

    layout = session.resize(Viewport(0, 0))

    assert layout.is_empty
    assert canvas.shapes == ()
    assert len(canvas.frames) == 1
    assert (session.scale.x_scale, session.scale.y_scale) == (40.0, 40.0)


def test_resize_back_restores_drawing(session: DiagramSession, canvas: InMemoryCanvas) -> None:
    session.resize(Viewport(0, 0))
    layout = session.resize(Viewport(800, 600))

    assert not layout.is_empty
    assert canvas.shapes == layout.shapes


def test_document_uses_last_layout(session: DiagramSession) -> None:
    layout = session.redraw()
    document = session.document()

    assert document.layout is layout
    assert document.viewport == Viewport(800, 600)
    assert document.title == "Monkey and Hunter"
    assert document.to_dict()["scale"] == {"x": 40.0, "y": 40.0}


def test_document_draws_when_nothing_painted(session: DiagramSession, canvas: InMemoryCanvas) -> None:
    document = session.document()

    assert not document.layout.is_empty
    assert canvas.clear_count == 1


def test_submit_respects_parameter_ceiling(
    canvas: InMemoryCanvas, params: SceneParameters, scale: ScaleState
) -> None:
    session = DiagramSession(canvas, params, scale, max_parameter_value=1000)

    error = session.submit("5", "1001")

    assert error == "Both height and distance must be at most 1000."
    assert session.params == params
    assert session.submit("5", "1000") == ""
    assert session.params.shooter_distance == 1000
