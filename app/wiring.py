from __future__ import annotations

from app.config import AppSettings
from app.session import DiagramSession
from domain.models import SceneParameters
from domain.ports.canvas import CanvasSurface
from domain.services.layout_scene import SceneLayoutEngine


def build_layout_engine(settings: AppSettings) -> SceneLayoutEngine:
    return SceneLayoutEngine(settings.diagram.margins.to_margins())


def build_session(
    settings: AppSettings,
    canvas: CanvasSurface,
    params: SceneParameters | None = None,
) -> DiagramSession:
    diagram = settings.diagram
    return DiagramSession(
        canvas=canvas,
        params=params or diagram.default_parameters(),
        scale=diagram.initial_scale.to_state(),
        layout_engine=build_layout_engine(settings),
        title=diagram.title,
        max_parameter_value=diagram.max_parameter_value,
    )
