from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from fastapi import Depends, FastAPI, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, ORJSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from adapters.canvas.memory import InMemoryCanvas
from adapters.excalidraw.scene_exporter import SceneToExcalidrawConverter
from adapters.excalidraw.url_encoder import ShareUrlTooLongError, build_excalidraw_url
from adapters.svg.renderer import SvgSceneRenderer
from app.config import AppSettings, load_settings
from app.session import DiagramSession
from app.wiring import build_session
from domain.models import SceneDocument, Viewport

TEMPLATES_DIR = Path(__file__).parent / "web" / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
logger = logging.getLogger(__name__)


class ParametersPayload(BaseModel):
    height: str | float
    distance: str | float


@dataclass(frozen=True)
class DiagramContext:
    settings: AppSettings
    canvas: InMemoryCanvas
    session: DiagramSession
    lock: threading.Lock
    svg_renderer: SvgSceneRenderer
    to_excalidraw: SceneToExcalidrawConverter


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title=settings.diagram.title)

    canvas = InMemoryCanvas(settings.diagram.viewport.to_viewport())
    context = DiagramContext(
        settings=settings,
        canvas=canvas,
        session=build_session(settings, canvas),
        lock=threading.Lock(),
        svg_renderer=SvgSceneRenderer(),
        to_excalidraw=SceneToExcalidrawConverter(),
    )
    app.state.context = context

    @app.get("/")
    def index() -> RedirectResponse:
        return RedirectResponse(url="/diagram")

    @app.get("/diagram", response_class=HTMLResponse)
    def diagram_view(
        request: Request,
        width: float | None = Query(default=None, allow_inf_nan=False),
        height: float | None = Query(default=None, allow_inf_nan=False),
        context: DiagramContext = Depends(get_context),
    ) -> HTMLResponse:
        document = refresh_scene(context, width, height)
        return render_page(request, context, document, "", None)

    @app.post("/diagram", response_class=HTMLResponse)
    def diagram_update(
        request: Request,
        height: str = Form(default=""),
        distance: str = Form(default=""),
        context: DiagramContext = Depends(get_context),
    ) -> HTMLResponse:
        with context.lock:
            error = context.session.submit(height, distance)
            document = context.session.document()
        submitted = {"height": height, "distance": distance} if error else None
        return render_page(request, context, document, error, submitted)

    @app.get("/api/scene")
    def api_scene(
        width: float | None = Query(default=None, allow_inf_nan=False),
        height: float | None = Query(default=None, allow_inf_nan=False),
        context: DiagramContext = Depends(get_context),
    ) -> ORJSONResponse:
        document = refresh_scene(context, width, height)
        return ORJSONResponse(document.to_dict())

    @app.get("/api/scene.svg")
    def api_scene_svg(
        width: float | None = Query(default=None, allow_inf_nan=False),
        height: float | None = Query(default=None, allow_inf_nan=False),
        context: DiagramContext = Depends(get_context),
    ) -> Response:
        document = refresh_scene(context, width, height)
        svg = context.svg_renderer.to_string(document.layout.shapes, document.viewport)
        return Response(content=svg, media_type="image/svg+xml")

    @app.get("/api/scene/excalidraw")
    def api_scene_excalidraw(
        width: float | None = Query(default=None, allow_inf_nan=False),
        height: float | None = Query(default=None, allow_inf_nan=False),
        download: bool = Query(default=False),
        context: DiagramContext = Depends(get_context),
    ) -> ORJSONResponse:
        document = refresh_scene(context, width, height)
        payload = context.to_excalidraw.convert(document).to_dict()
        headers = {}
        if download:
            headers["Content-Disposition"] = f'attachment; filename="{build_scene_filename(document)}"'
        return ORJSONResponse(payload, headers=headers)

    @app.get("/api/scene/excalidraw/open")
    def api_scene_excalidraw_open(
        width: float | None = Query(default=None, allow_inf_nan=False),
        height: float | None = Query(default=None, allow_inf_nan=False),
        context: DiagramContext = Depends(get_context),
    ) -> RedirectResponse:
        document = refresh_scene(context, width, height)
        payload = context.to_excalidraw.convert(document).to_dict()
        diagram = context.settings.diagram
        try:
            url = build_excalidraw_url(
                diagram.excalidraw_base_url, payload, max_length=diagram.excalidraw_max_url_length
            )
        except ShareUrlTooLongError as exc:
            raise HTTPException(status_code=413, detail=str(exc)) from exc
        return RedirectResponse(url=url)

    @app.post("/api/parameters")
    def api_parameters(
        payload: ParametersPayload,
        context: DiagramContext = Depends(get_context),
    ) -> ORJSONResponse:
        with context.lock:
            error = context.session.submit(payload.height, payload.distance)
            if error:
                raise HTTPException(status_code=400, detail=error)
            document = context.session.document()
        return ORJSONResponse(document.to_dict())

    return app


def get_context(request: Request) -> DiagramContext:
    return cast(DiagramContext, request.app.state.context)


def refresh_scene(
    context: DiagramContext, width: float | None, height: float | None
) -> SceneDocument:
    with context.lock:
        current = context.canvas.viewport()
        if width is not None or height is not None:
            viewport = Viewport(
                width=width if width is not None else current.width,
                height=height if height is not None else current.height,
            )
            context.session.resize(viewport)
        else:
            context.session.redraw()
        return context.session.document()


def build_scene_filename(document: SceneDocument) -> str:
    params = document.parameters
    return f"monkey_hunter_h{params.target_height:g}_d{params.shooter_distance:g}.excalidraw"


def render_page(
    request: Request,
    context: DiagramContext,
    document: SceneDocument,
    error: str,
    submitted: dict[str, str] | None,
) -> HTMLResponse:
    svg = context.svg_renderer.to_string(document.layout.shapes, document.viewport)
    params = document.parameters
    form_values: dict[str, Any] = submitted or {
        "height": f"{params.target_height:g}",
        "distance": f"{params.shooter_distance:g}",
    }
    return templates.TemplateResponse(
        request,
        "diagram.html",
        {
            "title": context.settings.diagram.title,
            "svg": svg,
            "error": error,
            "form": form_values,
            "scale": document.layout.scale,
            "viewport": document.viewport,
        },
    )


app = create_app(load_settings())
