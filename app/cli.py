from __future__ import annotations

import logging
import math
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.logging import RichHandler

from adapters.canvas.memory import InMemoryCanvas
from adapters.excalidraw.repository import FileSystemExcalidrawRepository
from adapters.excalidraw.scene_exporter import SceneToExcalidrawConverter
from adapters.excalidraw.url_encoder import ShareUrlTooLongError, build_excalidraw_url
from adapters.filesystem.scene_repository import FileSystemSceneRepository
from adapters.svg.canvas import SvgCanvas
from app.config import AppSettings, load_settings
from app.session import DiagramSession
from app.wiring import build_session
from domain.models import SceneParameters, Viewport
from domain.services.parse_scene_input import SceneInputError, parse_scene_parameters

app = typer.Typer(no_args_is_help=True)
console = Console()


class OutputFormat(str, Enum):
    svg = "svg"
    excalidraw = "excalidraw"
    json = "json"


OUTPUT_SUFFIXES = {
    OutputFormat.svg: ".svg",
    OutputFormat.excalidraw: ".excalidraw",
    OutputFormat.json: ".json",
}


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def resolve_parameters(
    settings: AppSettings, height: Optional[str], distance: Optional[str]
) -> SceneParameters:
    if height is None and distance is None:
        return settings.diagram.default_parameters()
    height_text = height if height is not None else str(settings.diagram.target_height)
    distance_text = distance if distance is not None else str(settings.diagram.shooter_distance)
    return parse_scene_parameters(
        height_text, distance_text, max_value=settings.diagram.max_parameter_value
    )


def resolve_viewport(
    settings: AppSettings, width: Optional[float], height: Optional[float]
) -> Viewport:
    default = settings.diagram.viewport
    viewport = Viewport(
        width=width if width is not None else default.width,
        height=height if height is not None else default.height,
    )
    if not (math.isfinite(viewport.width) and math.isfinite(viewport.height)):
        console.print("[red]Viewport size must be a finite number of pixels.[/]")
        raise typer.Exit(code=1)
    return viewport


def _load(config: Optional[Path]) -> AppSettings:
    try:
        return load_settings(config)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc


def _settled_session(
    settings: AppSettings,
    height: Optional[str],
    distance: Optional[str],
    width: Optional[float],
    viewport_height: Optional[float],
    passes: Optional[int],
) -> DiagramSession:
    try:
        params = resolve_parameters(settings, height, distance)
    except SceneInputError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    canvas = InMemoryCanvas(resolve_viewport(settings, width, viewport_height))
    session = build_session(settings, canvas, params)
    session.settle(passes or settings.diagram.settle_passes)
    return session


@app.command("render")
def render(
    height: Optional[str] = typer.Option(None, "--height", help="Target height in metres."),
    distance: Optional[str] = typer.Option(None, "--distance", help="Shooter distance in metres."),
    width: Optional[float] = typer.Option(None, "--width", help="Viewport width in pixels."),
    viewport_height: Optional[float] = typer.Option(
        None, "--viewport-height", help="Viewport height in pixels."
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.svg, "--format", help="Output format."),
    output: Optional[Path] = typer.Option(None, "--output", help="File to write."),
    passes: Optional[int] = typer.Option(None, "--passes", min=1, help="Maximum redraw passes."),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scale adjustments."),
) -> None:
    configure_logging(verbose)
    settings = _load(config)
    session = _settled_session(settings, height, distance, width, viewport_height, passes)
    document = session.document()
    if document.layout.is_empty:
        console.print("[yellow]Viewport is too small to draw the scene; nothing written.[/]")
        raise typer.Exit(code=0)

    target = output or settings.diagram.output_dir / f"scene{OUTPUT_SUFFIXES[output_format]}"
    if output_format is OutputFormat.svg:
        svg_canvas = SvgCanvas(target, document.viewport)
        svg_canvas.paint(document.layout.shapes)
    elif output_format is OutputFormat.excalidraw:
        excalidraw = SceneToExcalidrawConverter().convert(document)
        FileSystemExcalidrawRepository().save(excalidraw, target)
    else:
        FileSystemSceneRepository().save(document, target)

    scale = document.layout.scale
    console.print(
        f"[green]Wrote[/] {target} "
        f"({len(document.layout.shapes)} shapes, scale X={scale.x_scale:g} Y={scale.y_scale:g})"
    )


@app.command("share-url")
def share_url(
    height: Optional[str] = typer.Option(None, "--height", help="Target height in metres."),
    distance: Optional[str] = typer.Option(None, "--distance", help="Shooter distance in metres."),
    width: Optional[float] = typer.Option(None, "--width", help="Viewport width in pixels."),
    viewport_height: Optional[float] = typer.Option(
        None, "--viewport-height", help="Viewport height in pixels."
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    configure_logging(False)
    settings = _load(config)
    session = _settled_session(settings, height, distance, width, viewport_height, None)
    excalidraw = SceneToExcalidrawConverter().convert(session.document())
    try:
        url = build_excalidraw_url(
            settings.diagram.excalidraw_base_url,
            excalidraw.to_dict(),
            max_length=settings.diagram.excalidraw_max_url_length,
        )
    except ShareUrlTooLongError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    console.print(url, soft_wrap=True)


@app.command("validate")
def validate(
    height: str = typer.Argument(..., help="Target height as typed by the user."),
    distance: str = typer.Argument(..., help="Shooter distance as typed by the user."),
) -> None:
    try:
        params = parse_scene_parameters(height, distance)
    except SceneInputError as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(
        f"[green]Valid parameters:[/] height={params.target_height:g} m, "
        f"distance={params.shooter_distance:g} m"
    )


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8080, "--port"),
    reload: bool = typer.Option(False, "--reload"),
) -> None:
    configure_logging(False)
    uvicorn.run("app.web_main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
