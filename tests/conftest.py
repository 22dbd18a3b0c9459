from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, DiagramSettings
from domain.models import Margins, ScaleState, SceneParameters, Viewport


def _clear_mhd_env() -> None:
    for key in list(os.environ):
        if key.startswith("MHD_"):
            os.environ.pop(key, None)


_clear_mhd_env()


@pytest.fixture(autouse=True)
def clear_mhd_env() -> Generator[None, None, None]:
    _clear_mhd_env()
    yield
    _clear_mhd_env()


@pytest.fixture
def margins() -> Margins:
    return Margins(x=60.0, y=40.0)


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(width=800.0, height=600.0)


@pytest.fixture
def params() -> SceneParameters:
    return SceneParameters(target_height=5.0, shooter_distance=10.0)


@pytest.fixture
def scale() -> ScaleState:
    return ScaleState(x_scale=20.0, y_scale=20.0)


@pytest.fixture
def diagram_settings(tmp_path: Path) -> DiagramSettings:
    return DiagramSettings(
        title="Test Diagram",
        output_dir=tmp_path / "scenes",
        excalidraw_base_url="http://testserver/excalidraw",
        excalidraw_max_url_length=500_000,
    )


@pytest.fixture
def diagram_settings_factory(
    diagram_settings: DiagramSettings,
) -> Callable[..., DiagramSettings]:
    def _factory(**overrides: object) -> DiagramSettings:
        return diagram_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(diagram_settings: DiagramSettings) -> AppSettings:
    return AppSettings(diagram=diagram_settings)


@pytest.fixture
def app_settings_factory(
    diagram_settings_factory: Callable[..., DiagramSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(diagram=diagram_settings_factory(**overrides))

    return _factory
