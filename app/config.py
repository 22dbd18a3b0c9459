from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.models import Margins, ScaleState, SceneParameters, Viewport

DEFAULT_CONFIG_PATH = Path("config/diagram.yaml")


class MarginSettings(BaseModel):
    x: float = Field(default=60.0, ge=0)
    y: float = Field(default=40.0, ge=0)

    def to_margins(self) -> Margins:
        return Margins(x=self.x, y=self.y)


class ScaleSettings(BaseModel):
    x: float = Field(default=20.0, ge=1)
    y: float = Field(default=20.0, ge=1)

    def to_state(self) -> ScaleState:
        return ScaleState(x_scale=self.x, y_scale=self.y)


class ViewportSettings(BaseModel):
    width: float = 800.0
    height: float = 600.0

    def to_viewport(self) -> Viewport:
        return Viewport(width=self.width, height=self.height)


class DiagramSettings(BaseModel):
    title: str = "Monkey and Hunter"
    margins: MarginSettings = MarginSettings()
    initial_scale: ScaleSettings = ScaleSettings()
    viewport: ViewportSettings = ViewportSettings()
    target_height: float = Field(default=5.0, ge=1)
    shooter_distance: float = Field(default=10.0, ge=1)
    max_parameter_value: float = Field(default=10_000.0, ge=1)
    settle_passes: int = Field(default=8, ge=1)
    output_dir: Path = Path("data/scenes")
    excalidraw_base_url: str = "https://excalidraw.com/"
    excalidraw_max_url_length: int = 100_000

    @field_validator("excalidraw_base_url", mode="before")
    @classmethod
    def normalize_base_url(cls, value: object) -> str:
        raw = str(value or "").strip()
        return raw or "https://excalidraw.com/"

    def default_parameters(self) -> SceneParameters:
        return SceneParameters(
            target_height=self.target_height,
            shooter_distance=self.shooter_distance,
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MHD_", env_nested_delimiter="__")

    diagram: DiagramSettings = DiagramSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("MHD_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
