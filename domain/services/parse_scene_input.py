from __future__ import annotations

import math

from domain.models import SceneParameters

INVALID_NUMBER_MESSAGE = "Please enter valid numbers."
OUT_OF_RANGE_MESSAGE = "Both height and distance must be at least 1."
TOO_LARGE_MESSAGE = "Both height and distance must be at most {max_value:g}."
MIN_PARAMETER_VALUE = 1.0


class SceneInputError(ValueError):
    """Raised when text input cannot become scene parameters; ``str(exc)`` is user-facing."""


def _parse_number(raw: object) -> float | None:
    text = str(raw if raw is not None else "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_scene_parameters(
    height_text: object,
    distance_text: object,
    max_value: float | None = None,
) -> SceneParameters:
    """Parse the two text fields; ``max_value`` is an optional host-imposed ceiling."""
    height = _parse_number(height_text)
    distance = _parse_number(distance_text)
    if height is None or distance is None:
        raise SceneInputError(INVALID_NUMBER_MESSAGE)
    if height < MIN_PARAMETER_VALUE or distance < MIN_PARAMETER_VALUE:
        raise SceneInputError(OUT_OF_RANGE_MESSAGE)
    if max_value is not None and (height > max_value or distance > max_value):
        raise SceneInputError(TOO_LARGE_MESSAGE.format(max_value=max_value))
    return SceneParameters(target_height=height, shooter_distance=distance)
