from __future__ import annotations

import json
from typing import Any, cast

from lzstring import LZString  # type: ignore[import-untyped]


class ShareUrlTooLongError(ValueError):
    pass


def encode_scene_payload(scene: dict[str, Any]) -> str:
    payload = json.dumps(scene, ensure_ascii=True, separators=(",", ":"))
    return cast(str, LZString().compressToEncodedURIComponent(payload))


def decode_scene_payload(encoded: str) -> dict[str, Any]:
    payload = LZString().decompressFromEncodedURIComponent(encoded)
    if not payload:
        msg = "Encoded scene payload is empty or corrupt"
        raise ValueError(msg)
    data = json.loads(payload)
    if not isinstance(data, dict):
        msg = "Encoded scene payload is not a JSON object"
        raise ValueError(msg)
    return data


def build_excalidraw_url(base_url: str, scene: dict[str, Any], max_length: int | None = None) -> str:
    clean_base = base_url.split("#", 1)[0]
    url = f"{clean_base}#json={encode_scene_payload(scene)}"
    if max_length is not None and len(url) > max_length:
        msg = f"Excalidraw URL is {len(url)} characters, limit is {max_length}"
        raise ShareUrlTooLongError(msg)
    return url
