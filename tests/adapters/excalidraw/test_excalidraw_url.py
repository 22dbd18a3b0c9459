from __future__ import annotations

import json

import pytest
from lzstring import LZString  # type: ignore[import-untyped]

from adapters.excalidraw.url_encoder import (
    ShareUrlTooLongError,
    build_excalidraw_url,
    decode_scene_payload,
    encode_scene_payload,
)


def test_encode_scene_payload_is_lz_string() -> None:
    payload = {
        "elements": [],
        "appState": {"theme": "light"},
        "files": {},
    }
    encoded = encode_scene_payload(payload)
    decoded = LZString().decompressFromEncodedURIComponent(encoded)
    assert json.loads(decoded) == payload
    assert decode_scene_payload(encoded) == payload


def test_decode_rejects_non_object() -> None:
    encoded = LZString().compressToEncodedURIComponent("[1, 2]")
    with pytest.raises(ValueError, match="not a JSON object"):
        decode_scene_payload(encoded)


def test_build_url_replaces_existing_fragment() -> None:
    url = build_excalidraw_url("https://excalidraw.com/#room=abc", {"elements": []})
    assert url.startswith("https://excalidraw.com/#json=")
    assert "room=" not in url
    assert decode_scene_payload(url.split("#json=", 1)[1]) == {"elements": []}


def test_build_url_enforces_length_limit() -> None:
    scene = {"elements": [{"id": str(idx)} for idx in range(200)]}
    with pytest.raises(ShareUrlTooLongError, match="limit is 50"):
        build_excalidraw_url("https://excalidraw.com/", scene, max_length=50)
