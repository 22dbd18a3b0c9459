from __future__ import annotations

import argparse
import json
import time
import urllib.error
import urllib.request


def fetch(url: str, data: bytes | None = None) -> tuple[int, bytes]:
    headers = {"Content-Type": "application/json"} if data is not None else {}
    req = urllib.request.Request(url, data=data, headers=headers)
    with urllib.request.urlopen(req, timeout=10) as resp:
        return resp.status, resp.read()


def wait_for(url: str, timeout: int) -> bytes:
    deadline = time.time() + timeout
    last_error: Exception | None = None
    while time.time() < deadline:
        try:
            status, body = fetch(url)
            if status == 200:
                return body
        except (urllib.error.URLError, OSError) as exc:
            last_error = exc
        time.sleep(1)
    raise RuntimeError(f"Timed out waiting for {url}: {last_error}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test for a running diagram server.")
    parser.add_argument("--base", default="http://localhost:8080")
    parser.add_argument("--timeout", type=int, default=60)
    args = parser.parse_args()

    base = args.base.rstrip("/")

    wait_for(f"{base}/diagram", args.timeout)
    scene = json.loads(wait_for(f"{base}/api/scene?width=800&height=600", args.timeout))
    if not scene.get("shapes"):
        raise RuntimeError("Scene payload has no shapes")

    body = json.dumps({"height": "7", "distance": "12"}).encode("utf-8")
    status, payload = fetch(f"{base}/api/parameters", body)
    if status != 200 or json.loads(payload).get("parameters", {}).get("target_height") != 7:
        raise RuntimeError("Parameter update was not applied")

    svg = wait_for(f"{base}/api/scene.svg", args.timeout)
    if b"<svg" not in svg:
        raise RuntimeError("SVG endpoint did not return an SVG document")

    print("Smoke test passed.")


if __name__ == "__main__":
    main()
