from __future__ import annotations

from pathlib import Path
from typing import Any

from filelock import FileLock

from adapters.filesystem.json_files import read_json_object, write_json_file
from domain.models import SceneDocument
from domain.ports.repositories import SceneRepository


class FileSystemSceneRepository(SceneRepository):
    def save(self, document: SceneDocument, path: Path) -> None:
        lock_path = path.with_suffix(f"{path.suffix}.lock")
        path.parent.mkdir(parents=True, exist_ok=True)
        with FileLock(str(lock_path)):
            write_json_file(path, document.to_dict())

    def load_raw(self, path: Path) -> dict[str, Any]:
        return read_json_object(path)
