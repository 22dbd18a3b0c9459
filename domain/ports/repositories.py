from __future__ import annotations

from pathlib import Path
from typing import Protocol

from domain.models import ExcalidrawDocument, SceneDocument


class SceneRepository(Protocol):
    def save(self, document: SceneDocument, path: Path) -> None: ...

    def load_raw(self, path: Path) -> dict: ...


class ExcalidrawRepository(Protocol):
    def load(self, path: Path) -> ExcalidrawDocument: ...

    def save(self, document: ExcalidrawDocument, path: Path) -> None: ...
