# src/nodehub/adapters/fs/path_provider.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from nodehub.services.settings import Settings


@dataclass(slots=True)
class PathProvider:
    """Единая точка истины для путей. Всегда работает с pathlib.Path."""

    base: Path

    @classmethod
    def from_settings(cls, settings: Settings) -> "PathProvider":
        return cls(base=Path(settings.base_dir).expanduser().resolve())

    def base_dir(self) -> Path:
        return self.base

    def logs_dir(self) -> Path:
        return (self.base / "logs").resolve()

    def state_dir(self) -> Path:
        return (self.base / "state").resolve()

    def ensure_tree(self) -> None:
        for p in (self.base_dir(), self.logs_dir(), self.state_dir()):
            p.mkdir(parents=True, exist_ok=True)
