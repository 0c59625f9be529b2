from __future__ import annotations
from pathlib import Path
from typing import Protocol


class PathProvider(Protocol):
    def base_dir(self) -> Path: ...
    def state_dir(self) -> Path: ...
    def logs_dir(self) -> Path: ...
