"""Application context passed from the CLI into command pipelines."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class AppContext:
    root: Path
    args: object

    def arg(self, name: str, default=None):
        return getattr(self.args, name, default)
