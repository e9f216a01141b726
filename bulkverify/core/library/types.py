from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Title:
    """One installed title as described by its appmanifest file."""
    appid: str
    name: Optional[str]
    manifest_path: Path

    def label(self) -> str:
        return f"{self.name} ({self.appid})" if self.name else self.appid
