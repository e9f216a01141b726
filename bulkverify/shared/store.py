from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from bulkverify.shared.config import AppConfig
from bulkverify.shared.paths import config_path, ensure_app_dirs

log = logging.getLogger(__name__)


class ConfigStore:
    def __init__(self, path: Optional[Path] = None) -> None:
        if path is None:
            ensure_app_dirs()
            path = config_path()
        self._path = Path(path)

    def load(self) -> AppConfig:
        if not self._path.exists():
            cfg = AppConfig()
            self.save(cfg)
            return cfg

        try:
            raw = self._path.read_text(encoding="utf-8")
            data: Any = json.loads(raw)
            return AppConfig.model_validate(data)
        except (OSError, ValueError, ValidationError):
            log.warning("Unreadable config at %s, restoring defaults", self._path, exc_info=True)
            cfg = AppConfig()
            self.save(cfg)
            return cfg

    def save(self, cfg: AppConfig) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(cfg.model_dump_json(indent=2), encoding="utf-8")

    def path(self) -> str:
        return str(self._path)
