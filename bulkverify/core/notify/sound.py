from __future__ import annotations

import logging
from typing import Protocol

log = logging.getLogger(__name__)


class SoundPlayer(Protocol):
    def play(self, success: bool = True) -> None:
        ...


class WinBeepSound:
    def play(self, success: bool = True) -> None:
        try:
            import winsound
            if success:
                winsound.Beep(900, 180)
            else:
                winsound.Beep(400, 400)
        except Exception:
            log.exception("Failed to play sound")
