from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Protocol

log = logging.getLogger(__name__)


class ValidationTrigger(Protocol):
    def trigger(self, appid: str) -> None:
        ...


def validate_uri(scheme: str, appid: str) -> str:
    return f"{scheme}://validate/{appid}"


class UriValidationTrigger:
    """Asks the installed client to verify a title by opening its validate URI."""

    def __init__(self, scheme: str = "steam") -> None:
        self._scheme = scheme

    def trigger(self, appid: str) -> None:
        uri = validate_uri(self._scheme, appid)
        log.info("Opening %s", uri)
        if os.name == "nt":
            os.startfile(uri)  # type: ignore[attr-defined]
        elif sys.platform == "darwin":
            subprocess.Popen(["open", uri], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        else:
            subprocess.Popen(["xdg-open", uri], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
