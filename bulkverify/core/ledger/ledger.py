"""
Persisted identifier sets that drive the skip policy.

``validated`` holds every appid this tool has already handled and only
ever grows: each new id is appended to its file and synced to disk before
``mark_validated`` returns. ``blacklisted`` is maintained by the user and
never written here.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AbstractSet, Optional, Set, Union

log = logging.getLogger(__name__)


def _read_ids(path: Path) -> Set[str]:
    ids: Set[str] = set()
    for line in path.read_text(encoding="utf-8", errors="ignore").splitlines():
        line = line.strip()
        if line:
            ids.add(line)
    return ids


def _lacks_trailing_newline(path: Path) -> bool:
    with path.open("rb") as f:
        f.seek(0, os.SEEK_END)
        if f.tell() == 0:
            return False
        f.seek(-1, os.SEEK_END)
        return f.read(1) != b"\n"


class IdentifierLedger:
    """Validated and blacklisted appids. Not safe for concurrent writers."""

    def __init__(
        self,
        validated_path: Union[str, Path],
        blacklist_path: Optional[Union[str, Path]] = None,
    ) -> None:
        self._validated_path = Path(validated_path)
        self._blacklist_path = Path(blacklist_path) if blacklist_path else None

        if self._validated_path.exists():
            self._validated = _read_ids(self._validated_path)
            self._pending_newline = _lacks_trailing_newline(self._validated_path)
        else:
            self._validated_path.parent.mkdir(parents=True, exist_ok=True)
            self._validated_path.touch()
            self._validated = set()
            self._pending_newline = False
            log.info("Created validated ledger at %s", self._validated_path)

        if self._blacklist_path is not None and self._blacklist_path.exists():
            self._blacklisted = _read_ids(self._blacklist_path)
        else:
            self._blacklisted = set()

        log.info(
            "Ledger loaded: %d validated, %d blacklisted",
            len(self._validated), len(self._blacklisted),
        )

    @property
    def validated_ids(self) -> AbstractSet[str]:
        return frozenset(self._validated)

    @property
    def blacklisted_ids(self) -> AbstractSet[str]:
        return frozenset(self._blacklisted)

    def is_validated(self, appid: str) -> bool:
        return appid in self._validated

    def is_blacklisted(self, appid: str) -> bool:
        return appid in self._blacklisted

    def mark_validated(self, appid: str) -> None:
        if appid in self._validated:
            return
        with self._validated_path.open("a", encoding="utf-8") as f:
            if self._pending_newline:
                f.write("\n")
                self._pending_newline = False
            f.write(appid + "\n")
            f.flush()
            os.fsync(f.fileno())
        self._validated.add(appid)
        log.debug("Recorded %s in %s", appid, self._validated_path)
