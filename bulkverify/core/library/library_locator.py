from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from typing import List, Union

log = logging.getLogger(__name__)

PATH_PATTERN = re.compile(r'"path"\s*"([^"]*)"', re.IGNORECASE)

CLIENT_EXECUTABLES_WIN = ("steam.exe",)
CLIENT_EXECUTABLES_POSIX = ("steam.sh", "steam")


class LibraryFoldersNotFoundError(FileNotFoundError):
    """libraryfolders.vdf is missing, so there is nothing to scan."""


def library_folders_file(install_dir: Union[str, Path]) -> Path:
    return Path(install_dir) / "steamapps" / "libraryfolders.vdf"


def is_valid_install_dir(path: Union[str, Path]) -> bool:
    """True when ``path`` is a directory holding the client executable."""
    if not path:
        return False
    p = Path(path)
    if not p.is_dir():
        return False
    names = CLIENT_EXECUTABLES_WIN if sys.platform == "win32" else CLIENT_EXECUTABLES_WIN + CLIENT_EXECUTABLES_POSIX
    return any((p / n).is_file() for n in names)


def locate_libraries(vdf_path: Union[str, Path]) -> List[str]:
    """
    Return every "path" entry of libraryfolders.vdf in file order.

    The file stores Windows paths with escaped separators ("C:\\\\Games"),
    which are collapsed back to single backslashes.
    """
    p = Path(vdf_path)
    if not p.is_file():
        raise LibraryFoldersNotFoundError(f"Library folders file not found: {p}")

    libraries: List[str] = []
    text = p.read_text(encoding="utf-8", errors="ignore")
    for line in text.splitlines():
        m = PATH_PATTERN.search(line)
        if m:
            libraries.append(m.group(1).replace("\\\\", "\\"))

    log.info("Found %d library folder(s) in %s", len(libraries), p)
    return libraries


def steamapps_dir(library_path: str) -> Path:
    # backslash-separated library paths on a non-Windows host
    if os.sep != "\\":
        library_path = library_path.replace("\\", os.sep)
    return Path(library_path) / "steamapps"
