from __future__ import annotations

import logging
from typing import Iterable, Iterator, Set

from .library_locator import steamapps_dir
from .manifest_reader import read_manifest
from .types import Title

log = logging.getLogger(__name__)

MANIFEST_GLOB = "appmanifest_*.acf"


def discover_titles(library_paths: Iterable[str]) -> Iterator[Title]:
    """Yield one Title per installed manifest, libraries in the given order."""
    seen: Set[str] = set()
    for library in library_paths:
        apps_dir = steamapps_dir(library)
        if not apps_dir.is_dir():
            log.warning("Library folder has no steamapps directory: %s", library)
            continue

        for manifest in sorted(apps_dir.glob(MANIFEST_GLOB)):
            try:
                title = read_manifest(manifest)
            except OSError as e:
                log.warning("Cannot read manifest %s: %s", manifest, e)
                continue
            if title is None:
                continue
            if title.appid in seen:
                log.debug("Title %s listed in more than one library, keeping the first", title.appid)
                continue
            seen.add(title.appid)
            yield title
