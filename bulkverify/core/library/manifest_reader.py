"""
Reader for Steam appmanifest_<appid>.acf files.

Only two fields are needed, so the KeyValues structure is not parsed:
each line is searched for a quoted label followed by a quoted value,
and the first hit per label wins.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Optional

from .types import Title

log = logging.getLogger(__name__)

MANIFEST_LABELS = ("appid", "name")


def _label_pattern(label: str) -> re.Pattern[str]:
    return re.compile(r'"' + re.escape(label) + r'"\s*"([^"]*)"', re.IGNORECASE)


def read_manifest_fields(text: str, labels: Iterable[str] = MANIFEST_LABELS) -> Dict[str, Optional[str]]:
    patterns = {label: _label_pattern(label) for label in labels}
    found: Dict[str, Optional[str]] = {label: None for label in patterns}

    for line in text.splitlines():
        for label, pattern in patterns.items():
            if found[label] is not None:
                continue
            m = pattern.search(line)
            if m:
                found[label] = m.group(1)
        if all(v is not None for v in found.values()):
            break

    return found


def parse_manifest(text: str, path: Path) -> Optional[Title]:
    """Build a Title from manifest text, or None when it carries no appid."""
    fields = read_manifest_fields(text)
    appid = (fields["appid"] or "").strip()
    if not appid:
        return None
    name = (fields["name"] or "").strip() or None
    return Title(appid=appid, name=name, manifest_path=path)


def read_manifest(path: Path) -> Optional[Title]:
    text = Path(path).read_text(encoding="utf-8", errors="ignore")
    title = parse_manifest(text, Path(path))
    if title is None:
        log.warning("Manifest without appid skipped: %s", path)
    return title
