from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from bulkverify.core.ledger.ledger import IdentifierLedger
from bulkverify.core.library.discovery import discover_titles
from bulkverify.core.library.library_locator import library_folders_file, locate_libraries
from bulkverify.core.library.types import Title
from bulkverify.core.monitor.detector import ActivitySampler
from bulkverify.core.monitor.process_sampler import ProcessGroupSampler
from bulkverify.shared.config import AppConfig
from bulkverify.shared import paths

from .orchestrator import ValidationOrchestrator
from .trigger import UriValidationTrigger, ValidationTrigger

log = logging.getLogger(__name__)


def collect_titles(install_dir: str) -> List[Title]:
    """Installed titles across every library listed by the client. Raises LibraryFoldersNotFoundError."""
    libraries = locate_libraries(library_folders_file(install_dir))
    titles = list(discover_titles(libraries))
    log.info("Discovered %d installed title(s)", len(titles))
    return titles


def open_ledger(cfg: AppConfig) -> IdentifierLedger:
    validated = Path(cfg.validated_path) if cfg.validated_path else paths.validated_ledger_path()
    blacklist = Path(cfg.blacklist_path) if cfg.blacklist_path else paths.blacklist_path()
    return IdentifierLedger(validated, blacklist)


def build_orchestrator(
    cfg: AppConfig,
    ledger: IdentifierLedger,
    trigger: Optional[ValidationTrigger] = None,
    sampler: Optional[ActivitySampler] = None,
) -> ValidationOrchestrator:
    return ValidationOrchestrator(
        ledger=ledger,
        trigger=trigger or UriValidationTrigger(cfg.uri_scheme),
        sampler=sampler or ProcessGroupSampler(cfg.process_names),
        config=cfg.to_monitor_config(),
        ledger_policy=cfg.ledger_policy,
    )
