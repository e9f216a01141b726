"""
Console front end: verify every installed Steam title, one after another.

Exit status: 0 when the batch ran to the end (or was dry-run), 1 when Steam
disappeared mid-batch, 2 when the library configuration is unusable,
3 when Steam could not be asked to verify a title, 130 on Ctrl+C.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from bulkverify.core.logging_ import setup_logging
from bulkverify.core.library.library_locator import LibraryFoldersNotFoundError, is_valid_install_dir
from bulkverify.core.validation.orchestrator import BatchReport
from bulkverify.core.validation.pipeline import build_orchestrator, collect_titles, open_ledger
from bulkverify.shared.config import AppConfig
from bulkverify.shared.store import ConfigStore

log = logging.getLogger(__name__)


def prompt_install_dir(default: str, input_fn: Callable[[str], str] = input) -> Optional[str]:
    """Ask until the answer is a Steam installation directory. None on EOF."""
    while True:
        try:
            entered = input_fn(f"Steam installation directory [{default}]: ")
        except EOFError:
            return None
        candidate = entered.strip().strip('"') or default
        if is_valid_install_dir(candidate):
            return candidate
        print(f"⚠  Not a Steam installation directory: {candidate}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="steam-bulk-verify",
        description="Verify the integrity of every installed Steam title in sequence.",
    )
    p.add_argument("--install-dir", help="Steam installation directory (prompted for when missing or invalid)")
    p.add_argument("--ledger", help="File of already verified appids (default: app data dir)")
    p.add_argument("--blacklist", help="File of appids never to verify (default: app data dir)")
    p.add_argument(
        "--policy",
        choices=["on_trigger", "on_completion"],
        help="When an appid is written to the ledger",
    )
    p.add_argument("--idle-seconds", type=float, help="Quiet period that counts as finished")
    p.add_argument("--timeout-minutes", type=float, help="Give up waiting on one title after this long")
    p.add_argument("--grace-seconds", type=float, help="Pause between triggering and monitoring")
    p.add_argument("--dry-run", action="store_true", help="List the titles that would be verified and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every poll")
    return p


def apply_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    updates = {}
    if args.ledger:
        updates["validated_path"] = args.ledger
    if args.blacklist:
        updates["blacklist_path"] = args.blacklist
    if args.policy:
        updates["ledger_policy"] = args.policy
    if args.idle_seconds is not None:
        updates["idle_threshold_seconds"] = args.idle_seconds
    if args.timeout_minutes is not None:
        updates["timeout_minutes"] = args.timeout_minutes
    if args.grace_seconds is not None:
        updates["grace_delay_seconds"] = args.grace_seconds
    if not updates:
        return cfg
    return AppConfig.model_validate({**cfg.model_dump(), **updates})


def print_report(report: BatchReport) -> None:
    print()
    print("=" * 60)
    print(f"Verified:            {report.count('COMPLETED')}")
    print(f"Timed out:           {report.count('TIMED_OUT')}")
    print(f"Already verified:    {report.count('SKIPPED_VALIDATED')}")
    print(f"Blacklisted:         {report.count('SKIPPED_BLACKLISTED')}")
    if report.aborted:
        print("🛑 Steam stopped running, batch aborted.")
    elif report.stopped:
        print("Batch stopped before the last title.")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    store = ConfigStore()
    cfg = store.load()

    install_dir = args.install_dir if args.install_dir and is_valid_install_dir(args.install_dir) else None
    if install_dir is None:
        install_dir = prompt_install_dir(args.install_dir or cfg.install_dir)
        if install_dir is None:
            return 2
    if install_dir != cfg.install_dir:
        cfg.install_dir = install_dir
        store.save(cfg)

    cfg = apply_overrides(cfg, args)

    try:
        titles = collect_titles(install_dir)
    except LibraryFoldersNotFoundError as e:
        log.error("%s", e)
        return 2

    ledger = open_ledger(cfg)

    if args.dry_run:
        eligible = [t for t in titles if not ledger.is_validated(t.appid) and not ledger.is_blacklisted(t.appid)]
        for t in eligible:
            print(f"{t.appid:>10}  {t.name or ''}")
        print(f"{len(eligible)} of {len(titles)} title(s) would be verified.")
        return 0

    orchestrator = build_orchestrator(cfg, ledger)
    try:
        report = orchestrator.run(titles)
    except KeyboardInterrupt:
        log.warning("Interrupted; titles already triggered stay recorded in the ledger")
        return 130
    except OSError as e:
        log.error("Could not ask Steam to verify a title: %s", e)
        return 3

    print_report(report)
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
