"""
Sequential bulk validation of installed titles.

Per title: ledger skip checks -> trigger -> grace delay -> poll the client's
process group until the completion heuristic settles on COMPLETED,
TIMED_OUT or ABORTED. Only one title is in flight at a time; ABORTED
(client process gone) ends the whole batch.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Literal, Optional

from bulkverify.core.ledger.ledger import IdentifierLedger
from bulkverify.core.library.types import Title
from bulkverify.core.monitor.completion import advance, begin_monitoring
from bulkverify.core.monitor.detector import ActivitySampler
from bulkverify.core.monitor.types import MonitorConfig, MonitorOutcome
from bulkverify.shared.config import LedgerPolicy

from .trigger import ValidationTrigger

log = logging.getLogger(__name__)


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


TitleOutcome = Literal[
    "SKIPPED_VALIDATED",
    "SKIPPED_BLACKLISTED",
    "COMPLETED",
    "TIMED_OUT",
    "ABORTED",
]

TRIGGERED_OUTCOMES = ("COMPLETED", "TIMED_OUT", "ABORTED")


@dataclass(frozen=True)
class TitleResult:
    title: Title
    outcome: TitleOutcome
    elapsed_seconds: float = 0.0


@dataclass
class BatchReport:
    results: List[TitleResult] = field(default_factory=list)
    aborted: bool = False
    stopped: bool = False

    def count(self, outcome: TitleOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def triggered(self) -> List[str]:
        return [r.title.appid for r in self.results if r.outcome in TRIGGERED_OUTCOMES]

    @property
    def exit_code(self) -> int:
        return 1 if self.aborted else 0


class ValidationOrchestrator:
    """Drives the validate trigger for each eligible title, one at a time."""

    def __init__(
        self,
        ledger: IdentifierLedger,
        trigger: ValidationTrigger,
        sampler: ActivitySampler,
        config: dict,
        ledger_policy: LedgerPolicy = "on_trigger",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._ledger = ledger
        self._trigger = trigger
        self._sampler = sampler
        self._cfg = MonitorConfig(**config)
        self._policy = ledger_policy
        self._clock = clock
        self._sleep = sleep

        self._event_cb: Optional[Callable[[dict], None]] = None
        self._stop_evt = threading.Event()

    def on_event(self, cb: Callable[[dict], None]) -> None:
        self._event_cb = cb

    def request_stop(self) -> None:
        """Stop before the next title; the title being monitored is finished first."""
        self._stop_evt.set()

    def reset_stop(self) -> None:
        """Clear a previous stop request before a new batch is started."""
        self._stop_evt.clear()

    def _emit(self, evt: dict) -> None:
        if self._event_cb:
            self._event_cb(evt)

    def _emit_title(self, kind: str, title: Title, reason: Optional[str] = None) -> None:
        self._emit({
            "type": kind,
            "appid": title.appid,
            "name": title.name,
            "at": _now_iso(),
            "reason": reason,
        })

    def run(self, titles: Iterable[Title]) -> BatchReport:
        report = BatchReport()

        for title in titles:
            if self._stop_evt.is_set():
                log.info("Stop requested, leaving remaining titles for the next run")
                report.stopped = True
                break

            result = self.process_title(title)
            report.results.append(result)
            if result.outcome == "ABORTED":
                report.aborted = True
                break

        log.info(
            "Batch finished: %d completed, %d timed out, %d skipped (validated), "
            "%d skipped (blacklisted)%s",
            report.count("COMPLETED"),
            report.count("TIMED_OUT"),
            report.count("SKIPPED_VALIDATED"),
            report.count("SKIPPED_BLACKLISTED"),
            ", ABORTED" if report.aborted else "",
        )
        self._emit({
            "type": "BATCH_FINISHED",
            "at": _now_iso(),
            "reason": "ABORTED" if report.aborted else ("STOPPED" if report.stopped else None),
            "report": report,
        })
        return report

    def process_title(self, title: Title) -> TitleResult:
        # validated wins over blacklisted when an id is in both sets
        if self._ledger.is_validated(title.appid):
            log.info("Skipping %s: already validated", title.label())
            self._emit_title("TITLE_SKIPPED", title, "ALREADY_VALIDATED")
            return TitleResult(title, "SKIPPED_VALIDATED")
        if self._ledger.is_blacklisted(title.appid):
            log.info("Skipping %s: blacklisted", title.label())
            self._emit_title("TITLE_SKIPPED", title, "BLACKLISTED")
            return TitleResult(title, "SKIPPED_BLACKLISTED")

        self._trigger.trigger(title.appid)
        if self._policy == "on_trigger":
            self._ledger.mark_validated(title.appid)
        log.info("Validation triggered for %s", title.label())
        self._emit_title("VALIDATION_TRIGGERED", title)

        started = self._clock()
        outcome = self._monitor(title)
        elapsed = self._clock() - started

        if outcome == "ABORTED":
            log.error("Client process disappeared while validating %s, aborting batch", title.label())
            self._emit_title("CLIENT_LOST", title, "NO_CLIENT_PROCESS")
            return TitleResult(title, "ABORTED", elapsed)

        if self._policy == "on_completion":
            self._ledger.mark_validated(title.appid)

        if outcome == "COMPLETED":
            log.info("Validation of %s finished after %.0fs", title.label(), elapsed)
            self._emit_title("VALIDATION_COMPLETED", title, f"idle for {self._cfg.idle_threshold_seconds:g}s")
        else:
            log.warning("Validation of %s still busy after %.0fs, moving on", title.label(), elapsed)
            self._emit_title("VALIDATION_TIMED_OUT", title, f"no idle period within {self._cfg.timeout_seconds:g}s")
        return TitleResult(title, outcome, elapsed)

    def _monitor(self, title: Title) -> MonitorOutcome:
        cfg = self._cfg
        self._sleep(cfg.grace_delay_seconds)

        first = self._sampler.sample()
        if first is None:
            return "ABORTED"
        state = begin_monitoring(first, self._clock())

        while True:
            self._sleep(cfg.poll_interval_seconds)
            sample = self._sampler.sample()
            now = self._clock()
            outcome, state = advance(state, sample, now, cfg)
            if outcome is not None:
                return outcome
            log.debug(
                "%s: running %.1fs, quiet for %.1fs",
                title.appid, now - state.run_start, now - state.last_change,
            )
