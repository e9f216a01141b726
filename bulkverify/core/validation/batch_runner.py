from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional

from bulkverify.core.library.types import Title

from .orchestrator import BatchReport, ValidationOrchestrator

log = logging.getLogger(__name__)

RunnerStatus = Literal["STOPPED", "RUNNING", "STOPPING"]


@dataclass
class RunnerState:
    status: RunnerStatus = "STOPPED"
    current_title: Optional[str] = None
    processed: int = 0
    total: int = 0
    last_report: Optional[BatchReport] = None


class BatchRunner:
    """Runs one orchestrator batch on a background thread for the desktop UI."""

    def __init__(self, orchestrator: ValidationOrchestrator) -> None:
        self._orch = orchestrator
        self._state = RunnerState()
        self._lock = threading.Lock()

        self._event_cb: Optional[Callable[[dict], None]] = None
        self._error_cb: Optional[Callable[[str], None]] = None

        self._thread: Optional[threading.Thread] = None
        self._orch.on_event(self._on_orchestrator_event)

    def on_event(self, cb: Callable[[dict], None]) -> None:
        self._event_cb = cb

    def on_error(self, cb: Callable[[str], None]) -> None:
        self._error_cb = cb

    def get_state(self) -> RunnerState:
        with self._lock:
            return RunnerState(
                status=self._state.status,
                current_title=self._state.current_title,
                processed=self._state.processed,
                total=self._state.total,
                last_report=self._state.last_report,
            )

    def start(self, titles: List[Title]) -> None:
        with self._lock:
            if self._state.status != "STOPPED":
                return
            self._state = RunnerState(status="RUNNING", total=len(titles))
            self._orch.reset_stop()

        self._thread = threading.Thread(target=self._run, args=(titles,), name="BatchRunner", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the batch to stop after the title currently being validated."""
        with self._lock:
            if self._state.status != "RUNNING":
                return
            self._state.status = "STOPPING"
        self._orch.request_stop()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _emit(self, evt: dict) -> None:
        if self._event_cb:
            self._event_cb(evt)

    def _emit_error(self, msg: str) -> None:
        if self._error_cb:
            self._error_cb(msg)

    def _on_orchestrator_event(self, evt: dict) -> None:
        t = evt.get("type")
        with self._lock:
            if t == "VALIDATION_TRIGGERED":
                self._state.current_title = evt.get("name") or evt.get("appid")
            elif t in ("TITLE_SKIPPED", "VALIDATION_COMPLETED", "VALIDATION_TIMED_OUT", "CLIENT_LOST"):
                self._state.processed += 1
                self._state.current_title = None
            elif t == "BATCH_FINISHED":
                self._state.last_report = evt.get("report")
        self._emit(evt)

    def _run(self, titles: List[Title]) -> None:
        try:
            self._orch.run(titles)
        except Exception as e:
            log.exception("Batch runner error")
            self._emit_error(str(e))
        finally:
            with self._lock:
                self._state.status = "STOPPED"
                self._state.current_title = None
