"""
Shared fixtures: a fake clock whose sleep advances time, scripted samplers
and a trigger that records what it was asked to verify.
"""

from pathlib import Path
from typing import Callable, List, Optional

import pytest

from bulkverify.core.ledger.ledger import IdentifierLedger
from bulkverify.core.library.types import Title
from bulkverify.core.monitor.detector import ActivitySampler
from bulkverify.core.monitor.types import ActivitySample, MonitorConfig
from bulkverify.core.validation.orchestrator import ValidationOrchestrator


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FuncSampler(ActivitySampler):
    """Sampler whose readings come from a function of the call number."""

    def __init__(self, fn: Callable[[int], Optional[ActivitySample]]) -> None:
        self._fn = fn
        self.calls = 0

    def sample(self) -> Optional[ActivitySample]:
        result = self._fn(self.calls)
        self.calls += 1
        return result


class RecordingTrigger:
    def __init__(self, on_trigger: Optional[Callable[[str], None]] = None) -> None:
        self.appids: List[str] = []
        self._on_trigger = on_trigger

    def trigger(self, appid: str) -> None:
        self.appids.append(appid)
        if self._on_trigger:
            self._on_trigger(appid)


IDLE = ActivitySample(cpu_time=12.0, handle_count=300, process_count=3)


def idle_sampler() -> FuncSampler:
    return FuncSampler(lambda n: IDLE)


def busy_sampler() -> FuncSampler:
    return FuncSampler(lambda n: ActivitySample(cpu_time=float(n), handle_count=300, process_count=3))


def make_title(appid: str, name: Optional[str] = None) -> Title:
    return Title(appid=appid, name=name or f"Game {appid}", manifest_path=Path(f"appmanifest_{appid}.acf"))


MONITOR_CONFIG = {
    "grace_delay_seconds": 10.0,
    "poll_interval_seconds": 1.0,
    "idle_threshold_seconds": 5.0,
    "timeout_seconds": 60.0,
    "noise_threshold": 0.01,
}


@pytest.fixture
def monitor_cfg() -> MonitorConfig:
    return MonitorConfig(**MONITOR_CONFIG)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ledger_paths(tmp_path: Path):
    return tmp_path / "validated.txt", tmp_path / "blacklist.txt"


@pytest.fixture
def make_ledger(ledger_paths):
    def _make(validated: Optional[List[str]] = None, blacklisted: Optional[List[str]] = None) -> IdentifierLedger:
        validated_path, blacklist_path = ledger_paths
        if validated is not None:
            validated_path.write_text("".join(f"{v}\n" for v in validated), encoding="utf-8")
        if blacklisted is not None:
            blacklist_path.write_text("".join(f"{b}\n" for b in blacklisted), encoding="utf-8")
        return IdentifierLedger(validated_path, blacklist_path)
    return _make


@pytest.fixture
def make_orchestrator(clock):
    def _make(ledger, trigger, sampler, policy="on_trigger", **overrides) -> ValidationOrchestrator:
        return ValidationOrchestrator(
            ledger=ledger,
            trigger=trigger,
            sampler=sampler,
            config={**MONITOR_CONFIG, **overrides},
            ledger_policy=policy,
            clock=clock,
            sleep=clock.sleep,
        )
    return _make
