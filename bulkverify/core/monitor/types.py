from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

MonitorOutcome = Literal["COMPLETED", "TIMED_OUT", "ABORTED"]


@dataclass(frozen=True)
class ActivitySample:
    """Aggregate resource usage of the client's process group at one instant."""
    cpu_time: float  # user + system seconds, summed
    handle_count: int  # handles on Windows, open fds elsewhere
    process_count: int = 0

    def delta(self, other: "ActivitySample") -> float:
        return abs(self.cpu_time - other.cpu_time) + abs(self.handle_count - other.handle_count)


@dataclass(frozen=True)
class MonitorConfig:
    grace_delay_seconds: float
    poll_interval_seconds: float
    idle_threshold_seconds: float
    timeout_seconds: float
    noise_threshold: float


@dataclass(frozen=True)
class MonitorState:
    """Timers for one title's monitoring run, all in monotonic seconds."""
    last_sample: ActivitySample
    last_change: float
    run_start: float
