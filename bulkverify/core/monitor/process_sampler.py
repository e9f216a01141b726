"""
Steam process-group sampler using psutil.

Sums CPU time and open handle counts over every running process whose
name matches one of the client's known executables. Handle counts come
from ``num_handles()`` on Windows and ``num_fds()`` elsewhere.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import psutil

from .detector import ActivitySampler
from .types import ActivitySample

log = logging.getLogger(__name__)


def _handle_count(p: psutil.Process) -> int:
    if hasattr(p, "num_handles"):
        return p.num_handles()
    return p.num_fds()


class ProcessGroupSampler(ActivitySampler):
    """Samples the processes whose names appear in ``process_names``."""

    def __init__(self, process_names: Iterable[str]) -> None:
        self._names = {n.strip().lower() for n in process_names if n.strip()}
        if not self._names:
            raise ValueError("At least one client process name is required")

    def sample(self) -> Optional[ActivitySample]:
        cpu_time = 0.0
        handles = 0
        matched = 0

        for p in psutil.process_iter(attrs=["name"]):
            try:
                n = p.info.get("name")
                if not n or str(n).lower() not in self._names:
                    continue
                with p.oneshot():
                    times = p.cpu_times()
                    proc_handles = _handle_count(p)
                cpu_time += times.user + times.system
                handles += proc_handles
                matched += 1
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue

        if matched == 0:
            log.debug("No client process found (looked for %s)", sorted(self._names))
            return None

        sample = ActivitySample(cpu_time=cpu_time, handle_count=handles, process_count=matched)
        log.debug(
            "Client sample: cpu=%.2fs handles=%d processes=%d",
            sample.cpu_time, sample.handle_count, sample.process_count,
        )
        return sample
