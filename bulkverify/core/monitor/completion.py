"""
Completion detection for a single validation run.

Steam raises no event when a validation finishes, so completion is
inferred: once the client's summed CPU time and handle count stop moving
by more than ``noise_threshold`` for ``idle_threshold_seconds``, the run is
considered COMPLETED. Runs that never settle end as TIMED_OUT after
``timeout_seconds``; a vanished client ends the run as ABORTED.

The functions here are pure: the caller owns the clock and the sampler
and threads the returned MonitorState into the next call.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .types import ActivitySample, MonitorConfig, MonitorOutcome, MonitorState


def begin_monitoring(sample: ActivitySample, now: float) -> MonitorState:
    return MonitorState(last_sample=sample, last_change=now, run_start=now)


def advance(
    state: MonitorState,
    sample: Optional[ActivitySample],
    now: float,
    cfg: MonitorConfig,
) -> Tuple[Optional[MonitorOutcome], MonitorState]:
    """
    Fold one poll into the state.

    Returns (outcome, new_state); outcome is None while monitoring should
    continue.
    """
    if sample is None:
        return "ABORTED", state

    last_change = state.last_change
    if sample.delta(state.last_sample) > cfg.noise_threshold:
        last_change = now

    new_state = MonitorState(last_sample=sample, last_change=last_change, run_start=state.run_start)

    if now - last_change >= cfg.idle_threshold_seconds:
        return "COMPLETED", new_state
    if now - state.run_start >= cfg.timeout_seconds:
        return "TIMED_OUT", new_state
    return None, new_state
