from bulkverify.core.monitor.completion import advance, begin_monitoring
from bulkverify.core.monitor.types import ActivitySample, MonitorConfig


def _sample(cpu: float, handles: int = 100) -> ActivitySample:
    return ActivitySample(cpu_time=cpu, handle_count=handles)


def test_completes_after_idle_threshold_without_change(monitor_cfg) -> None:
    state = begin_monitoring(_sample(5.0), now=0.0)
    for t in (1.0, 2.0, 3.0, 4.0):
        outcome, state = advance(state, _sample(5.0), t, monitor_cfg)
        assert outcome is None
    outcome, state = advance(state, _sample(5.0), 5.0, monitor_cfg)
    assert outcome == "COMPLETED"


def test_activity_resets_idle_timer(monitor_cfg) -> None:
    state = begin_monitoring(_sample(5.0), now=0.0)
    outcome, state = advance(state, _sample(5.0), 1.0, monitor_cfg)
    outcome, state = advance(state, _sample(9.0), 3.0, monitor_cfg)
    assert outcome is None
    assert state.last_change == 3.0

    for t in (4.0, 5.0, 6.0, 7.0):
        outcome, state = advance(state, _sample(9.0), t, monitor_cfg)
        assert outcome is None
    outcome, _ = advance(state, _sample(9.0), 8.0, monitor_cfg)
    assert outcome == "COMPLETED"


def test_handle_count_change_counts_as_activity(monitor_cfg) -> None:
    state = begin_monitoring(_sample(5.0, handles=100), now=0.0)
    outcome, state = advance(state, _sample(5.0, handles=104), 4.0, monitor_cfg)
    assert outcome is None
    assert state.last_change == 4.0


def test_delta_at_noise_threshold_is_not_activity() -> None:
    cfg = MonitorConfig(
        grace_delay_seconds=0,
        poll_interval_seconds=1,
        idle_threshold_seconds=5,
        timeout_seconds=60,
        noise_threshold=0.25,
    )
    state = begin_monitoring(_sample(0.5), now=0.0)
    outcome, state = advance(state, _sample(0.75), 2.0, cfg)
    assert state.last_change == 0.0
    outcome, state = advance(state, _sample(1.25), 3.0, cfg)
    assert state.last_change == 3.0


def test_times_out_when_activity_never_settles(monitor_cfg) -> None:
    state = begin_monitoring(_sample(0.0), now=0.0)
    outcome = None
    t = 0.0
    while outcome is None:
        t += 1.0
        outcome, state = advance(state, _sample(t), t, monitor_cfg)
    assert outcome == "TIMED_OUT"
    assert t == monitor_cfg.timeout_seconds


def test_idle_wins_when_both_limits_are_reached() -> None:
    cfg = MonitorConfig(
        grace_delay_seconds=0,
        poll_interval_seconds=1,
        idle_threshold_seconds=5,
        timeout_seconds=5,
        noise_threshold=0.01,
    )
    state = begin_monitoring(_sample(1.0), now=0.0)
    outcome, _ = advance(state, _sample(1.0), 5.0, cfg)
    assert outcome == "COMPLETED"


def test_missing_sample_aborts(monitor_cfg) -> None:
    state = begin_monitoring(_sample(1.0), now=0.0)
    outcome, same = advance(state, None, 1.0, monitor_cfg)
    assert outcome == "ABORTED"
    assert same == state


def test_new_sample_replaces_stored_one(monitor_cfg) -> None:
    state = begin_monitoring(_sample(1.0), now=0.0)
    _, state = advance(state, _sample(2.0), 1.0, monitor_cfg)
    assert state.last_sample == _sample(2.0)
    assert state.run_start == 0.0
