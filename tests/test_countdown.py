from focusdesk.core import countdown
from focusdesk.core.countdown import CountdownPhase, CountdownState, parse_duration_minutes, project


T0 = 1_700_000_000_000


def running(baseline: int = 1500, configured: int = 1500, start_ms: int = T0) -> CountdownState:
    return CountdownState(
        is_running=True,
        start_instant_ms=start_ms,
        baseline_remaining_sec=baseline,
        configured_duration_sec=configured,
    )


def test_default_state_is_idle_25_minutes() -> None:
    state = CountdownState()
    snapshot = project(state, T0)

    assert state.phase == CountdownPhase.IDLE
    assert snapshot.remaining_seconds == 1500
    assert (snapshot.minutes, snapshot.seconds) == (25, 0)
    assert snapshot.clock_text == "25:00"
    assert snapshot.progress == 1.0


def test_projection_is_monotonic_while_running() -> None:
    state = running()
    previous = project(state, T0).remaining_seconds
    for offset_ms in range(0, 1_700_000, 700):
        remaining = project(state, T0 + offset_ms).remaining_seconds
        assert remaining <= previous
        previous = remaining
    assert previous == 0


def test_projection_never_negative_nor_above_configured() -> None:
    states = [
        CountdownState(),
        running(),
        running(baseline=30, configured=600),
        CountdownState(baseline_remaining_sec=0, configured_duration_sec=60),
    ]
    instants = [T0 - 3_600_000, T0 - 1, T0, T0 + 999, T0 + 1000, T0 + 86_400_000 * 30]
    for state in states:
        for now in instants:
            snapshot = project(state, now)
            assert 0 <= snapshot.remaining_seconds <= state.configured_duration_sec
            assert 0.0 <= snapshot.progress <= 1.0


def test_clock_running_backwards_does_not_add_time() -> None:
    assert project(running(), T0 - 120_000).remaining_seconds == 1500


def test_elapsed_is_floored_to_whole_seconds() -> None:
    state = running()
    assert project(state, T0 + 999).remaining_seconds == 1500
    assert project(state, T0 + 1000).remaining_seconds == 1499
    assert project(state, T0 + 61_500).clock_text == "23:59"


def test_pause_resume_fidelity() -> None:
    state = countdown.start(CountdownState(), T0)
    state = countdown.pause(state, T0 + 70_000)

    assert state.is_running is False
    assert state.start_instant_ms is None
    assert state.baseline_remaining_sec == 1430
    assert project(state, T0 + 150_000).remaining_seconds == 1430

    state = countdown.start(state, T0 + 200_000)
    assert project(state, T0 + 300_000).remaining_seconds == 1330


def test_long_suspension_reports_zero() -> None:
    state = running()
    snapshot = project(state, T0 + 3_600_000)

    assert snapshot.remaining_seconds == 0
    assert snapshot.is_finished is True


def test_reload_survival_and_single_completion() -> None:
    persisted = running().to_dict()
    rehydrated = CountdownState.from_dict(persisted)

    assert rehydrated == running()
    assert project(rehydrated, T0 + 1_500_000).remaining_seconds == 0

    done = countdown.complete(rehydrated, T0 + 1_500_000)
    assert done.phase == CountdownPhase.COMPLETED
    assert done.baseline_remaining_sec == 0
    assert done.last_completion_ms == T0 + 1_500_000
    assert countdown.complete(done, T0 + 1_501_000) is done


def test_complete_requires_zero_remaining() -> None:
    state = running()
    assert countdown.complete(state, T0 + 10_000) is state
    idle = CountdownState()
    assert countdown.complete(idle, T0 + 5_000_000) is idle


def test_reconfigure_while_running_resets_to_new_duration() -> None:
    state = countdown.reconfigure(running(), 10)

    assert state.is_running is False
    assert state.start_instant_ms is None
    assert state.configured_duration_sec == 600
    assert state.baseline_remaining_sec == 600


def test_reconfigure_with_unusable_input_falls_back_to_25() -> None:
    state = countdown.reconfigure(CountdownState(configured_duration_sec=300, baseline_remaining_sec=10), "soon")
    assert state.configured_duration_sec == 1500
    assert state.baseline_remaining_sec == 1500


def test_reset_restores_configured_duration() -> None:
    state = countdown.pause(running(baseline=900, configured=900), T0 + 300_000)
    assert state.baseline_remaining_sec == 600

    state = countdown.reset(state)
    assert state.baseline_remaining_sec == 900
    assert state.is_running is False


def test_start_guards() -> None:
    at_zero = CountdownState(baseline_remaining_sec=0)
    assert countdown.start(at_zero, T0) is at_zero

    already = running()
    assert countdown.start(already, T0 + 5_000) is already

    idle = CountdownState()
    assert countdown.pause(idle, T0) is idle


def test_configured_duration_unchanged_by_running_and_pausing() -> None:
    state = countdown.reconfigure(CountdownState(), 15)
    state = countdown.start(state, T0)
    state = countdown.pause(state, T0 + 42_000)
    state = countdown.start(state, T0 + 50_000)

    assert state.configured_duration_sec == 900


def test_parse_duration_minutes() -> None:
    assert parse_duration_minutes(10) == 10
    assert parse_duration_minutes("45") == 45
    assert parse_duration_minutes(" 12abc") == 12
    assert parse_duration_minutes(300) == 300
    assert parse_duration_minutes(7.9) == 7
    assert parse_duration_minutes("") == 25
    assert parse_duration_minutes("abc") == 25
    assert parse_duration_minutes("0") == 25
    assert parse_duration_minutes(301) == 25
    assert parse_duration_minutes(-5) == 25
    assert parse_duration_minutes(None) == 25
    assert parse_duration_minutes(True) == 25
    assert parse_duration_minutes(float("nan")) == 25


def test_from_dict_recovers_from_malformed_records() -> None:
    default = CountdownState()
    assert CountdownState.from_dict(None) == default
    assert CountdownState.from_dict("{not json") == default
    assert CountdownState.from_dict([1, 2, 3]) == default
    assert CountdownState.from_dict({"is_running": True, "start_instant_ms": None}) == default
    assert CountdownState.from_dict({"is_running": False, "start_instant_ms": T0}) == default
    assert CountdownState.from_dict({"baseline_remaining_sec": 900, "configured_duration_sec": 600}) == default
    assert CountdownState.from_dict({"configured_duration_sec": "600"}) == default
    assert CountdownState.from_dict({"is_running": "yes"}) == default


def test_from_dict_accepts_partial_idle_record() -> None:
    state = CountdownState.from_dict({"baseline_remaining_sec": 120, "configured_duration_sec": 600})
    assert state.baseline_remaining_sec == 120
    assert state.configured_duration_sec == 600
    assert state.is_running is False


def test_from_dict_rejects_non_finite_timestamps() -> None:
    default = CountdownState()
    assert CountdownState.from_dict({"is_running": True, "start_instant_ms": float("nan")}) == default
    assert CountdownState.from_dict({"is_running": True, "start_instant_ms": float("inf")}) == default
    assert CountdownState.from_dict({"last_completion_ms": float("-inf")}) == default
    assert CountdownState.from_dict({"is_running": True, "start_instant_ms": float(T0)}).start_instant_ms == T0
