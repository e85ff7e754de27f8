from skyline_config.core.state_machine import ResolverEvent, ResolverState, ResolverStateMachine


def test_state_machine_remote_path():
    sm = ResolverStateMachine()
    assert sm.state == ResolverState.UNINITIALIZED

    sm.transition(ResolverEvent.INITIALIZE)
    assert sm.state == ResolverState.BASELINE_ACTIVE

    sm.transition(ResolverEvent.RECONCILE)
    assert sm.state == ResolverState.RECONCILING

    sm.transition(ResolverEvent.REMOTE_ADOPTED)
    assert sm.state == ResolverState.REMOTE_ACTIVE


def test_state_machine_fallbacks():
    sm = ResolverStateMachine()
    sm.transition(ResolverEvent.INITIALIZE)
    sm.transition(ResolverEvent.RECONCILE)
    sm.transition(ResolverEvent.CACHE_ADOPTED)
    assert sm.state == ResolverState.CACHE_ACTIVE

    sm = ResolverStateMachine()
    sm.transition(ResolverEvent.INITIALIZE)
    sm.transition(ResolverEvent.RECONCILE)
    sm.transition(ResolverEvent.BASELINE_KEPT)
    assert sm.state == ResolverState.BASELINE_ACTIVE


def test_publish_enters_remote_active_from_any_ready_state():
    for setup in (
        [],
        [ResolverEvent.RECONCILE, ResolverEvent.CACHE_ADOPTED],
        [ResolverEvent.RECONCILE, ResolverEvent.REMOTE_ADOPTED],
    ):
        sm = ResolverStateMachine()
        sm.transition(ResolverEvent.INITIALIZE)
        for event in setup:
            sm.transition(event)
        assert sm.transition(ResolverEvent.OVERRIDE_PUBLISHED) == ResolverState.REMOTE_ACTIVE


def test_invalid_transition_keeps_state(caplog):
    sm = ResolverStateMachine()
    sm.transition(ResolverEvent.REMOTE_ADOPTED)
    assert sm.state == ResolverState.UNINITIALIZED
    assert "Ignoring resolver event" in caplog.text


def test_reconcile_without_result_returns_to_current_source_state():
    for adopted, kept, expected in (
        (ResolverEvent.CACHE_ADOPTED, ResolverEvent.CACHE_KEPT, ResolverState.CACHE_ACTIVE),
        (ResolverEvent.REMOTE_ADOPTED, ResolverEvent.REMOTE_KEPT, ResolverState.REMOTE_ACTIVE),
    ):
        sm = ResolverStateMachine()
        sm.transition(ResolverEvent.INITIALIZE)
        sm.transition(ResolverEvent.RECONCILE)
        sm.transition(adopted)
        sm.transition(ResolverEvent.RECONCILE)
        assert sm.transition(kept) == expected
