"""Resolver lifecycle state machine."""

from __future__ import annotations

from enum import Enum, auto
import logging


class ResolverState(Enum):
    UNINITIALIZED = auto()
    BASELINE_ACTIVE = auto()
    RECONCILING = auto()
    REMOTE_ACTIVE = auto()
    CACHE_ACTIVE = auto()


class ResolverEvent(Enum):
    INITIALIZE = auto()
    RECONCILE = auto()
    REMOTE_ADOPTED = auto()
    CACHE_ADOPTED = auto()
    BASELINE_KEPT = auto()
    CACHE_KEPT = auto()
    REMOTE_KEPT = auto()
    OVERRIDE_PUBLISHED = auto()


_TRANSITIONS = {
    ResolverState.UNINITIALIZED: {
        ResolverEvent.INITIALIZE: ResolverState.BASELINE_ACTIVE,
    },
    ResolverState.BASELINE_ACTIVE: {
        ResolverEvent.RECONCILE: ResolverState.RECONCILING,
        ResolverEvent.OVERRIDE_PUBLISHED: ResolverState.REMOTE_ACTIVE,
    },
    ResolverState.RECONCILING: {
        ResolverEvent.REMOTE_ADOPTED: ResolverState.REMOTE_ACTIVE,
        ResolverEvent.CACHE_ADOPTED: ResolverState.CACHE_ACTIVE,
        ResolverEvent.BASELINE_KEPT: ResolverState.BASELINE_ACTIVE,
        ResolverEvent.CACHE_KEPT: ResolverState.CACHE_ACTIVE,
        ResolverEvent.REMOTE_KEPT: ResolverState.REMOTE_ACTIVE,
        ResolverEvent.OVERRIDE_PUBLISHED: ResolverState.REMOTE_ACTIVE,
    },
    ResolverState.REMOTE_ACTIVE: {
        ResolverEvent.RECONCILE: ResolverState.RECONCILING,
        ResolverEvent.OVERRIDE_PUBLISHED: ResolverState.REMOTE_ACTIVE,
    },
    ResolverState.CACHE_ACTIVE: {
        ResolverEvent.RECONCILE: ResolverState.RECONCILING,
        ResolverEvent.OVERRIDE_PUBLISHED: ResolverState.REMOTE_ACTIVE,
    },
}


class ResolverStateMachine:
    def __init__(self):
        self.state = ResolverState.UNINITIALIZED

    def transition(self, event: ResolverEvent) -> ResolverState:
        allowed = _TRANSITIONS.get(self.state, {})
        if event not in allowed:
            logging.getLogger(__name__).warning(
                "Ignoring resolver event %s in state %s", event, self.state
            )
            return self.state
        self.state = allowed[event]
        return self.state
