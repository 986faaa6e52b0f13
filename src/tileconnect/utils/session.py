from __future__ import annotations

from esper import World

from tileconnect.components.session import Session, SessionPhase
from tileconnect.events.bus import EVENT_SESSION_PHASE_CHANGED, EventBus


def get_session(world: World) -> Session:
    for _, session in world.get_component(Session):
        return session
    raise RuntimeError("Session resource not found")


def session_running(world: World) -> bool:
    for _, session in world.get_component(Session):
        return session.phase == SessionPhase.RUNNING
    return False


def set_session_phase(world: World, event_bus: EventBus, phase: SessionPhase) -> bool:
    """Update the session phase and emit a change event when it differs.

    Returns True when the phase actually changed.
    """
    session = get_session(world)
    previous_phase = session.phase
    if previous_phase == phase:
        return False
    session.phase = phase
    event_bus.emit(
        EVENT_SESSION_PHASE_CHANGED,
        previous_phase=previous_phase,
        new_phase=phase,
    )
    return True
