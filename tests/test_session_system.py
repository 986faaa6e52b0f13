import random

import pytest

from tileconnect.components.session import Session, SessionPhase
from tileconnect.events.bus import (
    EventBus,
    EVENT_COUNTDOWN_TICK,
    EVENT_MATCH_CLEARED,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_PHASE_CHANGED,
    EVENT_SESSION_RESET,
    EVENT_TICK,
)
from tileconnect.systems.session_system import SessionSystem
from tileconnect.utils.session import get_session
from tileconnect.world import create_world

from tests.helpers import drive_ticks


@pytest.fixture
def setup():
    bus = EventBus(); world = create_world(rng=random.Random(0))
    system = SessionSystem(world, bus)
    return bus, world, system


def test_initial_session_state(setup):
    _, world, _ = setup
    session = get_session(world)
    assert session.score == 0
    assert session.time_remaining == 60
    assert session.phase == SessionPhase.NOT_STARTED


def test_start_transitions_to_running_and_emits(setup):
    bus, world, system = setup
    changes = []
    bus.subscribe(EVENT_SESSION_PHASE_CHANGED, lambda s, **k: changes.append((k['previous_phase'], k['new_phase'])))
    assert system.start()
    assert get_session(world).phase == SessionPhase.RUNNING
    assert changes == [(SessionPhase.NOT_STARTED, SessionPhase.RUNNING)]
    # Starting twice is ignored.
    assert not system.start()
    assert len(changes) == 1


def test_timer_does_not_tick_before_start(setup):
    bus, world, _ = setup
    bus.emit(EVENT_TICK, dt=5.0)
    assert get_session(world).time_remaining == 60


def test_countdown_accumulates_frame_ticks(setup):
    bus, world, system = setup
    system.start()
    seconds = []
    bus.subscribe(EVENT_COUNTDOWN_TICK, lambda s, **k: seconds.append(k['remaining']))
    drive_ticks(bus, count=10, dt=0.25)
    assert get_session(world).time_remaining == 58
    assert seconds == [59, 58]


def test_large_tick_consumes_several_seconds(setup):
    bus, world, system = setup
    system.start()
    bus.emit(EVENT_TICK, dt=3.5)
    assert get_session(world).time_remaining == 57


def test_reaching_zero_ends_session(setup):
    bus, world, system = setup
    system.start()
    get_session(world).time_remaining = 1
    bus.emit(EVENT_TICK, dt=1.0)
    session = get_session(world)
    assert session.time_remaining == 0
    assert session.phase == SessionPhase.OVER


def test_time_never_negative_and_stops_when_over(setup):
    bus, world, system = setup
    system.start()
    get_session(world).time_remaining = 2
    bus.emit(EVENT_TICK, dt=10.0)
    assert get_session(world).time_remaining == 0
    bus.emit(EVENT_TICK, dt=10.0)
    assert get_session(world).time_remaining == 0
    assert get_session(world).phase == SessionPhase.OVER


def test_start_not_allowed_from_over(setup):
    bus, world, system = setup
    system.start()
    get_session(world).time_remaining = 1
    bus.emit(EVENT_TICK, dt=1.0)
    assert not system.start()
    assert get_session(world).phase == SessionPhase.OVER


def test_match_cleared_adds_score_and_time(setup):
    bus, world, system = setup
    system.start()
    scores = []
    bus.subscribe(EVENT_SCORE_CHANGED, lambda s, **k: scores.append(k))
    bus.emit(EVENT_MATCH_CLEARED, positions=[(0, 0), (0, 1)], symbol='A')
    session = get_session(world)
    assert session.score == 5
    assert session.time_remaining == 61
    assert scores == [{'score': 5, 'delta': 5, 'time_remaining': 61}]


def test_match_cleared_ignored_unless_running(setup):
    bus, world, _ = setup
    bus.emit(EVENT_MATCH_CLEARED, positions=[(0, 0), (0, 1)], symbol='A')
    assert get_session(world).score == 0


@pytest.mark.parametrize("phase_driver", ["not_started", "running", "over"])
def test_restart_always_resets(setup, phase_driver):
    bus, world, system = setup
    if phase_driver in ("running", "over"):
        system.start()
        bus.emit(EVENT_MATCH_CLEARED, positions=[(0, 0), (0, 1)], symbol='A')
        bus.emit(EVENT_TICK, dt=0.5)
    if phase_driver == "over":
        get_session(world).time_remaining = 1
        bus.emit(EVENT_TICK, dt=1.0)
    resets = []
    bus.subscribe(EVENT_SESSION_RESET, lambda s, **k: resets.append(True))
    system.restart()
    session = get_session(world)
    assert (session.score, session.time_remaining, session.phase) == (0, 60, SessionPhase.NOT_STARTED)
    assert resets == [True]


def test_restart_clears_partial_second(setup):
    bus, world, system = setup
    system.start()
    bus.emit(EVENT_TICK, dt=0.9)
    system.restart()
    system.start()
    bus.emit(EVENT_TICK, dt=0.2)
    assert get_session(world).time_remaining == 60


def test_session_component_uses_slots():
    session = Session()
    assert not hasattr(session, '__dict__')
    with pytest.raises(AttributeError):
        session.bonus = 1
