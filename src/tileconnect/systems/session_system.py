"""Countdown, scoring and lifecycle of a timed session."""
from __future__ import annotations

import logging

from esper import World

from tileconnect.components.session import SessionPhase
from tileconnect.constants import MATCH_SCORE, MATCH_TIME_BONUS, START_TIME_SECONDS
from tileconnect.events.bus import (
    EVENT_COUNTDOWN_TICK,
    EVENT_MATCH_CLEARED,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_RESET,
    EVENT_SESSION_RESTART_REQUEST,
    EVENT_SESSION_START_REQUEST,
    EVENT_TICK,
    EventBus,
)
from tileconnect.utils.session import get_session, set_session_phase

logger = logging.getLogger(__name__)


class SessionSystem:
    """Drives NOT_STARTED -> RUNNING -> OVER and the per-second countdown.

    Frame ticks are accumulated into whole seconds; each second costs one unit of
    remaining time and reaching zero ends the session. Applied matches add score and
    bonus time.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        match_score: int = MATCH_SCORE,
        match_time_bonus: int = MATCH_TIME_BONUS,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.match_score = match_score
        self.match_time_bonus = match_time_bonus
        self._elapsed = 0.0

        self.event_bus.subscribe(EVENT_SESSION_START_REQUEST, self._on_start_request)
        self.event_bus.subscribe(EVENT_SESSION_RESTART_REQUEST, self._on_restart_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Begin the countdown; only valid from NOT_STARTED."""
        session = get_session(self.world)
        if session.phase != SessionPhase.NOT_STARTED:
            return False
        self._elapsed = 0.0
        logger.info("Session started with %ds on the clock", session.time_remaining)
        return set_session_phase(self.world, self.event_bus, SessionPhase.RUNNING)

    def restart(self) -> None:
        """Reset score, clock and board; reachable from any phase."""
        session = get_session(self.world)
        logger.info("Session restarted (previous score %d)", session.score)
        self._elapsed = 0.0
        session.score = 0
        session.time_remaining = getattr(self.world, "start_time", START_TIME_SECONDS)
        set_session_phase(self.world, self.event_bus, SessionPhase.NOT_STARTED)
        self.event_bus.emit(EVENT_SESSION_RESET)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_start_request(self, sender, **payload) -> None:
        self.start()

    def _on_restart_request(self, sender, **payload) -> None:
        self.restart()

    def on_tick(self, sender, **payload) -> None:
        session = get_session(self.world)
        if session.phase != SessionPhase.RUNNING:
            return
        dt = payload.get("dt", 1 / 60)
        self._elapsed += dt
        while self._elapsed >= 1.0 and session.phase == SessionPhase.RUNNING:
            self._elapsed -= 1.0
            session.time_remaining = max(0, session.time_remaining - 1)
            self.event_bus.emit(EVENT_COUNTDOWN_TICK, remaining=session.time_remaining)
            if session.time_remaining == 0:
                self._elapsed = 0.0
                logger.info("Time up; final score %d", session.score)
                set_session_phase(self.world, self.event_bus, SessionPhase.OVER)

    def on_match_cleared(self, sender, **payload) -> None:
        session = get_session(self.world)
        if session.phase != SessionPhase.RUNNING:
            return
        session.score += self.match_score
        session.time_remaining += self.match_time_bonus
        self.event_bus.emit(
            EVENT_SCORE_CHANGED,
            score=session.score,
            delta=self.match_score,
            time_remaining=session.time_remaining,
        )
