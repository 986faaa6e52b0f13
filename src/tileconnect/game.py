"""Headless assembly of the tile-connect engine.

TileConnectGame wires the world and the engine systems on one event bus and exposes the
boundary a presentation layer needs: read-only snapshots plus start/select/restart
commands and an external clock input.
"""
from __future__ import annotations

import random
from typing import List, Sequence, Tuple

from tileconnect.components.session import SessionPhase
from tileconnect.constants import GRID_COLS, GRID_ROWS, START_TIME_SECONDS
from tileconnect.events.bus import (
    EVENT_SESSION_RESTART_REQUEST,
    EVENT_SESSION_START_REQUEST,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EventBus,
)
from tileconnect.systems.animation import AnimationSystem
from tileconnect.systems.board import BoardSystem
from tileconnect.systems.board_ops import grid_snapshot
from tileconnect.systems.match import MatchSystem
from tileconnect.systems.match_resolution import MatchResolutionSystem
from tileconnect.systems.session_system import SessionSystem
from tileconnect.utils.session import get_session
from tileconnect.world import create_world

Position = Tuple[int, int]


class TileConnectGame:
    def __init__(
        self,
        event_bus: EventBus | None = None,
        *,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        start_time: int = START_TIME_SECONDS,
        symbols: Sequence[str] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world = create_world(symbols=symbols, start_time=start_time, rng=rng)
        self.session_system = SessionSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus, rows=rows, cols=cols)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self.animation_system = AnimationSystem(self.world, self.event_bus)

    # Commands -----------------------------------------------------------

    def start(self) -> None:
        self.event_bus.emit(EVENT_SESSION_START_REQUEST)

    def select_tile(self, row: int, col: int) -> None:
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)

    def restart(self) -> None:
        self.event_bus.emit(EVENT_SESSION_RESTART_REQUEST)

    def tick(self, dt: float) -> None:
        """Advance the external clock by dt seconds."""
        self.event_bus.emit(EVENT_TICK, dt=dt)

    # Snapshots ------------------------------------------------------------

    @property
    def grid(self) -> List[List[str | None]]:
        return grid_snapshot(self.world)

    @property
    def score(self) -> int:
        return get_session(self.world).score

    @property
    def time_remaining(self) -> int:
        return get_session(self.world).time_remaining

    @property
    def phase(self) -> SessionPhase:
        return get_session(self.world).phase

    @property
    def selected(self) -> List[Position]:
        return list(self.board_system.selected)

    @property
    def animating(self) -> List[Position]:
        return self.match_resolution_system.animating
