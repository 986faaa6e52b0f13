import logging
from typing import List, Tuple

from esper import World

from tileconnect.components.session import SessionPhase
from tileconnect.constants import GRID_COLS, GRID_ROWS
from tileconnect.events.bus import (
    EventBus,
    EVENT_SESSION_PHASE_CHANGED,
    EVENT_SESSION_RESET,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_PAIR_REQUEST,
    EVENT_TILE_SELECTED,
)
from tileconnect.systems.board_ops import check_position, respawn_full_board, spawn_board
from tileconnect.utils.session import session_running

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and the player's pending tile selection.

    A first click stores the tile; a second click forms a pair, clears the selection and
    hands the pair to MatchSystem through EVENT_TILE_PAIR_REQUEST whatever the outcome.
    """

    MAX_SELECTION = 2

    def __init__(self, world: World, event_bus: EventBus, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = spawn_board(world, rows, cols)
        self.selected: List[Tuple[int, int]] = []
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_SESSION_RESET, self.on_session_reset)
        self.event_bus.subscribe(EVENT_SESSION_PHASE_CHANGED, self.on_phase_changed)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select((row, col))

    def select(self, pos: Tuple[int, int]) -> None:
        """Add pos to the selection; ignored unless the session is running."""
        if not session_running(self.world):
            return
        check_position(self.world, pos)
        if not self.selected:
            self.selected.append(pos)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=pos[0], col=pos[1])
            return
        self.selected.append(pos)
        assert len(self.selected) <= self.MAX_SELECTION, f"selection overflow: {self.selected}"
        src, dst = self.selected
        self._clear_selection(reason='pair')
        logger.debug("Pair requested %s -> %s", src, dst)
        self.event_bus.emit(EVENT_TILE_PAIR_REQUEST, src=src, dst=dst)

    def on_session_reset(self, sender, **kwargs):
        self._clear_selection(reason='reset')
        respawn_full_board(self.world)

    def on_phase_changed(self, sender, **kwargs):
        if kwargs.get('new_phase') == SessionPhase.OVER:
            self._clear_selection(reason='game_over')

    def _clear_selection(self, reason: str) -> None:
        if not self.selected:
            return
        previous = list(self.selected)
        self.selected.clear()
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, positions=previous)
