import logging
from collections import deque
from typing import Deque, List, Tuple

from esper import World

from tileconnect.components.session import SessionPhase
from tileconnect.events.bus import (EventBus, EVENT_MATCH_FOUND, EVENT_MATCH_REJECTED, EVENT_MATCH_QUEUED,
                                    EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED,
                                    EVENT_BOARD_CHANGED, EVENT_ANIMATION_START, EVENT_ANIMATION_COMPLETE,
                                    EVENT_SESSION_RESET, EVENT_SESSION_PHASE_CHANGED)
from tileconnect.systems.animation import cancel_animations
from tileconnect.systems.board_ops import active_tile_type_map, collapse, is_valid_match
from tileconnect.utils.session import session_running

Position = Tuple[int, int]
Pair = Tuple[Position, Position]

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Two-phase commit for confirmed matches.

    ``confirm_match`` queues the pair and starts its fade; ``apply_match`` collapses the
    board once the fade completes. Matches are applied one at a time in confirmation
    order, and only the head of the queue is animating.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.pending: Deque[Pair] = deque()
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)
        self.event_bus.subscribe(EVENT_SESSION_RESET, self.on_session_reset)
        self.event_bus.subscribe(EVENT_SESSION_PHASE_CHANGED, self.on_phase_changed)

    @property
    def animating(self) -> List[Position]:
        if not self.pending:
            return []
        return sorted(self.pending[0])

    def queued_positions(self) -> set[Position]:
        return {pos for pair in self.pending for pos in pair}

    def on_match_found(self, sender, **kwargs):
        positions = kwargs.get('positions') or []
        if len(positions) != 2:
            return
        self.confirm_match(tuple(positions[0]), tuple(positions[1]))

    def confirm_match(self, a: Position, b: Position) -> bool:
        """Queue a validated pair; its fade starts as soon as it reaches the queue head."""
        if not session_running(self.world):
            return False
        if {a, b} & self.queued_positions():
            self.event_bus.emit(EVENT_MATCH_REJECTED, src=a, dst=b, reason='pending_overlap')
            return False
        self.pending.append((a, b))
        logger.debug("Match confirmed %s %s (queue depth %d)", a, b, len(self.pending))
        self.event_bus.emit(EVENT_MATCH_QUEUED, positions=[a, b], depth=len(self.pending))
        if len(self.pending) == 1:
            self._start_fade()
        return True

    def on_animation_complete(self, sender, **kwargs):
        if kwargs.get('kind') != 'fade' or not self.pending:
            return
        items = sorted(tuple(pos) for pos in kwargs.get('items', []))
        if items != self.animating:
            return
        self.apply_match()

    def apply_match(self) -> bool:
        """Collapse the board for the head of the queue.

        Queued pairs follow their tiles as earlier collapses move them. The pair is still
        re-validated against the current board; a pair that no longer matches is dropped.
        Returns True when the board was collapsed.
        """
        if not self.pending:
            return False
        a, b = self.pending.popleft()
        # Called directly (not from the fade completion) the head may still be fading.
        cancel_animations(self.world)
        applied = False
        types = active_tile_type_map(self.world)
        if session_running(self.world) and is_valid_match(self.world, a, b, types=types):
            symbol = types[a]
            _, moves, new_tiles = collapse(self.world, a, b)
            self._follow_moves({a, b}, moves)
            logger.debug("Match applied %s %s symbol=%s moves=%d refill=%d", a, b, symbol, len(moves), len(new_tiles))
            self.event_bus.emit(EVENT_MATCH_CLEARED, positions=[a, b], symbol=symbol)
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles)
            changed = {a, b} | {move.target for move in moves} | set(new_tiles)
            self.event_bus.emit(EVENT_BOARD_CHANGED, reason='match', positions=sorted(changed))
            applied = True
        else:
            self.event_bus.emit(EVENT_MATCH_REJECTED, src=a, dst=b, reason='stale')
        if self.pending:
            self._start_fade()
        return applied

    def on_session_reset(self, sender, **kwargs):
        self.pending.clear()

    def on_phase_changed(self, sender, **kwargs):
        if kwargs.get('new_phase') != SessionPhase.OVER:
            return
        if self.pending:
            logger.debug("Discarding %d pending match(es) at game over", len(self.pending))
        self.pending.clear()
        cancel_animations(self.world)

    def _follow_moves(self, cleared, moves) -> None:
        """Carry queued pairs along with their tiles after a collapse.

        A queued pair touching a cleared cell has lost a tile and is dropped.
        """
        shift = {move.source: move.target for move in moves}
        remapped: Deque[Pair] = deque()
        for pair in self.pending:
            if cleared & set(pair):
                self.event_bus.emit(EVENT_MATCH_REJECTED, src=pair[0], dst=pair[1], reason='stale')
                continue
            remapped.append((shift.get(pair[0], pair[0]), shift.get(pair[1], pair[1])))
        self.pending = remapped

    def _start_fade(self):
        self.event_bus.emit(EVENT_ANIMATION_START, kind='fade', items=list(self.pending[0]))
