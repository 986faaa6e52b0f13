from typing import Tuple

from esper import World

from tileconnect.events.bus import EventBus, EVENT_TILE_PAIR_REQUEST, EVENT_MATCH_FOUND, EVENT_MATCH_REJECTED
from tileconnect.systems.board_ops import active_tile_type_map, is_connectable, is_valid_match


class MatchSystem:
    """Validates completed pairs against the connection rule and symbol equality."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_PAIR_REQUEST, self.on_pair_request)

    def on_pair_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        types = active_tile_type_map(self.world)
        if is_valid_match(self.world, src, dst, types=types):
            self.event_bus.emit(EVENT_MATCH_FOUND, positions=[src, dst], symbol=types[src])
        else:
            self.event_bus.emit(EVENT_MATCH_REJECTED, src=src, dst=dst, reason=self._reject_reason(src, dst, types))

    def _reject_reason(self, a: Tuple[int, int], b: Tuple[int, int], types) -> str:
        if a == b:
            return 'same_tile'
        if not is_connectable(self.world, a, b, types=types):
            return 'not_connected'
        return 'symbol_mismatch'
