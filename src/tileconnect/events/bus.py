from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_KEY_PRESS = "key_press"                      # payload: symbol, modifiers
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col


# ============================================================================
# SELECTION & MATCHING
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, positions=list[(r,c)]
EVENT_TILE_PAIR_REQUEST = "tile_pair_request"      # payload: src=(r,c), dst=(r,c)
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),(r,c)], symbol=str
EVENT_MATCH_REJECTED = "match_rejected"            # payload: src=(r,c), dst=(r,c), reason=str
EVENT_MATCH_QUEUED = "match_queued"                # payload: positions=[(r,c),(r,c)], depth=int


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], symbol=str
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GravityMove]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, positions=list[(r,c)]


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, items=list/positions
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, items=list/positions


# ============================================================================
# SESSION FLOW
# ============================================================================
EVENT_SESSION_START_REQUEST = "session_start_request"      # payload: None
EVENT_SESSION_RESTART_REQUEST = "session_restart_request"  # payload: None
EVENT_SESSION_PHASE_CHANGED = "session_phase_changed"      # payload: previous_phase=SessionPhase|None, new_phase=SessionPhase
EVENT_SESSION_RESET = "session_reset"                      # payload: None
EVENT_COUNTDOWN_TICK = "countdown_tick"                    # payload: remaining=int
EVENT_SCORE_CHANGED = "score_changed"                      # payload: score=int, delta=int, time_remaining=int
