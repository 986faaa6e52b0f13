from tileconnect.components.session import SessionPhase
from tileconnect.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_SESSION_RESTART_REQUEST,
    EVENT_SESSION_START_REQUEST,
    EVENT_TILE_CLICK,
)
from tileconnect.systems.board_ops import board_dimensions
from tileconnect.ui.layout import overlay_button_rect, point_in_rect, tile_at_point
from tileconnect.utils.session import get_session

# arcade.key values; kept as literals so input mapping stays importable without arcade.
KEY_RETURN = 65293
KEY_ENTER = 65421
KEY_R = 114


class InputSystem:
    """Translates raw window input into engine commands for the current session phase."""

    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Left button only.
        if button != 1:
            return
        phase = get_session(self.world).phase
        if phase == SessionPhase.NOT_STARTED:
            if point_in_rect(x, y, overlay_button_rect(self.window.width, self.window.height)):
                self.event_bus.emit(EVENT_SESSION_START_REQUEST)
            return
        if phase == SessionPhase.OVER:
            if point_in_rect(x, y, overlay_button_rect(self.window.width, self.window.height)):
                self.event_bus.emit(EVENT_SESSION_RESTART_REQUEST)
            return
        dims = board_dimensions(self.world)
        if dims is None:
            return
        rows, cols = dims
        hit = tile_at_point(x, y, self.window.width, self.window.height, rows, cols)
        if hit is not None:
            self.event_bus.emit(EVENT_TILE_CLICK, row=hit[0], col=hit[1])

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        phase = get_session(self.world).phase
        if phase == SessionPhase.NOT_STARTED and symbol in (KEY_ENTER, KEY_RETURN):
            self.event_bus.emit(EVENT_SESSION_START_REQUEST)
        elif phase == SessionPhase.OVER and symbol in (KEY_R, KEY_ENTER, KEY_RETURN):
            self.event_bus.emit(EVENT_SESSION_RESTART_REQUEST)
