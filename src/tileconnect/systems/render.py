from typing import Dict, Tuple

from esper import World

from tileconnect.components.animation_fade import FadeAnimation
from tileconnect.components.session import SessionPhase
from tileconnect.events.bus import (EventBus, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED,
                                    EVENT_SESSION_RESET)
from tileconnect.rendering.board_renderer import BoardRenderer
from tileconnect.rendering.overlay_renderer import OverlayRenderer
from tileconnect.systems.board_ops import active_tile_type_map, board_dimensions, get_tile_registry
from tileconnect.ui.layout import compute_board_geometry
from tileconnect.utils.session import get_session

PADDING = 4

BoardPos = Tuple[int, int]


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.event_bus.subscribe(EVENT_SESSION_RESET, self.on_tile_deselected)
        self.selected: BoardPos | None = None
        self._board_renderer = BoardRenderer(self, padding=PADDING)
        self._overlay_renderer = OverlayRenderer(self)

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None

    def build_tile_layout(self) -> Dict[BoardPos, Tuple[float, float, int]]:
        """(left, bottom, size) in window coordinates for every board cell."""
        dims = board_dimensions(self.world)
        if dims is None:
            return {}
        rows, cols = dims
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        layout: Dict[BoardPos, Tuple[float, float, int]] = {}
        for row in range(rows):
            for col in range(cols):
                layout[(row, col)] = (start_x + col * tile_size, start_y + (rows - 1 - row) * tile_size, tile_size)
        return layout

    def fade_alphas(self) -> Dict[BoardPos, float]:
        return {fade.pos: fade.alpha for _, fade in self.world.get_component(FadeAnimation)}

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        layout = self.build_tile_layout()
        if headless:
            return
        session = get_session(self.world)
        if session.phase == SessionPhase.NOT_STARTED:
            self._overlay_renderer.render_start_screen(arcade)
            return
        self._overlay_renderer.render_hud(arcade, session)
        self._board_renderer.render(
            arcade,
            layout,
            active_tile_type_map(self.world),
            get_tile_registry(self.world),
            self.fade_alphas(),
        )
        if session.phase == SessionPhase.OVER:
            self._overlay_renderer.render_game_over(arcade, session)
