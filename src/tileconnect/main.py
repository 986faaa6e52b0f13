"""Entry point for the Tile Connect puzzle.

Sets up the engine, event bus, presentation systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color
from rich.logging import RichHandler

from tileconnect.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from tileconnect.events.bus import EventBus, EVENT_KEY_PRESS, EVENT_MOUSE_PRESS
from tileconnect.game import TileConnectGame
from tileconnect.systems.input import InputSystem
from tileconnect.systems.render import RenderSystem


class TileConnectWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Tile Connect")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.game = TileConnectGame(self.event_bus)
        self.render_system = RenderSystem(self.game.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.game.world)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.game.tick(delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    logging.basicConfig(
        level="INFO", format="%(message)s", datefmt="[%X]", handlers=[RichHandler()]
    )
    TileConnectWindow()
    run()

if __name__ == "__main__":
    main()
