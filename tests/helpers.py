from __future__ import annotations

import random
from typing import Sequence

from esper import World

from tileconnect.components.active_switch import ActiveSwitch
from tileconnect.components.session import SessionPhase
from tileconnect.components.tile import TileType
from tileconnect.events.bus import EVENT_TICK, EventBus
from tileconnect.game import TileConnectGame
from tileconnect.systems.board_ops import get_entity_at
from tileconnect.utils.session import get_session

SYMBOLS = ['A', 'B', 'C', 'D', 'E', 'F']


class DummyWindow:
    def __init__(self, width=480, height=720):
        self.width = width
        self.height = height


def drive_ticks(bus: EventBus, count=40, dt=0.02):
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def striped_layout(rows: int, cols: int) -> list[list[str]]:
    """Layout where no two orthogonal neighbours and no two top-row tiles share a symbol."""
    return [[SYMBOLS[(r * 2 + c) % len(SYMBOLS)] for c in range(cols)] for r in range(rows)]


def set_layout(world: World, layout: Sequence[Sequence[str | None]]) -> None:
    """Overwrite the board; None marks an empty cell."""
    for row, values in enumerate(layout):
        for col, symbol in enumerate(values):
            set_symbol(world, row, col, symbol)


def set_symbol(world: World, row: int, col: int, symbol: str | None) -> None:
    ent = get_entity_at(world, row, col)
    assert ent is not None
    if symbol is None:
        world.component_for_entity(ent, ActiveSwitch).active = False
        return
    world.component_for_entity(ent, TileType).type_name = symbol
    world.component_for_entity(ent, ActiveSwitch).active = True


def make_game(seed: int = 0, *, rows: int = 9, cols: int = 6, striped: bool = True) -> TileConnectGame:
    game = TileConnectGame(rows=rows, cols=cols, symbols=SYMBOLS, rng=random.Random(seed))
    if striped:
        set_layout(game.world, striped_layout(rows, cols))
    return game


def running_game(seed: int = 0, **kwargs) -> TileConnectGame:
    game = make_game(seed, **kwargs)
    game.start()
    assert get_session(game.world).phase == SessionPhase.RUNNING
    return game
