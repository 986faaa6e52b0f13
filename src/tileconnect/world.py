import random
from typing import Dict, Sequence, Tuple

from esper import World

from tileconnect.components.session import Session
from tileconnect.components.tile_type_registry import TileTypeRegistry
from tileconnect.components.tile_types import TileTypes
from tileconnect.constants import START_TIME_SECONDS, TILE_COLORS, TILE_SYMBOLS


def create_world(
    *,
    symbols: Sequence[str] | None = None,
    colors: Dict[str, Tuple[int, int, int]] | None = None,
    start_time: int = START_TIME_SECONDS,
    rng: random.Random | None = None,
) -> World:
    """Create a world holding the session resource and the symbol palette.

    The board itself is spawned by BoardSystem so its dimensions stay configurable per game.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "start_time", start_time)

    world.create_entity(Session(time_remaining=start_time))

    palette = list(symbols) if symbols else list(TILE_SYMBOLS)
    tints = colors or TILE_COLORS
    # Symbols without a configured tint fall back to a neutral grey.
    types = {symbol: tints.get(symbol, (128, 128, 128)) for symbol in palette}
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(types=types, spawnable=palette),
    )
    return world
