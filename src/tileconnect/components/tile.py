from dataclasses import dataclass

@dataclass(slots=True)
class TileType:
    """Per-tile symbol assignment.

    Stores only the symbol drawn on the tile. Occupied/empty state is handled by ActiveSwitch,
    the palette lives in the singleton entity with TileTypeRegistry + TileTypes.
    """
    type_name: str
