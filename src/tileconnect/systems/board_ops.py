from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from esper import World

from tileconnect.components.active_switch import ActiveSwitch
from tileconnect.components.board import Board
from tileconnect.components.board_position import BoardPosition
from tileconnect.components.tile import TileType
from tileconnect.components.tile_type_registry import TileTypeRegistry
from tileconnect.components.tile_types import TileTypes

Position = Tuple[int, int]
TypeEntry = Tuple[int, int, str]
Grid = List[List[str]]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    type_name: str


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def _world_rng(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()


def generate_symbols(
    rows: int,
    cols: int,
    symbols: Sequence[str],
    rng: random.Random | None = None,
) -> Grid:
    """Return a rows x cols matrix of symbols drawn uniformly and independently.

    Adjacent duplicates are allowed; a starting board may already contain matches.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
    if not symbols:
        raise ValueError("Symbol palette is empty")
    rng = rng or random.Random()
    choices = list(symbols)
    return [[rng.choice(choices) for _ in range(cols)] for _ in range(rows)]


def spawn_board(world: World, rows: int, cols: int) -> int:
    """Create the Board entity and one tile entity per cell filled with fresh symbols."""
    registry = get_tile_registry(world)
    layout = generate_symbols(rows, cols, registry.spawnable_types(), _world_rng(world))
    board_entity = world.create_entity(Board(rows=rows, cols=cols))
    for row in range(rows):
        for col in range(cols):
            world.create_entity(
                BoardPosition(row=row, col=col),
                TileType(type_name=layout[row][col]),
                ActiveSwitch(active=True),
            )
    return board_entity


def respawn_full_board(world: World, *, rng: random.Random | None = None) -> List[Position]:
    """Regenerate every cell of the existing board with fresh random symbols."""
    rows, cols = _require_dimensions(world)
    registry = get_tile_registry(world)
    layout = generate_symbols(rows, cols, registry.spawnable_types(), rng or _world_rng(world))
    positions: List[Position] = []
    for (row, col), entity in sorted(position_index(world).items()):
        tile_type: TileType = world.component_for_entity(entity, TileType)
        tile_type.type_name = layout[row][col]
        world.component_for_entity(entity, ActiveSwitch).active = True
        positions.append((row, col))
    return positions


def _require_dimensions(world: World) -> Tuple[int, int]:
    board = get_board(world)
    return board.rows, board.cols


def position_index(world: World) -> Dict[Position, int]:
    return {(pos.row, pos.col): entity for entity, pos in world.get_component(BoardPosition)}


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def check_position(world: World, pos: Position) -> None:
    """Raise ValueError if pos lies outside the board."""
    rows, cols = _require_dimensions(world)
    row, col = pos
    if not (0 <= row < rows and 0 <= col < cols):
        raise ValueError(f"Coordinate {pos} outside {rows}x{cols} board")


def active_tile_type_map(world: World) -> Dict[Position, str]:
    """Return mapping of occupied tile positions to their symbols."""
    mapping: Dict[Position, str] = {}
    for entity, position in world.get_component(BoardPosition):
        try:
            switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
            if not switch.active:
                continue
            tile: TileType = world.component_for_entity(entity, TileType)
        except KeyError:
            continue
        mapping[(position.row, position.col)] = tile.type_name
    return mapping


def grid_snapshot(world: World) -> List[List[str | None]]:
    """Rows of symbols, top row first; empty cells are None."""
    rows, cols = _require_dimensions(world)
    types = active_tile_type_map(world)
    return [[types.get((row, col)) for col in range(cols)] for row in range(rows)]


def _is_orthogonal_neighbor(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def _is_edge_exposed(types: Dict[Position, str], pos: Position) -> bool:
    # Exposed when nothing sits directly above: top row, or the cell above is empty.
    row, col = pos
    return row == 0 or (row - 1, col) not in types


def is_connectable(
    world: World, a: Position, b: Position, *, types: Dict[Position, str] | None = None
) -> bool:
    """Return True if a and b form a connected pair, ignoring their symbols.

    Orthogonal neighbours always connect. Tiles in different columns also connect when
    both are edge-exposed (nothing occupied directly above either of them). This is not
    a path search; no straight or L-shaped route between the tiles is checked.
    """
    check_position(world, a)
    check_position(world, b)
    if a == b:
        return False
    if _is_orthogonal_neighbor(a, b):
        return True
    tile_map = types if types is not None else active_tile_type_map(world)
    return (
        a[1] != b[1]
        and _is_edge_exposed(tile_map, a)
        and _is_edge_exposed(tile_map, b)
    )


def is_valid_match(
    world: World, a: Position, b: Position, *, types: Dict[Position, str] | None = None
) -> bool:
    """Connected pair whose symbols are equal and non-empty."""
    tile_map = types if types is not None else active_tile_type_map(world)
    if not is_connectable(world, a, b, types=tile_map):
        return False
    symbol = tile_map.get(a)
    return symbol is not None and symbol == tile_map.get(b)


def clear_tiles_with_collapse(world: World, positions: Iterable[Position]):
    """Clear tiles at positions, apply gravity to every column and refill the gaps.

    Returns (typed_before, gravity_moves, new_tiles) so callers can report or animate the
    change. The board has no empty cells afterwards.
    """
    positions = list(positions)
    for pos in positions:
        check_position(world, pos)
    index = position_index(world)
    typed: List[TypeEntry] = []
    for row, col in positions:
        entity = index.get((row, col))
        if entity is None:
            continue
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not tile_switch.active:
            continue
        tile_type: TileType = world.component_for_entity(entity, TileType)
        typed.append((row, col, tile_type.type_name))
        tile_switch.active = False
    moves = compute_gravity_moves(world)
    if moves:
        apply_gravity_moves(world, moves)
    new_tiles = refill_inactive_tiles(world)
    return typed, moves, new_tiles


def collapse(world: World, a: Position, b: Position):
    """Clear a matched pair and settle the board; see clear_tiles_with_collapse."""
    return clear_tiles_with_collapse(world, [a, b])


def compute_gravity_moves(world: World) -> List[GravityMove]:
    """Moves that settle occupied tiles toward the bottom row, keeping their order.

    Moves within a column are listed bottom-most first so they can be applied in order
    without overwriting a tile that has not moved yet.
    """
    dims = board_dimensions(world)
    if dims is None:
        return []
    rows, cols = dims
    types = active_tile_type_map(world)
    moves: List[GravityMove] = []
    for col in range(cols):
        filled_rows = [row for row in range(rows) if (row, col) in types]
        offset = rows - len(filled_rows)
        for index in range(len(filled_rows) - 1, -1, -1):
            original_row = filled_rows[index]
            target_row = offset + index
            if original_row == target_row:
                continue
            moves.append(
                GravityMove(
                    source=(original_row, col),
                    target=(target_row, col),
                    type_name=types[(original_row, col)],
                )
            )
    return moves


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    index = position_index(world)
    for move in moves:
        src_entity = index.get(move.source)
        dst_entity = index.get(move.target)
        if src_entity is None or dst_entity is None:
            continue
        src_switch: ActiveSwitch = world.component_for_entity(src_entity, ActiveSwitch)
        dst_switch: ActiveSwitch = world.component_for_entity(dst_entity, ActiveSwitch)
        if not src_switch.active:
            continue
        src_tile: TileType = world.component_for_entity(src_entity, TileType)
        dst_tile: TileType = world.component_for_entity(dst_entity, TileType)
        dst_tile.type_name = src_tile.type_name
        dst_switch.active = True
        src_switch.active = False


def refill_inactive_tiles(world: World) -> List[Position]:
    """Fill every empty cell with a fresh random symbol, column by column from the top."""
    spawned: List[Position] = []
    registry = get_tile_registry(world)
    choices = registry.spawnable_types()
    rng = _world_rng(world)
    index = position_index(world)
    for row, col in sorted(index, key=lambda pos: (pos[1], pos[0])):
        entity = index[(row, col)]
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if tile_switch.active:
            continue
        tile_type: TileType = world.component_for_entity(entity, TileType)
        tile_type.type_name = rng.choice(choices)
        tile_switch.active = True
        spawned.append((row, col))
    return sorted(spawned)
