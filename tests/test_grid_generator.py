import random

import pytest

from tileconnect.components.active_switch import ActiveSwitch
from tileconnect.components.board import Board
from tileconnect.components.board_position import BoardPosition
from tileconnect.constants import TILE_SYMBOLS
from tileconnect.events.bus import EventBus
from tileconnect.systems.board import BoardSystem
from tileconnect.systems.board_ops import generate_symbols, grid_snapshot
from tileconnect.world import create_world


def test_generated_grid_has_requested_shape_and_palette():
    grid = generate_symbols(9, 6, TILE_SYMBOLS, random.Random(3))
    assert len(grid) == 9
    assert all(len(row) == 6 for row in grid)
    assert all(cell in TILE_SYMBOLS for row in grid for cell in row)


def test_generation_is_deterministic_for_seeded_rng():
    first = generate_symbols(4, 4, "ABC", random.Random(42))
    second = generate_symbols(4, 4, "ABC", random.Random(42))
    assert first == second


@pytest.mark.parametrize("rows, cols", [(0, 6), (9, 0), (-1, 3)])
def test_non_positive_dimensions_rejected(rows, cols):
    with pytest.raises(ValueError):
        generate_symbols(rows, cols, TILE_SYMBOLS)


def test_empty_palette_rejected():
    with pytest.raises(ValueError):
        generate_symbols(2, 2, [])


def test_board_component_exists():
    bus = EventBus(); world = create_world()
    BoardSystem(world, bus, 6, 7)
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    ent, comp = boards[0]
    assert comp.rows == 6 and comp.cols == 7
    assert len(world.get_component(BoardPosition)) == 42


def test_default_board_is_full_with_default_palette():
    bus = EventBus(); world = create_world(rng=random.Random(1))
    BoardSystem(world, bus)
    snapshot = grid_snapshot(world)
    assert len(snapshot) == 9 and all(len(row) == 6 for row in snapshot)
    assert all(cell in TILE_SYMBOLS for row in snapshot for cell in row)
    assert all(switch.active for _, switch in world.get_component(ActiveSwitch))


def test_board_respects_custom_palette():
    bus = EventBus(); world = create_world(symbols=["X", "Y"], rng=random.Random(5))
    BoardSystem(world, bus, 5, 5)
    cells = {cell for row in grid_snapshot(world) for cell in row}
    assert cells <= {"X", "Y"}
