import random

import pytest

from tileconnect.events.bus import EventBus
from tileconnect.systems.board import BoardSystem
from tileconnect.systems.board_ops import (
    collapse,
    compute_gravity_moves,
    grid_snapshot,
    refill_inactive_tiles,
)
from tileconnect.world import create_world

from tests.helpers import SYMBOLS, set_layout, set_symbol


def _column(snapshot, col):
    return [row[col] for row in snapshot]


@pytest.fixture
def world():
    bus = EventBus(); world = create_world(symbols=SYMBOLS, rng=random.Random(11))
    BoardSystem(world, bus)
    return world


def test_collapse_leaves_no_empty_cells(world):
    collapse(world, (4, 2), (4, 3))
    snapshot = grid_snapshot(world)
    assert all(cell is not None for row in snapshot for cell in row)
    assert all(cell in SYMBOLS for row in snapshot for cell in row)


def test_collapse_shifts_survivors_down_preserving_order(world):
    before = grid_snapshot(world)
    typed, moves, new_tiles = collapse(world, (4, 2), (4, 3))
    after = grid_snapshot(world)
    for col in (2, 3):
        survivors = [cell for row, cell in enumerate(_column(before, col)) if row != 4]
        assert _column(after, col)[1:] == survivors
    assert new_tiles == [(0, 2), (0, 3)]
    assert sorted((r, c) for r, c, _ in typed) == [(4, 2), (4, 3)]
    # Untouched columns keep every symbol in place.
    for col in (0, 1, 4, 5):
        assert _column(after, col) == _column(before, col)


def test_collapse_same_column_opens_two_top_cells(world):
    before = grid_snapshot(world)
    _, moves, new_tiles = collapse(world, (5, 1), (6, 1))
    after = grid_snapshot(world)
    survivors = [cell for row, cell in enumerate(_column(before, 1)) if row not in (5, 6)]
    assert _column(after, 1)[2:] == survivors
    assert new_tiles == [(0, 1), (1, 1)]
    assert {move.target for move in moves} == {(r, 1) for r in range(2, 7)}


def test_collapse_of_bottom_row_tiles(world):
    before = grid_snapshot(world)
    collapse(world, (8, 0), (8, 1))
    after = grid_snapshot(world)
    for col in (0, 1):
        assert _column(after, col)[1:] == _column(before, col)[:8]


def test_collapse_of_top_row_only_refills(world):
    before = grid_snapshot(world)
    _, moves, new_tiles = collapse(world, (0, 0), (0, 4))
    after = grid_snapshot(world)
    assert moves == []
    assert new_tiles == [(0, 0), (0, 4)]
    for col in (0, 4):
        assert _column(after, col)[1:] == _column(before, col)[1:]


def test_gravity_moves_listed_bottom_first(world):
    set_layout(world, [[SYMBOLS[(r + c) % 6] for c in range(6)] for r in range(9)])
    set_symbol(world, 7, 3, None)
    set_symbol(world, 2, 3, None)
    moves = compute_gravity_moves(world)
    column_moves = [(m.source, m.target) for m in moves if m.source[1] == 3]
    assert column_moves == [
        ((6, 3), (7, 3)),
        ((5, 3), (6, 3)),
        ((4, 3), (5, 3)),
        ((3, 3), (4, 3)),
        ((1, 3), (3, 3)),
        ((0, 3), (2, 3)),
    ]


def test_collapse_scans_every_column(world):
    # A stray empty cell elsewhere is settled and refilled together with the pair.
    before = grid_snapshot(world)
    set_symbol(world, 6, 5, None)
    collapse(world, (3, 0), (3, 1))
    after = grid_snapshot(world)
    survivors = [cell for row, cell in enumerate(_column(before, 5)) if row != 6]
    assert _column(after, 5)[1:] == survivors
    assert all(cell is not None for row in after for cell in row)


def test_refill_draws_from_palette_only():
    bus = EventBus(); world = create_world(symbols=["Q"], rng=random.Random(2))
    BoardSystem(world, bus, 3, 3)
    set_symbol(world, 0, 0, None)
    set_symbol(world, 0, 2, None)
    spawned = refill_inactive_tiles(world)
    assert spawned == [(0, 0), (0, 2)]
    assert grid_snapshot(world)[0] == ["Q", "Q", "Q"]


def test_collapse_rejects_out_of_bounds(world):
    with pytest.raises(ValueError):
        collapse(world, (4, 2), (4, 6))
