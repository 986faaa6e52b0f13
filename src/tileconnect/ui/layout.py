from tileconnect.constants import (
    GRID_COLS, GRID_ROWS, BOTTOM_MARGIN, HUD_HEIGHT,
    BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT,
    OVERLAY_BUTTON_WIDTH, OVERLAY_BUTTON_HEIGHT,
)

def compute_board_geometry(window_width: int, window_height: int, rows: int = GRID_ROWS, cols: int = GRID_COLS):
    """Return (tile_size, start_x, start_y) shared by the renderer and input mapping.

    start_x/start_y are the window coordinates of the board's bottom-left corner. Arcade's
    y axis points up while board row 0 is the top row, so row r is drawn at
    start_y + (rows - 1 - r) * tile_size.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def tile_origin(row: int, col: int, window_width: int, window_height: int, rows: int = GRID_ROWS, cols: int = GRID_COLS):
    """Bottom-left window coordinate of the tile at (row, col)."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    return start_x + col * tile_size, start_y + (rows - 1 - row) * tile_size


def tile_at_point(x: float, y: float, window_width: int, window_height: int, rows: int = GRID_ROWS, cols: int = GRID_COLS):
    """Map a window point to (row, col), or None when it falls outside the board."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= start_y + rows * tile_size:
        return None
    col = int((x - start_x) // tile_size)
    row = rows - 1 - int((y - start_y) // tile_size)
    if 0 <= row < rows and 0 <= col < cols:
        return row, col
    return None


def overlay_button_rect(window_width: int, window_height: int):
    """(left, bottom, width, height) of the start/restart button, centered in the window."""
    left = (window_width - OVERLAY_BUTTON_WIDTH) / 2
    bottom = (window_height - OVERLAY_BUTTON_HEIGHT) / 2 - OVERLAY_BUTTON_HEIGHT
    return left, bottom, OVERLAY_BUTTON_WIDTH, OVERLAY_BUTTON_HEIGHT


def point_in_rect(x: float, y: float, rect) -> bool:
    left, bottom, width, height = rect
    return left <= x <= left + width and bottom <= y <= bottom + height
