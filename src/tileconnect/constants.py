GRID_ROWS = 9
GRID_COLS = 6

# Fruit palette; every generated or refilled tile draws uniformly from it.
TILE_SYMBOLS = ['🍎', '🥭', '🫐', '🍊', '🍓', '🍐']
# Background tint per symbol for the board renderer.
TILE_COLORS = {
    '🍎': (196, 52, 52),
    '🥭': (232, 168, 48),
    '🫐': (72, 84, 176),
    '🍊': (236, 124, 36),
    '🍓': (212, 64, 104),
    '🍐': (148, 184, 64),
}

# ============================================================================
# SESSION & SCORING
# ============================================================================
START_TIME_SECONDS = 60
MATCH_SCORE = 5
MATCH_TIME_BONUS = 1
# Seconds a confirmed match fades before the board collapses.
MATCH_ANIMATION_DELAY = 0.6

# ============================================================================
# WINDOW & LAYOUT
# ============================================================================
WINDOW_WIDTH = 480
WINDOW_HEIGHT = 720
BOTTOM_MARGIN = 20
# Height reserved above the board for the timer/score bar.
HUD_HEIGHT = 60
# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.85
# Start / restart prompt button geometry (centered in window).
OVERLAY_BUTTON_WIDTH = 220
OVERLAY_BUTTON_HEIGHT = 56
