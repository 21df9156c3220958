GRID_ROWS = 12
GRID_COLS = 6

# Connected same-color cells needed before a group pops.
MIN_GROUP_SIZE = 4
# Points per popped cell before the chain and group multipliers.
BASE_POINTS = 10

# Spawn coordinates for the anchor; the satellite starts directly above it.
SPAWN_ROW = 1

# Timing (seconds). The fast interval applies while soft drop is held.
FALL_INTERVAL = 1.0
FAST_FALL_INTERVAL = 0.05
# Delay between a pop and the gravity pass that follows it.
SETTLE_DELAY = 0.3

DEFAULT_COLORS = {
    'red':    (220, 60, 70),
    'blue':   (60, 110, 220),
    'green':  (70, 190, 90),
    'yellow': (235, 200, 60),
    'purple': (160, 80, 200),
}

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
BOTTOM_MARGIN = 20

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.45
BOARD_MAX_HEIGHT_PCT = 0.90
# Gap between the board's right edge and the score panel.
SIDE_GAP = 30
SIDE_PANEL_WIDTH = 200
