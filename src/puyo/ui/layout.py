from puyo.constants import (GRID_COLS, GRID_ROWS, BOTTOM_MARGIN, BOARD_MAX_WIDTH_PCT,
                            BOARD_MAX_HEIGHT_PCT, SIDE_GAP)


def compute_board_geometry(window_width: int, window_height: int, rows: int = GRID_ROWS, cols: int = GRID_COLS):
    """Return (tile_size, start_x, start_y) for the board's bottom-left corner.

    The board may not exceed the configured fraction of the window in either
    direction; it sits left of centre to leave room for the score panel.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < 12:
        tile_size = 12
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2 - SIDE_GAP * 2
    if start_x < SIDE_GAP:
        start_x = SIDE_GAP
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_center(row: int, col: int, tile_size: float, start_x: float, start_y: float, rows: int = GRID_ROWS):
    """Screen centre of a cell. Row 0 is the top of the board; screen y grows upward."""
    x = start_x + col * tile_size + tile_size / 2
    y = start_y + (rows - 1 - row) * tile_size + tile_size / 2
    return x, y
