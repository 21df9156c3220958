from __future__ import annotations

from typing import TYPE_CHECKING

from puyo.ui.layout import cell_center

if TYPE_CHECKING:
    from puyo.components.palette import PuyoPalette
    from puyo.systems.render import RenderSystem
    from puyo.utils.snapshot import SessionSnapshot

POP_COLOR = (245, 245, 245)
FRAME_COLOR = (90, 90, 120)


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, padding: int = 4):
        self._rs = render_system
        self._padding = padding

    def render(self, arcade, snapshot: SessionSnapshot, palette: PuyoPalette, headless: bool) -> None:
        rs = self._rs
        tile_size, start_x, start_y = rs.geometry
        rows, cols = snapshot.rows, snapshot.cols
        draw_size = max(tile_size - self._padding, 4)
        radius = draw_size / 2

        rs._last_tile_layout = {}
        if not headless:
            arcade.draw_lrbt_rectangle_outline(
                start_x, start_x + cols * tile_size,
                start_y, start_y + rows * tile_size,
                FRAME_COLOR, 2,
            )

        for row in range(rows):
            for col in range(cols):
                view = snapshot.grid[row][col]
                center = cell_center(row, col, tile_size, start_x, start_y, rows)
                if view.color is None and not view.marked:
                    continue
                rs._last_tile_layout[(row, col)] = {"center": center, "radius": radius, "marked": view.marked}
                if headless:
                    continue
                if view.marked:
                    arcade.draw_circle_outline(center[0], center[1], radius, POP_COLOR, 3)
                    continue
                arcade.draw_circle_filled(center[0], center[1], radius, palette.rgb_for(view.color))

        for row, col, color in snapshot.active_cells or ():
            center = cell_center(row, col, tile_size, start_x, start_y, rows)
            rs._last_tile_layout[(row, col)] = {"center": center, "radius": radius, "marked": False}
            if headless:
                continue
            arcade.draw_circle_filled(center[0], center[1], radius, palette.rgb_for(color))
            arcade.draw_circle_outline(center[0], center[1], radius, (255, 255, 255), 2)
