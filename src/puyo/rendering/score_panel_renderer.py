from __future__ import annotations

from typing import TYPE_CHECKING

from puyo.constants import SIDE_GAP, SIDE_PANEL_WIDTH

if TYPE_CHECKING:
    from puyo.components.palette import PuyoPalette
    from puyo.systems.render import RenderSystem
    from puyo.utils.snapshot import SessionSnapshot


def format_max_chain(max_chain: int) -> str:
    return f"{max_chain} chain" if max_chain > 0 else "-"


class ScorePanelRenderer:
    """Score, max chain and next-pair preview to the right of the board."""

    def __init__(self, render_system: RenderSystem):
        self._rs = render_system

    def panel_lines(self, snapshot: SessionSnapshot) -> list[str]:
        lines = [
            f"Score: {snapshot.score:,}",
            f"Max chain: {format_max_chain(snapshot.max_chain)}",
            f"Pieces: {snapshot.pieces_spawned}",
        ]
        if snapshot.current_chain > 0:
            lines.append(f"Chain: {snapshot.current_chain} (+{snapshot.last_step_points:,})")
        return lines

    def render(self, arcade, snapshot: SessionSnapshot, palette: PuyoPalette, headless: bool) -> None:
        rs = self._rs
        tile_size, start_x, start_y = rs.geometry
        left = start_x + snapshot.cols * tile_size + SIDE_GAP
        top = start_y + snapshot.rows * tile_size
        lines = self.panel_lines(snapshot)
        rs._panel_text_cache = lines
        if headless:
            return

        y = top - 24
        for line in lines:
            arcade.draw_text(line, left, y, arcade.color.WHITE, 16)
            y -= 30

        arcade.draw_text("Next", left, y, arcade.color.LIGHT_GRAY, 14)
        if snapshot.preview_colors is not None:
            anchor_color, satellite_color = snapshot.preview_colors
            radius = max(tile_size / 2 - 2, 4)
            cx = left + radius + 4
            # Satellite is drawn above the anchor, as it spawns.
            arcade.draw_circle_filled(cx, y - radius - 8, radius, palette.rgb_for(satellite_color))
            arcade.draw_circle_filled(cx, y - 3 * radius - 12, radius, palette.rgb_for(anchor_color))

        if snapshot.game_over:
            self._banner(arcade, rs, "GAME OVER - press R", (230, 70, 70))
        elif snapshot.paused:
            self._banner(arcade, rs, "PAUSED - press P", (230, 230, 120))

    @staticmethod
    def _banner(arcade, rs: RenderSystem, text: str, color) -> None:
        width = min(rs.window.width - 20, SIDE_PANEL_WIDTH * 2)
        cx = rs.window.width / 2
        cy = rs.window.height / 2
        arcade.draw_lbwh_rectangle_filled(cx - width / 2, cy - 30, width, 60, (0, 0, 0, 200))
        arcade.draw_text(text, cx, cy, color, 20, anchor_x="center", anchor_y="center")
