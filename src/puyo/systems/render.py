from typing import Any

from esper import World
from puyo.events.bus import EventBus, EVENT_SESSION_RESET
from puyo.components.board import Board
from puyo.rendering.board_renderer import BoardRenderer
from puyo.rendering.score_panel_renderer import ScorePanelRenderer
from puyo.systems.board_ops import get_board
from puyo.ui.layout import compute_board_geometry
from puyo.utils.session_state import get_palette
from puyo.utils.snapshot import build_snapshot

PADDING = 4


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_SESSION_RESET, self.on_session_reset)
        self._last_window_size = (self.window.width, self.window.height)
        self.geometry = self._compute_geometry()
        self._last_tile_layout: dict[tuple[int, int], dict[str, Any]] = {}
        self._panel_text_cache: list[str] = []
        self._board_renderer = BoardRenderer(self, padding=PADDING)
        self._score_panel_renderer = ScorePanelRenderer(self)

    def notify_resize(self, width: int, height: int):
        self._last_window_size = (width, height)
        self.geometry = self._compute_geometry()

    def _compute_geometry(self):
        board: Board = get_board(self.world)
        return compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        if (self.window.width, self.window.height) != self._last_window_size:
            self.notify_resize(self.window.width, self.window.height)
        snapshot = build_snapshot(self.world)
        palette = get_palette(self.world)
        self._board_renderer.render(arcade, snapshot, palette, headless=headless)
        self._score_panel_renderer.render(arcade, snapshot, palette, headless=headless)

    def on_session_reset(self, sender, **kwargs):
        self._last_tile_layout = {}
        self._panel_text_cache = []
