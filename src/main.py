"""Entry point for the Puyo chain prototype.

Sets up ECS world, event bus, systems, and Arcade window.
"""
from arcade import Window, run, set_background_color, color
from puyo.world import create_world
from puyo.constants import GRID_ROWS, GRID_COLS, WINDOW_WIDTH, WINDOW_HEIGHT
from puyo.events.bus import EVENT_TICK, EVENT_KEY_PRESS, EVENT_KEY_RELEASE, EventBus
from puyo.systems.board import BoardSystem
from puyo.systems.input import InputSystem
from puyo.systems.match_resolution import ChainResolutionSystem
from puyo.systems.movement import MovementSystem
from puyo.systems.render import RenderSystem
from puyo.systems.session import SessionSystem


class PuyoWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Puyo Chain")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        # Board and rules
        self.board_system = BoardSystem(self.world, self.event_bus, rows=GRID_ROWS, cols=GRID_COLS)
        self.movement_system = MovementSystem(self.world, self.event_bus)
        self.chain_resolution_system = ChainResolutionSystem(self.world, self.event_bus)
        self.session_system = SessionSystem(
            self.world,
            self.event_bus,
            movement=self.movement_system,
            resolution=self.chain_resolution_system,
        )

        # Interface systems
        self.input_system = InputSystem(self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.BLACK)

    def on_resize(self, width: int, height: int):
        self.render_system.notify_resize(width, height)
        return super().on_resize(width, height)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def on_key_release(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_RELEASE, symbol=symbol, modifiers=modifiers)


def main():
    window = PuyoWindow()
    run()

if __name__ == "__main__":
    main()
