from puyo.events.bus import EventBus, EVENT_KEY_PRESS, EVENT_KEY_RELEASE, EVENT_INTENT
from puyo.events.intents import Intent

# Arcade key symbols (pyglet values); kept numeric so the mapping loads without a window.
KEY_LEFT = 65361
KEY_UP = 65362
KEY_RIGHT = 65363
KEY_DOWN = 65364
KEY_SPACE = 32
KEY_P = 112
KEY_R = 114
KEY_X = 120
KEY_Z = 122

KEY_PRESS_INTENTS = {
    KEY_LEFT: Intent.MOVE_LEFT,
    KEY_RIGHT: Intent.MOVE_RIGHT,
    KEY_UP: Intent.ROTATE_CW,
    KEY_X: Intent.ROTATE_CW,
    KEY_SPACE: Intent.ROTATE_CW,
    KEY_Z: Intent.ROTATE_CCW,
    KEY_DOWN: Intent.SOFT_DROP_ON,
    KEY_P: Intent.TOGGLE_PAUSE,
    KEY_R: Intent.RESET,
}

KEY_RELEASE_INTENTS = {
    KEY_DOWN: Intent.SOFT_DROP_OFF,
}


class InputSystem:
    """Translates raw key events into session intents."""

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_KEY_RELEASE, self.on_key_release)

    def on_key_press(self, sender, **kwargs):
        self._dispatch(KEY_PRESS_INTENTS, kwargs.get('symbol'))

    def on_key_release(self, sender, **kwargs):
        self._dispatch(KEY_RELEASE_INTENTS, kwargs.get('symbol'))

    def _dispatch(self, mapping, symbol):
        if symbol is None:
            return
        # Letter keys arrive lower-case from arcade; fold shifted symbols just in case.
        if 65 <= symbol <= 90:
            symbol += 32
        intent = mapping.get(symbol)
        if intent is not None:
            self.event_bus.emit(EVENT_INTENT, intent=intent)
