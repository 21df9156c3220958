from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from puyo.events.bus import EventBus


@dataclass(slots=True)
class EventTrace:
    """Records (event name, payload) pairs emitted on the bus, in emission order."""

    bus: EventBus
    names: Iterable[str]
    entries: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.names = tuple(self.names)
        for name in self.names:
            self.bus.subscribe(name, self._recorder(name))

    def _recorder(self, name: str):
        def record(sender, **payload):
            self.entries.append((name, dict(payload)))
        return record

    def of(self, name: str) -> List[Dict[str, Any]]:
        return [payload for event, payload in self.entries if event == name]

    def last(self, name: str) -> Dict[str, Any] | None:
        matches = self.of(name)
        return matches[-1] if matches else None

    def sequence(self) -> List[str]:
        return [event for event, _ in self.entries]

    def clear(self) -> None:
        self.entries.clear()
