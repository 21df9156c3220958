from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

@dataclass(slots=True)
class PuyoPalette:
    """Canonical puyo colors stored on a single entity.

    Lives alongside PaletteRegistry (tag). Only ``spawnable`` colors are drawn
    for new pieces; ``colors`` also feeds the renderer.
    """
    colors: Dict[str, Tuple[int, int, int]]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.spawnable:
            self.set_spawnable(self.spawnable)
        else:
            self.spawnable = list(self.colors.keys())

    def rgb_for(self, color: str) -> Tuple[int, int, int]:
        try:
            return self.colors[color]
        except KeyError as exc:
            raise ValueError(f"Unknown puyo color '{color}'") from exc

    def spawnable_colors(self) -> List[str]:
        return list(self.spawnable)

    def set_spawnable(self, names: Iterable[str]) -> None:
        seen: set[str] = set()
        filtered: List[str] = []
        for name in names:
            if name not in self.colors:
                raise ValueError(f"Unknown puyo color '{name}'")
            if name not in seen:
                filtered.append(name)
                seen.add(name)
        self.spawnable = filtered or list(self.colors.keys())
