from dataclasses import dataclass
from typing import Optional

@dataclass(slots=True)
class Cell:
    """Per-cell occupancy.

    color: palette name of the puyo resting here, or None when the cell is empty.
    marked: True only between a pop and the settle that follows it, so the
    renderer can flash the cleared cells. Game logic never reads it.
    """
    color: Optional[str] = None
    marked: bool = False

    @property
    def occupied(self) -> bool:
        return self.color is not None
