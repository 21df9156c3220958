from dataclasses import dataclass
from typing import Optional

from puyo.components.piece import Piece


@dataclass(slots=True)
class PieceQueue:
    """The falling piece (absent while a chain resolves) and the next one to spawn."""

    active: Optional[Piece] = None
    preview: Optional[Piece] = None
