from dataclasses import dataclass

@dataclass(slots=True)
class PaletteRegistry:
    """Empty tag component marking the single entity that stores the puyo palette.

    The same entity also has a PuyoPalette component mapping color name -> RGB.
    """
    pass
