"""Cell - atomic unit of the frame buffer."""

from dataclasses import dataclass, field

from cellterm.core.color import Color


@dataclass(frozen=True, slots=True)
class Cell:
    """
    A single character cell with its colors.
    
    Cells are immutable values: a buffer may hold the same instance at
    many positions, and two cells compare equal when char, fg and bg match.
    """
    char: str = ' '
    fg: Color = field(default=Color.RESET)
    bg: Color = field(default=Color.RESET)
    
    def is_default(self) -> bool:
        """Check if this cell is a blank space in terminal default colors."""
        return self.char == ' ' and self.fg == Color.RESET and self.bg == Color.RESET


DEFAULT_CELL = Cell()
