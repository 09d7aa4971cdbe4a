"""Render a whole FrameBuffer as a full-screen repaint."""

from cellterm.core.buffer import FrameBuffer
from cellterm.core.color import Color
from cellterm.render.sequences import CLEAR_SCREEN, HOME, RESET, move_to, set_bg, set_fg


class TerminalRenderer:
    """
    Render a FrameBuffer to escape sequences that repaint the whole screen.
    
    The screen is cleared first, so rows are only positioned and printed up
    to their last non-default cell. Colors are only emitted when they change.
    """
    
    def __init__(self, reset_at_end: bool = True):
        self.reset_at_end = reset_at_end
    
    def render(self, buffer: FrameBuffer) -> str:
        """Render buffer to an ANSI string."""
        parts: list[str] = [RESET, CLEAR_SCREEN, HOME]
        
        last_fg = Color.RESET
        last_bg = Color.RESET
        
        for y, row in enumerate(buffer.rows()):
            # Find last non-empty cell to avoid trailing spaces
            last_col = -1
            for x, cell in enumerate(row):
                if cell is not None and not cell.is_default():
                    last_col = x
            
            if last_col < 0:
                continue
            
            parts.append(move_to(0, y))
            for cell in row[:last_col + 1]:
                if cell is None:
                    # Unknown content paints as a blank
                    parts.append(' ')
                    continue
                
                if cell.bg != last_bg:
                    parts.append(set_bg(cell.bg))
                    last_bg = cell.bg
                
                if cell.fg != last_fg:
                    parts.append(set_fg(cell.fg))
                    last_fg = cell.fg
                
                parts.append(cell.char)
        
        if self.reset_at_end and (last_fg != Color.RESET or last_bg != Color.RESET):
            parts.append(RESET)
        
        return ''.join(parts)
