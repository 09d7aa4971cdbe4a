"""Escape sequences emitted by the renderer."""

from cellterm.core.color import Color

ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"
CLEAR_SCREEN = f"{CSI}2J"
HOME = f"{CSI}H"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
ENTER_ALT_SCREEN = f"{CSI}?1049h"
LEAVE_ALT_SCREEN = f"{CSI}?1049l"


def move_to(x: int, y: int) -> str:
    """Cursor position for 0-indexed column x, row y (CSI is 1-indexed)."""
    return f"{CSI}{y + 1};{x + 1}H"


def set_fg(color: Color) -> str:
    return f"{CSI}{color.to_sgr_fg()}m"


def set_bg(color: Color) -> str:
    return f"{CSI}{color.to_sgr_bg()}m"
