"""Core data structures: cells, colors and frame buffers."""

from cellterm.core.buffer import FrameBuffer, Patch
from cellterm.core.cell import Cell
from cellterm.core.color import Color, ColorMode

__all__ = ["Cell", "Color", "ColorMode", "FrameBuffer", "Patch"]
