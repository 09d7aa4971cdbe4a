"""
cellterm: character-cell terminal renderer

Keeps a model of what the terminal currently shows and, each frame, writes
only the cells that changed.

Quick Start:
    >>> import sys
    >>> from cellterm import Color, Renderer
    >>> renderer = Renderer(sys.stdout, 80, 24)
    >>> renderer.put_cells(0, 0, "Hello", Color.GREEN)
    >>> renderer.draw(cursor=(5, 0))

Features:
    - Flat row-major frame buffer with clamp-on-out-of-bounds writes
    - Diff-based drawing with cursor-run and color-change coalescing
    - Full-screen repaint on resize
    - 16-color, 256-color and true color cells
"""

__version__ = "0.1.0"

# Core types
from cellterm.core.cell import Cell
from cellterm.core.color import Color, ColorMode
from cellterm.core.buffer import FrameBuffer, Patch

# Rendering
from cellterm.render.renderer import DrawStats, Renderer
from cellterm.render.terminal import TerminalRenderer

__all__ = [
    # Version
    "__version__",
    # Core types
    "Cell",
    "Color",
    "ColorMode",
    "FrameBuffer",
    "Patch",
    # Rendering
    "DrawStats",
    "Renderer",
    "TerminalRenderer",
]
