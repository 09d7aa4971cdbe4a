"""Renderers for streaming frame buffers to a terminal."""

from cellterm.render.renderer import DrawStats, Renderer
from cellterm.render.terminal import TerminalRenderer

__all__ = ["DrawStats", "Renderer", "TerminalRenderer"]
