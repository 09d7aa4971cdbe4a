"""Animated demo loop that exercises the renderer."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from cellterm.core.color import Color
from cellterm.render.renderer import DrawStats, Renderer

logger = logging.getLogger(__name__)

TITLE = " cellterm demo "
BANNER = "cellterm"

# Cycled through by the bouncing banner
BANNER_COLORS = (
    Color.BRIGHT_RED,
    Color.BRIGHT_YELLOW,
    Color.BRIGHT_GREEN,
    Color.BRIGHT_CYAN,
    Color.BRIGHT_BLUE,
    Color.BRIGHT_MAGENTA,
)


def _bounce(position: int, span: int) -> int:
    """Map an ever-increasing position onto 0..span and back."""
    if span <= 0:
        return 0
    period = span * 2
    offset = position % period
    return offset if offset <= span else period - offset


def build_frame(renderer: Renderer, frame: int) -> None:
    """Write one demo frame into the renderer's next buffer."""
    width, height = renderer.width, renderer.height
    if width == 0 or height == 0:
        return

    # Title bar
    renderer.put_cells(0, 0, TITLE.center(width), Color.BLACK, Color.CYAN)

    # Scrolling 256-color gradient
    if height > 2:
        for x in range(width):
            index = 16 + (x + frame) % 216
            renderer.put_cell(x, 1, ' ', Color.RESET, Color.from_256(index))

    # Bouncing banner
    if height > 4:
        x = _bounce(frame, max(0, width - len(BANNER)))
        y = 2 + _bounce(frame // 2, height - 4)
        color = BANNER_COLORS[(frame // 4) % len(BANNER_COLORS)]
        renderer.put_cells(x, y, BANNER, color)

    # Status line
    status = f" frame {frame}  {width}x{height}  patches {renderer.last_stats.patches}"
    renderer.put_cells(0, height - 1, status.ljust(width), Color.BRIGHT_WHITE, Color.BLUE)


def run_demo(
    renderer: Renderer,
    frames: int,
    fps: float,
    poll_size: Optional[Callable[[], tuple[int, int]]] = None,
) -> DrawStats:
    """
    Draw ``frames`` frames at ``fps`` and return the accumulated stats.

    ``poll_size`` returns the current (width, height); when it changes the
    renderer is resized before the frame is built.
    """
    total = DrawStats()
    interval = 1.0 / fps
    for frame in range(frames):
        started = time.monotonic()

        if poll_size is not None:
            size = poll_size()
            if size != (renderer.width, renderer.height):
                renderer.resize(*size)

        build_frame(renderer, frame)
        total += renderer.draw()

        elapsed = time.monotonic() - started
        if frame + 1 < frames and elapsed < interval:
            time.sleep(interval - elapsed)

    logger.info("demo finished frames=%d stats=%s", frames, total)
    return total
