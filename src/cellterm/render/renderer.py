"""Double-buffered renderer that streams only the cells that changed."""

from __future__ import annotations

import logging
import sys
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO

from cellterm.core.buffer import FrameBuffer, Patch
from cellterm.core.cell import Cell
from cellterm.core.color import Color
from cellterm.render.sequences import move_to, set_bg, set_fg
from cellterm.render.terminal import TerminalRenderer

logger = logging.getLogger(__name__)


def _single_column(char: str) -> bool:
    return len(char) == 1 and unicodedata.east_asian_width(char) not in ('W', 'F')


@dataclass
class DrawStats:
    """What one draw cycle put on the wire."""
    patches: int = 0
    cursor_moves: int = 0
    fg_changes: int = 0
    bg_changes: int = 0
    bytes_written: int = 0

    def __iadd__(self, other: DrawStats) -> DrawStats:
        self.patches += other.patches
        self.cursor_moves += other.cursor_moves
        self.fg_changes += other.fg_changes
        self.bg_changes += other.bg_changes
        self.bytes_written += other.bytes_written
        return self


class Renderer:
    """
    Reconcile the terminal screen with the frame the caller builds.

    The caller writes the next frame into ``buf_curr`` with :meth:`put_cell`
    and :meth:`put_cells`, then calls :meth:`queue_draw`. The renderer diffs
    ``buf_prev`` (what the terminal shows) against ``buf_curr`` and writes
    only the changed cells, skipping cursor moves for horizontally
    contiguous runs and color sets that are already in force. The buffers
    are then swapped and the new ``buf_curr`` is cleared.

    Usage:
        renderer = Renderer(sys.stdout, 80, 24)
        renderer.put_cells(0, 0, "Hello", Color.GREEN)
        renderer.draw(cursor=(5, 0))

    The cursor is assumed to advance one column per cell only for single
    narrow characters. After a wide or multi-character glyph its position
    is treated as unknown and the next patch gets an explicit move.

    If a write, cursor placement or flush fails, the ``OSError`` propagates.
    Every cell not yet delivered is invalidated in ``buf_prev`` and the
    cursor and color state are forgotten, so the next successful draw
    re-sends them.
    """

    def __init__(self, out: Optional[TextIO] = None, width: int = 0, height: int = 0) -> None:
        self.out = out if out is not None else sys.stdout
        self.buf_curr = FrameBuffer(width, height)
        self.buf_prev = FrameBuffer(width, height)
        self.last_stats = DrawStats()
        self._full = TerminalRenderer(reset_at_end=True)

        # Physical terminal state; None means unknown
        self._cursor: Optional[tuple[int, int]] = None
        self._fg: Optional[Color] = Color.RESET
        self._bg: Optional[Color] = Color.RESET

        # Patches written since the last successful flush
        self._pending: list[Patch] = []

    @property
    def width(self) -> int:
        return self.buf_curr.width

    @property
    def height(self) -> int:
        return self.buf_curr.height

    def put_cell(
        self,
        x: int,
        y: int,
        char: str,
        fg: Color = Color.RESET,
        bg: Color = Color.RESET,
    ) -> None:
        """Write one character into the next frame."""
        self.buf_curr.put(x, y, Cell(char, fg, bg))

    def put_cells(
        self,
        x: int,
        y: int,
        chars: str,
        fg: Color = Color.RESET,
        bg: Color = Color.RESET,
    ) -> int:
        """Write a run of characters into the next frame, truncated at the row end."""
        return self.buf_curr.put_run(x, y, (Cell(char, fg, bg) for char in chars))

    def resize(self, width: int, height: int) -> None:
        """Resize both buffers and repaint the whole (now blank) screen."""
        logger.info("resize %dx%d -> %dx%d", self.width, self.height, width, height)
        self.buf_curr.resize(width, height)
        self.buf_prev.resize(width, height)
        self._pending.clear()
        self.repaint()

    def repaint(self) -> None:
        """Clear the physical screen and repaint ``buf_prev`` without diffing."""
        output = self._full.render(self.buf_prev)
        try:
            self.out.write(output)
            self.out.flush()
        except OSError:
            logger.warning("full repaint failed; screen contents unknown", exc_info=True)
            self._forget_terminal_state()
            for x, y, _ in list(self.buf_prev.cells()):
                self.buf_prev.invalidate(x, y)
            raise
        self._cursor = None
        self._fg = Color.RESET
        self._bg = Color.RESET

    def queue_draw(self) -> DrawStats:
        """
        Write the difference between the displayed frame and the next frame.

        Output is written to the sink but not flushed; position the cursor
        and call :meth:`flush` (or use :meth:`draw`) to finish the frame.
        """
        patches = list(self.buf_prev.diff(self.buf_curr))
        stats = DrawStats(patches=len(patches))

        cursor = self._cursor
        fg = self._fg
        bg = self._bg
        width = self.buf_curr.width
        parts: list[str] = []

        for patch in patches:
            if cursor != (patch.x, patch.y):
                parts.append(move_to(patch.x, patch.y))
                stats.cursor_moves += 1

            cell = patch.cell
            if cell.bg != bg:
                parts.append(set_bg(cell.bg))
                bg = cell.bg
                stats.bg_changes += 1
            if cell.fg != fg:
                parts.append(set_fg(cell.fg))
                fg = cell.fg
                stats.fg_changes += 1

            parts.append(cell.char)
            # Writing the last column leaves the terminal in a pending-wrap state
            if patch.x + 1 < width and _single_column(cell.char):
                cursor = (patch.x + 1, patch.y)
            else:
                cursor = None

        output = ''.join(parts)
        try:
            if output:
                self.out.write(output)
        except OSError:
            logger.warning("draw of %d patches failed", len(patches), exc_info=True)
            self._forget_terminal_state()
            self._invalidate(patches)
            self.buf_curr.clear()
            raise

        self._cursor = cursor
        self._fg = fg
        self._bg = bg
        self._pending.extend(patches)

        self.buf_curr, self.buf_prev = self.buf_prev, self.buf_curr
        self.buf_curr.clear()

        stats.bytes_written = len(output.encode('utf-8'))
        self.last_stats = stats
        logger.debug("draw: %s", stats)
        return stats

    def move_cursor(self, x: int, y: int) -> None:
        """Position the terminal cursor (0-indexed)."""
        if self._cursor == (x, y):
            return
        try:
            self.out.write(move_to(x, y))
        except OSError:
            self._roll_back("cursor move")
            raise
        self._cursor = (x, y)

    def flush(self) -> None:
        """Flush the sink. On failure, roll back the frames not yet delivered."""
        try:
            self.out.flush()
        except OSError:
            self._roll_back("flush")
            raise
        self._pending = []

    def draw(self, cursor: Optional[tuple[int, int]] = None) -> DrawStats:
        """Queue the frame, optionally place the cursor, and flush."""
        stats = self.queue_draw()
        if cursor is not None:
            self.move_cursor(*cursor)
        self.flush()
        return stats

    def _roll_back(self, operation: str) -> None:
        """Treat every patch written since the last good flush as undelivered."""
        logger.warning(
            "%s failed; rolling back %d undelivered patches",
            operation,
            len(self._pending),
            exc_info=True,
        )
        self._forget_terminal_state()
        self._invalidate(self._pending)
        self._pending = []

    def _forget_terminal_state(self) -> None:
        self._cursor = None
        self._fg = None
        self._bg = None

    def _invalidate(self, patches: Iterable[Patch]) -> None:
        for patch in patches:
            self.buf_prev.invalidate(patch.x, patch.y)
