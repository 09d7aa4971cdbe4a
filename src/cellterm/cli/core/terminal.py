"""Terminal session handling - size detection and screen mode setup."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, TextIO

from cellterm.render.sequences import (
    ENTER_ALT_SCREEN,
    HIDE_CURSOR,
    LEAVE_ALT_SCREEN,
    RESET,
    SHOW_CURSOR,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Terminal setup for applications that drive a Renderer."""

    @staticmethod
    def size(stream: Optional[TextIO] = None, fallback: tuple[int, int] = (80, 24)) -> TerminalSize:
        """Get current terminal dimensions; ``fallback`` is (cols, rows)."""
        stream = stream if stream is not None else sys.stdout
        try:
            size = os.get_terminal_size(stream.fileno())
            return TerminalSize(size.lines, size.columns)
        except (OSError, ValueError, AttributeError):
            # Not a TTY, or a stream without a file descriptor
            return TerminalSize(fallback[1], fallback[0])

    @staticmethod
    @contextmanager
    def raw_mode(stream: Optional[TextIO] = None) -> Iterator[None]:
        """Context manager for raw terminal input (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - just yield
            yield
            return

        fd = (stream if stream is not None else sys.stdin).fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def alternate_screen(out: TextIO) -> Iterator[None]:
        """Use alternate screen buffer (preserves scrollback)."""
        out.write(ENTER_ALT_SCREEN)
        out.flush()
        try:
            yield
        finally:
            out.write(LEAVE_ALT_SCREEN)
            out.flush()

    @staticmethod
    @contextmanager
    def session(out: Optional[TextIO] = None, raw: bool = False) -> Iterator[TextIO]:
        """
        Full-screen mode: alternate screen, hidden cursor, optional raw input.

        Everything is restored exactly once when the block exits, whether it
        returns, raises, or is interrupted.
        """
        out = out if out is not None else sys.stdout
        logger.debug("entering terminal session raw=%s", raw)
        with Terminal.alternate_screen(out):
            out.write(HIDE_CURSOR)
            out.flush()
            try:
                if raw:
                    with Terminal.raw_mode():
                        yield out
                else:
                    yield out
            finally:
                out.write(SHOW_CURSOR + RESET)
                out.flush()
                logger.debug("left terminal session")
