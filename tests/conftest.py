"""Shared fixtures: output sinks for the renderer."""

import errno
import io
import logging
import re

import pytest

from cellterm.render.renderer import Renderer

CURSOR_MOVE = re.compile(r"\x1b\[(\d+);(\d+)H")


class FailingSink(io.StringIO):
    """StringIO whose write or flush can be switched to raise EIO."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_write = False
        self.fail_flush = False

    def write(self, s: str) -> int:
        if self.fail_write:
            raise OSError(errno.EIO, "write failed")
        return super().write(s)

    def flush(self) -> None:
        if self.fail_flush:
            raise OSError(errno.EIO, "flush failed")
        super().flush()

    def take(self) -> str:
        """Return everything written so far and reset the buffer."""
        value = self.getvalue()
        self.seek(0)
        self.truncate()
        return value


def _decode_moves(output: str) -> list[tuple[int, int]]:
    return [(int(col) - 1, int(row) - 1) for row, col in CURSOR_MOVE.findall(output)]


@pytest.fixture
def sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def make_renderer(sink: FailingSink):
    """Build a Renderer writing to ``sink``."""
    def _make(width: int = 10, height: int = 6) -> Renderer:
        return Renderer(sink, width, height)
    return _make


@pytest.fixture
def cursor_moves():
    """Decode cursor positioning sequences to 0-indexed (x, y) pairs."""
    return _decode_moves


@pytest.fixture
def clean_logger():
    """Detach handlers from the package logger around a test."""
    logger = logging.getLogger("cellterm")
    saved = logger.handlers[:]
    level = logger.level
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved
    logger.setLevel(level)
