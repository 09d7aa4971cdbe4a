"""Tests for core data structures."""

import random

import pytest

from cellterm.core.buffer import FrameBuffer, Patch
from cellterm.core.cell import DEFAULT_CELL, Cell
from cellterm.core.color import Color, ColorMode


PALETTE = [Color.RESET, Color.RED, Color.BRIGHT_CYAN, Color.from_256(202), Color.from_rgb(1, 2, 3)]


def random_buffer(rng: random.Random, width: int, height: int) -> FrameBuffer:
    buffer = FrameBuffer(width, height)
    for y in range(height):
        for x in range(width):
            if rng.random() < 0.4:
                buffer.put(x, y, Cell(rng.choice("ab #"), rng.choice(PALETTE), rng.choice(PALETTE)))
    return buffer


class TestColor:
    """Tests for Color."""

    def test_reset_sgr(self) -> None:
        assert Color.RESET.mode == ColorMode.DEFAULT
        assert Color.RESET.to_sgr_fg() == "39"
        assert Color.RESET.to_sgr_bg() == "49"
        assert Color.RESET.is_default

    def test_standard_sgr(self) -> None:
        assert Color.RED.to_sgr_fg() == "31"
        assert Color.RED.to_sgr_bg() == "41"
        assert Color.BRIGHT_RED.to_sgr_fg() == "91"
        assert Color.BRIGHT_RED.to_sgr_bg() == "101"

    def test_extended_and_rgb_sgr(self) -> None:
        assert Color.from_256(202).to_sgr_fg() == "38;5;202"
        assert Color.from_256(202).to_sgr_bg() == "48;5;202"
        assert Color.from_rgb(10, 20, 30).to_sgr_fg() == "38;2;10;20;30"
        assert Color.from_rgb(10, 20, 30).to_sgr_bg() == "48;2;10;20;30"

    def test_equality_is_exact(self) -> None:
        assert Color.from_sgr(31) == Color.RED
        assert Color.from_256(1) != Color.RED
        assert Color.from_rgb(0, 0, 0) != Color.BLACK
        assert Color.RESET != Color.BLACK

    def test_from_sgr(self) -> None:
        assert Color.from_sgr(39) is Color.RESET
        assert Color.from_sgr(49) is Color.RESET
        assert Color.from_sgr(44) == Color.BLUE
        assert Color.from_sgr(97) == Color.BRIGHT_WHITE
        with pytest.raises(ValueError):
            Color.from_sgr(12)

    def test_from_name(self) -> None:
        assert Color.from_name("bright-green") == Color.BRIGHT_GREEN
        assert Color.from_name("Default") is Color.RESET
        with pytest.raises(ValueError):
            Color.from_name("chartreuse")

    def test_range_validation(self) -> None:
        with pytest.raises(ValueError):
            Color.from_256(256)
        with pytest.raises(ValueError):
            Color.from_rgb(0, 300, 0)


class TestCell:
    """Tests for Cell."""

    def test_default_cell(self) -> None:
        cell = Cell()
        assert cell.char == ' '
        assert cell.fg == Color.RESET
        assert cell.bg == Color.RESET
        assert cell.is_default()
        assert cell == DEFAULT_CELL

    def test_value_equality(self) -> None:
        assert Cell('x', Color.RED) == Cell('x', Color.RED)
        assert Cell('x', Color.RED) != Cell('x', Color.RED, Color.BLUE)
        assert not Cell('x').is_default()
        assert not Cell(bg=Color.BLACK).is_default()

    def test_immutable(self) -> None:
        cell = Cell('x')
        with pytest.raises(AttributeError):
            cell.char = 'y'  # type: ignore[misc]


class TestFrameBuffer:
    """Tests for FrameBuffer."""

    def test_new_buffer_is_blank(self) -> None:
        buffer = FrameBuffer(4, 3)
        assert buffer.size == (4, 3)
        assert len(buffer) == 12
        assert all(cell == DEFAULT_CELL for _, _, cell in buffer.cells())

    def test_zero_sized_buffer(self) -> None:
        buffer = FrameBuffer(0, 0)
        assert len(buffer) == 0
        buffer.put(0, 0, Cell('x'))
        buffer.clear()
        assert list(buffer.diff(FrameBuffer(0, 0))) == []

    def test_put_and_get(self) -> None:
        buffer = FrameBuffer(5, 2)
        buffer.put(3, 1, Cell('A', Color.GREEN))
        assert buffer.get(3, 1) == Cell('A', Color.GREEN)
        assert buffer[3, 1].char == 'A'

    def test_row_major_layout(self) -> None:
        buffer = FrameBuffer(3, 2)
        buffer.put(0, 1, Cell('x'))
        rows = list(buffer.rows())
        assert len(rows) == 2
        assert rows[1][0] == Cell('x')
        assert rows[0] == [DEFAULT_CELL] * 3

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 2), (99, 99), (3, -1)])
    def test_out_of_bounds_put_is_ignored(self, x: int, y: int) -> None:
        buffer = FrameBuffer(5, 2)
        before = buffer.copy()
        buffer.put(x, y, Cell('X'))
        assert buffer == before

    def test_out_of_bounds_get_raises(self) -> None:
        with pytest.raises(IndexError):
            FrameBuffer(2, 2).get(2, 0)

    def test_put_run_truncates_at_row_end(self) -> None:
        buffer = FrameBuffer(5, 2)
        written = buffer.put_run(3, 0, [Cell(c) for c in "abcdef"])
        assert written == 2
        assert buffer.get(3, 0) == Cell('a')
        assert buffer.get(4, 0) == Cell('b')
        assert all(cell == DEFAULT_CELL for cell in list(buffer.rows())[1])

    def test_put_run_on_last_row_stays_in_buffer(self) -> None:
        buffer = FrameBuffer(4, 2)
        written = buffer.put_run(1, 1, [Cell('z')] * 50)
        assert written == 3
        assert len(buffer) == 8
        assert buffer.get(3, 1) == Cell('z')

    def test_put_run_from_invalid_start(self) -> None:
        buffer = FrameBuffer(4, 2)
        assert buffer.put_run(-1, 0, [Cell('z')]) == 0
        assert buffer.put_run(0, 2, [Cell('z')]) == 0
        assert buffer == FrameBuffer(4, 2)

    def test_clear(self) -> None:
        buffer = FrameBuffer(3, 3)
        buffer.put(1, 1, Cell('q'))
        buffer.invalidate(2, 2)
        buffer.clear()
        assert buffer == FrameBuffer(3, 3)

    def test_resize_discards_content(self) -> None:
        buffer = FrameBuffer(3, 3)
        buffer.put(0, 0, Cell('q'))
        buffer.resize(7, 2)
        assert buffer.size == (7, 2)
        assert len(buffer) == 14
        assert buffer == FrameBuffer(7, 2)

    def test_diff_identical_is_empty(self) -> None:
        rng = random.Random(7)
        buffer = random_buffer(rng, 8, 5)
        assert list(buffer.diff(buffer.copy())) == []

    def test_diff_reports_target_cells_in_row_major_order(self) -> None:
        a = FrameBuffer(3, 2)
        b = FrameBuffer(3, 2)
        b.put(2, 1, Cell('z'))
        b.put(0, 0, Cell('H'))
        b.put(1, 0, Cell('i'))
        assert list(a.diff(b)) == [
            Patch(0, 0, Cell('H')),
            Patch(1, 0, Cell('i')),
            Patch(2, 1, Cell('z')),
        ]

    def test_applying_diff_reproduces_target(self) -> None:
        rng = random.Random(1234)
        for _ in range(20):
            a = random_buffer(rng, 9, 4)
            b = random_buffer(rng, 9, 4)
            patched = a.copy()
            patched.apply(a.diff(b))
            assert patched == b

    def test_diff_shape_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            list(FrameBuffer(2, 2).diff(FrameBuffer(3, 2)))

    def test_invalidated_cell_always_differs(self) -> None:
        a = FrameBuffer(2, 1)
        a.invalidate(1, 0)
        assert a.get(1, 0) is None
        assert list(a.diff(FrameBuffer(2, 1))) == [Patch(1, 0, DEFAULT_CELL)]

    def test_copy_is_independent(self) -> None:
        a = FrameBuffer(2, 2)
        b = a.copy()
        b.put(0, 0, Cell('x'))
        assert a.get(0, 0) == DEFAULT_CELL
