"""FrameBuffer - flat grid of cells representing one screen image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from cellterm.core.cell import DEFAULT_CELL, Cell


@dataclass(frozen=True, slots=True)
class Patch:
    """A position whose cell differs between two buffers, with the target cell."""
    x: int
    y: int
    cell: Cell


class FrameBuffer:
    """
    A width x height grid of Cells stored row-major in a single list.

    Cell (x, y) lives at index ``y * width + x``. Writes outside the grid
    are ignored rather than raised, so a caller holding stale coordinates
    during a resize cannot break the render loop.

    A slot may also hold ``None`` after :meth:`invalidate`: its content is
    unknown and it differs from every cell.
    """

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self._width = max(0, width)
        self._height = max(0, height)
        self._cells: list[Optional[Cell]] = [DEFAULT_CELL] * (self._width * self._height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the grid."""
        return self._width, self._height

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrameBuffer):
            return NotImplemented
        return self.size == other.size and self._cells == other._cells

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self._width}, height={self._height})"

    def _index(self, x: int, y: int) -> Optional[int]:
        if 0 <= x < self._width and 0 <= y < self._height:
            return y * self._width + x
        return None

    def clear(self) -> None:
        """Reset every cell to the default cell."""
        self._cells = [DEFAULT_CELL] * len(self._cells)

    def resize(self, width: int, height: int) -> None:
        """Change dimensions. Previous content is discarded, not migrated."""
        self._width = max(0, width)
        self._height = max(0, height)
        self._cells = [DEFAULT_CELL] * (self._width * self._height)

    def get(self, x: int, y: int) -> Optional[Cell]:
        """Get the cell at (x, y); None if the position was invalidated."""
        index = self._index(x, y)
        if index is None:
            raise IndexError(f"({x}, {y}) out of bounds ({self._width}x{self._height})")
        return self._cells[index]

    def __getitem__(self, pos: tuple[int, int]) -> Optional[Cell]:
        """Get cell using indexing: buffer[x, y]."""
        x, y = pos
        return self.get(x, y)

    def put(self, x: int, y: int, cell: Cell) -> None:
        """Write one cell; out-of-bounds positions are ignored."""
        index = self._index(x, y)
        if index is not None:
            self._cells[index] = cell

    def put_run(self, x: int, y: int, cells: Iterable[Cell]) -> int:
        """
        Write cells left to right starting at (x, y).

        The run is truncated at the end of the row. Returns the number of
        cells written.
        """
        start = self._index(x, y)
        if start is None:
            return 0
        end = start + (self._width - x)
        written = 0
        for offset, cell in enumerate(cells):
            if start + offset >= end:
                break
            self._cells[start + offset] = cell
            written += 1
        return written

    def invalidate(self, x: int, y: int) -> None:
        """Mark a position as unknown so the next diff against it reports it."""
        index = self._index(x, y)
        if index is not None:
            self._cells[index] = None

    def diff(self, other: FrameBuffer) -> Iterator[Patch]:
        """
        Yield a Patch for every position whose cell differs in ``other``.

        Positions are visited in row-major order and patches carry the
        cell from ``other``. Both buffers must have the same shape; resize
        before diffing.
        """
        if self.size != other.size:
            raise ValueError(
                f"Cannot diff {self._width}x{self._height} against "
                f"{other.width}x{other.height}"
            )
        width = self._width
        for index, (ours, theirs) in enumerate(zip(self._cells, other._cells)):
            if ours != theirs and theirs is not None:
                y, x = divmod(index, width)
                yield Patch(x, y, theirs)

    def apply(self, patches: Iterable[Patch]) -> None:
        """Write each patch's cell at its position."""
        for patch in patches:
            self.put(patch.x, patch.y, patch.cell)

    def copy(self) -> FrameBuffer:
        """Create a shallow copy; cells are immutable so sharing them is safe."""
        clone = FrameBuffer.__new__(FrameBuffer)
        clone._width = self._width
        clone._height = self._height
        clone._cells = list(self._cells)
        return clone

    def rows(self) -> Iterator[list[Optional[Cell]]]:
        """Iterate over rows."""
        for start in range(0, len(self._cells), self._width or 1):
            yield self._cells[start:start + self._width]

    def cells(self) -> Iterator[tuple[int, int, Optional[Cell]]]:
        """Iterate over all cells as (x, y, cell) tuples."""
        for y, row in enumerate(self.rows()):
            for x, cell in enumerate(row):
                yield x, y, cell
