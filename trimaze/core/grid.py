from array import array
from typing import Iterable, Iterator, List, Optional, Sequence

from trimaze.core.errors import OutOfRange
from trimaze.core.geometry import Edge, Orientation, Position, orientation, step


class TriGrid:
    # Bitmask Constants
    LEFT  = 0b001  # left diagonal
    RIGHT = 0b010  # right diagonal
    BASE  = 0b100  # top or bottom edge

    ALL_WALLS = LEFT | RIGHT | BASE
    NO_WALLS = 0

    __slots__ = ('_rows', '_cols', '_cells')

    def __init__(self, rows: int, cols: int, cells: Optional[Iterable[int]] = None):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")

        if cells is None:
            data = array('B', [self.NO_WALLS] * (rows * cols))
        else:
            # Whole byte kept so files round-trip; undefined bits are masked on read
            data = array('B', (int(v) & 0xFF for v in cells))

        if len(data) != rows * cols:
            raise ValueError(f"Expected {rows * cols} cells for a {rows}x{cols} grid, got {len(data)}")

        self._rows = rows
        self._cols = cols
        self._cells = data

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "TriGrid":
        if not rows:
            raise ValueError("Grid needs at least one row")
        width = len(rows[0])
        for r, line in enumerate(rows):
            if len(line) != width:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {width}")
        return cls(len(rows), width, (v for line in rows for v in line))

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def __len__(self) -> int:
        return self._rows * self._cols

    def __eq__(self, other) -> bool:
        if not isinstance(other, TriGrid):
            return NotImplemented
        return (self._rows, self._cols, self._cells) == (other._rows, other._cols, other._cells)

    def __repr__(self) -> str:
        return f"TriGrid({self._rows}x{self._cols})"

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def get_index(self, row: int, col: int) -> int:
        if 0 <= row < self._rows and 0 <= col < self._cols:
            return row * self._cols + col
        raise OutOfRange(row, col)

    def mask(self, row: int, col: int) -> int:
        return self._cells[self.get_index(row, col)] & self.ALL_WALLS

    def has_wall(self, row: int, col: int, edge: Edge) -> bool:
        return (self._cells[self.get_index(row, col)] & Edge(edge).bit) != 0

    def is_sealed(self, row: int, col: int) -> bool:
        """True when all three edges of the cell are walled."""
        return self.mask(row, col) == self.ALL_WALLS

    def orientation(self, row: int, col: int) -> Orientation:
        return orientation(row, col)

    def neighbor(self, row: int, col: int, edge: Edge) -> Position:
        """
        Returns the cell on the other side of `edge`.
        The result may lie outside the grid; use in_bounds() to check.
        """
        return step(row, col, edge)[0]

    def boundary_edges(self) -> Iterator[tuple]:
        """Yields (row, col, edge) for every edge that leads out of the grid."""
        for r in range(self._rows):
            for c in range(self._cols):
                for edge in Edge:
                    if not self.in_bounds(*self.neighbor(r, c, edge)):
                        yield (r, c, edge)

    def masks(self) -> Iterator[List[int]]:
        """Yields each row as a list of 3-bit wall masks."""
        for r in range(self._rows):
            start = r * self._cols
            yield [v & self.ALL_WALLS for v in self._cells[start:start + self._cols]]

    def to_bytes(self) -> bytes:
        return self._cells.tobytes()
