from abc import ABC, abstractmethod
from array import array
from typing import Iterator, Tuple

from trimaze.core.geometry import Edge, opposite_edge, step
from trimaze.core.grid import TriGrid


class Generator(ABC):
    """
    Carves a maze into a scratch buffer of wall masks.
    TriGrid is immutable, so generators own the buffer and hand out
    frozen snapshots through grid().
    """
    def __init__(self, rows: int, cols: int, seed: int = None):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.seed = seed
        self.step_count = 0
        # All walls present by default, 1 byte per cell
        self.cells = array('B', [TriGrid.ALL_WALLS] * (rows * cols))
        self.visited = array('B', [0] * (rows * cols))

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int, Edge]]:
        """
        Yields (nrow, ncol, edge_to_neighbor) for the in-grid neighbours.
        Does NOT check walls.
        """
        for edge in Edge:
            (nr, nc), _ = step(row, col, edge)
            if self.in_bounds(nr, nc):
                yield (nr, nc, edge)

    def carve_path(self, row: int, col: int, edge: Edge):
        """
        Removes the wall on `edge` of (row, col) and the matching wall of the
        neighbour. On the boundary only the cell's own wall goes, which opens
        an exit.
        """
        self.cells[row * self.cols + col] &= ~edge.bit

        (nr, nc), _ = step(row, col, edge)
        if self.in_bounds(nr, nc):
            self.cells[nr * self.cols + nc] &= ~opposite_edge(edge).bit

    def set_visited(self, row: int, col: int):
        self.visited[row * self.cols + col] = 1

    def is_visited(self, row: int, col: int) -> bool:
        return self.visited[row * self.cols + col] != 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The carving happens in-place on self.cells.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass

    def grid(self) -> TriGrid:
        return TriGrid(self.rows, self.cols, self.cells)
