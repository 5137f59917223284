import random
from typing import Iterator, List, Tuple

from trimaze.algo.base import Generator
from trimaze.core.grid import TriGrid


class RecursiveBacktracker(Generator):
    """Depth-first carving; yields a perfect maze with `exits` openings on the boundary."""

    def __init__(self, rows: int, cols: int, seed: int = None, exits: int = 1):
        super().__init__(rows, cols, seed)
        if exits < 0:
            raise ValueError("exits must be >= 0")
        self.exits = exits

    def run(self) -> Iterator[str]:
        rng = random.Random(self.seed)

        # Start at (0,0)
        self.set_visited(0, 0)

        # Stack of (row, col)
        stack: List[Tuple[int, int]] = [(0, 0)]

        while stack:
            cr, cc = stack[-1]

            neighbors = [(nr, nc, edge) for nr, nc, edge in self.get_neighbors(cr, cc)
                         if not self.is_visited(nr, nc)]

            if neighbors:
                nr, nc, edge = rng.choice(neighbors)

                self.carve_path(cr, cc, edge)
                self.set_visited(nr, nc)

                stack.append((nr, nc))
                self.step_count += 1

                # Yield every N steps to keep UI responsive without spamming
                if self.step_count % 100 == 0:
                    yield f"Carving... Stack: {len(stack)}"
            else:
                # Backtrack
                stack.pop()
                if self.step_count % 100 == 0:
                    yield f"Backtracking... Stack: {len(stack)}"

        # Open the way out
        boundary = list(TriGrid(self.rows, self.cols).boundary_edges())
        for row, col, edge in rng.sample(boundary, min(self.exits, len(boundary))):
            self.carve_path(row, col, edge)

        yield "Done"
