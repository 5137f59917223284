import logging
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

from trimaze.algo.turns import start_edge, turn
from trimaze.core.errors import InvalidStart, StepLimitExceeded
from trimaze.core.geometry import Direction, Edge, Hand, Position, opposite_edge, step
from trimaze.core.grid import TriGrid

logger = logging.getLogger(__name__)

StepObserver = Callable[[Position, Optional[Direction]], None]
InitialEdge = Union[Edge, str]

BORDER = "border"


class Walker:
    """
    Follows a wall with one hand until the walker steps off the grid.

    walk() returns a lazy generator of positions: the start cell first and
    the first position outside the grid last. Every call starts a fresh walk.
    A maze with no reachable boundary makes the generator infinite; wrap it
    with bounded() when that matters.
    """
    # Facing reported for the start cell; only the default right-diagonal
    # opening has a conventional one, other openings report None
    INITIAL_FACING = Direction.BOTTOM_RIGHT

    def __init__(self, grid: TriGrid, hand: Hand = Hand.RIGHT,
                 initial_edge: InitialEdge = Edge.RIGHT,
                 observer: Optional[StepObserver] = None):
        if initial_edge != BORDER:
            initial_edge = Edge(initial_edge)
        self.grid = grid
        self.hand = Hand(hand)
        self.initial_edge = initial_edge
        self.observer = observer

        # Stats of the most recent walk
        self.path: List[Position] = []
        self.steps = 0
        self.max_edges_tested = 0

    def first_edge(self, row: int, col: int) -> Edge:
        if self.initial_edge == BORDER:
            return start_edge(self.grid, row, col, self.hand)
        return self.initial_edge

    def walk(self, row: int, col: int) -> Iterator[Position]:
        if not self.grid.in_bounds(row, col):
            raise InvalidStart(row, col, self.grid.rows, self.grid.cols)
        return self._walk(row, col)

    def _walk(self, row: int, col: int) -> Iterator[Position]:
        self.path = []
        self.steps = 0
        self.max_edges_tested = 0

        pos = Position(row, col)
        edge = self.first_edge(row, col)
        facing = self.INITIAL_FACING if edge is Edge.RIGHT else None
        logger.debug("Walking from %s with the %s hand, first edge %s", pos, self.hand.name.lower(), edge.name)

        while True:
            self.path.append(pos)
            self.steps += 1
            if self.observer:
                self.observer(pos, facing)
            yield pos

            if not self.grid.in_bounds(pos.row, pos.col):
                logger.debug("Exited at %s after %d steps", pos, self.steps)
                return

            # Pivot in place. On a consistent maze the edge we came through is
            # open, so this ends within three tests.
            tested = 1
            while self.grid.has_wall(pos.row, pos.col, edge):
                edge = turn(pos.row, pos.col, edge, self.hand)
                tested += 1
            self.max_edges_tested = max(self.max_edges_tested, tested)

            pos, facing = step(pos.row, pos.col, edge)
            if self.grid.in_bounds(pos.row, pos.col):
                # The edge just crossed is the last one to try in the new cell,
                # so the first is the one after it.
                edge = turn(pos.row, pos.col, opposite_edge(edge), self.hand)


def bounded(path: Iterable[Position], max_steps: int) -> Iterator[Position]:
    """Passes positions through, raising StepLimitExceeded past `max_steps`."""
    for count, pos in enumerate(path, start=1):
        if count > max_steps:
            raise StepLimitExceeded(max_steps)
        yield pos


def state_bound(grid: TriGrid) -> int:
    """
    Longest path a terminating walk can produce.
    A cell and the first edge tested in it decide the rest of the walk, so a
    walk visiting more than 3 * rows * cols states never ends.
    """
    return 3 * grid.rows * grid.cols + 1


def escape_path(grid: TriGrid, row: int, col: int, hand: Hand = Hand.RIGHT,
                initial_edge: InitialEdge = Edge.RIGHT,
                observer: Optional[StepObserver] = None) -> Iterator[Tuple[int, int]]:
    """Same as Walker.walk but with 1-based coordinates in and out."""
    walker = Walker(grid, hand=hand, initial_edge=initial_edge, observer=observer)
    return (pos.one_based() for pos in walker.walk(row - 1, col - 1))
