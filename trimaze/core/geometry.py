"""
Triangle geometry shared by the grid, the turn table and the walker.

Cells alternate orientation along rows and columns. A cell whose
``row + col`` is even is APEX_UP and shares its base with the cell above;
an odd cell is APEX_DOWN and shares its base with the cell below. The two
diagonals are always shared with the left and right neighbours in the row.
"""
from enum import Enum, IntEnum
from typing import NamedTuple, Tuple


class Edge(IntEnum):
    LEFT = 0   # left diagonal
    RIGHT = 1  # right diagonal
    BASE = 2   # top or bottom edge

    @property
    def bit(self) -> int:
        return 1 << self.value


class Orientation(Enum):
    APEX_UP = -1
    APEX_DOWN = 1


class Hand(IntEnum):
    """Wall-following convention; the value is the handedness factor of the turn formula."""
    RIGHT = -1
    LEFT = 1


class Direction(Enum):
    TOP_LEFT = 0
    TOP = 1
    TOP_RIGHT = 2
    BOTTOM_LEFT = 3
    BOTTOM = 4
    BOTTOM_RIGHT = 5


class Position(NamedTuple):
    row: int
    col: int

    def one_based(self) -> Tuple[int, int]:
        return (self.row + 1, self.col + 1)


# Which edge the walker tests first after arriving with a given facing
EDGE_FOR_FACING = {
    Hand.LEFT: {
        Direction.TOP_LEFT: Edge.LEFT,
        Direction.TOP: Edge.LEFT,
        Direction.TOP_RIGHT: Edge.BASE,
        Direction.BOTTOM_LEFT: Edge.BASE,
        Direction.BOTTOM: Edge.RIGHT,
        Direction.BOTTOM_RIGHT: Edge.RIGHT,
    },
    Hand.RIGHT: {
        Direction.BOTTOM: Edge.LEFT,
        Direction.BOTTOM_LEFT: Edge.LEFT,
        Direction.TOP: Edge.RIGHT,
        Direction.TOP_RIGHT: Edge.RIGHT,
        Direction.TOP_LEFT: Edge.BASE,
        Direction.BOTTOM_RIGHT: Edge.BASE,
    },
}

OPPOSITE_EDGE = {Edge.LEFT: Edge.RIGHT, Edge.RIGHT: Edge.LEFT, Edge.BASE: Edge.BASE}


def orientation(row: int, col: int) -> Orientation:
    if (row + col) % 2 == 0:
        return Orientation.APEX_UP
    return Orientation.APEX_DOWN


def triangle_sign(row: int, col: int) -> int:
    """-1 for APEX_UP cells, +1 for APEX_DOWN cells."""
    return orientation(row, col).value


def edge_for_facing(direction: Direction, hand: Hand) -> Edge:
    return EDGE_FOR_FACING[Hand(hand)][direction]


def opposite_edge(edge: Edge) -> Edge:
    """The same physical side, as seen from the cell on the other side of it."""
    return OPPOSITE_EDGE[Edge(edge)]


def step(row: int, col: int, edge: Edge) -> Tuple[Position, Direction]:
    """
    Moves out of (row, col) through `edge`.
    Returns the new position and the facing the move leaves the walker with.
    The facing depends on the orientation of the cell being left.
    """
    up = orientation(row, col) is Orientation.APEX_UP
    edge = Edge(edge)

    if edge is Edge.LEFT:
        return Position(row, col - 1), (Direction.BOTTOM_LEFT if up else Direction.TOP_LEFT)
    if edge is Edge.RIGHT:
        return Position(row, col + 1), (Direction.BOTTOM_RIGHT if up else Direction.TOP_RIGHT)
    return Position(row + triangle_sign(row, col), col), (Direction.TOP if up else Direction.BOTTOM)
