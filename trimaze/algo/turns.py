from typing import List

from trimaze.core.geometry import Edge, Hand, Orientation, orientation, triangle_sign
from trimaze.core.grid import TriGrid


def turn(row: int, col: int, edge: Edge, hand: Hand) -> Edge:
    """
    Next edge to test after `edge` of cell (row, col) turned out to be walled.

    Rotating by `hand * triangle_sign` covers both orientations and both
    hands; applying it three times returns to `edge`.
    """
    return Edge((3 + int(edge) + int(hand) * triangle_sign(row, col)) % 3)


def turn_sequence(row: int, col: int, edge: Edge, hand: Hand) -> List[Edge]:
    """The three edges of the cell in the order a walker tests them, starting at `edge`."""
    seq = [Edge(edge)]
    for _ in range(2):
        seq.append(turn(row, col, seq[-1], hand))
    return seq


def start_edge(grid: TriGrid, row: int, col: int, hand: Hand) -> Edge:
    """
    Picks the first edge to follow from a standing start.

    APEX_UP cells try an open left diagonal first. Then the right hand
    prefers an open right diagonal over the base, the left hand an open
    base over the right diagonal.
    """
    if orientation(row, col) is Orientation.APEX_UP and not grid.has_wall(row, col, Edge.LEFT):
        return Edge.LEFT

    if Hand(hand) is Hand.RIGHT:
        if not grid.has_wall(row, col, Edge.RIGHT):
            return Edge.RIGHT
        return Edge.BASE

    if not grid.has_wall(row, col, Edge.BASE):
        return Edge.BASE
    return Edge.RIGHT
