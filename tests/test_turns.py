import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from trimaze.algo.turns import start_edge, turn, turn_sequence
from trimaze.core.geometry import Edge, Hand, edge_for_facing, opposite_edge, step
from trimaze.core.grid import TriGrid


class TestTurns(unittest.TestCase):
    def test_known_values(self):
        # APEX_UP cell
        self.assertEqual(turn(0, 0, Edge.LEFT, Hand.RIGHT), Edge.RIGHT)
        self.assertEqual(turn(0, 0, Edge.RIGHT, Hand.RIGHT), Edge.BASE)
        self.assertEqual(turn(0, 0, Edge.BASE, Hand.RIGHT), Edge.LEFT)
        self.assertEqual(turn(0, 0, Edge.LEFT, Hand.LEFT), Edge.BASE)
        # APEX_DOWN cell
        self.assertEqual(turn(0, 1, Edge.LEFT, Hand.RIGHT), Edge.BASE)
        self.assertEqual(turn(0, 1, Edge.BASE, Hand.RIGHT), Edge.RIGHT)
        self.assertEqual(turn(0, 1, Edge.LEFT, Hand.LEFT), Edge.RIGHT)

    def test_period_three(self):
        for r in range(2):
            for c in range(2):
                for edge in Edge:
                    for hand in Hand:
                        e = edge
                        for _ in range(3):
                            e = turn(r, c, e, hand)
                        self.assertEqual(e, edge)

    def test_sequence_visits_every_edge(self):
        for r in range(2):
            for c in range(2):
                for edge in Edge:
                    for hand in Hand:
                        seq = turn_sequence(r, c, edge, hand)
                        self.assertEqual(seq[0], edge)
                        self.assertEqual(set(seq), set(Edge))

    def test_hands_rotate_opposite_ways(self):
        for r in range(2):
            for c in range(2):
                for edge in Edge:
                    right = turn_sequence(r, c, edge, Hand.RIGHT)
                    left = turn_sequence(r, c, edge, Hand.LEFT)
                    self.assertEqual(right[1:], left[:0:-1])

    def test_turn_only_depends_on_parity(self):
        for edge in Edge:
            for hand in Hand:
                self.assertEqual(turn(0, 0, edge, hand), turn(3, 5, edge, hand))
                self.assertEqual(turn(0, 1, edge, hand), turn(4, 7, edge, hand))

    def test_formula_matches_facing_tables(self):
        # After stepping through an edge, the first edge tested in the new cell
        # is the one the facing tables name.
        for r in range(1, 3):
            for c in range(1, 3):
                for edge in Edge:
                    (nr, nc), facing = step(r, c, edge)
                    for hand in Hand:
                        self.assertEqual(
                            turn(nr, nc, opposite_edge(edge), hand),
                            edge_for_facing(facing, hand),
                            f"cell ({r},{c}) edge {edge.name} hand {hand.name}",
                        )


class TestStartEdge(unittest.TestCase):
    def test_apex_up_prefers_left_diagonal(self):
        grid = TriGrid(1, 1, [0])
        self.assertEqual(start_edge(grid, 0, 0, Hand.RIGHT), Edge.LEFT)
        self.assertEqual(start_edge(grid, 0, 0, Hand.LEFT), Edge.LEFT)

    def test_fallbacks(self):
        self.assertEqual(start_edge(TriGrid(1, 1, [1]), 0, 0, Hand.RIGHT), Edge.RIGHT)
        self.assertEqual(start_edge(TriGrid(1, 1, [1]), 0, 0, Hand.LEFT), Edge.BASE)
        self.assertEqual(start_edge(TriGrid(1, 1, [3]), 0, 0, Hand.RIGHT), Edge.BASE)
        self.assertEqual(start_edge(TriGrid(1, 1, [5]), 0, 0, Hand.LEFT), Edge.RIGHT)

    def test_apex_down_skips_left_diagonal(self):
        grid = TriGrid(1, 2, [0, 0])
        self.assertEqual(start_edge(grid, 0, 1, Hand.RIGHT), Edge.RIGHT)
        self.assertEqual(start_edge(grid, 0, 1, Hand.LEFT), Edge.BASE)


if __name__ == '__main__':
    unittest.main()
