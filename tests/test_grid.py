import unittest
import sys
import os

# Add project root to path so we can import trimaze
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from trimaze.core.errors import OutOfRange
from trimaze.core.geometry import (
    Direction, Edge, Orientation, Position, opposite_edge, orientation, step, triangle_sign,
)
from trimaze.core.grid import TriGrid


class TestGrid(unittest.TestCase):
    def setUp(self):
        # 1 0 4
        # 2 7 0
        self.grid = TriGrid(2, 3, [1, 0, 4, 2, 7, 0])

    def test_initialization(self):
        grid = TriGrid(4, 5)
        self.assertEqual(len(grid), 20)
        self.assertEqual((grid.rows, grid.cols), (4, 5))
        for row in grid.masks():
            self.assertEqual(row, [0] * 5)

    def test_bad_dimensions(self):
        with self.assertRaises(ValueError):
            TriGrid(0, 3)
        with self.assertRaises(ValueError):
            TriGrid(2, -1)
        with self.assertRaises(ValueError):
            TriGrid(2, 2, [0, 0, 0])

    def test_from_rows(self):
        grid = TriGrid.from_rows([[1, 0, 4], [2, 7, 0]])
        self.assertEqual(grid, self.grid)
        with self.assertRaises(ValueError):
            TriGrid.from_rows([[1, 0], [2]])

    def test_in_bounds(self):
        self.assertTrue(self.grid.in_bounds(0, 0))
        self.assertTrue(self.grid.in_bounds(1, 2))
        self.assertFalse(self.grid.in_bounds(-1, 0))
        self.assertFalse(self.grid.in_bounds(2, 0))
        self.assertFalse(self.grid.in_bounds(0, 3))
        self.assertFalse(self.grid.in_bounds(0, -1))

    def test_has_wall(self):
        self.assertTrue(self.grid.has_wall(0, 0, Edge.LEFT))
        self.assertFalse(self.grid.has_wall(0, 0, Edge.RIGHT))
        self.assertFalse(self.grid.has_wall(0, 0, Edge.BASE))
        self.assertTrue(self.grid.has_wall(0, 2, Edge.BASE))
        self.assertTrue(self.grid.has_wall(1, 0, Edge.RIGHT))
        for edge in Edge:
            self.assertTrue(self.grid.has_wall(1, 1, edge))
            self.assertFalse(self.grid.has_wall(1, 2, edge))

    def test_has_wall_out_of_range(self):
        for row, col in [(-1, 0), (0, -1), (2, 0), (0, 3)]:
            with self.assertRaises(OutOfRange):
                self.grid.has_wall(row, col, Edge.LEFT)
        # Still an IndexError for callers that only know the builtin
        with self.assertRaises(IndexError):
            self.grid.get_index(5, 5)

    def test_undefined_bits_are_ignored(self):
        grid = TriGrid(1, 1, [0b1010])
        self.assertEqual(grid.mask(0, 0), TriGrid.RIGHT)
        self.assertTrue(grid.has_wall(0, 0, Edge.RIGHT))
        self.assertFalse(grid.has_wall(0, 0, Edge.LEFT))
        self.assertFalse(grid.has_wall(0, 0, Edge.BASE))
        self.assertFalse(grid.is_sealed(0, 0))

    def test_sealed(self):
        self.assertTrue(self.grid.is_sealed(1, 1))
        self.assertFalse(self.grid.is_sealed(0, 0))

    def test_immutable_copy(self):
        cells = [0, 0]
        grid = TriGrid(1, 2, cells)
        cells[0] = 7
        self.assertEqual(grid.mask(0, 0), 0)
        self.assertFalse(hasattr(grid, "carve_path"))

    def test_neighbors(self):
        self.assertEqual(self.grid.neighbor(0, 0, Edge.LEFT), (0, -1))
        self.assertEqual(self.grid.neighbor(0, 0, Edge.RIGHT), (0, 1))
        self.assertEqual(self.grid.neighbor(0, 0, Edge.BASE), (-1, 0))
        self.assertEqual(self.grid.neighbor(0, 1, Edge.BASE), (1, 1))

    def test_boundary_edges(self):
        self.assertEqual(len(list(TriGrid(1, 1).boundary_edges())), 3)
        self.assertEqual(len(list(TriGrid(2, 2).boundary_edges())), 6)

    def test_round_trip_bytes(self):
        grid = TriGrid(2, 3, self.grid.to_bytes())
        self.assertEqual(grid, self.grid)


class TestGeometry(unittest.TestCase):
    def test_orientation_alternates(self):
        for r in range(-2, 6):
            for c in range(-2, 6):
                self.assertNotEqual(orientation(r, c), orientation(r + 1, c))
                self.assertNotEqual(orientation(r, c), orientation(r, c + 1))

    def test_orientation_parity(self):
        self.assertIs(orientation(0, 0), Orientation.APEX_UP)
        self.assertIs(orientation(0, 1), Orientation.APEX_DOWN)
        self.assertIs(orientation(3, 5), Orientation.APEX_UP)
        self.assertEqual(triangle_sign(0, 0), -1)
        self.assertEqual(triangle_sign(1, 0), 1)

    def test_edge_bits(self):
        self.assertEqual(Edge.LEFT.bit, TriGrid.LEFT)
        self.assertEqual(Edge.RIGHT.bit, TriGrid.RIGHT)
        self.assertEqual(Edge.BASE.bit, TriGrid.BASE)

    def test_step_facings(self):
        # APEX_UP cell
        self.assertEqual(step(0, 0, Edge.LEFT), (Position(0, -1), Direction.BOTTOM_LEFT))
        self.assertEqual(step(0, 0, Edge.RIGHT), (Position(0, 1), Direction.BOTTOM_RIGHT))
        self.assertEqual(step(2, 2, Edge.BASE), (Position(1, 2), Direction.TOP))
        # APEX_DOWN cell
        self.assertEqual(step(0, 1, Edge.LEFT), (Position(0, 0), Direction.TOP_LEFT))
        self.assertEqual(step(0, 1, Edge.RIGHT), (Position(0, 2), Direction.TOP_RIGHT))
        self.assertEqual(step(0, 1, Edge.BASE), (Position(1, 1), Direction.BOTTOM))

    def test_shared_edges(self):
        # Crossing back through the same side returns to the start cell
        for r in range(4):
            for c in range(4):
                for edge in Edge:
                    (nr, nc), _ = step(r, c, edge)
                    (br, bc), _ = step(nr, nc, opposite_edge(edge))
                    self.assertEqual((br, bc), (r, c))

    def test_one_based(self):
        self.assertEqual(Position(0, 2).one_based(), (1, 3))
        self.assertEqual(Position(-1, 0).one_based(), (0, 1))


if __name__ == '__main__':
    unittest.main()
