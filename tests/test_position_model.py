"""
Tests for the position model.

Tests cover:
- Position validation and arithmetic
- Set, adjust and reset on PositionModel
- Grouping independence of adjust sequences
"""

import unittest
from dataclasses import FrozenInstanceError

from OA_Libs.AlignmentLib.position_model import ORIGIN, Position, PositionModel


class TestPosition(unittest.TestCase):
    """Test the Position value object."""

    def test_defaults_to_origin(self):
        self.assertEqual(Position(), ORIGIN)
        self.assertEqual(ORIGIN.as_tuple(), (0, 0))

    def test_allows_negative_and_large_offsets(self):
        """Offsets are unbounded in both directions."""
        pos = Position(-5000, 99999)
        self.assertEqual(pos.x, -5000)
        self.assertEqual(pos.y, 99999)

    def test_rejects_non_integer_coordinates(self):
        with self.assertRaises(TypeError):
            Position(1.5, 0)
        with self.assertRaises(TypeError):
            Position(0, "3")
        with self.assertRaises(TypeError):
            Position(True, 0)

    def test_addition_and_subtraction(self):
        a = Position(3, -4)
        b = Position(10, 20)
        self.assertEqual(a + b, Position(13, 16))
        self.assertEqual(b - a, Position(7, 24))

    def test_is_immutable(self):
        pos = Position(1, 2)
        with self.assertRaises(FrozenInstanceError):
            pos.x = 5


class TestPositionModel(unittest.TestCase):
    """Test PositionModel mutation."""

    def test_starts_at_origin(self):
        self.assertEqual(PositionModel().position, ORIGIN)

    def test_set_replaces_value(self):
        model = PositionModel()
        model.set(Position(7, -3))
        self.assertEqual(model.position, Position(7, -3))

    def test_set_requires_position(self):
        with self.assertRaises(TypeError):
            PositionModel().set((1, 2))

    def test_adjust_adds_delta(self):
        model = PositionModel(Position(5, 5))
        model.adjust(-2, 3)
        self.assertEqual(model.position, Position(3, 8))

    def test_adjust_rejects_floats(self):
        with self.assertRaises(TypeError):
            PositionModel().adjust(0.5, 0)

    def test_reset(self):
        model = PositionModel(Position(40, 40))
        model.reset()
        self.assertEqual(model.position, ORIGIN)

    def test_adjust_sequence_equals_vector_sum(self):
        """Final position is the sum of all deltas however they are grouped."""
        deltas = [(3, 1), (-7, 2), (0, -9), (12, 12), (-1, 0)]

        one_by_one = PositionModel()
        for dx, dy in deltas:
            one_by_one.adjust(dx, dy)

        grouped = PositionModel()
        grouped.adjust(deltas[0][0] + deltas[1][0], deltas[0][1] + deltas[1][1])
        grouped.adjust(
            sum(dx for dx, _ in deltas[2:]),
            sum(dy for _, dy in deltas[2:]),
        )

        expected = Position(sum(dx for dx, _ in deltas), sum(dy for _, dy in deltas))
        self.assertEqual(one_by_one.position, expected)
        self.assertEqual(grouped.position, expected)


if __name__ == "__main__":
    unittest.main()
