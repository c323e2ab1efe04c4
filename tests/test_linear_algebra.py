"""Unit tests for linear-algebra primitives."""

import math
import sys
import unittest
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from templatematch.utils.linear_algebra import (
    PrecisionRoundingRule,
    ShapeMismatchError,
    as_matrix,
    check_same_shape,
    max_value,
    mean,
    mean_centered,
    multiply_elementwise,
    norm,
    rescale_to_01,
    round_decimal,
    sum_all,
)


class TestAsMatrix(unittest.TestCase):
    """Test conversion of inputs to 2D float64 matrices."""

    def test_float_array_is_not_copied(self):
        arr = np.ones((2, 3), dtype=np.float64)
        self.assertIs(as_matrix(arr), arr)

    def test_list_is_converted(self):
        matrix = as_matrix([[1, 2], [3, 4]])
        self.assertIsInstance(matrix, np.ndarray)
        self.assertEqual(matrix.dtype, np.float64)
        self.assertEqual(matrix.shape, (2, 2))

    def test_integer_array_is_copied(self):
        arr = np.array([[1, 2], [3, 4]], dtype=np.uint8)
        matrix = as_matrix(arr)
        self.assertIsNot(matrix, arr)
        self.assertEqual(matrix.dtype, np.float64)

    def test_non_2d_input(self):
        """Test that 1D and 3D inputs raise ValueError."""
        with self.assertRaises(ValueError):
            as_matrix([1.0, 2.0, 3.0])
        with self.assertRaises(ValueError):
            as_matrix(np.zeros((2, 2, 3)))

    def test_read_only_array_is_copied(self):
        arr = np.ones((2, 2))
        arr.setflags(write=False)
        matrix = as_matrix(arr)
        self.assertIsNot(matrix, arr)
        self.assertTrue(matrix.flags.writeable)

    def test_ragged_rows(self):
        with self.assertRaises(ValueError):
            as_matrix([[1.0, 2.0], [3.0]])


class TestPrimitives(unittest.TestCase):
    """Test the matrix primitives."""

    def setUp(self):
        self.a = np.array([[1.0, 2.0], [3.0, 4.0]])
        self.b = np.array([[5.0, 6.0], [7.0, 8.0]])

    def test_multiply_elementwise(self):
        result = multiply_elementwise(self.a, self.b)
        np.testing.assert_array_equal(result, [[5.0, 12.0], [21.0, 32.0]])
        # Inputs are untouched
        np.testing.assert_array_equal(self.a, [[1.0, 2.0], [3.0, 4.0]])

    def test_multiply_shape_mismatch(self):
        with self.assertRaises(ShapeMismatchError):
            multiply_elementwise(self.a, np.ones((2, 3)))

    def test_shape_mismatch_is_value_error(self):
        with self.assertRaises(ValueError):
            check_same_shape(np.ones((2, 2)), np.ones((3, 2)))

    def test_sum_all(self):
        self.assertEqual(sum_all(self.a), 10.0)
        self.assertEqual(sum_all(self.a, 10.0), 20.0)
        self.assertEqual(sum_all([[-1.0, 1.0]]), 0.0)

    def test_norm(self):
        self.assertAlmostEqual(norm([[3.0, 4.0]]), 5.0)
        self.assertAlmostEqual(norm(self.a), math.sqrt(30.0))
        self.assertEqual(norm(np.zeros((3, 3))), 0.0)
        self.assertGreaterEqual(norm([[-2.0, -1.0]]), 0.0)

    def test_max_value(self):
        self.assertEqual(max_value(self.a), 4.0)
        self.assertEqual(max_value([[-3.0, -1.0], [-2.0, -5.0]]), -1.0)

    def test_max_value_empty(self):
        """Test that an empty matrix has a max of 0.0."""
        self.assertEqual(max_value(np.zeros((0, 0))), 0.0)
        self.assertEqual(max_value(np.zeros((2, 0))), 0.0)

    def test_mean(self):
        self.assertEqual(mean(self.a), 2.5)

    def test_mean_empty(self):
        with np.errstate(invalid="ignore"):
            self.assertTrue(math.isnan(mean(np.zeros((1, 0)))))
            self.assertEqual(mean_centered(np.zeros((1, 0))).shape, (1, 0))

    def test_mean_centered(self):
        centered = mean_centered(self.a)
        np.testing.assert_allclose(centered, [[-1.5, -0.5], [0.5, 1.5]])
        self.assertAlmostEqual(float(centered.sum()), 0.0)
        np.testing.assert_array_equal(self.a, [[1.0, 2.0], [3.0, 4.0]])

    def test_rescale_to_01(self):
        image = np.array([[255.0, 0.0], [51.0, 102.0]])
        scaled = rescale_to_01(image)
        np.testing.assert_allclose(scaled, [[1.0, 0.0], [0.2, 0.4]])
        # Returns a new matrix
        self.assertEqual(image[0, 0], 255.0)


class TestRoundDecimal(unittest.TestCase):
    """Test decimal rounding with precision tiers."""

    def test_two_digits(self):
        self.assertEqual(round_decimal(1.23456, PrecisionRoundingRule.TWOS), 1.23)

    def test_half_rounds_away_from_zero(self):
        self.assertEqual(round_decimal(0.005, PrecisionRoundingRule.TWOS), 0.01)
        self.assertEqual(round_decimal(-0.005, PrecisionRoundingRule.TWOS), -0.01)
        self.assertEqual(round_decimal(2.5), 3.0)
        self.assertEqual(round_decimal(-2.5), -3.0)

    def test_default_precision(self):
        self.assertEqual(round_decimal(2.4), 2.0)
        self.assertEqual(round_decimal(2.6), 3.0)

    def test_all_tiers(self):
        value = 3.14159265
        expected = [3.0, 3.1, 3.14, 3.142, 3.1416, 3.14159, 3.141593]
        for rule, exp in zip(PrecisionRoundingRule, expected):
            self.assertAlmostEqual(round_decimal(value, rule), exp, places=9)

    def test_int_precision(self):
        self.assertEqual(round_decimal(1.23456, 3), 1.235)

    def test_invalid_precision(self):
        with self.assertRaises(ValueError):
            round_decimal(1.0, 7)

    def test_non_finite_passthrough(self):
        self.assertTrue(math.isnan(round_decimal(float("nan"), PrecisionRoundingRule.TWOS)))
        self.assertEqual(round_decimal(float("inf")), float("inf"))


if __name__ == '__main__':
    unittest.main()
