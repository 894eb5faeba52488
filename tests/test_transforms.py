# tests/test_transforms.py

import copy
import unittest

import numpy as np

from geoframe import Matrix, MismatchedDimensionError, NonInvertibleMatrixError, linear
from geoframe.linear_transform import AffineTransform2D, LinearTransform1D


class TestTransformPoints(unittest.TestCase):
    def setUp(self):
        self.t = linear(Matrix(3, 3, [0, -1, 5,
                                      1, 0, -2,
                                      0, 0, 1]))

    def test_single_point(self):
        np.testing.assert_array_equal(self.t.transform([1.0, 2.0]), [3.0, -1.0])

    def test_many_points(self):
        pts = np.array([[1.0, 2.0], [0.0, 0.0], [-1.0, 4.0]])
        out = self.t.transform(pts)
        self.assertEqual(out.shape, (3, 2))
        np.testing.assert_array_equal(out[1], [5.0, -2.0])

    def test_in_place(self):
        pts = np.array([[1.0, 2.0], [0.0, 0.0]])
        result = self.t.transform(pts, pts)
        self.assertIs(result, pts)
        np.testing.assert_array_equal(pts, [[3.0, -1.0], [5.0, -2.0]])

    def test_wrong_dimension(self):
        with self.assertRaises(MismatchedDimensionError):
            self.t.transform([1.0, 2.0, 3.0])
        with self.assertRaises(MismatchedDimensionError):
            self.t.transform([1.0, 2.0], np.empty(3))
        with self.assertRaises(MismatchedDimensionError):
            self.t.derivative([1.0])

    def test_destination_must_be_an_array(self):
        with self.assertRaises(TypeError):
            self.t.transform([1.0, 2.0], [0.0, 0.0])

    def test_derivative_of_affine_is_constant(self):
        np.testing.assert_array_equal(self.t.derivative([7.0, 9.0]).to_array(), [[0, -1], [1, 0]])

    def test_transform_and_derivative(self):
        point, derivative = self.t.transform_and_derivative([1.0, 2.0])
        np.testing.assert_array_equal(point, [3.0, -1.0])
        self.assertTrue(derivative.equals(self.t.derivative([0.0, 0.0])))


class TestInverse(unittest.TestCase):
    def test_affine_2d(self):
        t = AffineTransform2D(2, 0, 0, 4, 1, 1)
        inv = t.inverse()
        self.assertIsInstance(inv, AffineTransform2D)
        np.testing.assert_allclose(inv.transform(t.transform([3.0, 5.0])), [3.0, 5.0])
        self.assertEqual(t.determinant, 8.0)

    def test_singular_affine(self):
        t = AffineTransform2D(1, 2, 2, 4, 0, 0)
        with self.assertRaises(NonInvertibleMatrixError):
            t.inverse()

    def test_linear_1d(self):
        t = LinearTransform1D(4.0, 2.0)
        self.assertEqual(t.inverse().transform_value(t.transform_value(3.0)), 3.0)
        with self.assertRaises(NonInvertibleMatrixError):
            LinearTransform1D(0.0, 2.0).inverse()

    def test_identity_inverse_is_itself(self):
        t = linear(Matrix.identity(3))
        self.assertIs(t.inverse(), t)


class TestEquality(unittest.TestCase):
    def test_equal_by_matrix(self):
        a = linear(2.0, 1.0)
        b = linear(Matrix(2, 2, [2, 1, 0, 1]))
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, linear(2.0, 1.5))

    def test_copy(self):
        t = linear(Matrix(3, 3, [1, 0, 0, 0, 1, 0, 0.5, 0, 1]))
        self.assertEqual(t, copy.copy(t))
        self.assertIn("ProjectiveTransform2D", repr(t))


if __name__ == "__main__":
    unittest.main()
