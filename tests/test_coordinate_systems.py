# tests/test_coordinate_systems.py

import math
import unittest

import numpy as np

from geoframe import (
    AxisDirection,
    CoordinateSystem,
    CoordinateSystemAxis,
    angle,
    linear,
    parse_axis_direction,
    swap_axes,
)
from geoframe.constants import COMPASS_DIRECTION_COUNT
from geoframe.coordinate_systems import compass_angle
from geoframe.direction import opposite

D = AxisDirection

LONGITUDE = CoordinateSystemAxis("Geodetic longitude", "λ", D.EAST, "deg")
LATITUDE = CoordinateSystemAxis("Geodetic latitude", "φ", D.NORTH, "deg")
HEIGHT = CoordinateSystemAxis("Ellipsoidal height", "h", D.UP)
EASTING = CoordinateSystemAxis("Easting", "E", D.EAST)
NORTHING = CoordinateSystemAxis("Northing", "N", D.NORTH)
SOUTHING = CoordinateSystemAxis("Southing", "S", D.SOUTH)
DEPTH = CoordinateSystemAxis("Depth", "D", D.DOWN)

COMPASS = (
    D.NORTH, D.NORTH_NORTH_EAST, D.NORTH_EAST, D.EAST_NORTH_EAST,
    D.EAST, D.EAST_SOUTH_EAST, D.SOUTH_EAST, D.SOUTH_SOUTH_EAST,
    D.SOUTH, D.SOUTH_SOUTH_WEST, D.SOUTH_WEST, D.WEST_SOUTH_WEST,
    D.WEST, D.WEST_NORTH_WEST, D.NORTH_WEST, D.NORTH_NORTH_WEST,
)


class TestCoordinateSystem(unittest.TestCase):
    def test_axes(self):
        cs = CoordinateSystem("(λ,φ,h)", [LONGITUDE, LATITUDE, HEIGHT])
        self.assertEqual(cs.dimension, 3)
        self.assertIs(cs.get_axis(1), LATITUDE)
        self.assertIsInstance(cs.axes, tuple)

    def test_empty(self):
        with self.assertRaises(ValueError):
            CoordinateSystem("empty", [])


class TestParseAxisDirection(unittest.TestCase):
    def test_compass_names(self):
        self.assertIs(parse_axis_direction("NORTH"), D.NORTH)
        self.assertIs(parse_axis_direction("north"), D.NORTH)
        self.assertIs(parse_axis_direction("  north "), D.NORTH)
        self.assertIs(parse_axis_direction("east"), D.EAST)
        self.assertIs(parse_axis_direction("NORTH_EAST"), D.NORTH_EAST)
        self.assertIs(parse_axis_direction("north-east"), D.NORTH_EAST)
        self.assertIs(parse_axis_direction("north east"), D.NORTH_EAST)
        self.assertIs(parse_axis_direction("south-south-east"), D.SOUTH_SOUTH_EAST)

    def test_along_meridian(self):
        self.assertEqual(parse_axis_direction("South along 180 deg").name, "South along 180°")
        self.assertEqual(parse_axis_direction("South along 180°").name, "South along 180°")
        self.assertEqual(parse_axis_direction(" SOUTH  along  180 ° ").name, "South along 180°")
        self.assertEqual(parse_axis_direction("south along 90 deg east").name, "South along 90°E")
        self.assertEqual(parse_axis_direction("south along 90°e").name, "South along 90°E")
        self.assertEqual(parse_axis_direction("north along 45 deg e").name, "North along 45°E")
        self.assertEqual(parse_axis_direction("north along 45 deg west").name, "North along 45°W")

    def test_unknown(self):
        with self.assertRaises(ValueError):
            parse_axis_direction("sideways")


class TestAngles(unittest.TestCase):
    def test_compass_angle(self):
        self.assertEqual(len(COMPASS), COMPASS_DIRECTION_COUNT)
        base = D.NORTH.ordinal
        h = len(COMPASS) // 2
        for i, direction in enumerate(COMPASS):
            reverse = opposite(direction)
            io = i + h if i < h else i + h - COMPASS_DIRECTION_COUNT
            expected = i if i <= h else i - COMPASS_DIRECTION_COUNT
            self.assertEqual(direction.ordinal, base + i, direction.name)
            self.assertEqual(reverse.ordinal, base + io, direction.name)
            self.assertEqual(compass_angle(direction, direction), 0)
            self.assertEqual(abs(compass_angle(direction, reverse)), h)
            self.assertEqual(compass_angle(direction, D.NORTH), expected)

    def test_compass_angle_not_compass(self):
        self.assertIsNone(compass_angle(D.UP, D.NORTH))
        self.assertIsNone(compass_angle(D.NORTH, D.FUTURE))

    def test_angle(self):
        self.assertEqual(angle(D.EAST, D.EAST), 0)
        self.assertEqual(angle(D.EAST, D.NORTH), 90)
        self.assertEqual(angle(D.NORTH, D.EAST), -90)
        self.assertEqual(angle(D.WEST, D.SOUTH), 90)
        self.assertEqual(angle(D.SOUTH, D.WEST), -90)
        self.assertEqual(angle(D.NORTH, D.SOUTH), -180)
        self.assertEqual(angle(D.SOUTH, D.NORTH), 180)
        self.assertEqual(angle(D.NORTH_EAST, D.NORTH), 45)
        self.assertEqual(angle(D.NORTH_NORTH_EAST, D.NORTH), 22.5)
        self.assertEqual(angle(D.NORTH_NORTH_WEST, D.NORTH), -22.5)
        self.assertEqual(angle(D.SOUTH, D.SOUTH_EAST), 45)

    def test_angle_of_parsed_names(self):
        cases = (
            (90.0, "West", "South"),
            (-90.0, "South", "West"),
            (45.0, "South", "South-East"),
            (-22.5, "North-North-West", "North"),
            (-22.5, "North_North_West", "North"),
            (-22.5, "North North West", "North"),
            (90.0, "North along 90 deg East", "North along 0 deg"),
            (90.0, "South along 180 deg", "South along 90 deg West"),
            (90.0, "North along 90°E", "North along 0°"),
            (135.0, "North along 90°E", "North along 45°W"),
            (-135.0, "North along 45°W", "North along 90°E"),
        )
        for expected, source, target in cases:
            result = angle(parse_axis_direction(source), parse_axis_direction(target))
            self.assertEqual(result, expected, (source, target))

    def test_angle_undefined(self):
        self.assertTrue(math.isnan(angle(D.UP, D.NORTH)))
        self.assertTrue(math.isnan(angle(parse_axis_direction("North along 90°E"), D.NORTH)))
        self.assertTrue(math.isnan(angle(parse_axis_direction("North along 90°E"),
                                         parse_axis_direction("South along 90°E"))))


class TestSwapAxes(unittest.TestCase):
    def test_swap_2d(self):
        λφ = CoordinateSystem("(λ,φ)", [LONGITUDE, LATITUDE])
        φλ = CoordinateSystem("(φ,λ)", [LATITUDE, LONGITUDE])
        expected = np.array([[0, 1, 0],
                             [1, 0, 0],
                             [0, 0, 1]])
        self.assertTrue(swap_axes(λφ, λφ).is_identity())
        self.assertTrue(swap_axes(φλ, φλ).is_identity())
        np.testing.assert_array_equal(swap_axes(λφ, φλ).to_array(), expected)
        np.testing.assert_array_equal(swap_axes(φλ, λφ).to_array(), expected)

    def test_swap_3d(self):
        λφh = CoordinateSystem("(λ,φ,h)", [LONGITUDE, LATITUDE, HEIGHT])
        φλh = CoordinateSystem("(φ,λ,h)", [LATITUDE, LONGITUDE, HEIGHT])
        expected = np.array([[0, 1, 0, 0],
                             [1, 0, 0, 0],
                             [0, 0, 1, 0],
                             [0, 0, 0, 1]])
        self.assertTrue(swap_axes(λφh, λφh).is_identity())
        np.testing.assert_array_equal(swap_axes(λφh, φλh).to_array(), expected)
        np.testing.assert_array_equal(swap_axes(φλh, λφh).to_array(), expected)

    def test_reversed_axes(self):
        hxy = CoordinateSystem("(h,x,y)", [HEIGHT, EASTING, NORTHING])
        yxh = CoordinateSystem("(y,x,h)", [SOUTHING, EASTING, DEPTH])
        expected = np.array([[0, 0, -1, 0],
                             [0, 1, 0, 0],
                             [-1, 0, 0, 0],
                             [0, 0, 0, 1]])
        self.assertTrue(swap_axes(yxh, yxh).is_identity())
        np.testing.assert_array_equal(swap_axes(hxy, yxh).to_array(), expected)
        np.testing.assert_array_equal(swap_axes(yxh, hxy).to_array(), expected)

    def test_as_transform(self):
        λφ = CoordinateSystem("(λ,φ)", [LONGITUDE, LATITUDE])
        φλ = CoordinateSystem("(φ,λ)", [LATITUDE, LONGITUDE])
        t = linear(swap_axes(λφ, φλ))
        np.testing.assert_array_equal(t.transform([10.0, 45.0]), [45.0, 10.0])

    def test_missing_axis(self):
        en = CoordinateSystem("(E,N)", [EASTING, NORTHING])
        enh = CoordinateSystem("(E,N,h)", [EASTING, NORTHING, HEIGHT])
        with self.assertRaises(ValueError):
            swap_axes(en, enh)
        m = swap_axes(enh, en)
        self.assertEqual(m.shape, (3, 4))


if __name__ == "__main__":
    unittest.main()
