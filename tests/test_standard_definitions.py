# tests/test_standard_definitions.py

import math
import unittest

from geoframe import Ellipsoid, GeodeticObject, InternalInconsistencyError
from geoframe.datum import ALIAS_KEY, NAME_KEY
from geoframe.standard_definitions import EPSG, GREENWICH, create_ellipsoid, prime_meridian


class TestCreateEllipsoid(unittest.TestCase):
    def test_wgs84(self):
        e = create_ellipsoid(7030)
        self.assertEqual(e.name, "WGS 84")
        self.assertEqual(e.alias, "WGS84")
        self.assertEqual(e.identifier, "7030")
        self.assertEqual(e.authority, EPSG)
        self.assertEqual(e.semi_major_axis, 6378137.0)
        self.assertEqual(e.inverse_flattening, 298.257223563)
        self.assertTrue(e.ivf_definitive)
        self.assertFalse(e.is_sphere)
        self.assertAlmostEqual(e.semi_minor_axis, 6356752.314245, places=5)

    def test_flattened_definitions(self):
        expected = {
            7043: ("WGS 72", 6378135.0, 298.26),
            7019: ("GRS 1980", 6378137.0, 298.257222101),
            7022: ("International 1924", 6378388.0, 297.0),
        }
        for code, (name, a, ivf) in expected.items():
            e = create_ellipsoid(code)
            self.assertEqual(e.name, name)
            self.assertEqual(e.semi_major_axis, a)
            self.assertEqual(e.inverse_flattening, ivf)
            self.assertTrue(e.ivf_definitive, name)

    def test_clarke_1866(self):
        e = create_ellipsoid(7008)
        self.assertEqual(e.semi_major_axis, 6378206.4)
        self.assertEqual(e.semi_minor_axis, 6356583.8)
        self.assertFalse(e.ivf_definitive)
        self.assertAlmostEqual(e.inverse_flattening, 294.9786982, places=6)
        self.assertIsNone(e.alias)

    def test_sphere(self):
        e = create_ellipsoid(7048)
        self.assertEqual(e.name, "GRS 1980 Authalic Sphere")
        self.assertTrue(e.is_sphere)
        self.assertEqual(e.semi_major_axis, 6371007.0)
        self.assertTrue(math.isinf(e.inverse_flattening))

    def test_unknown_code(self):
        with self.assertRaises(InternalInconsistencyError):
            create_ellipsoid(9999)
        # also an assertion failure
        with self.assertRaises(AssertionError):
            create_ellipsoid(4326)

    def test_cached(self):
        self.assertIs(create_ellipsoid(7030), create_ellipsoid(7030))

    def test_string_code(self):
        self.assertIs(create_ellipsoid("7030"), create_ellipsoid(7030))
        self.assertEqual(create_ellipsoid(" 7008 ").name, "Clarke 1866")
        with self.assertRaises(InternalInconsistencyError):
            create_ellipsoid("EPSG:7030")
        with self.assertRaises(InternalInconsistencyError):
            create_ellipsoid(None)


class TestEllipsoidFactories(unittest.TestCase):
    def test_flattened_sphere(self):
        e = Ellipsoid.create_flattened_sphere({NAME_KEY: "Test", ALIAS_KEY: "T"}, 1000.0, 4.0)
        self.assertEqual(e.semi_minor_axis, 750.0)
        self.assertEqual(e.alias, "T")
        self.assertIsNone(e.identifier)

    def test_infinite_flattening_is_sphere(self):
        e = Ellipsoid.create_flattened_sphere({NAME_KEY: "Ball"}, 1000.0, math.inf)
        self.assertTrue(e.is_sphere)

    def test_from_axes(self):
        e = Ellipsoid.create_ellipsoid({NAME_KEY: "Test"}, 1000.0, 750.0)
        self.assertEqual(e.inverse_flattening, 4.0)
        self.assertFalse(e.ivf_definitive)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            Ellipsoid.create_flattened_sphere({NAME_KEY: "Bad"}, -1.0, 298.0)
        with self.assertRaises(ValueError):
            Ellipsoid.create_ellipsoid({NAME_KEY: "Bad"}, 1000.0, 0.0)
        with self.assertRaises(ValueError):
            Ellipsoid.create_flattened_sphere({NAME_KEY: "Bad"}, 1000.0, math.nan)


class TestPrimeMeridian(unittest.TestCase):
    def test_greenwich(self):
        pm = prime_meridian()
        self.assertEqual(pm.name, "Greenwich")
        self.assertEqual(pm.greenwich_longitude, 0.0)
        self.assertEqual(pm.angular_unit, "deg")
        self.assertEqual(pm.identifier, GREENWICH)
        self.assertEqual(pm.authority, EPSG)
        self.assertIs(pm, prime_meridian())


class TestGeodeticObject(unittest.TestCase):
    def test_every_member_has_an_ellipsoid(self):
        for member in GeodeticObject:
            e = member.ellipsoid()
            self.assertEqual(e.identifier, str(member.ellipsoid_code))
            self.assertIs(member.prime_meridian(), prime_meridian())

    def test_shared_ellipsoid(self):
        self.assertIs(GeodeticObject.NAD83.ellipsoid(), GeodeticObject.ETRS89.ellipsoid())
        self.assertEqual(GeodeticObject.WGS84.ellipsoid().name, "WGS 84")
        self.assertEqual(GeodeticObject.NAD27.ellipsoid().name, "Clarke 1866")
        self.assertTrue(GeodeticObject.SPHERE.ellipsoid().is_sphere)


if __name__ == "__main__":
    unittest.main()
