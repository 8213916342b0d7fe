from unittest import TestCase

from gridgeo.constructs.coordinate import GeographicCoordinate, PlanarCoordinate
from gridgeo.constructs.geometry import MultiPolygon, Polygon
from gridgeo.wkt.decoder import parse_planar

SQUARE_WITH_HOLE = Polygon(
    [
        [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (0.0, 0.0)],
        [(2.0, 2.0), (4.0, 2.0), (4.0, 4.0), (2.0, 4.0), (2.0, 2.0)],
    ]
)


class TestCoordinates(TestCase):
    def test_geographic_axis_order(self):
        c = GeographicCoordinate(latitude=55.9, longitude=-3.2)

        self.assertEqual(c.to_lon_lat(), (-3.2, 55.9))
        self.assertEqual((c.to_point().x, c.to_point().y), (-3.2, 55.9))

    def test_planar_point_round_trip(self):
        c = PlanarCoordinate(easting=325482, northing=673143)
        self.assertEqual(PlanarCoordinate.from_point(c.to_point()), c)


class TestPolygon(TestCase):
    def test_exterior_and_interiors(self):
        self.assertEqual(len(SQUARE_WITH_HOLE.exterior), 5)
        self.assertEqual(len(SQUARE_WITH_HOLE.interiors), 1)
        self.assertFalse(SQUARE_WITH_HOLE.is_empty)

    def test_to_geojson(self):
        g = SQUARE_WITH_HOLE.to_geojson()

        self.assertEqual(g["type"], "Polygon")
        self.assertEqual(len(g["coordinates"]), 2)
        self.assertEqual(g["coordinates"][0][1], [10.0, 0.0])

    def test_to_shapely(self):
        shape = SQUARE_WITH_HOLE.to_shapely()

        self.assertEqual(shape.geom_type, "Polygon")
        self.assertAlmostEqual(shape.area, 100 - 4)
        self.assertEqual(len(shape.interiors), 1)

    def test_empty(self):
        empty = Polygon([])

        self.assertTrue(empty.is_empty)
        self.assertEqual(empty.exterior, [])
        self.assertTrue(empty.to_shapely().is_empty)
        self.assertEqual(empty.to_geojson(), {"type": "Polygon", "coordinates": []})


class TestMultiPolygon(TestCase):
    def test_to_geojson_and_shapely(self):
        multi = parse_planar(
            "MULTIPOLYGON(((0 0,10 0,10 10,0 10,0 0),(2 2,4 2,4 4,2 4,2 2)),((20 20,30 20,30 30,20 20)))"
        )

        g = multi.to_geojson()
        self.assertEqual(g["type"], "MultiPolygon")
        self.assertEqual(len(g["coordinates"]), 2)
        self.assertEqual(g["coordinates"][1][0][0], [20.0, 20.0])

        shape = multi.to_shapely()
        self.assertEqual(shape.geom_type, "MultiPolygon")
        self.assertEqual(len(shape.geoms), 2)
        self.assertAlmostEqual(shape.area, 96 + 50)

    def test_empty_members_are_skipped(self):
        multi = MultiPolygon([Polygon([]), SQUARE_WITH_HOLE])

        self.assertFalse(multi.is_empty)
        self.assertEqual(len(multi.to_shapely().geoms), 1)
        self.assertTrue(MultiPolygon([]).to_shapely().is_empty)
