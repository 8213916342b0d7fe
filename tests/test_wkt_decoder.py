from unittest import TestCase

from gridgeo.constructs.coordinate import GeographicCoordinate, PlanarCoordinate
from gridgeo.constructs.geometry import MultiPolygon, Polygon
from gridgeo.transformers.national_grid import NationalGridTransformer
from gridgeo.transformers.transformer_interface import TransformerInterface
from gridgeo.utils.exceptions import (
    ConvergenceError,
    GeometryError,
    MalformedGeometryError,
    UnsupportedGeometryError,
)
from gridgeo.wkt.decoder import WKTDecoder, decode, parse_planar
from gridgeo.wkt.tokenizer import TokenType, tokenize


class KilometerTransformer(TransformerInterface):
    """Maps (easting, northing) meters to (lat=northing km, lon=easting km)."""

    def transform(self, coordinate: PlanarCoordinate) -> GeographicCoordinate:
        return GeographicCoordinate(
            latitude=coordinate.northing / 1000, longitude=coordinate.easting / 1000
        )


class TestTokenizer(TestCase):
    def test_token_stream(self):
        tokens = tokenize("polygon ((1 -2.5, +3e2 .5))")
        types = [t.type for t in tokens]

        self.assertEqual(
            types,
            [
                TokenType.WORD,
                TokenType.LPAREN,
                TokenType.LPAREN,
                TokenType.NUMBER,
                TokenType.NUMBER,
                TokenType.COMMA,
                TokenType.NUMBER,
                TokenType.NUMBER,
                TokenType.RPAREN,
                TokenType.RPAREN,
                TokenType.END,
            ],
        )
        self.assertEqual(tokens[0].text, "POLYGON")
        self.assertEqual([t.text for t in tokens if t.type is TokenType.NUMBER], ["1", "-2.5", "+3e2", ".5"])

    def test_unexpected_character(self):
        with self.assertRaises(MalformedGeometryError) as ctx:
            tokenize("POLYGON((0 0;0 1))")
        self.assertEqual(ctx.exception.position, 12)


class TestDecode(TestCase):
    def test_closed_ring_stays_closed(self):
        polygon = decode("POLYGON((0 0,0 10,10 10,10 0,0 0))")

        self.assertIsInstance(polygon, Polygon)
        self.assertEqual(len(polygon.rings), 1)
        ring = polygon.rings[0]
        self.assertEqual(len(ring), 5)
        self.assertAlmostEqual(ring[0][0], ring[-1][0], places=12)
        self.assertAlmostEqual(ring[0][1], ring[-1][1], places=12)

    def test_vertices_are_lon_lat(self):
        polygon = decode("POLYGON((325482 673143,325582 673143,325582 673243,325482 673143))")
        expected = NationalGridTransformer().transform(PlanarCoordinate(325482, 673143))

        lon, lat = polygon.exterior[0]

        self.assertEqual((lon, lat), (expected.longitude, expected.latitude))

    def test_unsupported_type(self):
        with self.assertRaises(UnsupportedGeometryError) as ctx:
            decode("POINT(0 0)")
        self.assertEqual(ctx.exception.geometry_type, "POINT")

        for text in ("LINESTRING(0 0,1 1)", "GEOMETRYCOLLECTION EMPTY", "polygonz ((0 0,1 1))"):
            with self.assertRaises(UnsupportedGeometryError):
                decode(text)

    def test_unbalanced_parentheses(self):
        with self.assertRaises(MalformedGeometryError):
            decode("POLYGON((0 0,0 10)")

    def test_malformed_inputs(self):
        bad = [
            "",
            "   ",
            "((0 0,0 10,10 10,0 0))",
            "POLYGON",
            "POLYGON((0 0,0,10 10,0 0))",
            "POLYGON((0 0,0 10,10 10,0))",
            "POLYGON((0 0,0 abc,10 10,0 0))",
            "POLYGON((0 0,0 nan,10 10,0 0))",
            "POLYGON((0 0 0,0 10 0,10 10 0,0 0 0))",
            "POLYGON((0 0,0 10,10 10,0 0)))",
            "POLYGON((0 0,0 10,10 10,0 0)) trailing",
            "POLYGON((0 0,0 10,10 10,0 0),)",
            "POLYGON()",
            "POLYGON(0 0,0 10,10 10,0 0)",
            "POLYGON Z ((0 0 1,0 10 1,10 10 1,0 0 1))",
            "MULTIPOLYGON((0 0,0 10,10 10,0 0))",
            "MULTIPOLYGON(((0 0,0 10,10 10,0 0))",
        ]
        for text in bad:
            with self.assertRaises(MalformedGeometryError, msg=text):
                decode(text)

    def test_numbers_must_be_separated(self):
        for text in (
            "POLYGON((0 0,10-5,10 10,0 0))",
            "POLYGON((0 0,10+5,10 10,0 0))",
            "POLYGON((0 0,1.5.2 3,10 10,0 0))",
        ):
            with self.assertRaises(MalformedGeometryError, msg=text):
                parse_planar(text)

    def test_out_of_range_numbers(self):
        text = "POLYGON((1e999 0,0 10,10 10,1e999 0))"
        with self.assertRaises(MalformedGeometryError) as ctx:
            parse_planar(text)
        self.assertEqual(ctx.exception.position, 9)

        with self.assertRaises(MalformedGeometryError):
            decode(text)

    def test_errors_are_value_errors(self):
        for text in ("POINT(0 0)", "POLYGON((0 0"):
            with self.assertRaises(ValueError):
                decode(text)
            with self.assertRaises(GeometryError):
                decode(text)

    def test_non_string_input(self):
        with self.assertRaises(TypeError):
            decode(b"POLYGON((0 0,0 10,10 10,0 0))")

    def test_case_and_whitespace_tolerant(self):
        a = decode("POLYGON((325000 673000,325100 673000,325100 673100,325000 673000))")
        b = decode("  polygon (\n\t( 325000  673000 ,325100 673000,\n 325100 673100 , 325000 673000 ) )  ")
        self.assertEqual(a, b)

    def test_holes_keep_their_order(self):
        text = (
            "POLYGON((0 0,100 0,100 100,0 100,0 0),"
            "(10 10,20 10,20 20,10 10),"
            "(50 50,60 50,60 60,50 60,50 50))"
        )
        polygon = decode(text, transformer=KilometerTransformer())

        self.assertEqual([len(r) for r in polygon.rings], [5, 4, 5])
        self.assertEqual(polygon.interiors[0][0], (0.01, 0.01))
        self.assertEqual(polygon.interiors[1][0], (0.05, 0.05))

    def test_multipolygon_structure(self):
        text = (
            "MULTIPOLYGON (((326800 677000, 327200 677000, 327200 677300, 326800 677000)),"
            " ((327500 677100, 327800 677100, 327800 677400, 327500 677400, 327500 677100),"
            " (327600 677200, 327700 677200, 327700 677300, 327600 677200)))"
        )
        multi = decode(text)

        self.assertIsInstance(multi, MultiPolygon)
        self.assertEqual(len(multi.polygons), 2)
        self.assertEqual([len(p.rings) for p in multi.polygons], [1, 2])
        self.assertEqual([len(r) for r in multi.polygons[0].rings], [4])
        self.assertEqual([len(r) for r in multi.polygons[1].rings], [5, 4])

    def test_empty(self):
        self.assertEqual(decode("POLYGON EMPTY"), Polygon([]))
        self.assertEqual(decode("MULTIPOLYGON EMPTY"), MultiPolygon([]))

        multi = decode("MULTIPOLYGON(EMPTY,((0 0,0 10,10 10,0 0)))")
        self.assertTrue(multi.polygons[0].is_empty)
        self.assertEqual(len(multi.polygons[1].exterior), 4)

    def test_custom_transformer(self):
        decoder = WKTDecoder(KilometerTransformer())

        polygon = decoder.decode("POLYGON((1000 2000,3000 2000,3000 4000,1000 2000))")

        self.assertEqual(polygon.exterior, [(1.0, 2.0), (3.0, 2.0), (3.0, 4.0), (1.0, 2.0)])

    def test_transformer_failure_propagates(self):
        transformer = NationalGridTransformer(max_iterations=1)
        with self.assertRaises(ConvergenceError):
            decode("POLYGON((325482 673143,325582 673143,325582 673243,325482 673143))", transformer)

    def test_deterministic(self):
        text = "POLYGON((325000 673000,325100 673000,325100 673100,325000 673000))"
        self.assertEqual(decode(text), decode(text))


class TestParsePlanar(TestCase):
    def test_raw_values(self):
        polygon = parse_planar("POLYGON((325000 673000,325100.5 673000,3.251e5 673100,325000 673000))")

        self.assertEqual(
            polygon.exterior,
            [(325000.0, 673000.0), (325100.5, 673000.0), (325100.0, 673100.0), (325000.0, 673000.0)],
        )

    def test_same_errors_as_decode(self):
        with self.assertRaises(UnsupportedGeometryError):
            parse_planar("POINT(0 0)")
        with self.assertRaises(MalformedGeometryError):
            parse_planar("POLYGON((0 0,0 10)")
