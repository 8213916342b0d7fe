"""Decoding of POLYGON and MULTIPOLYGON well-known text.

Grammar (keywords are case-insensitive, whitespace is free):

    geometry     := "POLYGON" polygon_text | "MULTIPOLYGON" multi_text
    polygon_text := "EMPTY" | "(" ring ("," ring)* ")"
    multi_text   := "EMPTY" | "(" polygon_text ("," polygon_text)* ")"
    ring         := "(" point ("," point)* ")"
    point        := number number

Points are read as National Grid (easting, northing) pairs. `decode` converts
each of them to WGS84 and stores it as (longitude, latitude), the GeoJSON axis
order; `parse_planar` keeps the raw grid values.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

from gridgeo.constructs.coordinate import PlanarCoordinate
from gridgeo.constructs.geometry import Geometry, MultiPolygon, Polygon, Position, Ring
from gridgeo.transformers.national_grid import NationalGridTransformer
from gridgeo.transformers.transformer_interface import TransformerInterface
from gridgeo.utils.exceptions import MalformedGeometryError, UnsupportedGeometryError
from gridgeo.wkt.tokenizer import Token, TokenType, tokenize

PointHandler = Callable[[float, float], Position]


def _describe(token: Token) -> str:
    if token.type is TokenType.END:
        return "end of input"
    return repr(token.text)


class _Parser:
    """Recursive-descent parser over a token list; one instance per input."""

    def __init__(self, tokens: Sequence[Token], on_point: PointHandler):
        self._tokens = tokens
        self._index = 0
        self._on_point = on_point

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.type is not TokenType.END:
            self._index += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        token = self._advance()
        if token.type is not token_type:
            raise MalformedGeometryError(
                f"expected {token_type.value!r} but found {_describe(token)}",
                token.position,
            )
        return token

    def _at_empty(self) -> bool:
        token = self._peek()
        if token.type is TokenType.WORD and token.text == "EMPTY":
            self._advance()
            return True
        return False

    def parse(self) -> Geometry:
        keyword = self._advance()
        if keyword.type is not TokenType.WORD:
            raise MalformedGeometryError(
                f"expected a geometry keyword but found {_describe(keyword)}",
                keyword.position,
            )

        if keyword.text == "POLYGON":
            geometry: Geometry = self._polygon_text()
        elif keyword.text == "MULTIPOLYGON":
            geometry = self._multipolygon_text()
        else:
            raise UnsupportedGeometryError(keyword.text)

        self._expect(TokenType.END)

        return geometry

    def _multipolygon_text(self) -> MultiPolygon:
        if self._at_empty():
            return MultiPolygon([])

        self._expect(TokenType.LPAREN)
        polygons = [self._polygon_text()]
        while self._close_or_continue():
            polygons.append(self._polygon_text())

        return MultiPolygon(polygons)

    def _polygon_text(self) -> Polygon:
        if self._at_empty():
            return Polygon([])

        self._expect(TokenType.LPAREN)
        rings = [self._ring()]
        while self._close_or_continue():
            rings.append(self._ring())

        return Polygon(rings)

    def _ring(self) -> Ring:
        self._expect(TokenType.LPAREN)
        points = [self._point()]
        while self._close_or_continue():
            points.append(self._point())

        return points

    def _close_or_continue(self) -> bool:
        """Consume a ',' (returns True) or a ')' (returns False)."""
        token = self._advance()
        if token.type is TokenType.COMMA:
            return True
        elif token.type is TokenType.RPAREN:
            return False
        raise MalformedGeometryError(
            f"expected ',' or ')' but found {_describe(token)}", token.position
        )

    def _point(self) -> Position:
        easting = self._number()
        northing = self._number()
        return self._on_point(easting, northing)

    def _number(self) -> float:
        token = self._advance()
        if token.type is not TokenType.NUMBER:
            raise MalformedGeometryError(
                f"expected a number but found {_describe(token)}", token.position
            )
        value = float(token.text)
        if not math.isfinite(value):
            raise MalformedGeometryError(
                f"number {token.text!r} is out of range", token.position
            )
        return value


def _parse(text: str, on_point: PointHandler) -> Geometry:
    if not isinstance(text, str):
        raise TypeError(f"expected WKT text as a str but got {type(text).__name__}")

    return _Parser(tokenize(text), on_point).parse()


class WKTDecoder:
    """
    Decodes POLYGON / MULTIPOLYGON WKT in National Grid coordinates into WGS84 geometry.

    Decoding is all-or-nothing: a single bad point fails the whole call and no partial
    geometry is returned.

    Args:
        transformer: The transformer applied to every vertex. Default is a NationalGridTransformer.

    Examples:
        >>> from gridgeo.wkt.decoder import WKTDecoder
        >>> decoder = WKTDecoder()
        >>> geometry = decoder.decode("MULTIPOLYGON(((0 0,0 10,10 10,0 0)),((20 20,20 30,30 30,20 20)))")
        >>> len(geometry.polygons)
        2
    """

    def __init__(self, transformer: Optional[TransformerInterface] = None):
        self.transformer = transformer or NationalGridTransformer()

    def _to_lon_lat(self, easting: float, northing: float) -> Position:
        return self.transformer.transform(
            PlanarCoordinate(easting, northing)
        ).to_lon_lat()

    def decode(self, text: str) -> Geometry:
        """
        Parse WKT text and convert every vertex to WGS84.

        Args:
            text: A POLYGON or MULTIPOLYGON string with (easting northing) points

        Returns:
            A Polygon or MultiPolygon whose positions are (longitude, latitude) tuples

        Raises:
            UnsupportedGeometryError: If the geometry keyword is not POLYGON or MULTIPOLYGON
            MalformedGeometryError: If the text does not follow the grammar (unbalanced parentheses, a missing or extra ordinate, a non-numeric ordinate, trailing content)
            ConvergenceError: If a vertex cannot be transformed
        """
        return _parse(text, self._to_lon_lat)


_DEFAULT_DECODER = WKTDecoder()


def decode(text: str, transformer: Optional[TransformerInterface] = None) -> Geometry:
    """
    Decode National Grid WKT into WGS84 geometry.

    Args:
        text: A POLYGON or MULTIPOLYGON string with (easting northing) points
        transformer: The transformer applied to every vertex. Default is the built-in Helmert pipeline.

    Returns:
        A Polygon or MultiPolygon whose positions are (longitude, latitude) tuples

    Examples:
        >>> polygon = decode("POLYGON((325000 673000,325500 673000,325500 673500,325000 673000))")
        >>> lon, lat = polygon.exterior[0]
    """
    if transformer is None:
        return _DEFAULT_DECODER.decode(text)
    return WKTDecoder(transformer).decode(text)


def parse_planar(text: str) -> Geometry:
    """
    Parse WKT without transforming it; positions are (easting, northing) tuples.

    Raises:
        UnsupportedGeometryError: If the geometry keyword is not POLYGON or MULTIPOLYGON
        MalformedGeometryError: If the text does not follow the grammar
    """
    return _parse(text, lambda easting, northing: (easting, northing))
