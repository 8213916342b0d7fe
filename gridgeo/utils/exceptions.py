from typing import Optional


class GridGeoException(Exception):
    """
    Base class for errors raised by gridgeo.
    """


class ConvergenceError(GridGeoException, ArithmeticError):
    """
    An iterative solve did not reach its tolerance within the iteration cap.

    Attributes:
        iterations: The number of iterations performed before giving up
        residual: The last residual seen (meters for the arc-length solve, radians for the latitude solve)
    """

    def __init__(self, message: str, iterations: int, residual: float):
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual


class GeometryError(GridGeoException, ValueError):
    """
    Base class for errors raised while decoding WKT geometry.
    """


class MalformedGeometryError(GeometryError):
    """
    The WKT text is structurally invalid.

    Attributes:
        position: Character offset in the input where the problem was found, if known
    """

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)
        self.position = position


class UnsupportedGeometryError(GeometryError):
    """
    The WKT text describes a geometry type other than POLYGON or MULTIPOLYGON.
    """

    def __init__(self, geometry_type: str):
        super().__init__(
            f"unsupported geometry type {geometry_type!r}; "
            "only POLYGON and MULTIPOLYGON can be decoded"
        )
        self.geometry_type = geometry_type
