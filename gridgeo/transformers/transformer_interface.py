from abc import ABCMeta, abstractmethod
from typing import Iterable, List

from gridgeo.constructs.coordinate import GeographicCoordinate, PlanarCoordinate


class TransformerInterface(metaclass=ABCMeta):
    """
    Abstract base class for National Grid to WGS84 transformers.

    The decoder and the data sources take any implementation of this interface, so
    callers can swap the built-in Helmert pipeline for a pyproj backed one.

    Examples:
        >>> from gridgeo.constructs.coordinate import PlanarCoordinate
        >>> from gridgeo.transformers.national_grid import NationalGridTransformer
        >>> transformer = NationalGridTransformer()
        >>> c = transformer.transform(PlanarCoordinate(325482, 673143))
        >>> print(f"{c.latitude:.2f}, {c.longitude:.2f}")
        55.95, -3.19
    """

    @abstractmethod
    def transform(self, coordinate: PlanarCoordinate) -> GeographicCoordinate:
        """
        Convert one National Grid coordinate to WGS84.

        Args:
            coordinate: The easting/northing to convert, in meters

        Returns:
            The latitude/longitude in decimal degrees
        """

    def transform_many(
        self, coordinates: Iterable[PlanarCoordinate]
    ) -> List[GeographicCoordinate]:
        """
        Convert a sequence of coordinates, preserving order.

        Each coordinate is converted independently; the first failure propagates.
        """
        return [self.transform(c) for c in coordinates]
