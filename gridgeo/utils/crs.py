"""Coordinate Reference System (CRS) constants used throughout gridgeo.

This module defines the two CRS objects the library converts between:
- BNG_CRS: British National Grid on the OSGB36 datum (EPSG:27700)
- LATLON_CRS: WGS84 geographic coordinates (EPSG:4326)
"""

from pyproj import CRS

# British National Grid (EPSG:27700)
# Transverse Mercator on the Airy 1830 ellipsoid, false origin 49N 2W
# Coordinates are in meters (easting, northing)
BNG_CRS = CRS(27700)

# WGS84 latitude/longitude coordinate system (EPSG:4326)
# Range: latitude [-90, 90], longitude [-180, 180]
LATLON_CRS = CRS(4326)
