# digipin/abstractions/types/grid_types.py
"""Grid system type definitions."""

import math
from dataclasses import dataclass
from typing import Dict, Any, Tuple
from shapely.geometry import Polygon, box


@dataclass(frozen=True)
class Coordinate:
    """A (latitude, longitude) pair in decimal degrees."""
    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {'latitude': self.latitude, 'longitude': self.longitude}


@dataclass(frozen=True)
class BoundingBox:
    """
    Immutable latitude/longitude rectangle.

    One of these describes the region still consistent with a location
    estimate at a given subdivision depth. Each level narrows the box to one
    of its 4x4 sub-cells.

    Invariants:
        - min_lat < max_lat
        - min_lon < max_lon
    """
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def __post_init__(self):
        """Validate invariants."""
        if not self.min_lat < self.max_lat:
            raise ValueError(
                f"BoundingBox min_lat must be < max_lat, got {self.min_lat} >= {self.max_lat}"
            )
        if not self.min_lon < self.max_lon:
            raise ValueError(
                f"BoundingBox min_lon must be < max_lon, got {self.min_lon} >= {self.max_lon}"
            )

    @property
    def lat_span(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_span(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def midpoint(self) -> Coordinate:
        """Center of the box."""
        return Coordinate(
            latitude=(self.min_lat + self.max_lat) / 2,
            longitude=(self.min_lon + self.max_lon) / 2
        )

    @property
    def diagonal(self) -> float:
        """Length of the diagonal in degrees (planar)."""
        return math.hypot(self.lat_span, self.lon_span)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounds in shapely order: minx, miny, maxx, maxy."""
        return (self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    @property
    def polygon(self) -> Polygon:
        """Get box as polygon (x = longitude, y = latitude)."""
        return box(*self.bounds)

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if point is within the box, edges included."""
        return (self.min_lat <= latitude <= self.max_lat and
                self.min_lon <= longitude <= self.max_lon)

    def cell_index(self, latitude: float, longitude: float, divisions: int = 4) -> Tuple[int, int]:
        """
        Locate the sub-cell containing a point.

        Rows run from high latitude (row 0) to low latitude, columns from low
        longitude (col 0) to high longitude. Both indices are clamped into
        ``[0, divisions - 1]`` so that a point lying exactly on the outer edge
        still selects a cell.

        Args:
            latitude: Point latitude
            longitude: Point longitude
            divisions: Cells per axis

        Returns:
            (row, col) tuple
        """
        lat_div = self.lat_span / divisions
        lon_div = self.lon_span / divisions

        row = (divisions - 1) - math.floor((latitude - self.min_lat) / lat_div)
        col = math.floor((longitude - self.min_lon) / lon_div)

        row = max(0, min(row, divisions - 1))
        col = max(0, min(col, divisions - 1))
        return row, col

    def narrow(self, row: int, col: int, divisions: int = 4) -> 'BoundingBox':
        """
        Return the sub-cell at (row, col) of a ``divisions`` x ``divisions`` split.

        Encoding and decoding both go through this method, so a code always
        decodes to exactly the cell its encoder selected.
        """
        if not (0 <= row < divisions and 0 <= col < divisions):
            raise ValueError(f"Cell index ({row}, {col}) outside {divisions}x{divisions} grid")

        lat_div = self.lat_span / divisions
        lon_div = self.lon_span / divisions

        min_lon = self.min_lon + lon_div * col
        return BoundingBox(
            min_lat=self.min_lat + lat_div * (divisions - 1 - row),
            max_lat=self.min_lat + lat_div * (divisions - row),
            min_lon=min_lon,
            max_lon=min_lon + lon_div
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'min_lat': self.min_lat,
            'max_lat': self.max_lat,
            'min_lon': self.min_lon,
            'max_lon': self.max_lon
        }


@dataclass(frozen=True)
class DecodedLocation:
    """Result of decoding a code: the final cell and its center."""
    code: str
    bounds: BoundingBox

    @property
    def coordinate(self) -> Coordinate:
        """Representative coordinate (cell midpoint)."""
        return self.bounds.midpoint

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    def to_dict(self, precision: int = 6) -> Dict[str, Any]:
        """
        Convert to the wire shape used by the HTTP service.

        Coordinates are rendered as fixed-precision strings so callers do not
        read more exactness into them than the cell size supports. The cell
        bounds stay numeric.
        """
        return {
            'latitude': f"{self.latitude:.{precision}f}",
            'longitude': f"{self.longitude:.{precision}f}",
            'bounds': self.bounds.to_dict()
        }
