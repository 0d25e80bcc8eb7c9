"""
Utility functions for coordinate operations.
"""
import math
from dataclasses import dataclass
from typing import Optional

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinate:
    """
    A WGS84 position in decimal degrees.

    Either component may be None when the position is unknown. Missing
    components are never replaced with 0.
    """

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return self.latitude is not None and self.longitude is not None


def distance_km(point_a: Coordinate, point_b: Coordinate) -> Optional[float]:
    """
    Calculate the great circle distance between two points on Earth using the Haversine formula.

    Args:
        point_a, point_b: Coordinates in decimal degrees

    Returns:
        Distance in kilometers, or None when either point is missing a
        latitude or longitude
    """
    if not point_a.is_complete or not point_b.is_complete:
        return None

    lat1, lon1 = float(point_a.latitude), float(point_a.longitude)
    lat2, lon2 = float(point_b.latitude), float(point_b.longitude)

    # Haversine formula
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push a past 1 for near-antipodal points
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c
