"""
KD-tree prefilter for large mechanic populations.

Positions are embedded as unit vectors on the sphere, where straight-line
(chord) distance grows monotonically with great-circle distance. A ball query
sized for the largest service radius in the snapshot therefore returns a
superset of every candidate that could be in range; the exact haversine check
is still done by the caller.
"""
import math
from typing import List, Sequence

import numpy as np
from scipy.spatial import cKDTree

from service_requests.utils.geo import EARTH_RADIUS_KM, Coordinate

# Absorbs rounding in the unit-vector embedding so boundary candidates survive
CHORD_SLACK = 1e-9


def to_unit_vectors(latitudes: Sequence[float], longitudes: Sequence[float]) -> np.ndarray:
    lat = np.radians(np.asarray(latitudes, dtype=np.float64))
    lng = np.radians(np.asarray(longitudes, dtype=np.float64))
    cos_lat = np.cos(lat)
    return np.column_stack((cos_lat * np.cos(lng), cos_lat * np.sin(lng), np.sin(lat)))


def chord_length(km: float) -> float:
    """Straight-line distance through the unit sphere for a surface distance in km."""
    theta = min(km / EARTH_RADIUS_KM, math.pi)
    return 2.0 * math.sin(theta / 2.0)


class CandidateIndex:
    """
    Spatial index over mechanic candidates with known positions.

    Args:
        candidates: objects exposing ``position`` (complete Coordinate) and
            ``service_radius_km``
    """

    def __init__(self, candidates: Sequence):
        self._candidates = list(candidates)
        self._tree = None
        self._search_radius = 0.0

        if not self._candidates:
            return

        points = to_unit_vectors(
            [c.position.latitude for c in self._candidates],
            [c.position.longitude for c in self._candidates],
        )
        self._tree = cKDTree(points)
        max_radius_km = max(float(c.service_radius_km) for c in self._candidates)
        self._search_radius = chord_length(max_radius_km) + CHORD_SLACK

    def __len__(self):
        return len(self._candidates)

    def nearby(self, location: Coordinate) -> List:
        """Return candidates that may cover location, in snapshot order."""
        if self._tree is None or not location.is_complete:
            return []

        point = to_unit_vectors([location.latitude], [location.longitude])[0]
        indices = self._tree.query_ball_point(point, r=self._search_radius)
        return [self._candidates[i] for i in sorted(indices)]
