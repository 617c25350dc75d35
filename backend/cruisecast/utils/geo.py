from __future__ import annotations
import math
from typing import List, Sequence, Tuple

from cruisecast.schemas.route import Waypoint

# WGS84
_A = 6378137.0

LatLng = Tuple[float, float]


def haversine_m(p1: LatLng, p2: LatLng) -> float:
    """Great-circle distance (meters)."""
    lat1, lon1 = map(math.radians, p1)
    lat2, lon2 = map(math.radians, p2)
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return _A * c


def polyline_length_m(poly: List[LatLng]) -> float:
    return sum(haversine_m(poly[i], poly[i + 1]) for i in range(len(poly) - 1))


def squared_planar_distance(lat: float, lng: float, w: Waypoint) -> float:
    """Δlat² + Δlng² in raw degrees. Not a distance in meters; only for ranking."""
    dlat = lat - w.lat
    dlng = lng - w.lng
    return dlat * dlat + dlng * dlng


def nearest_waypoint_index(lat: float, lng: float, waypoints: Sequence[Waypoint]) -> int:
    """Index of the closest waypoint; on a tie the lower index wins."""
    best = math.inf
    best_idx = 0
    for i, w in enumerate(waypoints):
        d = squared_planar_distance(lat, lng, w)
        if d < best:
            best = d
            best_idx = i
    return best_idx


def interpolate(a: Waypoint, b: Waypoint, t: float) -> Waypoint:
    """Linear interpolation between two waypoints, t in [0, 1]."""
    if t == 0:
        return a
    if t == 1:
        return b
    return Waypoint(
        lat=a.lat + (b.lat - a.lat) * t,
        lng=a.lng + (b.lng - a.lng) * t,
    )
