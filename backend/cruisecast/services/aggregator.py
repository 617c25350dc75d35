from __future__ import annotations
from typing import Dict, Iterable, List
import math

from cruisecast.core.logger import get_logger
from cruisecast.schemas.route import RouteModel
from cruisecast.schemas.telemetry import CruiseProfile, SegmentProfile, TelemetryPoint
from cruisecast.utils.geo import nearest_waypoint_index

logger = get_logger(__name__)


def round2(value: float) -> float:
    # half-up, so 12.345 -> 12.35 rather than banker's rounding
    return math.floor(value * 100 + 0.5) / 100


def compute_profile(points: Iterable[TelemetryPoint], route: RouteModel) -> CruiseProfile:
    """Average observed speed per route waypoint.

    Each point is assigned to the waypoint with the smallest squared planar
    distance (ties go to the lower index). Waypoints without samples report
    avg_speed=0, sample_count=0. The result always has one entry per waypoint.
    """
    waypoints = route.waypoints
    speeds: Dict[int, List[float]] = {}
    total = 0
    if waypoints:
        for p in points:
            idx = nearest_waypoint_index(p.lat, p.lng, waypoints)
            speeds.setdefault(idx, []).append(p.speed)
            total += 1

    segments: List[SegmentProfile] = []
    for i, w in enumerate(waypoints):
        bucket = speeds.get(i, [])
        avg = round2(sum(bucket) / len(bucket)) if bucket else 0.0
        segments.append(SegmentProfile(
            segment_index=i,
            avg_speed=avg,
            sample_count=len(bucket),
            lat=w.lat,
            lng=w.lng,
        ))

    logger.debug("Profile from %d points: %d/%d segments populated", total, len(speeds), len(waypoints))
    return CruiseProfile(segments=segments)
