"""
Mock fleet telemetry along a route.

Every vehicle reports one sample per waypoint, exactly at the waypoint's
coordinates, with a speed drawn around the segment's dominant behavior.
"""
from __future__ import annotations
from typing import List, Optional, Sequence
import random
import time

from cruisecast.schemas.route import RouteModel
from cruisecast.schemas.telemetry import TelemetryPoint

BEHAVIORS = {
    "slow": {"base_speed": 40.0, "variance": 5.0},    # 35–45 km/h
    "medium": {"base_speed": 55.0, "variance": 5.0},  # 50–60 km/h
    "fast": {"base_speed": 70.0, "variance": 5.0},    # 65–75 km/h
}

# Dominant behavior per waypoint of the default 7-point route
DEFAULT_LAYOUT = ["slow", "slow", "medium", "medium", "medium", "fast", "fast"]


def fit_layout(layout: Sequence[str], n: int) -> List[str]:
    """Stretch (or shrink) a behavior layout proportionally to n waypoints."""
    if n <= 0 or not layout:
        return []
    if n == len(layout):
        return list(layout)
    return [layout[min(i * len(layout) // n, len(layout) - 1)] for i in range(n)]


def generate_vehicle(
    vehicle_id: str,
    route: RouteModel,
    layout: Sequence[str],
    rng: random.Random,
    start_ms: float,
) -> List[TelemetryPoint]:
    points = []
    for i, w in enumerate(route.waypoints):
        kind = layout[i]
        b = BEHAVIORS[kind]
        speed = b["base_speed"] + (rng.random() - 0.5) * 2 * b["variance"]
        points.append(TelemetryPoint(
            vehicle_id=vehicle_id,
            timestamp=start_ms + i * 1000,
            lat=w.lat,
            lng=w.lng,
            speed=speed,
            behavior=kind,
        ))
    return points


def generate_fleet(
    route: RouteModel,
    vehicle_count: int = 1000,
    seed: Optional[int] = None,
    layout: Optional[Sequence[str]] = None,
) -> List[TelemetryPoint]:
    rng = random.Random(seed)
    fitted = fit_layout(layout or DEFAULT_LAYOUT, len(route))
    start_ms = time.time() * 1000.0
    out: List[TelemetryPoint] = []
    for n in range(1, vehicle_count + 1):
        out.extend(generate_vehicle(f"car-{n}", route, fitted, rng, start_ms))
    return out
