from typing import List, Sequence

import pytest

from cruisecast.core.config import DEFAULT_ROUTE
from cruisecast.schemas.route import RouteModel
from cruisecast.schemas.simulation import SmootherConfig
from cruisecast.schemas.telemetry import CruiseProfile, SegmentProfile, TelemetryPoint
from cruisecast.services.session import SimulationSession, set_session

STUTTGART_SPEEDS = [45, 45, 55, 55, 55, 51, 51]


def make_profile(route: RouteModel, speeds: Sequence[float]) -> CruiseProfile:
    return CruiseProfile(segments=[
        SegmentProfile(segment_index=i, avg_speed=s, sample_count=1 if s else 0, lat=w.lat, lng=w.lng)
        for i, (w, s) in enumerate(zip(route.waypoints, speeds))
    ])


def fleet_at_waypoints(route: RouteModel, speeds: Sequence[float], vehicles: int = 3) -> List[TelemetryPoint]:
    points = []
    for v in range(1, vehicles + 1):
        for i, w in enumerate(route.waypoints):
            points.append(TelemetryPoint(
                vehicle_id=f"car-{v}", timestamp=i * 1000, lat=w.lat, lng=w.lng, speed=speeds[i],
            ))
    return points


@pytest.fixture
def stuttgart() -> RouteModel:
    return RouteModel.from_pairs(DEFAULT_ROUTE, name="stuttgart")


@pytest.fixture
def three_point_route() -> RouteModel:
    return RouteModel.from_pairs([(0.0, 0.0), (0.0, 1.0), (0.0, 2.0)])


@pytest.fixture
def fast_config() -> SmootherConfig:
    # step = 0.6 * speed / 50 * multiplier: two ticks per segment at 50 km/h
    return SmootherConfig(base_step=0.6, reference_speed=50, scale_factor=1.0, tick_interval_ms=10)


@pytest.fixture
def session(stuttgart, fast_config):
    s = SimulationSession(stuttgart, fleet_at_waypoints(stuttgart, STUTTGART_SPEEDS), config=fast_config)
    set_session(s)
    yield s
    set_session(None)
