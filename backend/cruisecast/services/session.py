from __future__ import annotations
from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional

from cruisecast.core.config import (
    DEFAULT_ROUTE,
    DEFAULT_ROUTE_NAME,
    HISTORY_LIMIT,
    MOCK_SEED,
    MOCK_VEHICLE_COUNT,
)
from cruisecast.core.logger import get_logger
from cruisecast.schemas.route import RouteModel
from cruisecast.schemas.simulation import SimulationState, SmootherConfig
from cruisecast.schemas.telemetry import CruiseProfile, TelemetryPoint
from cruisecast.services.aggregator import compute_profile
from cruisecast.services.clock import TickClock
from cruisecast.services.fleet import generate_fleet
from cruisecast.services.smoother import SpeedSmoother

logger = get_logger(__name__)


class SimulationSession:
    """Route, telemetry batch, cruise profile and one smoothed vehicle run."""

    def __init__(
        self,
        route: RouteModel,
        telemetry: Iterable[TelemetryPoint] = (),
        config: Optional[SmootherConfig] = None,
        history_limit: int = HISTORY_LIMIT,
    ):
        self.config = config or SmootherConfig()
        self.route = route
        self.telemetry: List[TelemetryPoint] = list(telemetry)
        self.profile = compute_profile(self.telemetry, route)
        self.smoother = SpeedSmoother(route, self.profile, self.config)
        self.speed_multiplier = 1.0
        self.history: Deque[SimulationState] = deque(maxlen=history_limit)
        self.clock = TickClock(self.tick, self.config.tick_interval_ms / 1000.0)

    @property
    def state(self) -> SimulationState:
        return self.smoother.state

    @property
    def running(self) -> bool:
        return self.clock.running

    def tick(self) -> SimulationState:
        before = self.smoother.state
        after = self.smoother.advance(self.speed_multiplier)
        if after is not before:
            self.history.append(after)
        return after

    def set_multiplier(self, value: float) -> float:
        self.speed_multiplier = value
        return self.config.clamp_multiplier(value)

    def load_telemetry(self, points: Iterable[TelemetryPoint]) -> CruiseProfile:
        self.telemetry = list(points)
        self.profile = compute_profile(self.telemetry, self.route)
        self.smoother.swap_profile(self.profile)
        logger.info("Cruise profile recomputed from %d points: %s", len(self.telemetry), self.profile.avg_speeds())
        return self.profile

    def set_route(self, route: RouteModel) -> None:
        self.clock.stop()
        self.route = route
        self.profile = compute_profile(self.telemetry, route)
        self.smoother = SpeedSmoother(route, self.profile, self.config)
        self.history.clear()
        logger.info("Route set: %s (%d waypoints)", route.name or "-", len(route))

    def reset(self) -> SimulationState:
        self.history.clear()
        return self.smoother.reset()

    def start(self) -> None:
        self.clock.start()

    def stop(self) -> None:
        self.clock.stop()

    def export(self) -> Dict[str, Any]:
        vehicles: Dict[str, List[Dict[str, Any]]] = {}
        for p in self.telemetry:
            vehicles.setdefault(p.vehicle_id, []).append(p.model_dump(mode="json"))
        return {
            "route": [w.model_dump() for w in self.route.waypoints],
            "vehicles": list(vehicles.values()),
            "cruise_profile": [s.model_dump() for s in self.profile.segments],
            "segment_average_speeds": self.profile.avg_speeds(),
            "history": [s.model_dump(mode="json") for s in self.history],
            "state": self.state.model_dump(mode="json"),
        }


_session: Optional[SimulationSession] = None


def default_session() -> SimulationSession:
    route = RouteModel.from_pairs(DEFAULT_ROUTE, name=DEFAULT_ROUTE_NAME)
    fleet = generate_fleet(route, vehicle_count=MOCK_VEHICLE_COUNT, seed=MOCK_SEED)
    session = SimulationSession(route, fleet)
    logger.info("Default session: %d vehicles, profile %s", MOCK_VEHICLE_COUNT, session.profile.avg_speeds())
    return session


def get_session() -> SimulationSession:
    global _session
    if _session is None:
        _session = default_session()
    return _session


def current_session() -> Optional[SimulationSession]:
    """The process-wide session if one exists; never builds the default."""
    return _session


def set_session(session: Optional[SimulationSession]) -> None:
    global _session
    if _session is not None and _session is not session:
        _session.stop()
    _session = session
