from __future__ import annotations
from typing import Optional, Tuple

from cruisecast.core.logger import get_logger
from cruisecast.schemas.route import RouteModel
from cruisecast.schemas.simulation import SimulationState, SmootherConfig
from cruisecast.schemas.telemetry import CruiseProfile
from cruisecast.utils.geo import interpolate

logger = get_logger(__name__)


def initial_state(route: RouteModel, profile: CruiseProfile) -> SimulationState:
    """State at the start of the route; terminal at once if there is no segment."""
    n = len(route)
    current = profile[0].avg_speed if len(profile) > 0 else 0.0
    upcoming = profile[1].avg_speed if len(profile) > 1 else current
    return SimulationState(
        segment_index=0,
        progress=0.0,
        position=route[0] if n > 0 else None,
        current_speed=current,
        next_speed_target=upcoming,
        terminal=n < 2,
    )


def blended_speed(
    current: float,
    upcoming: float,
    previous: Optional[float],
    progress: float,
    entered_faster: bool,
) -> float:
    """Instantaneous speed inside a segment.

    Accelerating: hold the previous segment's speed on the tick right after
    crossing into a faster segment, then ramp previous -> current with progress.
    Decelerating: brake from current towards upcoming with progress.
    """
    if upcoming > current:
        if entered_faster and previous is not None:
            return previous
        if progress > 0:
            start = current if previous is None else previous
            return start + (current - start) * progress
        return current
    if upcoming < current:
        return current + (upcoming - current) * progress
    return current


def progress_step(speed: float, multiplier: float, config: SmootherConfig) -> float:
    return config.base_step * (speed / config.reference_speed) * config.scale_factor * multiplier


def transition(
    state: SimulationState,
    entered_faster: bool,
    route: RouteModel,
    profile: CruiseProfile,
    config: SmootherConfig,
    speed_multiplier: float,
) -> Tuple[SimulationState, bool]:
    """One tick. Returns the new state and the updated entered-faster flag."""
    if state.terminal:
        return state, entered_faster

    idx = state.segment_index
    current = profile[idx].avg_speed
    upcoming = profile[idx + 1].avg_speed if idx + 1 < len(profile) else current
    previous = profile[idx - 1].avg_speed if idx > 0 else None

    speed = blended_speed(current, upcoming, previous, state.progress, entered_faster)
    multiplier = config.clamp_multiplier(speed_multiplier)
    progress = state.progress + progress_step(speed, multiplier, config)
    next_target = upcoming

    if progress > 1:
        progress = 0.0
        idx += 1
        if idx >= len(route) - 1:
            final = profile[len(profile) - 1].avg_speed
            logger.info("Reached final waypoint after %d ticks", state.tick + 1)
            return state.model_copy(update={
                "segment_index": idx,
                "progress": 0.0,
                "position": route[len(route) - 1],
                "current_speed": final,
                "next_speed_target": final,
                "speed_multiplier": multiplier,
                "terminal": True,
                "tick": state.tick + 1,
            }), False
        entered_faster = profile[idx].avg_speed > profile[idx - 1].avg_speed
        next_target = profile[idx + 1].avg_speed
    elif entered_faster and progress > 0:
        entered_faster = False

    new_state = state.model_copy(update={
        "segment_index": idx,
        "progress": progress,
        "position": interpolate(route[idx], route[idx + 1], progress),
        "current_speed": speed,
        "next_speed_target": next_target,
        "speed_multiplier": multiplier,
        "tick": state.tick + 1,
    })
    return new_state, entered_faster


class SpeedSmoother:
    """Owns the SimulationState of one vehicle and advances it tick by tick."""

    def __init__(self, route: RouteModel, profile: CruiseProfile, config: Optional[SmootherConfig] = None):
        _check_aligned(route, profile)
        self.route = route
        self.config = config or SmootherConfig()
        self._profile = profile
        self._pending: Optional[CruiseProfile] = None
        self._entered_faster = False
        self._state = initial_state(route, profile)

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def profile(self) -> CruiseProfile:
        return self._pending if self._pending is not None else self._profile

    @property
    def terminal(self) -> bool:
        return self._state.terminal

    def swap_profile(self, profile: CruiseProfile) -> None:
        """Stage a new profile; it takes effect at the start of the next tick."""
        _check_aligned(self.route, profile)
        self._pending = profile

    def reset(self) -> SimulationState:
        if self._pending is not None:
            self._profile, self._pending = self._pending, None
        self._entered_faster = False
        self._state = initial_state(self.route, self._profile)
        return self._state

    def _adopt_pending(self) -> None:
        self._profile, self._pending = self._pending, None
        # the hold decision must follow the profile now in use
        state = self._state
        idx = state.segment_index
        self._entered_faster = (
            not state.terminal
            and state.progress == 0
            and idx > 0
            and self._profile[idx].avg_speed > self._profile[idx - 1].avg_speed
        )

    def advance(self, speed_multiplier: float = 1.0) -> SimulationState:
        if self._pending is not None:
            self._adopt_pending()
        self._state, self._entered_faster = transition(
            self._state,
            self._entered_faster,
            self.route,
            self._profile,
            self.config,
            speed_multiplier,
        )
        return self._state


def _check_aligned(route: RouteModel, profile: CruiseProfile) -> None:
    if len(profile) != len(route):
        raise ValueError(f"profile has {len(profile)} entries, route has {len(route)} waypoints")
