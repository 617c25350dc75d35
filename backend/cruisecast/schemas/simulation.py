from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional

from cruisecast.core.config import (
    BASE_STEP,
    REFERENCE_SPEED,
    SCALE_FACTOR,
    MULTIPLIER_MIN,
    MULTIPLIER_MAX,
    TICK_INTERVAL_MS,
)
from cruisecast.schemas.route import Waypoint


class SmootherConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_step: float = Field(BASE_STEP, ge=0)
    reference_speed: float = Field(REFERENCE_SPEED, gt=0)
    scale_factor: float = Field(SCALE_FACTOR, ge=0)
    multiplier_min: float = Field(MULTIPLIER_MIN, ge=0)
    multiplier_max: float = Field(MULTIPLIER_MAX, ge=0)
    tick_interval_ms: float = Field(TICK_INTERVAL_MS, gt=0)

    @model_validator(mode="after")
    def ordered_bounds(self):
        if self.multiplier_min > self.multiplier_max:
            raise ValueError("multiplier_min must not exceed multiplier_max")
        return self

    def clamp_multiplier(self, value: float) -> float:
        return min(max(value, self.multiplier_min), self.multiplier_max)


class SimulationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    segment_index: int = 0
    progress: float = 0.0
    position: Optional[Waypoint] = None
    current_speed: float = 0.0
    next_speed_target: float = 0.0
    speed_multiplier: float = 1.0
    terminal: bool = False
    tick: int = 0


class SimStatus(BaseModel):
    state: SimulationState
    running: bool
    requested_multiplier: float
    effective_multiplier: float


class MultiplierRequest(BaseModel):
    value: float = Field(allow_inf_nan=False)


class TickRequest(BaseModel):
    steps: int = Field(1, ge=1, le=100000)
