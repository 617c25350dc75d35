from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
import math


class TelemetryPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_id: str
    timestamp: float  # epoch ms
    lat: float
    lng: float
    speed: float  # km/h
    behavior: Optional[str] = None

    @field_validator("lat", "lng", "speed")
    @classmethod
    def finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v


class TelemetryBatch(BaseModel):
    points: List[TelemetryPoint]


class MockFleetRequest(BaseModel):
    vehicle_count: int = Field(1000, ge=1, le=20000)
    seed: Optional[int] = None


class SegmentProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    segment_index: int = Field(ge=0)
    avg_speed: float
    sample_count: int = Field(ge=0)
    lat: float
    lng: float


class CruiseProfile(BaseModel):
    """Per-waypoint average speeds, index-aligned with the route."""
    model_config = ConfigDict(frozen=True)

    segments: List[SegmentProfile] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> SegmentProfile:
        return self.segments[index]

    def avg_speeds(self) -> List[float]:
        return [s.avg_speed for s in self.segments]
