from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional, Tuple

LatLng = Tuple[float, float]


class Waypoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(allow_inf_nan=False)
    lng: float = Field(allow_inf_nan=False)


class RouteModel(BaseModel):
    """Ordered waypoints; segment i runs from waypoint i to waypoint i+1."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    waypoints: List[Waypoint] = Field(default_factory=list)

    @classmethod
    def from_pairs(cls, pairs: List[LatLng], name: Optional[str] = None) -> "RouteModel":
        return cls(name=name, waypoints=[Waypoint(lat=lat, lng=lng) for lat, lng in pairs])

    def __len__(self) -> int:
        return len(self.waypoints)

    def __getitem__(self, index: int) -> Waypoint:
        return self.waypoints[index]

    @property
    def segment_count(self) -> int:
        return max(len(self.waypoints) - 1, 0)

    def pairs(self) -> List[LatLng]:
        return [(w.lat, w.lng) for w in self.waypoints]


class RouteRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=80)
    coordinates: Optional[List[Waypoint]] = None
    polyline: Optional[str] = None  # HERE flexible polyline

    @model_validator(mode="after")
    def one_source(self):
        if (self.coordinates is None) == (self.polyline is None):
            raise ValueError("Provide exactly one of 'coordinates' or 'polyline'")
        return self


class RouteSummary(BaseModel):
    name: Optional[str]
    waypoints: List[Waypoint]
    segment_count: int
    distance_km: float
