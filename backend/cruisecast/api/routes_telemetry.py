from __future__ import annotations
from fastapi import APIRouter

from cruisecast.schemas.telemetry import CruiseProfile, MockFleetRequest, TelemetryBatch
from cruisecast.services.fleet import generate_fleet
from cruisecast.services.session import get_session

router = APIRouter(prefix="/api", tags=["telemetry"])


@router.post("/telemetry", response_model=CruiseProfile)
async def submit_telemetry(batch: TelemetryBatch):
    """Replace the telemetry batch and recompute the cruise profile."""
    return get_session().load_telemetry(batch.points)


@router.post("/telemetry/mock", response_model=CruiseProfile)
async def mock_telemetry(req: MockFleetRequest):
    session = get_session()
    fleet = generate_fleet(session.route, vehicle_count=req.vehicle_count, seed=req.seed)
    return session.load_telemetry(fleet)


@router.get("/profile", response_model=CruiseProfile)
async def get_profile():
    return get_session().profile
