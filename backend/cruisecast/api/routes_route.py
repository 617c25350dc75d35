from fastapi import APIRouter, HTTPException
from typing import List, Tuple
import flexpolyline as fp

from cruisecast.core.logger import get_logger
from cruisecast.schemas.route import RouteModel, RouteRequest, RouteSummary, Waypoint
from cruisecast.services.session import get_session
from cruisecast.utils.geo import polyline_length_m

router = APIRouter()
log = get_logger(__name__)


def _summary(route: RouteModel) -> RouteSummary:
    return RouteSummary(
        name=route.name,
        waypoints=route.waypoints,
        segment_count=route.segment_count,
        distance_km=polyline_length_m(route.pairs()) / 1000.0,
    )


def _decode_polyline(encoded: str) -> List[Tuple[float, float]]:
    try:
        decoded = list(fp.decode(encoded))
    except Exception as e:
        raise HTTPException(400, f"Invalid flexible polyline: {e}")
    # 3D polylines carry a third value we do not use
    return [(float(p[0]), float(p[1])) for p in decoded]


@router.get("/api/route", response_model=RouteSummary)
async def get_route():
    return _summary(get_session().route)


@router.post("/api/route", response_model=RouteSummary)
async def set_route(req: RouteRequest):
    if req.polyline is not None:
        pairs = _decode_polyline(req.polyline)
        waypoints = [Waypoint(lat=lat, lng=lng) for lat, lng in pairs]
    else:
        waypoints = list(req.coordinates or [])
    if len(waypoints) < 2:
        raise HTTPException(400, "Route needs at least 2 waypoints")

    route = RouteModel(name=req.name, waypoints=waypoints)
    get_session().set_route(route)
    log.info("Route replaced via API: %d waypoints", len(route))
    return _summary(route)
