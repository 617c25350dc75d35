from __future__ import annotations
from fastapi import APIRouter

from cruisecast.schemas.simulation import MultiplierRequest, SimStatus, SimulationState, TickRequest
from cruisecast.services.session import SimulationSession, get_session

router = APIRouter(prefix="/api/sim", tags=["simulation"])

# Handlers are async so they share the event-loop thread with the tick clock.


def _status(session: SimulationSession) -> SimStatus:
    return SimStatus(
        state=session.state,
        running=session.running,
        requested_multiplier=session.speed_multiplier,
        effective_multiplier=session.config.clamp_multiplier(session.speed_multiplier),
    )


@router.get("/state", response_model=SimStatus)
async def get_state():
    return _status(get_session())


@router.post("/tick", response_model=SimulationState)
async def manual_tick(req: TickRequest | None = None):
    session = get_session()
    steps = req.steps if req is not None else 1
    state = session.state
    for _ in range(steps):
        state = session.tick()
        if state.terminal:
            break
    return state


@router.post("/start", response_model=SimStatus)
async def start():
    session = get_session()
    session.start()
    return _status(session)


@router.post("/stop", response_model=SimStatus)
async def stop():
    session = get_session()
    session.stop()
    return _status(session)


@router.post("/reset", response_model=SimStatus)
async def reset():
    session = get_session()
    session.reset()
    return _status(session)


@router.put("/multiplier", response_model=SimStatus)
async def set_multiplier(req: MultiplierRequest):
    session = get_session()
    session.set_multiplier(req.value)
    return _status(session)
