from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from cruisecast.api.routes_route import router as route_router
from cruisecast.api.routes_telemetry import router as telemetry_router
from cruisecast.api.run import router as sim_router
from cruisecast.api.routes_files import router as files_router
from cruisecast.core.logger import get_logger
from cruisecast.core.config import AUTOSTART, SIM_DIR, TICK_INTERVAL_MS
from cruisecast.services.session import current_session, get_session

logger = get_logger(__name__)

app = FastAPI(title="CruiseCast", version="1.0")

origins = [
    "http://localhost:3000",  # Development
    "https://localhost:3000", # Development HTTPS
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(route_router)
app.include_router(telemetry_router)
app.include_router(sim_router)
app.include_router(files_router)

@app.get("/")
async def root():
    return {"message": "CruiseCast API running", "docs": "/docs"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.on_event("startup")
async def startup():
    session = get_session()
    logger.info("============================================")
    logger.info("🚗 CruiseCast API Starting")
    logger.info("Route: %s (%d waypoints)", session.route.name, len(session.route))
    logger.info("Telemetry points: %d", len(session.telemetry))
    logger.info("Tick: %.0f ms, autostart: %s", TICK_INTERVAL_MS, "YES" if AUTOSTART else "NO")
    logger.info("SIM dir: %s", SIM_DIR)
    logger.info("============================================")
    if AUTOSTART:
        session.start()

@app.on_event("shutdown")
async def shutdown():
    session = current_session()
    if session is None:
        return
    session.stop()
    await session.clock.wait_stopped()
