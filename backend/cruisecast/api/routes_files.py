from fastapi import APIRouter, HTTPException

from cruisecast.core.config import SIM_DIR
from cruisecast.core.logger import get_logger
from cruisecast.services.session import get_session
from cruisecast.utils.io import write_atomic_json, read_json_or

router = APIRouter()
log = get_logger(__name__)

SEGMENT_LOGS_PATH = SIM_DIR / "all_segment_logs.json"


@router.post("/api/export")
async def export_segment_logs():
    """Write vehicles, cruise profile and snapshot history to the simulator dir."""
    doc = get_session().export()
    write_atomic_json(doc, SEGMENT_LOGS_PATH)
    log.info("Segment logs written: %s", SEGMENT_LOGS_PATH)
    return doc


@router.get("/api/files/segment-logs")
async def get_segment_logs():
    """Get the last exported segment logs."""
    doc = read_json_or(SEGMENT_LOGS_PATH, None)
    if doc is None:
        raise HTTPException(404, "Segment logs not found")
    return doc
