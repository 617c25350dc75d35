from pathlib import Path
import os

# Directories
BASE_DIR = Path(__file__).resolve().parent.parent
SIM_DIR = Path(os.getenv("CRUISECAST_SIM_DIR", str(BASE_DIR.parent / "simulator")))
SIM_DIR.mkdir(parents=True, exist_ok=True)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Smoother tuning (speeds in km/h)
TICK_INTERVAL_MS = float(os.getenv("TICK_INTERVAL_MS", "100"))
BASE_STEP = float(os.getenv("BASE_STEP", "0.02"))
REFERENCE_SPEED = float(os.getenv("REFERENCE_SPEED", "50"))
SCALE_FACTOR = float(os.getenv("SCALE_FACTOR", "0.05"))
MULTIPLIER_MIN = float(os.getenv("MULTIPLIER_MIN", "0.2"))
MULTIPLIER_MAX = float(os.getenv("MULTIPLIER_MAX", "20"))

# Session
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "5000"))
AUTOSTART = os.getenv("AUTOSTART", "0") not in ("0", "false", "False", "")

# Mock fleet
MOCK_VEHICLE_COUNT = int(os.getenv("MOCK_VEHICLE_COUNT", "1000"))
MOCK_SEED = int(os.environ["MOCK_SEED"]) if os.getenv("MOCK_SEED") else None

# Stuttgart Hbf down Heilbronner Straße
DEFAULT_ROUTE_NAME = "stuttgart-heilbronner"
DEFAULT_ROUTE = [
    (48.7837, 9.1829),  # Hauptbahnhof
    (48.7832, 9.1815),  # Arnulf-Klett-Platz
    (48.7825, 9.1800),
    (48.7815, 9.1790),
    (48.7805, 9.1780),
    (48.7795, 9.1770),  # Wolframstraße
    (48.7785, 9.1760),
]
